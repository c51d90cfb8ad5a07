"""Pygame GUI frontend — fully self-contained.

Includes the level picker, gameplay with mouse taps, and the win screen.
Each level's material names a picture under ``assets/images`` that is
sliced onto the tiles; numbered tiles are drawn when it is missing.
"""

from __future__ import annotations

import enum
import logging
import time

import pygame

from backend.config import Settings
from backend.engine.gameplay import GamePlay
from backend.models.board import Direction
from backend.models.level import LevelCatalog
from backend.models.progress import ProgressStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 640
TILE_GAP = 4
MARGIN = 20
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
BOARD_TOP = 76
FLASH_SECONDS = 0.25


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    WIN = "win"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "enabled", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        enabled: bool = True,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.enabled = enabled
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        if not self.enabled:
            c, fg = COL_MANTLE, COL_OVERLAY0
        else:
            c, fg = (self.hover if self._hot else self.bg), self.fg
        pygame.draw.rect(surf, c, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.enabled and self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.enabled and self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Feedback: flashes the tapped tile
# ---------------------------------------------------------------------------
class _FlashFeedback:
    def __init__(self) -> None:
        self.index: int | None = None
        self.colour = COL_RED
        self.until = 0.0

    def _flash(self, index: int | None, colour: tuple) -> None:
        self.index = index
        self.colour = colour
        self.until = time.monotonic() + FLASH_SECONDS

    def on_move_applied(self, index: int) -> None:
        self.index = None

    def on_move_rejected(self, index: int | None) -> None:
        self._flash(index, COL_RED)

    def on_solved(self) -> None:
        self.index = None

    def active(self, index: int) -> bool:
        return self.index == index and time.monotonic() < self.until


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        settings: Settings,
        catalog: LevelCatalog,
        progress: ProgressStore,
        level_index: int | None = None,
    ) -> None:
        self._settings = settings
        self._catalog = catalog
        self._progress = progress
        self._tile_images: dict[int, pygame.Surface] = {}
        self._flash = _FlashFeedback()

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._build_menu_btns()
        self._build_win_btns()

        if level_index is not None:
            self._start_level(level_index)

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw, bh, gap, per_row = 130, 46, 12, 3
        total_w = per_row * bw + (per_row - 1) * gap
        sx = _cx(total_w)

        self._level_btns: list[_Btn] = []
        for i, level in enumerate(self._catalog):
            r, c = divmod(i, per_row)
            self._level_btns.append(
                _Btn(
                    (sx + c * (bw + gap), 200 + r * (bh + gap), bw, bh),
                    f"{i + 1}.  {level.size}×{level.size}",
                    self._f_btn_sm,
                )
            )

        bw_lg = 220
        self._reset_btn = _Btn(
            (_cx(bw_lg), WIN_H - 140, bw_lg, 42), "RESET PROGRESS", self._f_btn_sm,
        )
        self._quit_btn = _Btn(
            (_cx(bw_lg), WIN_H - 86, bw_lg, 42),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )

    def _refresh_locks(self) -> None:
        for i, btn in enumerate(self._level_btns):
            btn.enabled = self._progress.is_unlocked(i)

    def _build_win_btns(self) -> None:
        bw = 220
        self._win_next = _Btn(
            (_cx(bw), 380, bw, 50),
            "NEXT LEVEL",
            self._f_btn,
            bg=COL_GREEN,
            hover=(190, 240, 190),
            fg=COL_BASE,
        )
        self._win_again = _Btn(
            (_cx(bw), 444, bw, 46), "PLAY AGAIN", self._f_btn_sm,
            bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE,
        )
        self._win_menu = _Btn((_cx(bw), 504, bw, 46), "M E N U", self._f_btn_sm)

    # ── helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _fmt(seconds: float) -> str:
        m, s = divmod(int(seconds), 60)
        return f"{m:02d}:{s:02d}"

    def _tile_layout(self) -> tuple[int, int, int, int]:
        """Return (tile_px, origin_x, origin_y, total_px) for current game."""
        sz = self._game.size  # type: ignore[union-attr]
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        return tile_px, _cx(total) + TILE_GAP, BOARD_TOP + TILE_GAP, total

    def _slot_rect(self, index: int, tpx: int, ox: int, oy: int) -> pygame.Rect:
        r, c = divmod(index, self._game.size)  # type: ignore[union-attr]
        return pygame.Rect(
            ox + c * (tpx + TILE_GAP),
            oy + r * (tpx + TILE_GAP),
            tpx,
            tpx,
        )

    def _slot_at(self, pos: tuple[int, int]) -> int | None:
        """Hit-test a click against the grid and return the slot index."""
        game = self._game
        assert game is not None
        tpx, ox, oy, _ = self._tile_layout()
        for index in range(game.size * game.size):
            if self._slot_rect(index, tpx, ox, oy).collidepoint(pos):
                return index
        return None

    # ── image tile preparation ───────────────────────────────────────────────

    def _prepare_tile_images(self) -> None:
        """Slice the level's picture into one surface per tile identity."""
        game = self._game
        assert game is not None
        self._tile_images = {}
        img_path = self._settings.images_dir / f"{game.level.material}.png"
        if not img_path.is_file():
            logger.warning("Material '%s' not found at %s", game.level.material, img_path)
            return

        full_img = pygame.image.load(str(img_path)).convert()
        sz = game.size
        tpx = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        full_img = pygame.transform.smoothscale(full_img, (sz * tpx, sz * tpx))

        for identity in range(sz * sz - 1):
            tr, tc = divmod(identity, sz)
            self._tile_images[identity] = full_img.subsurface(
                pygame.Rect(tc * tpx, tr * tpx, tpx, tpx)
            ).copy()

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_big.render("SLIDING  PUZZLE", True, COL_TEXT),
            80,
        )
        _blit_center(
            self._surf,
            self._f_body.render("Select a level", True, COL_SUBTEXT),
            160,
        )
        for btn in self._level_btns:
            btn.draw(self._surf)
        self._reset_btn.draw(self._surf)
        self._quit_btn.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        board = game.board
        sz = game.size
        tpx, ox, oy, total = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tpx // 3), bold=True)

        _blit_center(
            self._surf,
            self._f_title.render(
                f"Level {game.level_index + 1}  {sz}×{sz}", True, COL_TEXT
            ),
            14,
        )
        if game.is_shuffling_pending:
            line = "Memorise the picture…"
        else:
            line = f"Moves: {game.state.moves}    Time: {self._fmt(game.state.elapsed_time)}"
        _blit_center(self._surf, self._f_body.render(line, True, COL_PINK), 44)

        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        # Redrawn from board.cells every frame.
        for index, tile in enumerate(board.cells):
            if tile == board.empty_tile:
                continue
            rect = self._slot_rect(index, tpx, ox, oy)
            if tile in self._tile_images:
                self._surf.blit(self._tile_images[tile], rect.topleft)
            else:
                correct = board.started and board.is_tile_correct(index)
                pygame.draw.rect(
                    self._surf, COL_GREEN if correct else COL_BLUE, rect, border_radius=6
                )
                lbl = f_tile.render(str(tile + 1), True, COL_BASE)
                self._surf.blit(
                    lbl,
                    (
                        rect.centerx - lbl.get_width() // 2,
                        rect.centery - lbl.get_height() // 2,
                    ),
                )
            if self._flash.active(index):
                pygame.draw.rect(
                    self._surf, self._flash.colour, rect, width=3, border_radius=4
                )

        _blit_center(
            self._surf,
            self._f_small.render(
                "Click a tile next to the gap     Arrows / WASD  move"
                "     R  restart     Esc  menu",
                True,
                COL_OVERLAY0,
            ),
            BOARD_TOP + total + 16,
        )

    def _draw_win(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None

        _blit_center(
            self._surf,
            self._f_big.render("★  S O L V E D  ★", True, COL_GREEN),
            100,
        )
        info = [
            (f"Level:  {game.level_index + 1}", COL_SUBTEXT),
            (f"Moves:  {game.state.moves}", COL_PINK),
            (f"Time:   {self._fmt(game.state.elapsed_time)}", COL_PINK),
        ]
        y = 190
        for txt, col in info:
            _blit_center(self._surf, self._f_title.render(txt, True, col), y)
            y += 44

        self._win_next.draw(self._surf)
        self._win_again.draw(self._surf)
        self._win_menu.draw(self._surf)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        buttons = [*self._level_btns, self._reset_btn, self._quit_btn]
        if ev.type == pygame.MOUSEMOTION:
            for b in buttons:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for i, b in enumerate(self._level_btns):
                if b.hit(ev.pos):
                    self._start_level(i)
                    return True
            if self._reset_btn.hit(ev.pos):
                self._progress.reset()
                self._refresh_locks()
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_level(min(self._progress.highest_unlocked, len(self._catalog) - 1))
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            index = self._slot_at(ev.pos)
            if index is not None:
                game.tap(index)
        elif ev.type == pygame.KEYDOWN:
            _dirs = {
                pygame.K_UP: Direction.UP,
                pygame.K_w: Direction.UP,
                pygame.K_DOWN: Direction.DOWN,
                pygame.K_s: Direction.DOWN,
                pygame.K_LEFT: Direction.LEFT,
                pygame.K_a: Direction.LEFT,
                pygame.K_RIGHT: Direction.RIGHT,
                pygame.K_d: Direction.RIGHT,
            }
            if ev.key in _dirs:
                game.move(_dirs[ev.key])
            elif ev.key == pygame.K_r:
                self._start_level(game.level_index)
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                game.cancel_shuffle()
                self._open_menu()
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        buttons = (self._win_next, self._win_again, self._win_menu)
        if ev.type == pygame.MOUSEMOTION:
            for b in buttons:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._win_next.hit(ev.pos):
                self._start_level(game.level_index + 1)
            elif self._win_again.hit(ev.pos):
                self._start_level(game.level_index)
            elif self._win_menu.hit(ev.pos):
                self._open_menu()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_n, pygame.K_RETURN) and self._win_next.enabled:
                self._start_level(game.level_index + 1)
            elif ev.key == pygame.K_r:
                self._start_level(game.level_index)
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._open_menu()
        return True

    # ── game state ──────────────────────────────────────────────────────────

    def _open_menu(self) -> None:
        self._refresh_locks()
        self._screen = _Screen.MENU

    def _start_level(self, index: int) -> None:
        self._flash = _FlashFeedback()
        self._game = GamePlay(
            self._catalog[index],
            level_index=index,
            feedback=self._flash,
            progress=self._progress,
        )
        self._game.schedule_shuffle(self._settings.shuffle_delay)
        self._prepare_tile_images()
        self._screen = _Screen.PLAYING

    def _check_win(self) -> None:
        game = self._game
        if game is None or not game.is_won:
            return
        nxt = game.level_index + 1
        self._win_next.enabled = nxt < len(self._catalog) and self._progress.is_unlocked(nxt)
        self._screen = _Screen.WIN

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
        }

        self._refresh_locks()
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            if self._screen == _Screen.PLAYING and self._game is not None:
                self._game.tick()
                self._check_win()

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    settings: Settings,
    catalog: LevelCatalog,
    progress: ProgressStore,
    level_index: int | None = None,
) -> None:
    """Launch the Pygame GUI (opens on the level picker unless *level_index*)."""
    app = PygameApp(settings, catalog, progress, level_index)
    app.run_loop()
