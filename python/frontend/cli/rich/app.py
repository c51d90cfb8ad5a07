"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output and the shared single-key
input handler.  Includes a level picker, the game screen, and a win screen
that offers the next unlocked level.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import Settings
from backend.engine.feedback import FanOutFeedback, FeedbackSink
from backend.engine.gameplay import GamePlay
from backend.models.board import Board, Direction
from backend.models.level import LevelCatalog
from backend.models.progress import ProgressStore
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


class _StatusFeedback:
    """Turns board events into a one-line status."""

    def __init__(self) -> None:
        self.message = ""

    def on_move_applied(self, index: int) -> None:
        self.message = ""

    def on_move_rejected(self, index: int | None) -> None:
        self.message = "[dim]That tile can't move.[/dim]"

    def on_solved(self) -> None:
        self.message = "[bold green]Solved![/bold green]"


class _BellFeedback:
    """Rings the terminal bell on rejected taps."""

    def on_move_applied(self, index: int) -> None:
        pass

    def on_move_rejected(self, index: int | None) -> None:
        sys.stdout.write("\a")
        sys.stdout.flush()

    def on_solved(self) -> None:
        pass


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid.

    Tiles are labelled by their home slot, counting from 1.
    """
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, tile in enumerate(row):
            label = tile + 1
            if tile == board.empty_tile:
                cells.append("[dim]·[/dim]")
            elif board.started and board.is_tile_correct(r * board.size + c):
                cells.append(f"[bold green]{label:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{label:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(catalog: LevelCatalog, progress: ProgressStore, selected: int) -> None:
    console.clear()

    levels = Text()
    for i, level in enumerate(catalog):
        if i:
            levels.append("  ")
        label = f" {i + 1}:{level.size}×{level.size} "
        if not progress.is_unlocked(i):
            levels.append(label, style="dim strike")
        elif i == selected:
            levels.append(label, style="bold green on #313244")
        else:
            levels.append(label)

    nav = Text("  ← →  choose level", style="dim")

    opts = Text()
    opts.append("  Enter", style="bold cyan")
    opts.append("  Play    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(levels),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    size = game.size
    board_table = _render_board(game.board)

    stats = Text()
    if game.is_shuffling_pending:
        stats.append("  Get ready…", style="bold magenta")
    else:
        stats.append("  Moves: ", style="dim")
        stats.append(str(game.state.moves), style="bold yellow")
        stats.append("    Time: ", style="dim")
        stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    panel = Panel(
        Align.center(board_table),
        title=(
            f"[bold cyan]Level {game.level_index + 1}  "
            f"{size}×{size}  {game.level.material}[/bold cyan]"
        ),
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay, has_next: bool) -> None:
    console.clear()

    size = game.size

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("LEVEL COMPLETE!", style="bold green")
    congrats.append("  ★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    hint = Text(
        "\n  N next level, R play again, Q back.\n" if has_next
        else "\n  R play again, Q back.\n",
        style="dim",
    )

    panel = Panel(
        Group(
            Align.center(_render_board(game.board)),
            Align.center(congrats),
            Align.center(stats),
            Align.center(hint),
        ),
        title=f"[bold green]Level {game.level_index + 1}  {size}×{size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


# -- game loop ----------------------------------------------------------------


def _new_game(
    settings: Settings,
    catalog: LevelCatalog,
    progress: ProgressStore,
    index: int,
    status: _StatusFeedback,
) -> GamePlay:
    sinks: list[FeedbackSink] = [status]
    if settings.feedback_bell:
        sinks.append(_BellFeedback())
    game = GamePlay(
        catalog[index],
        level_index=index,
        feedback=FanOutFeedback(sinks),
        progress=progress,
    )
    game.schedule_shuffle(settings.shuffle_delay)
    return game


def _play_level(
    settings: Settings,
    catalog: LevelCatalog,
    progress: ProgressStore,
    index: int,
) -> None:
    """Play levels starting at *index* until the player backs out."""
    while True:
        status = _StatusFeedback()
        game = _new_game(settings, catalog, progress, index, status)

        while not game.is_won:
            _draw_game(game, status.message)

            # Short timeout so the preview ends on time and the clock ticks.
            key = None
            while key is None:
                key = get_key_timeout(0.1 if game.is_shuffling_pending else 0.5)
                if game.tick():
                    break
                if key is None and not game.is_shuffling_pending:
                    _draw_game(game, status.message)

            if key in _DIRECTIONS:
                game.move(_DIRECTIONS[key])
            elif key == "restart":
                status = _StatusFeedback()
                game = _new_game(settings, catalog, progress, index, status)
            elif key == "quit":
                game.cancel_shuffle()
                return

        # -- win ---------------------------------------------------------------
        next_index = index + 1
        has_next = next_index < len(catalog) and progress.is_unlocked(next_index)
        _draw_win(game, has_next)

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "next" and has_next:
                index = next_index
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(
    settings: Settings,
    catalog: LevelCatalog,
    progress: ProgressStore,
    selected: int,
) -> None:
    while True:
        last = min(progress.highest_unlocked, len(catalog) - 1)
        selected = min(selected, last)
        _draw_menu(catalog, progress, selected)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key == "left":
            selected = max(0, selected - 1)
        elif key == "right":
            selected = min(last, selected + 1)
        elif key == "enter":
            _play_level(settings, catalog, progress, selected)
        elif key.isdigit() and 0 < int(key) <= last + 1:
            selected = int(key) - 1


# -- public entry point -------------------------------------------------------


def run(
    settings: Settings,
    catalog: LevelCatalog,
    progress: ProgressStore,
    level_index: int | None = None,
) -> None:
    """Launch the Rich CLI; go straight to *level_index* when given."""
    if level_index is not None:
        _play_level(settings, catalog, progress, level_index)
        return
    _menu_loop(settings, catalog, progress, progress.highest_unlocked)
