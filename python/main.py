#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                # interactive menu
    python main.py -f rich -l 2   # Rich terminal, third level
    python main.py -f pygame      # Pygame GUI (has its own level picker)
    python main.py --levels       # list levels and which are unlocked
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import Settings  # noqa: E402
from backend.models.board import InvalidSizeError  # noqa: E402
from backend.models.level import LevelCatalog, LevelConfigError  # noqa: E402
from backend.models.progress import ProgressStore  # noqa: E402

logger = logging.getLogger("slide_puzzle")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _print_levels(catalog: LevelCatalog, progress: ProgressStore) -> None:
    print("\n  === LEVELS ===\n")
    for i, level in enumerate(catalog):
        mark = "open  " if progress.is_unlocked(i) else "locked"
        print(f"  {i + 1:>2}. [{mark}]  {level.size}x{level.size}  {level.material}")
    print()


def _ask_level(catalog: LevelCatalog, progress: ProgressStore) -> int:
    last = min(progress.highest_unlocked, len(catalog) - 1)
    raw = input(f"  Level (1-{last + 1}, default {last + 1}): ").strip()
    try:
        index = int(raw) - 1 if raw else last
        if not 0 <= index <= last:
            raise ValueError
    except ValueError:
        print(f"  Invalid level — using {last + 1}.")
        index = last
    return index


def _menu_loop(settings: Settings, catalog: LevelCatalog, progress: ProgressStore) -> None:
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  3.  View Levels")
        print("  4.  Reset Progress")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice == "1":
            index = _ask_level(catalog, progress)
            mod = importlib.import_module(_RUNNERS[Frontend.rich])
            mod.run(settings, catalog, progress, level_index=index)

        elif choice == "2":
            mod = importlib.import_module(_RUNNERS[Frontend.pygame])
            mod.run(settings, catalog, progress)

        elif choice == "3":
            _print_levels(catalog, progress)

        elif choice == "4":
            progress.reset()
            print("  Progress cleared.")

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    level: Optional[int] = typer.Option(
        None, "-l", "--level",
        min=1,
        help="Level number to start on (must be unlocked).",
    ),
    levels: bool = typer.Option(
        False, "--levels",
        help="List levels and exit.",
    ),
    reset_progress: bool = typer.Option(
        False, "--reset-progress",
        help="Lock every level except the first.",
    ),
    levels_file: Optional[Path] = typer.Option(
        None, "--levels-file",
        help="Level catalogue JSON (default: data/levels.json).",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Sliding Puzzle Game."""
    settings = Settings.from_env().with_overrides(
        levels_file=levels_file,
        log_level=log_level.upper() if log_level else None,
    )
    _configure_logging(settings.log_level)

    try:
        catalog = LevelCatalog.load(settings.levels_file)
    except LevelConfigError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)

    progress = ProgressStore(settings.progress_file)

    if reset_progress:
        progress.reset()
        print("  Progress cleared.")

    if levels:
        _print_levels(catalog, progress)
        return

    if frontend is None:
        if not reset_progress:
            _menu_loop(settings, catalog, progress)
        return

    index = None if level is None else level - 1
    if index is not None and (index >= len(catalog) or not progress.is_unlocked(index)):
        logger.error("Level %d is not available.", level)
        raise typer.Exit(code=1)

    mod = importlib.import_module(_RUNNERS[frontend])
    try:
        mod.run(settings, catalog, progress, level_index=index)
    except InvalidSizeError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
