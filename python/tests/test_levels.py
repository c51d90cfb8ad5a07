"""Level catalogue and progress store tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from backend.config import DEFAULT_DATA_DIR
from backend.models.level import LevelCatalog, LevelConfigError, LevelData
from backend.models.progress import ProgressStore


# -- helpers ------------------------------------------------------------------


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data))
    return path


# -- level catalogue ----------------------------------------------------------


def test_load_levels(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "levels.json",
        {"levels": [
            {"size": 3, "material": "sunrise", "icon": "sun"},
            {"size": 4, "material": "forest"},
        ]},
    )
    catalog = LevelCatalog.load(path)
    assert len(catalog) == 2
    assert catalog[0] == LevelData(size=3, material="sunrise", icon="sun")
    assert catalog[1].icon == ""
    assert [lvl.size for lvl in catalog] == [3, 4]


def test_get_out_of_range_returns_none(tmp_path: Path) -> None:
    path = _write(tmp_path / "levels.json", {"levels": [{"size": 3, "material": "a"}]})
    catalog = LevelCatalog.load(path)
    assert catalog.get(0) == catalog[0]
    assert catalog.get(1) is None
    assert catalog.get(-1) is None


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LevelConfigError):
        LevelCatalog.load(tmp_path / "nope.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "levels.json"
    path.write_text("{not json")
    with pytest.raises(LevelConfigError):
        LevelCatalog.load(path)


@pytest.mark.parametrize(
    "data",
    [
        {"levels": []},
        {"stages": []},
        [],
        {"levels": [{"size": 1, "material": "a"}]},
        {"levels": [{"size": "3", "material": "a"}]},
        {"levels": [{"size": 3}]},
        {"levels": ["3x3"]},
    ],
)
def test_malformed_catalogue(tmp_path: Path, data: object) -> None:
    with pytest.raises(LevelConfigError):
        LevelCatalog.load(_write(tmp_path / "levels.json", data))


def test_shipped_catalogue_loads() -> None:
    catalog = LevelCatalog.load(DEFAULT_DATA_DIR / "levels.json")
    assert len(catalog) > 0
    assert all(level.size >= 2 for level in catalog)


# -- progress store -----------------------------------------------------------


def test_first_level_always_unlocked(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path / "progress.json")
    assert store.is_unlocked(0)
    assert not store.is_unlocked(1)
    assert store.highest_unlocked == 0
    assert not (tmp_path / "progress.json").exists()


def test_record_solved_persists(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "progress.json"
    store = ProgressStore(path)
    store.record_solved(0)
    store.record_solved(1)

    reloaded = ProgressStore(path)
    assert reloaded.unlocked == [0, 1, 2]
    assert reloaded.highest_unlocked == 2
    assert json.loads(path.read_text()) == {"unlocked": [0, 1, 2]}


def test_reset(tmp_path: Path) -> None:
    path = tmp_path / "progress.json"
    store = ProgressStore(path)
    store.unlock(3)
    store.reset()
    assert ProgressStore(path).unlocked == [0]


def test_unreadable_progress_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "progress.json"
    path.write_text("garbage")
    assert ProgressStore(path).unlocked == [0]
