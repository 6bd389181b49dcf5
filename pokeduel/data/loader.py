"""Runtime loader utilities for roster and type chart data.

Provides cached access to the JSON documents under ``assets/``. Callers get
fresh engine objects every time; only the parsed JSON is cached.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Union

from pokeduel.core.errors import DataLoadError, PokeduelError
from pokeduel.core.logging import logger
from pokeduel.core.paths import ROSTERS
from pokeduel.battle.factory import roster_from_list
from pokeduel.battle.models import BattleCreature
from pokeduel.battle.typechart import TypeEffectivenessTable

PathLike = Union[str, Path]


@lru_cache(maxsize=64)
def _read_json(path: str) -> Any:
    p = Path(path)
    if not p.exists():
        raise DataLoadError(path, "file not found")
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(path, str(e)) from e

def clear_cache():
    _read_json.cache_clear()


def roster_path(name_or_path: PathLike) -> Path:
    """A bare name resolves to ``assets/rosters/<name>.json``."""
    p = Path(name_or_path)
    if p.suffix == ".json" or p.exists():
        return p
    return ROSTERS / f"{name_or_path}.json"

def available_rosters() -> List[str]:
    if not ROSTERS.is_dir():
        return []
    return sorted(p.stem for p in ROSTERS.glob("*.json"))

def load_roster(name_or_path: PathLike, type_table: Optional[TypeEffectivenessTable] = None) -> List[BattleCreature]:
    path = roster_path(name_or_path)
    raw = _read_json(str(path))
    entries = raw.get("team") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise DataLoadError(str(path), "expected a list of creatures or an object with a 'team' list")
    try:
        roster = roster_from_list(entries, known_types=type_table)
    except (KeyError, TypeError, ValueError, PokeduelError) as e:
        raise DataLoadError(str(path), f"invalid roster entry: {e}") from e
    logger.debug("RosterLoaded", path=str(path), size=len(roster))
    return roster


def load_type_table(path: Optional[PathLike] = None) -> TypeEffectivenessTable:
    """Load a chart file, or the built-in chart when no path is configured.

    The file maps attacking type -> defending type -> multiplier; types it
    leaves out behave as neutral.
    """
    if not path:
        return TypeEffectivenessTable()
    raw = _read_json(str(Path(path)))
    if not isinstance(raw, dict) or not all(isinstance(v, dict) for v in raw.values()):
        raise DataLoadError(str(path), "type chart must map attacking type to an object of multipliers")
    try:
        table = TypeEffectivenessTable(raw)
    except (TypeError, ValueError) as e:
        raise DataLoadError(str(path), f"invalid multiplier: {e}") from e
    logger.debug("TypeChartLoaded", path=str(path), types=len(table))
    return table

__all__ = ["load_roster", "load_type_table", "available_rosters", "roster_path", "clear_cache"]
