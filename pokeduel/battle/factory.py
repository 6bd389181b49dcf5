"""Factory helpers for constructing battle creatures from roster data.

Roster entries are plain dicts (usually loaded from ``assets/rosters``).
Shared across the CLI, the data loader and tests.
"""
from __future__ import annotations
import math
from typing import Any, Dict, List, Mapping, Optional

from pokeduel.core.errors import UnknownKeyError, ValidationError
from pokeduel.core.logging import logger
from .models import BattleCreature, EffectTarget, Heal, Move, MoveCategory, MoveEffect, StatChange, StatusApply, StatusCondition
from .stages import Stat

DEFAULT_LEVEL = 50

# long (PokeAPI) stat names -> engine stat keys
BASE_STAT_KEYS = {
    "hp": "hp",
    "attack": "atk",
    "defense": "def",
    "special-attack": "sp_atk",
    "special-defense": "sp_def",
    "speed": "speed",
}

AILMENT_NAMES = {
    "paralysis": StatusCondition.PARALYSIS,
    "sleep": StatusCondition.SLEEP,
    "poison": StatusCondition.POISON,
    "burn": StatusCondition.BURN,
    "freeze": StatusCondition.FREEZE,
}

OPPONENT_TARGETS = frozenset({
    "selected-pokemon", "all-opponents", "all-other-pokemon", "specific-move", "random-opponent",
})


def battle_hp(base_hp: int, level: int) -> int:
    return math.floor((2 * base_hp + 31) * level / 100) + level + 10

def derive_stats(base: Mapping[str, int], level: int) -> Dict[str, int]:
    """Convert long-named base stats; only HP scales with level."""
    stats: Dict[str, int] = {}
    for k, v in base.items():
        key = BASE_STAT_KEYS.get(k.replace("_", "-").lower())
        if key is None:
            raise UnknownKeyError("base stat", k)
        stats[key] = int(v)
    if "hp" in stats:
        stats["hp"] = battle_hp(stats["hp"], level)
    return stats


def effect_from_dict(data: Optional[Mapping[str, Any]]) -> Optional[MoveEffect]:
    if not data:
        return None
    kind = str(data.get("kind") or data.get("type") or "").lower()
    chance = int(data.get("chance", 100))
    if kind == "stat-change":
        return StatChange(stat=Stat.parse(data["stat"]), stages=int(data["stages"]),
                          target=data.get("target", "opponent"), chance=chance)
    if kind == "status-condition":
        return StatusApply(condition=StatusCondition.parse(data["condition"]),
                           target=data.get("target", "opponent"), chance=chance)
    if kind == "heal":
        return Heal(percent=int(data.get("percent", 50)), target=data.get("target", "self"), chance=chance)
    raise UnknownKeyError("move effect kind", kind)


def _effect_target(target_name: Optional[str], change: Optional[int] = None) -> EffectTarget:
    if target_name == "user":
        return EffectTarget.SELF
    if change is not None and change > 0 and not target_name:
        return EffectTarget.SELF
    if target_name in OPPONENT_TARGETS:
        return EffectTarget.OPPONENT
    return EffectTarget.OPPONENT if change is not None and change < 0 else EffectTarget.SELF

def _chance(*candidates: Optional[int]) -> int:
    # PokeAPI reports 0 when the effect is the move's whole point
    for c in candidates:
        if c is not None:
            return int(c) or 100
    return 100

def effect_from_move_data(data: Mapping[str, Any]) -> Optional[MoveEffect]:
    """Extract one effect from PokeAPI-shaped move data.

    The first stat change wins over an ailment; unknown stats and ailments
    are logged and dropped.
    """
    target_name = (data.get("target") or {}).get("name")
    meta = data.get("meta") or {}
    changes = data.get("stat_changes") or []
    if changes:
        first = changes[0]
        stat_name = (first.get("stat") or {}).get("name", "")
        try:
            stat = Stat.parse(stat_name)
        except UnknownKeyError:
            logger.warn("Unknown stat in move data", move=data.get("name"), stat=stat_name)
            return None
        change = int(first.get("change", 0))
        return StatChange(stat=stat, stages=change, target=_effect_target(target_name, change),
                          chance=_chance(meta.get("stat_chance")))
    ailment = (meta.get("ailment") or {}).get("name")
    if ailment and ailment != "none":
        condition = AILMENT_NAMES.get(ailment)
        if condition is None:
            logger.warn("Unknown ailment in move data", move=data.get("name"), ailment=ailment)
            return None
        return StatusApply(condition=condition, target=_effect_target(target_name),
                           chance=_chance(meta.get("ailment_chance"), data.get("effect_chance")))
    return None


def move_from_dict(data: Mapping[str, Any]) -> Move:
    name = data.get("name") or data.get("id")
    if not name:
        raise ValidationError("move entry needs a name or id")
    move_id = str(data.get("id") or str(name).lower().replace(" ", "-"))
    category = data.get("category") or (data.get("damage_class") or {}).get("name")
    mtype = data.get("type")
    if isinstance(mtype, Mapping):
        mtype = mtype.get("name")
    if "effect" in data:
        effect = effect_from_dict(data["effect"])
    elif "stat_changes" in data or "meta" in data:
        effect = effect_from_move_data(data)
    else:
        effect = None
    display = data.get("display_name")
    if not display:
        # PokeAPI slugs ("thunder-wave") become "Thunder Wave"
        display = str(name).replace("-", " ").title() if str(name).islower() else str(name)
    return Move(
        id=move_id,
        name=str(display),
        type=str(mtype or "normal"),
        category=MoveCategory.parse(category),
        power=data.get("power") or 0,
        accuracy=data.get("accuracy") or 0,
        effect=effect,
    )


def creature_from_dict(data: Mapping[str, Any], *, known_types=None) -> BattleCreature:
    """Build a ``BattleCreature`` from a roster entry.

    ``base_stats`` entries are derived for the entry's level, ``stats``
    entries are taken as already final. ``known_types`` (a type table) only
    drives warnings for type names it does not know.
    """
    name = str(data.get("name") or data.get("id") or "")
    if not name:
        raise ValidationError("roster entry needs a name or id")
    level = int(data.get("level", DEFAULT_LEVEL))
    if "stats" in data:
        stats = {k: int(v) for k, v in data["stats"].items()}
    elif "base_stats" in data:
        stats = derive_stats(data["base_stats"], level)
    else:
        raise ValidationError(f"{name}: roster entry needs 'stats' or 'base_stats'")
    types = tuple(str(t).lower() for t in data.get("types", ()))
    moves: List[Move] = [move_from_dict(m) for m in data.get("moves", ())]
    if known_types is not None:
        for t in types + tuple(m.type for m in moves):
            if not known_types.knows_type(t):
                logger.warn("Unknown type in roster", creature=name, type=t)
    return BattleCreature(
        id=str(data.get("id", name.lower())),
        name=name,
        types=types,
        level=level,
        stats=stats,
        moves=moves,
        current_hp=data.get("current_hp"),
    )

def roster_from_list(entries, *, known_types=None) -> List[BattleCreature]:
    return [creature_from_dict(e, known_types=known_types) for e in entries]

__all__ = [
    "battle_hp", "derive_stats", "creature_from_dict", "roster_from_list",
    "move_from_dict", "effect_from_dict", "effect_from_move_data", "DEFAULT_LEVEL",
]
