"""Damage formula.

Every intermediate value is floored exactly where the formula says so; the
only randomness is a single 0.85..1.00 roll drawn from the session Rng.
"""
from __future__ import annotations
import math

from pokeduel.core.errors import BattleError
from .models import BattleCreature, Move, MoveCategory
from .stages import Stat
from .status import StatusConditionEngine
from .rng import Rng

RANDOM_FLOOR = 0.85
RANDOM_SPAN = 0.15


def effective_attack(attack: int, stage_multiplier: float = 1.0, status_modifier: float = 1.0) -> int:
    return math.floor(attack * stage_multiplier * status_modifier)

def effective_defense(defense: int, stage_multiplier: float = 1.0) -> int:
    return math.floor(defense * stage_multiplier)

def level_factor(level: int) -> int:
    return math.floor(2 * level / 5 + 2)

def base_damage(level: int, power: int, eff_atk: int, eff_def: int) -> int:
    return math.floor(math.floor(level_factor(level) * power * eff_atk / max(1, eff_def)) / 50) + 2

def calculate_damage(level: int, power: int, attack: int, defense: int, type_multiplier: float, rng: Rng, *,
                     attack_stage_multiplier: float = 1.0,
                     defense_stage_multiplier: float = 1.0,
                     status_attack_modifier: float = 1.0) -> int:
    eff_atk = effective_attack(attack, attack_stage_multiplier, status_attack_modifier)
    eff_def = effective_defense(defense, defense_stage_multiplier)
    base = base_damage(level, power, eff_atk, eff_def)
    rand = RANDOM_FLOOR + rng.next() * RANDOM_SPAN
    return max(0, math.floor(base * type_multiplier * rand))


def damage_for_move(attacker: BattleCreature, defender: BattleCreature, move: Move,
                    type_multiplier: float, status_engine: StatusConditionEngine, rng: Rng) -> int:
    """Pick the physical or special stat pair and feed the formula."""
    if not move.is_damaging:
        raise BattleError(f"{move.name} is not a damaging move")
    if move.category is MoveCategory.PHYSICAL:
        atk_key, def_key, atk_stat, def_stat = "atk", "def", Stat.ATTACK, Stat.DEFENSE
    else:
        atk_key, def_key, atk_stat, def_stat = "sp_atk", "sp_def", Stat.SP_ATK, Stat.SP_DEF
    return calculate_damage(
        attacker.level, move.power, attacker.stats[atk_key], defender.stats[def_key], type_multiplier, rng,
        attack_stage_multiplier=attacker.stages.multiplier(atk_stat),
        defense_stage_multiplier=defender.stages.multiplier(def_stat),
        status_attack_modifier=status_engine.attack_modifier(attacker, move.category),
    )

__all__ = ["calculate_damage", "damage_for_move", "effective_attack", "effective_defense", "level_factor", "base_damage"]
