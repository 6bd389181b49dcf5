"""Opponent move selection policies.

Every strategy returns the id of one of ``attacker.moves``; the state machine
re-validates the id before using it.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from pokeduel.core.errors import UnknownKeyError
from .models import BattleCreature, Move, StatChange, StatusApply, Heal, EffectTarget
from .stages import MAX_STAGE, MIN_STAGE
from .status import StatusConditionEngine
from .typechart import TypeEffectivenessTable
from .rng import Rng


class AiStrategy(Protocol):
    name: str
    def choose_move(self, attacker: BattleCreature, defender: BattleCreature, rng: Rng) -> str: ...


class FirstMoveAI:
    name = "first"

    def choose_move(self, attacker: BattleCreature, defender: BattleCreature, rng: Rng) -> str:
        return attacker.moves[0].id


class RandomAI:
    name = "random"

    def choose_move(self, attacker: BattleCreature, defender: BattleCreature, rng: Rng) -> str:
        return rng.pick(attacker.moves).id


STATUS_MOVE_SCORE = 10.0

class StrategicAI:
    """Prefer the hardest-hitting move after type effectiveness.

    Status moves only win when no damaging move can touch the defender, and
    are scored zero when their effect could not land (immunity, existing
    status, capped stage, full HP).
    """
    name = "strategic"

    def __init__(self, type_table: Optional[TypeEffectivenessTable] = None,
                 status_engine: Optional[StatusConditionEngine] = None):
        self.type_table = type_table or TypeEffectivenessTable()
        self.status_engine = status_engine or StatusConditionEngine()

    def score(self, move: Move, attacker: BattleCreature, defender: BattleCreature) -> Tuple[int, float]:
        """(tier, value): damaging moves are tier 1, anything else tier 0."""
        if move.is_damaging:
            mult = self.type_table.multiplier(move.type, defender.types)
            accuracy = 1.0 if move.always_hits else move.accuracy / 100
            value = move.power * mult * accuracy
            return (1 if value > 0 else 0, value)
        return (0, self._status_value(move, attacker, defender))

    def _status_value(self, move: Move, attacker: BattleCreature, defender: BattleCreature) -> float:
        effect = move.effect
        if effect is None:
            return 0.0
        target = attacker if effect.target is EffectTarget.SELF else defender
        if isinstance(effect, StatusApply):
            if not self.status_engine.can_apply(target, effect.condition):
                return 0.0
        elif isinstance(effect, StatChange):
            stage = target.stages.get(effect.stat)
            if (effect.stages > 0 and stage >= MAX_STAGE) or (effect.stages < 0 and stage <= MIN_STAGE):
                return 0.0
        elif isinstance(effect, Heal):
            if target.current_hp >= target.max_hp:
                return 0.0
        return STATUS_MOVE_SCORE * effect.chance / 100

    def choose_move(self, attacker: BattleCreature, defender: BattleCreature, rng: Rng) -> str:
        scored = [(self.score(m, attacker, defender), m) for m in attacker.moves]
        best = max(s for s, _ in scored)
        candidates: List[Move] = [m for s, m in scored if s == best]
        if len(candidates) == 1:
            return candidates[0].id
        return rng.pick(candidates).id


_STRATEGIES: Dict[str, Callable[[TypeEffectivenessTable, StatusConditionEngine], AiStrategy]] = {
    "first": lambda table, engine: FirstMoveAI(),
    "random": lambda table, engine: RandomAI(),
    "strategic": lambda table, engine: StrategicAI(table, engine),
}

def available_strategies() -> List[str]:
    return sorted(_STRATEGIES)

def get_strategy(name: str, type_table: Optional[TypeEffectivenessTable] = None,
                 status_engine: Optional[StatusConditionEngine] = None) -> AiStrategy:
    factory = _STRATEGIES.get(name.lower())
    if factory is None:
        raise UnknownKeyError("AI strategy", name)
    return factory(type_table or TypeEffectivenessTable(), status_engine or StatusConditionEngine())

__all__ = ["AiStrategy", "FirstMoveAI", "RandomAI", "StrategicAI", "get_strategy", "available_strategies"]
