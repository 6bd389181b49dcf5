"""Move effect resolution (stat changes, status application, healing)."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pokeduel.core.errors import UnknownKeyError
from .models import BattleCreature, EffectTarget, Heal, MoveEffect, StatChange, StatusApply
from .stages import apply_stage_change
from .status import StatusConditionEngine
from .rng import Rng


@dataclass(frozen=True)
class EffectResult:
    applied: bool
    message: Optional[str] = None


def _stage_message(name: str, label: str, delta: int) -> str:
    if delta > 0:
        adverb = {1: " rose!", 2: " rose sharply!"}.get(delta, " rose drastically!")
    else:
        adverb = {-1: " fell!", -2: " harshly fell!"}.get(delta, " severely fell!")
    return f"{name}'s {label}{adverb}"


class MoveEffectResolver:
    def __init__(self, status_engine: Optional[StatusConditionEngine] = None):
        self.status_engine = status_engine or StatusConditionEngine()

    def resolve(self, effect: MoveEffect, attacker: BattleCreature, defender: BattleCreature, rng: Rng) -> EffectResult:
        target = attacker if effect.target is EffectTarget.SELF else defender
        if not rng.chance(effect.chance):
            return EffectResult(False)
        if isinstance(effect, StatChange):
            return self._stat_change(effect, target)
        if isinstance(effect, StatusApply):
            return self._status_apply(effect, target, rng)
        if isinstance(effect, Heal):
            return self._heal(effect, target)
        raise UnknownKeyError("move effect", type(effect).__name__)

    def _stat_change(self, effect: StatChange, target: BattleCreature) -> EffectResult:
        current = target.stages.get(effect.stat)
        change = apply_stage_change(current, effect.stages)
        if change.delta_applied == 0:
            if effect.stages == 0:
                return EffectResult(False)
            direction = "higher" if effect.stages > 0 else "lower"
            return EffectResult(False, f"{target.name}'s {effect.stat.label} won't go any {direction}!")
        target.stages.set(effect.stat, change.stage)
        return EffectResult(True, _stage_message(target.name, effect.stat.label, change.delta_applied))

    def _status_apply(self, effect: StatusApply, target: BattleCreature, rng: Rng) -> EffectResult:
        engine = self.status_engine
        if not engine.can_apply(target, effect.condition):
            return EffectResult(False, engine.immunity_reason(target, effect.condition))
        return EffectResult(True, engine.apply(target, effect.condition, rng))

    def _heal(self, effect: Heal, target: BattleCreature) -> EffectResult:
        if target.current_hp >= target.max_hp:
            return EffectResult(False, f"{target.name}'s HP is full!")
        amount = max(1, target.max_hp * effect.percent // 100)
        target.heal(amount)
        return EffectResult(True, f"{target.name} regained health!")

__all__ = ["MoveEffectResolver", "EffectResult"]
