"""Persistent status conditions: application, immunities, action gating and ticks.

Only one condition can be active on a creature. Sleep and freeze stop the
creature from acting, paralysis stops it 25% of the time, and poison, burn
and badly-poisoned chip at HP at the end of every turn.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from pokeduel.core.errors import BattleError
from .models import BattleCreature, MoveCategory, StatusCondition, StatusConditionState
from .rng import Rng

PARALYSIS_SKIP_CHANCE = 0.25
FREEZE_THAW_CHANCE = 0.20
SLEEP_TURNS = (1, 3)

TYPE_IMMUNITIES: Dict[StatusCondition, FrozenSet[str]] = {
    StatusCondition.PARALYSIS: frozenset({"electric"}),
    StatusCondition.SLEEP: frozenset(),
    StatusCondition.POISON: frozenset({"poison", "steel"}),
    StatusCondition.BADLY_POISONED: frozenset({"poison", "steel"}),
    StatusCondition.BURN: frozenset({"fire"}),
    StatusCondition.FREEZE: frozenset({"ice"}),
}

# {name} is replaced with the creature's display name
STATUS_MESSAGES: Dict[StatusCondition, Dict[str, str]] = {
    StatusCondition.PARALYSIS: {
        "apply": "{name} is paralyzed! It may be unable to move!",
        "already": "{name} is already paralyzed!",
        "blocked": "{name} is paralyzed! It can't move!",
    },
    StatusCondition.SLEEP: {
        "apply": "{name} fell asleep!",
        "already": "{name} is already asleep!",
        "blocked": "{name} is fast asleep.",
        "cured": "{name} woke up!",
    },
    StatusCondition.POISON: {
        "apply": "{name} was poisoned!",
        "already": "{name} is already poisoned!",
        "tick": "{name} is hurt by poison!",
    },
    StatusCondition.BADLY_POISONED: {
        "apply": "{name} was badly poisoned!",
        "already": "{name} is already poisoned!",
        "tick": "{name} is hurt by poison!",
    },
    StatusCondition.BURN: {
        "apply": "{name} was burned!",
        "already": "{name} is already burned!",
        "tick": "{name} is hurt by its burn!",
    },
    StatusCondition.FREEZE: {
        "apply": "{name} was frozen solid!",
        "already": "{name} is already frozen!",
        "blocked": "{name} is frozen solid!",
        "cured": "{name} thawed out!",
    },
}

def status_message(condition: StatusCondition, kind: str, name: str) -> str:
    return STATUS_MESSAGES[condition][kind].format(name=name)


@dataclass(frozen=True)
class ActCheck:
    can_act: bool
    message: Optional[str] = None

@dataclass(frozen=True)
class StatusTick:
    damage: int
    message: Optional[str] = None


class StatusConditionEngine:
    def is_immune(self, creature: BattleCreature, condition: StatusCondition) -> bool:
        immune = TYPE_IMMUNITIES[StatusCondition.parse(condition)]
        return any(t in immune for t in creature.types)

    def can_apply(self, creature: BattleCreature, condition: StatusCondition) -> bool:
        condition = StatusCondition.parse(condition)
        if creature.status is not None:
            return False
        return not self.is_immune(creature, condition)

    def immunity_reason(self, creature: BattleCreature, condition: StatusCondition) -> Optional[str]:
        """Log line explaining why ``can_apply`` is False, or None if it is True."""
        condition = StatusCondition.parse(condition)
        if creature.status is not None:
            if creature.status.condition is condition:
                return status_message(condition, "already", creature.name)
            return f"But it failed! {creature.name} is already afflicted."
        if self.is_immune(creature, condition):
            return f"It doesn't affect {creature.name}..."
        return None

    def apply(self, creature: BattleCreature, condition: StatusCondition, rng: Rng) -> str:
        condition = StatusCondition.parse(condition)
        if not self.can_apply(creature, condition):
            raise BattleError(f"{condition.value} cannot be applied to {creature.name}")
        state = StatusConditionState(condition=condition)
        if condition is StatusCondition.SLEEP:
            lo, hi = SLEEP_TURNS
            state.turns_remaining = lo + rng.index(hi - lo + 1)
        elif condition is StatusCondition.BADLY_POISONED:
            state.poison_counter = 1
        creature.status = state
        return status_message(condition, "apply", creature.name)

    def cure(self, creature: BattleCreature):
        creature.status = None

    def check_can_act(self, creature: BattleCreature, rng: Rng) -> ActCheck:
        state = creature.status
        if state is None:
            return ActCheck(True)
        cond = state.condition
        if cond is StatusCondition.PARALYSIS:
            if rng.next() < PARALYSIS_SKIP_CHANCE:
                return ActCheck(False, status_message(cond, "blocked", creature.name))
            return ActCheck(True)
        if cond is StatusCondition.SLEEP:
            state.turns_remaining = max(0, state.turns_remaining - 1)
            if state.turns_remaining == 0:
                self.cure(creature)
                return ActCheck(True, status_message(cond, "cured", creature.name))
            return ActCheck(False, status_message(cond, "blocked", creature.name))
        if cond is StatusCondition.FREEZE:
            if rng.next() < FREEZE_THAW_CHANCE:
                self.cure(creature)
                return ActCheck(True, status_message(cond, "cured", creature.name))
            return ActCheck(False, status_message(cond, "blocked", creature.name))
        return ActCheck(True)

    def end_of_turn(self, creature: BattleCreature) -> StatusTick:
        """Compute the end-of-turn damage; HP itself is left to the caller."""
        state = creature.status
        if state is None:
            return StatusTick(0)
        cond = state.condition
        max_hp = creature.max_hp
        if cond is StatusCondition.POISON:
            dmg = max_hp // 8
        elif cond is StatusCondition.BURN:
            dmg = max_hp // 16
        elif cond is StatusCondition.BADLY_POISONED:
            dmg = (max_hp * state.poison_counter) // 16
            state.poison_counter += 1
        else:
            return StatusTick(0)
        return StatusTick(dmg, status_message(cond, "tick", creature.name))

    def attack_modifier(self, creature: BattleCreature, category: MoveCategory) -> float:
        if category is MoveCategory.PHYSICAL and creature.condition is StatusCondition.BURN:
            return 0.5
        return 1.0

    def speed_modifier(self, creature: BattleCreature) -> float:
        return 0.5 if creature.condition is StatusCondition.PARALYSIS else 1.0

__all__ = [
    "StatusConditionEngine", "ActCheck", "StatusTick",
    "TYPE_IMMUNITIES", "STATUS_MESSAGES", "status_message",
]
