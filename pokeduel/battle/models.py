"""Battle data model: moves, effect descriptors, status state and creatures."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pokeduel.core.errors import InvalidMoveError, UnknownKeyError, ValidationError
from .stages import Stages, Stat

STAT_KEYS: Tuple[str, ...] = ("hp", "atk", "def", "sp_atk", "sp_def", "speed")
MAX_MOVES = 4


class MoveCategory(str, Enum):
    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"

    @classmethod
    def parse(cls, raw: object) -> "MoveCategory":
        if isinstance(raw, MoveCategory):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise UnknownKeyError("move category", raw) from None


class StatusCondition(str, Enum):
    PARALYSIS = "paralysis"
    SLEEP = "sleep"
    POISON = "poison"
    BURN = "burn"
    FREEZE = "freeze"
    BADLY_POISONED = "badly-poisoned"

    @classmethod
    def parse(cls, raw: object) -> "StatusCondition":
        if isinstance(raw, StatusCondition):
            return raw
        key = str(raw).strip().lower().replace("_", "-")
        cond = _CONDITION_ALIASES.get(key)
        if cond is None:
            raise UnknownKeyError("status condition", raw)
        return cond


_CONDITION_ALIASES: Dict[str, StatusCondition] = {c.value: c for c in StatusCondition}
_CONDITION_ALIASES.update({
    "par": StatusCondition.PARALYSIS,
    "slp": StatusCondition.SLEEP,
    "psn": StatusCondition.POISON,
    "brn": StatusCondition.BURN,
    "frz": StatusCondition.FREEZE,
    "tox": StatusCondition.BADLY_POISONED,
    "toxic": StatusCondition.BADLY_POISONED,
})


class EffectTarget(str, Enum):
    SELF = "self"
    OPPONENT = "opponent"

    @classmethod
    def parse(cls, raw: object) -> "EffectTarget":
        if isinstance(raw, EffectTarget):
            return raw
        key = str(raw).strip().lower()
        if key in ("self", "user"):
            return cls.SELF
        if key in ("opponent", "foe", "target"):
            return cls.OPPONENT
        raise UnknownKeyError("effect target", raw)


def _check_chance(chance: int):
    if not 0 <= chance <= 100:
        raise ValidationError(f"effect chance must be within 0..100, got {chance}")

@dataclass(frozen=True)
class StatChange:
    stat: Stat
    stages: int
    target: EffectTarget = EffectTarget.OPPONENT
    chance: int = 100

    def __post_init__(self):
        object.__setattr__(self, "stat", Stat.parse(self.stat))
        object.__setattr__(self, "target", EffectTarget.parse(self.target))
        _check_chance(self.chance)

@dataclass(frozen=True)
class StatusApply:
    condition: StatusCondition
    target: EffectTarget = EffectTarget.OPPONENT
    chance: int = 100

    def __post_init__(self):
        object.__setattr__(self, "condition", StatusCondition.parse(self.condition))
        object.__setattr__(self, "target", EffectTarget.parse(self.target))
        _check_chance(self.chance)

@dataclass(frozen=True)
class Heal:
    percent: int = 50
    target: EffectTarget = EffectTarget.SELF
    chance: int = 100

    def __post_init__(self):
        object.__setattr__(self, "target", EffectTarget.parse(self.target))
        _check_chance(self.chance)
        if not 0 < self.percent <= 100:
            raise ValidationError(f"heal percent must be within 1..100, got {self.percent}")

MoveEffect = Union[StatChange, StatusApply, Heal]


@dataclass
class Move:
    id: str
    name: str
    type: str
    category: MoveCategory
    power: int = 0
    accuracy: int = 100  # 0 => always hits
    effect: Optional[MoveEffect] = None

    def __post_init__(self):
        self.id = str(self.id)
        self.type = self.type.lower()
        self.category = MoveCategory.parse(self.category)
        self.power = int(self.power or 0)
        self.accuracy = int(self.accuracy or 0)
        if self.power < 0:
            raise ValidationError(f"{self.name}: power cannot be negative")
        if not 0 <= self.accuracy <= 100:
            raise ValidationError(f"{self.name}: accuracy must be within 0..100")

    @property
    def is_damaging(self) -> bool:
        return self.category is not MoveCategory.STATUS and self.power > 0

    @property
    def always_hits(self) -> bool:
        return self.accuracy == 0


@dataclass
class StatusConditionState:
    condition: StatusCondition
    turns_remaining: int = 0   # sleep only
    poison_counter: int = 0    # badly-poisoned only


@dataclass
class BattleCreature:
    id: str
    name: str
    types: Tuple[str, ...]
    level: int
    stats: Dict[str, int]
    moves: List[Move] = field(default_factory=list)
    current_hp: Optional[int] = None  # lazily initialized to max HP
    stages: Stages = field(default_factory=Stages)
    status: Optional[StatusConditionState] = None

    def __post_init__(self):
        self.id = str(self.id)
        self.types = tuple(t.lower() for t in self.types)
        if not 1 <= len(self.types) <= 2:
            raise ValidationError(f"{self.name}: a creature has one or two types, got {len(self.types)}")
        missing = [k for k in STAT_KEYS if k not in self.stats]
        if missing:
            raise UnknownKeyError("stat block for " + self.name, ",".join(missing))
        self.stats = {k: int(self.stats[k]) for k in STAT_KEYS}
        if self.stats["hp"] <= 0:
            raise ValidationError(f"{self.name}: max HP must be positive")
        if len(self.moves) > MAX_MOVES:
            raise ValidationError(f"{self.name}: at most {MAX_MOVES} moves, got {len(self.moves)}")
        if self.current_hp is None:
            self.current_hp = self.stats["hp"]
        self.current_hp = max(0, min(int(self.current_hp), self.stats["hp"]))

    @property
    def max_hp(self) -> int:
        return self.stats["hp"]

    @property
    def condition(self) -> Optional[StatusCondition]:
        return self.status.condition if self.status else None

    def is_fainted(self) -> bool:
        return (self.current_hp or 0) <= 0

    def has_type(self, type_name: str) -> bool:
        return type_name.lower() in self.types

    def move(self, move_id: str) -> Move:
        for m in self.moves:
            if m.id == move_id:
                return m
        raise InvalidMoveError(self.name, move_id)

    def move_ids(self) -> List[str]:
        return [m.id for m in self.moves]

    def take_damage(self, amount: int) -> int:
        old = int(self.current_hp or 0)
        self.current_hp = max(0, old - max(0, int(amount)))
        return old - self.current_hp

    def heal(self, amount: int) -> int:
        old = int(self.current_hp or 0)
        self.current_hp = min(self.max_hp, old + max(0, int(amount)))
        return self.current_hp - old

    def reset_for_battle(self):
        self.current_hp = self.max_hp
        self.stages = Stages()
        self.status = None

__all__ = [
    "MoveCategory", "StatusCondition", "EffectTarget", "Stat",
    "StatChange", "StatusApply", "Heal", "MoveEffect",
    "Move", "StatusConditionState", "BattleCreature", "STAT_KEYS",
]
