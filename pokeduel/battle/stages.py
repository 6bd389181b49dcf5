"""Stat stage bookkeeping (-6..+6) and stage multipliers."""
from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict

from pokeduel.core.errors import UnknownKeyError

MIN_STAGE = -6
MAX_STAGE = 6


class Stat(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"
    SP_ATK = "sp_atk"
    SP_DEF = "sp_def"
    SPEED = "speed"
    ACCURACY = "accuracy"
    EVASION = "evasion"

    @property
    def label(self) -> str:
        return _STAT_LABELS[self]

    @property
    def is_accuracy_or_evasion(self) -> bool:
        return self in (Stat.ACCURACY, Stat.EVASION)

    @classmethod
    def parse(cls, raw: object) -> "Stat":
        if isinstance(raw, Stat):
            return raw
        key = str(raw).strip().replace("_", "-").lower()
        stat = _STAT_ALIASES.get(key)
        if stat is None:
            raise UnknownKeyError("stat", raw)
        return stat


_STAT_LABELS = {
    Stat.ATTACK: "Attack",
    Stat.DEFENSE: "Defense",
    Stat.SP_ATK: "Sp. Atk",
    Stat.SP_DEF: "Sp. Def",
    Stat.SPEED: "Speed",
    Stat.ACCURACY: "accuracy",
    Stat.EVASION: "evasiveness",
}

_STAT_ALIASES: Dict[str, Stat] = {
    "attack": Stat.ATTACK, "atk": Stat.ATTACK,
    "defense": Stat.DEFENSE, "def": Stat.DEFENSE,
    "sp-atk": Stat.SP_ATK, "spatk": Stat.SP_ATK, "special-attack": Stat.SP_ATK,
    "sp-def": Stat.SP_DEF, "spdef": Stat.SP_DEF, "special-defense": Stat.SP_DEF,
    "speed": Stat.SPEED, "spe": Stat.SPEED,
    "accuracy": Stat.ACCURACY,
    "evasion": Stat.EVASION,
}


def _check_stage(stage: int) -> int:
    s = int(stage)
    if s < MIN_STAGE or s > MAX_STAGE:
        raise UnknownKeyError("stat stage", stage)
    return s

def stage_multiplier(stage: int, accuracy_or_evasion: bool = False) -> float:
    s = _check_stage(stage)
    if accuracy_or_evasion:
        return (3 + s)/3 if s >= 0 else 3/(3 - s)
    return (2 + s)/2 if s >= 0 else 2/(2 - s)

def stage_multiplier_acc_eva(stage: int) -> float:
    return stage_multiplier(stage, True)


@dataclass(frozen=True)
class StageChange:
    stage: int
    delta_applied: int
    clamped: bool

def apply_stage_change(current: int, delta: int) -> StageChange:
    """Clamp ``current + delta`` to [-6, +6] and report whether clamping occurred."""
    target = int(current) + int(delta)
    new = max(MIN_STAGE, min(MAX_STAGE, target))
    return StageChange(stage=new, delta_applied=new - int(current), clamped=new != target)


@dataclass
class Stages:
    attack: int = 0
    defense: int = 0
    sp_atk: int = 0
    sp_def: int = 0
    speed: int = 0
    accuracy: int = 0
    evasion: int = 0

    def get(self, stat: Stat) -> int:
        return getattr(self, Stat.parse(stat).value)

    def set(self, stat: Stat, value: int):
        setattr(self, Stat.parse(stat).value, max(MIN_STAGE, min(MAX_STAGE, int(value))))

    def multiplier(self, stat: Stat) -> float:
        stat = Stat.parse(stat)
        return stage_multiplier(self.get(stat), stat.is_accuracy_or_evasion)

    def reset(self):
        for f in fields(self):
            setattr(self, f.name, 0)

    def is_neutral(self) -> bool:
        return all(getattr(self, f.name) == 0 for f in fields(self))

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

__all__ = [
    "Stat", "Stages", "StageChange", "MIN_STAGE", "MAX_STAGE",
    "stage_multiplier", "stage_multiplier_acc_eva", "apply_stage_change",
]
