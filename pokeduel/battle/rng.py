"""Seeded random source shared by every probabilistic step of a battle.

A session owns exactly one ``Rng``; replaying the same seed with the same
move choices reproduces the same log and final state. Draw order per turn:

1. opponent AI choice (strategy dependent, 0 or 1 draw)
2. speed tie-break (only on exactly equal effective speed)
3. per actor: action gate (paralysis/freeze) -> accuracy (skipped for
   always-hit moves) -> damage roll (damaging, non-immune) -> effect chance
   -> sleep duration (when sleep is applied)
4. end-of-turn ticks draw nothing
"""
from __future__ import annotations
import random
import secrets
from typing import Optional, Sequence, TypeVar, Union

T = TypeVar("T")
Seed = Union[int, str]


class Rng:
    def __init__(self, seed: Seed):
        self.seed = seed
        self._random = random.Random(seed)
        self.draws = 0

    @classmethod
    def from_seed(cls, seed: Optional[Seed] = None) -> "Rng":
        if seed is None:
            seed = secrets.randbits(32)
        return cls(seed)

    def next(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        self.draws += 1
        return self._random.random()

    def index(self, n: int) -> int:
        """Uniform index in range(n) from a single draw."""
        return min(int(self.next() * n), n - 1)

    def pick(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot pick from an empty sequence.")
        return seq[self.index(len(seq))]

    def chance(self, percent: float) -> bool:
        """One draw; True with probability percent/100."""
        return self.next() * 100 < percent

    def __repr__(self) -> str:
        return f"Rng(seed={self.seed!r}, draws={self.draws})"

__all__ = ["Rng", "Seed"]
