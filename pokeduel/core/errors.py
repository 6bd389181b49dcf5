"""
Error classes for clearer exception sources.

Only caller contract violations are raised from the battle engine; misses,
immunities and similar game outcomes are reported through the battle log.
"""
from __future__ import annotations

class PokeduelError(Exception):
    pass

class DataLoadError(PokeduelError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(PokeduelError):
    pass

class BattleError(PokeduelError):
    """Base for battle engine contract violations."""

class RosterError(BattleError):
    pass

class InvalidMoveError(BattleError):
    def __init__(self, creature: str, move_id: str):
        super().__init__(f"{creature} does not know move '{move_id}'")
        self.creature = creature
        self.move_id = move_id

class PhaseError(BattleError):
    def __init__(self, phase: str, action: str):
        super().__init__(f"Cannot {action} while battle phase is '{phase}'")
        self.phase = phase
        self.action = action

class UnknownKeyError(BattleError):
    def __init__(self, kind: str, key: object):
        super().__init__(f"Unknown {kind}: {key!r}")
        self.kind = kind
        self.key = key
