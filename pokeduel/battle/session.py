"""Battle session: the owned state of one battle.

A session is created fresh for every battle from deep copies of the rosters
the caller supplies and is discarded when the battle ends.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pokeduel.core.errors import RosterError
from pokeduel.core.logging import logger
from .models import BattleCreature
from .rng import Rng, Seed

MAX_TEAM_SIZE = 6


class Side(str, Enum):
    PLAYER = "player"
    NPC = "npc"

    @property
    def opponent(self) -> "Side":
        return Side.NPC if self is Side.PLAYER else Side.PLAYER


class Phase(str, Enum):
    SELECT = "select"
    RESOLVING = "resolving"
    ENDED = "ended"


@dataclass
class Team:
    members: List[BattleCreature]
    active_index: int = 0

    def active(self) -> BattleCreature:
        return self.members[self.active_index]

    def remaining(self) -> int:
        return sum(1 for m in self.members if not m.is_fainted())

    def next_available_index(self) -> Optional[int]:
        for i, m in enumerate(self.members):
            if i != self.active_index and not m.is_fainted():
                return i
        return None

    def switch_to(self, index: int) -> BattleCreature:
        # Stages never survive leaving the field
        self.active().stages.reset()
        self.active_index = index
        return self.active()


def _prepare_roster(roster: Sequence[BattleCreature], side: Side) -> List[BattleCreature]:
    if not roster:
        raise RosterError(f"Cannot start battle: {side.value} team is empty")
    if len(roster) > MAX_TEAM_SIZE:
        raise RosterError(f"Cannot start battle: {side.value} team has {len(roster)} members (max {MAX_TEAM_SIZE})")
    members = [copy.deepcopy(c) for c in roster]
    if not members[0].moves:
        raise RosterError(f"Cannot start battle: {side.value} lead {members[0].name} has no moves")
    for m in members:
        m.reset_for_battle()
    return members


class BattleSession:
    def __init__(self, player: Team, npc: Team, rng: Rng):
        self.teams: Dict[Side, Team] = {Side.PLAYER: player, Side.NPC: npc}
        self.rng = rng
        self.turn = 1
        self.phase = Phase.SELECT
        self.winner: Optional[Side] = None
        self._log: List[str] = []

    @classmethod
    def start(cls, player_roster: Sequence[BattleCreature], npc_roster: Sequence[BattleCreature],
              seed: Optional[Seed] = None) -> "BattleSession":
        player = Team(_prepare_roster(player_roster, Side.PLAYER))
        npc = Team(_prepare_roster(npc_roster, Side.NPC))
        rng = Rng.from_seed(seed)
        logger.info("BattleStart", seed=rng.seed, player=player.active().name, npc=npc.active().name)
        return cls(player, npc, rng)

    # --- log ---
    @property
    def log(self) -> Tuple[str, ...]:
        return tuple(self._log)

    def log_event(self, text: str):
        self._log.append(text)

    # --- queries ---
    @property
    def player(self) -> Team:
        return self.teams[Side.PLAYER]

    @property
    def npc(self) -> Team:
        return self.teams[Side.NPC]

    def team(self, side: Side) -> Team:
        return self.teams[side]

    def active(self, side: Side) -> BattleCreature:
        return self.teams[side].active()

    def remaining(self, side: Side) -> int:
        return self.teams[side].remaining()

    def hp_percent(self, side: Side) -> int:
        c = self.active(side)
        return (c.current_hp * 100) // c.max_hp

    def is_over(self) -> bool:
        return self.phase is Phase.ENDED

    def snapshot(self) -> Dict[str, Any]:
        def creature(c: BattleCreature) -> Dict[str, Any]:
            st = c.status
            return {
                "id": c.id,
                "name": c.name,
                "hp": c.current_hp,
                "max_hp": c.max_hp,
                "stages": c.stages.as_dict(),
                "status": None if st is None else {
                    "condition": st.condition.value,
                    "turns_remaining": st.turns_remaining,
                    "poison_counter": st.poison_counter,
                },
            }
        return {
            "turn": self.turn,
            "phase": self.phase.value,
            "winner": self.winner.value if self.winner else None,
            "seed": self.rng.seed,
            "teams": {
                side.value: {
                    "active_index": team.active_index,
                    "members": [creature(c) for c in team.members],
                }
                for side, team in self.teams.items()
            },
            "log": list(self._log),
        }

__all__ = ["Side", "Phase", "Team", "BattleSession", "MAX_TEAM_SIZE"]
