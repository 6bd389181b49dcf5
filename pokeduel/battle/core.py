"""Battle state machine: Select -> Resolving -> Select | Ended.

``submit_move`` resolves one full turn synchronously. Any pacing a UI wants
is a replay of the lines this returns; nothing here sleeps or yields.
"""
from __future__ import annotations
import math
from typing import Callable, List, Optional, Tuple

from pokeduel.core.errors import InvalidMoveError, PhaseError
from pokeduel.core.logging import logger
from .ai import AiStrategy, StrategicAI
from .damage import damage_for_move
from .effects import MoveEffectResolver
from .models import BattleCreature, Move
from .session import BattleSession, Phase, Side
from .stages import Stat, stage_multiplier_acc_eva
from .status import StatusConditionEngine
from .typechart import TypeEffectivenessTable

PlayerPolicy = Callable[[BattleSession], Optional[str]]


def effective_speed(creature: BattleCreature, status_engine: StatusConditionEngine) -> int:
    return math.floor(creature.stats["speed"] * creature.stages.multiplier(Stat.SPEED)
                      * status_engine.speed_modifier(creature))


class BattleStateMachine:
    def __init__(self, type_table: Optional[TypeEffectivenessTable] = None, ai: Optional[AiStrategy] = None,
                 status_engine: Optional[StatusConditionEngine] = None,
                 effects: Optional[MoveEffectResolver] = None):
        self.type_table = type_table or TypeEffectivenessTable()
        self.status_engine = status_engine or StatusConditionEngine()
        self.effects = effects or MoveEffectResolver(self.status_engine)
        self.ai = ai or StrategicAI(self.type_table, self.status_engine)

    # ------------------------------------------------------------------
    # Turn entry point
    # ------------------------------------------------------------------
    def submit_move(self, session: BattleSession, move_id: Optional[str]) -> List[str]:
        """Resolve one turn with the player's move; returns the lines it logged."""
        if session.phase is not Phase.SELECT:
            raise PhaseError(session.phase.value, "submit a move")
        player_move = self._player_move(session, move_id)
        start = len(session.log)
        session.phase = Phase.RESOLVING
        try:
            self._resolve_turn(session, player_move)
        finally:
            if session.phase is Phase.RESOLVING:
                session.phase = Phase.ENDED if session.winner else Phase.SELECT
        return list(session.log[start:])

    def _player_move(self, session: BattleSession, move_id: Optional[str]) -> Optional[Move]:
        active = session.active(Side.PLAYER)
        if not active.moves:
            if move_id is not None:
                raise InvalidMoveError(active.name, move_id)
            return None
        if move_id is None:
            raise InvalidMoveError(active.name, "<none>")
        return active.move(move_id)

    def _npc_move(self, session: BattleSession) -> Optional[Move]:
        npc = session.active(Side.NPC)
        if not npc.moves:
            return None
        move_id = self.ai.choose_move(npc, session.active(Side.PLAYER), session.rng)
        return npc.move(move_id)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def _resolve_turn(self, session: BattleSession, player_move: Optional[Move]):
        logger.debug("TurnStart", turn=session.turn, draws=session.rng.draws)
        npc_move = self._npc_move(session)
        moves = {Side.PLAYER: player_move, Side.NPC: npc_move}
        order = self.turn_order(session)
        logger.debug("TurnOrder", first=order[0].value)

        # Creatures that were active when the turn began; a switch-in does not act
        actors = {side: session.active(side) for side in Side}
        for side in order:
            if session.winner:
                break
            attacker = session.active(side)
            if attacker is not actors[side] or attacker.is_fainted():
                continue
            self._execute(session, side, moves[side])
            self._check_faint(session, side.opponent)

        for side in order:
            if session.winner:
                break
            self._end_of_turn(session, side)

        if session.winner:
            self._finish(session)
        else:
            session.turn += 1
            session.phase = Phase.SELECT

    def turn_order(self, session: BattleSession) -> Tuple[Side, Side]:
        p_speed = effective_speed(session.active(Side.PLAYER), self.status_engine)
        n_speed = effective_speed(session.active(Side.NPC), self.status_engine)
        if p_speed != n_speed:
            first = Side.PLAYER if p_speed > n_speed else Side.NPC
        else:
            first = Side.PLAYER if session.rng.next() < 0.5 else Side.NPC
        return first, first.opponent

    def _execute(self, session: BattleSession, side: Side, move: Optional[Move]):
        attacker = session.active(side)
        defender = session.active(side.opponent)
        rng = session.rng

        gate = self.status_engine.check_can_act(attacker, rng)
        if gate.message:
            session.log_event(gate.message)
        if not gate.can_act:
            return
        if move is None:
            session.log_event(f"{attacker.name} has no moves to use!")
            return

        session.log_event(f"{attacker.name} used {move.name}!")
        if not self.accuracy_check(attacker, defender, move, rng):
            session.log_event(f"{attacker.name}'s attack missed!")
            return

        if move.is_damaging:
            mult = self.type_table.multiplier(move.type, defender.types)
            if mult == 0:
                session.log_event(f"It doesn't affect {defender.name}...")
            elif mult > 1:
                session.log_event("It's super effective!")
            elif mult < 1:
                session.log_event("It's not very effective...")
            # x0 still draws the damage roll
            dealt = defender.take_damage(damage_for_move(attacker, defender, move, mult, self.status_engine, rng))
            if mult != 0:
                session.log_event(f"{defender.name} took {dealt} damage!")

        # Effects resolve on every hit; fainting is handled after the action
        effect = move.effect
        if effect is None:
            if not move.is_damaging:
                session.log_event("But nothing happened.")
            return
        result = self.effects.resolve(effect, attacker, defender, rng)
        if result.message:
            session.log_event(result.message)
        elif not move.is_damaging:
            session.log_event("But nothing happened.")

    def accuracy_check(self, attacker: BattleCreature, defender: BattleCreature, move: Move, rng) -> bool:
        if move.always_hits:
            return True
        acc_mod = stage_multiplier_acc_eva(attacker.stages.accuracy)
        eva_mod = stage_multiplier_acc_eva(defender.stages.evasion)
        return rng.next() * 100 < move.accuracy * (acc_mod / eva_mod)

    # ------------------------------------------------------------------
    # Faint / switch / end of turn
    # ------------------------------------------------------------------
    def _check_faint(self, session: BattleSession, side: Side):
        team = session.team(side)
        creature = team.active()
        if not creature.is_fainted() or session.winner:
            return
        session.log_event(f"{creature.name} fainted!")
        nxt = team.next_available_index()
        if nxt is None:
            session.winner = side.opponent
            logger.debug("BattleDecided", winner=session.winner.value, turn=session.turn)
            return
        incoming = team.switch_to(nxt)
        if side is Side.PLAYER:
            session.log_event(f"Go! {incoming.name}!")
        else:
            session.log_event(f"The opponent sent out {incoming.name}!")

    def _end_of_turn(self, session: BattleSession, side: Side):
        creature = session.active(side)
        if creature.is_fainted():
            return
        tick = self.status_engine.end_of_turn(creature)
        if tick.message is None or tick.damage == 0:
            return
        creature.take_damage(tick.damage)
        session.log_event(tick.message)
        self._check_faint(session, side)

    def _finish(self, session: BattleSession):
        if session.winner is Side.PLAYER:
            session.log_event("You won the battle!")
        else:
            session.log_event("You lost the battle...")
        session.phase = Phase.ENDED
        logger.info("BattleEnd", winner=session.winner.value, turns=session.turn, draws=session.rng.draws)

    # ------------------------------------------------------------------
    # Convenience driver
    # ------------------------------------------------------------------
    def run_battle(self, session: BattleSession, player_policy: PlayerPolicy, max_turns: int = 500) -> Optional[Side]:
        """Submit moves from ``player_policy`` until the battle ends or ``max_turns`` pass."""
        while not session.is_over() and session.turn <= max_turns:
            self.submit_move(session, player_policy(session))
        return session.winner

__all__ = ["BattleStateMachine", "effective_speed", "PlayerPolicy"]
