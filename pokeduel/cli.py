from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional

from pokeduel.battle.ai import StrategicAI, available_strategies, get_strategy
from pokeduel.battle.core import BattleStateMachine, PlayerPolicy
from pokeduel.battle.rng import Rng
from pokeduel.battle.session import BattleSession, Side
from pokeduel.battle.status import StatusConditionEngine
from pokeduel.core.errors import InvalidMoveError, PokeduelError
from pokeduel.core.logging import logger
from pokeduel.data.loader import available_rosters, load_roster, load_type_table
from pokeduel.system.settings import Settings
from pokeduel.ui import battle as ui
from pokeduel.ui import typewriter as tw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokeduel", description="Turn-based creature battles in the terminal")
    parser.add_argument("--player", default="player", help="Player roster name (assets/rosters) or JSON path")
    parser.add_argument("--npc", default="rival", help="Opponent roster name (assets/rosters) or JSON path")
    parser.add_argument("--seed", help="Battle seed (integer or text); random when omitted")
    parser.add_argument("--ai", choices=available_strategies(), help="Opponent move policy")
    parser.add_argument("--type-chart", help="JSON type chart overriding the built-in one")
    parser.add_argument("--auto", action="store_true", help="Let the strategic policy play the player's side too")
    parser.add_argument("--json", action="store_true", help="Print the final battle snapshot as JSON (implies --auto)")
    parser.add_argument("--max-turns", type=int, default=500, help="Stop an automatic battle after this many turns")
    parser.add_argument("--list-rosters", action="store_true", help="List bundled rosters and exit")
    return parser

def _parse_seed(raw):
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return str(raw)


def auto_policy(machine: BattleStateMachine, seed) -> PlayerPolicy:
    """Strategic choices for the player side, drawing from a private Rng."""
    chooser = StrategicAI(machine.type_table, machine.status_engine)
    rng = Rng(f"auto:{seed}")

    def choose(session: BattleSession) -> Optional[str]:
        player = session.active(Side.PLAYER)
        if not player.moves:
            return None
        return chooser.choose_move(player, session.active(Side.NPC), rng)
    return choose

def prompt_move(session: BattleSession, machine: BattleStateMachine) -> Optional[str]:
    player = session.active(Side.PLAYER)
    if not player.moves:
        tw.wait_for_continue(f"{player.name} has no moves. Press Enter...")
        return None
    ui.render_moves(player, session.active(Side.NPC), machine.type_table)
    while True:
        raw = input("Move (number or id)> ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(player.moves):
            return player.moves[int(raw) - 1].id
        if raw in player.move_ids():
            return raw
        print(f"Choose 1-{len(player.moves)}.")


def play_interactive(session: BattleSession, machine: BattleStateMachine, speed: int):
    while not session.is_over():
        ui.render_field(session)
        move_id = prompt_move(session, machine)
        try:
            lines = machine.submit_move(session, move_id)
        except InvalidMoveError as e:
            print(str(e))
            continue
        tw.replay(lines, speed)
    ui.render_result(session)

def play_auto(session: BattleSession, machine: BattleStateMachine, policy: PlayerPolicy, max_turns: int,
              speed: int, quiet: bool = False):
    while not session.is_over() and session.turn <= max_turns:
        lines = machine.submit_move(session, policy(session))
        if not quiet:
            tw.replay(lines, speed)
    if not quiet:
        ui.render_result(session)


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    settings.apply_log_level()

    if args.list_rosters:
        for name in available_rosters():
            print(name)
        return 0

    seed = _parse_seed(args.seed if args.seed is not None else settings.data.seed)
    try:
        type_table = load_type_table(args.type_chart or settings.data.type_chart_path)
        player = load_roster(args.player, type_table)
        npc = load_roster(args.npc, type_table)
        engine = StatusConditionEngine()
        ai = get_strategy(args.ai or settings.data.ai_strategy, type_table, engine)
        machine = BattleStateMachine(type_table=type_table, ai=ai, status_engine=engine)
        session = BattleSession.start(player, npc, seed=seed)
    except PokeduelError as e:
        logger.error("BattleSetupFailed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    speed = settings.data.text_speed
    try:
        if args.json:
            play_auto(session, machine, auto_policy(machine, session.rng.seed), args.max_turns, speed, quiet=True)
            print(json.dumps(session.snapshot(), indent=2))
        elif args.auto:
            play_auto(session, machine, auto_policy(machine, session.rng.seed), args.max_turns, speed)
        else:
            play_interactive(session, machine, speed)
    except (KeyboardInterrupt, EOFError):
        print("\nBattle abandoned.")
        return 130
    return 0

if __name__ == "__main__":
    sys.exit(run())
