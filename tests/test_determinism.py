from pokeduel.battle.ai import RandomAI, StrategicAI
from pokeduel.battle.core import BattleStateMachine
from pokeduel.battle.session import BattleSession
from pokeduel.data.loader import load_roster


def _first_move(session):
    return session.player.active().moves[0].id


def _play(seed, ai_cls):
    player, npc = load_roster('player'), load_roster('rival')
    session = BattleSession.start(player, npc, seed=seed)
    machine = BattleStateMachine(ai=ai_cls())
    machine.run_battle(session, _first_move, max_turns=300)
    return session


def test_same_seed_same_log_and_state():
    for ai_cls in (RandomAI, StrategicAI):
        a, b = _play(2024, ai_cls), _play(2024, ai_cls)
        assert a.log == b.log
        assert a.snapshot() == b.snapshot()
        assert a.rng.draws == b.rng.draws


def test_different_seeds_usually_differ():
    logs = {_play(seed, RandomAI).log for seed in range(5)}
    assert len(logs) > 1


def test_source_rosters_untouched_by_battle():
    player = load_roster('player')
    hp_before = [c.current_hp for c in player]
    session = BattleSession.start(player, load_roster('rival'), seed=7)
    BattleStateMachine().run_battle(session, _first_move, max_turns=300)
    assert [c.current_hp for c in player] == hp_before
    assert all(c.status is None and c.stages.is_neutral() for c in player)
