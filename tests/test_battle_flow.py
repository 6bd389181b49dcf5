import pytest

from pokeduel.battle.ai import FirstMoveAI
from pokeduel.battle.core import BattleStateMachine, effective_speed
from pokeduel.battle.models import BattleCreature, Move, StatChange, StatusApply, StatusCondition, StatusConditionState
from pokeduel.battle.rng import Rng
from pokeduel.battle.session import BattleSession, Phase, Side
from pokeduel.battle.status import StatusConditionEngine
from pokeduel.core.errors import InvalidMoveError, PhaseError


class ScriptedRng(Rng):
    """Replays fixed values, then a constant."""
    def __init__(self, *values: float, rest: float = 0.0):
        super().__init__(0)
        self.values = list(values)
        self.rest = rest

    def next(self) -> float:
        self.draws += 1
        return self.values.pop(0) if self.values else self.rest


BOLT = Move(id='thunderbolt', name='Thunderbolt', type='electric', category='special', power=90)
SPARK = Move(id='spark', name='Spark', type='electric', category='physical', power=60,
             effect=StatusApply(StatusCondition.PARALYSIS, chance=30))
TACKLE = Move(id='tackle', name='Tackle', type='normal', category='physical', power=40)
GROWL = Move(id='growl', name='Growl', type='normal', category='status', effect=StatChange('attack', -1))
SPLASH = Move(id='splash', name='Splash', type='water', category='status')
DIG = Move(id='dig', name='Dig', type='ground', category='physical', power=80, accuracy=50)


def _mon(name, types=('normal',), speed=50, hp=200, moves=(TACKLE,)):
    return BattleCreature(id=name.lower(), name=name, types=types, level=50, moves=list(moves),
                          stats={'hp': hp, 'atk': 80, 'def': 80, 'sp_atk': 80, 'sp_def': 80, 'speed': speed})


def _battle(player, npc, *values, rest=0.0):
    session = BattleSession.start(player, npc, seed=1)
    session.rng = ScriptedRng(*values, rest=rest)
    return session, BattleStateMachine(ai=FirstMoveAI())


def test_faint_at_one_hp_switches_in_next_creature():
    session, machine = _battle([_mon('Zap', ('electric',), speed=100, moves=(BOLT,))],
                               [_mon('Foe'), _mon('Backup')])
    session.active(Side.NPC).current_hp = 1
    lines = machine.submit_move(session, 'thunderbolt')
    assert lines == ["Zap used Thunderbolt!", "Foe took 1 damage!", "Foe fainted!",
                     "The opponent sent out Backup!"]
    assert session.active(Side.NPC).name == 'Backup'
    # Backup switched in mid-turn and must not act
    assert session.active(Side.PLAYER).current_hp == session.active(Side.PLAYER).max_hp
    assert session.phase is Phase.SELECT and session.turn == 2


def test_faint_of_last_creature_wins_and_locks_session():
    session, machine = _battle([_mon('Zap', ('electric',), speed=100, moves=(BOLT,))], [_mon('Foe')])
    session.active(Side.NPC).current_hp = 1
    lines = machine.submit_move(session, 'thunderbolt')
    assert lines[-2:] == ["Foe fainted!", "You won the battle!"]
    assert session.winner is Side.PLAYER
    assert session.phase is Phase.ENDED and session.is_over()
    before = session.snapshot()
    with pytest.raises(PhaseError):
        machine.submit_move(session, 'thunderbolt')
    assert session.snapshot() == before


def test_player_loss_line():
    session, machine = _battle([_mon('Slow', speed=10)], [_mon('Fast', speed=90)])
    session.active(Side.PLAYER).current_hp = 1
    lines = machine.submit_move(session, 'tackle')
    assert "Slow used Tackle!" not in lines
    assert lines[-2:] == ["Slow fainted!", "You lost the battle..."]
    assert session.winner is Side.NPC


def test_player_switch_in_does_not_act():
    session, machine = _battle([_mon('Lead', speed=10), _mon('Sub', speed=10)], [_mon('Fast', speed=90)])
    session.active(Side.PLAYER).current_hp = 1
    lines = machine.submit_move(session, 'tackle')
    assert lines[-2:] == ["Lead fainted!", "Go! Sub!"]
    assert not any(l.startswith("Sub used") for l in lines)
    assert session.active(Side.NPC).current_hp == session.active(Side.NPC).max_hp


def test_effect_applies_after_damage_and_only_on_hit():
    session, machine = _battle([_mon('Zap', ('electric',), speed=100, moves=(SPARK,))],
                               [_mon('Foe', speed=10, moves=(SPLASH,))])
    # accuracy, damage roll, effect chance, then Foe's paralysis gate
    session.rng.values = [0.0, 0.0, 0.1, 0.0]
    lines = machine.submit_move(session, 'spark')
    hit = lines.index("Foe is paralyzed! It may be unable to move!")
    assert lines[0] == "Zap used Spark!"
    assert lines[1].startswith("Foe took ")
    assert hit == 2
    assert lines[3] == "Foe is paralyzed! It can't move!"


def test_missed_move_skips_damage_and_effect():
    dig = Move(id='dig', name='Dig', type='ground', category='physical', power=80, accuracy=50,
               effect=StatChange('defense', -1))
    session, machine = _battle([_mon('Mole', speed=100, moves=(dig,))], [_mon('Foe', speed=10, moves=(SPLASH,))],
                               0.9)
    lines = machine.submit_move(session, 'dig')
    assert lines[:2] == ["Mole used Dig!", "Mole's attack missed!"]
    foe = session.active(Side.NPC)
    assert foe.current_hp == foe.max_hp and foe.stages.defense == 0
    assert "Foe used Splash!" in lines and "But nothing happened." in lines


def test_opponent_effect_still_resolves_on_fainting_hit():
    crunch = Move(id='crunch', name='Crunch', type='dark', category='physical', power=80,
                  effect=StatChange('defense', -1))
    session, machine = _battle([_mon('Fang', speed=100, moves=(crunch,))], [_mon('Foe')])
    session.active(Side.NPC).current_hp = 1
    lines = machine.submit_move(session, 'crunch')
    assert lines == ["Fang used Crunch!", "Foe took 1 damage!", "Foe's Defense fell!", "Foe fainted!",
                     "You won the battle!"]
    # accuracy, damage, effect chance
    assert session.rng.draws == 3


def test_immune_target_still_takes_the_effect():
    shock = Move(id='shock', name='Shock', type='electric', category='special', power=60,
                 effect=StatChange('defense', -1))
    session, machine = _battle([_mon('Zap', ('electric',), speed=100, moves=(shock,))],
                               [_mon('Mole', ('ground',), speed=10, moves=(SPLASH,))])
    lines = machine.submit_move(session, 'shock')
    assert lines[:3] == ["Zap used Shock!", "It doesn't affect Mole...", "Mole's Defense fell!"]
    mole = session.active(Side.NPC)
    assert mole.current_hp == mole.max_hp
    assert mole.stages.defense == -1
    # Zap accuracy, damage roll, effect chance, Splash accuracy
    assert session.rng.draws == 4


@pytest.mark.parametrize("category", ['physical', 'special'])
def test_zero_power_move_never_damages(category):
    feint = Move(id='feint', name='Feint', type='fighting', category=category, power=0)
    session, machine = _battle([_mon('User', speed=100, moves=(feint,))], [_mon('Foe', speed=10, moves=(SPLASH,))])
    lines = machine.submit_move(session, 'feint')
    assert lines[:2] == ["User used Feint!", "But nothing happened."]
    foe = session.active(Side.NPC)
    assert foe.current_hp == foe.max_hp


def test_zero_damage_tick_is_not_logged():
    session, machine = _battle([_mon('A', speed=100, moves=(SPLASH,))], [_mon('Tiny', speed=10, hp=15, moves=(SPLASH,))])
    tiny = session.active(Side.NPC)
    tiny.status = StatusConditionState(StatusCondition.BURN)
    lines = machine.submit_move(session, 'splash')
    assert not any("hurt by its burn" in l for l in lines)
    assert tiny.current_hp == 15


def test_effectiveness_lines():
    session, machine = _battle([_mon('Zap', ('electric',), speed=100, moves=(BOLT,))],
                               [_mon('Gull', ('water', 'flying'), speed=10, moves=(SPLASH,))])
    lines = machine.submit_move(session, 'thunderbolt')
    assert lines[1] == "It's super effective!"
    session2, machine2 = _battle([_mon('Zap', ('electric',), speed=100, moves=(BOLT,))],
                                 [_mon('Weed', ('grass',), speed=10, moves=(SPLASH,))])
    assert machine2.submit_move(session2, 'thunderbolt')[1] == "It's not very effective..."


def test_unknown_move_rejected_without_mutation():
    session, machine = _battle([_mon('A')], [_mon('B')])
    before = session.snapshot()
    with pytest.raises(InvalidMoveError):
        machine.submit_move(session, 'hyper-beam')
    assert session.snapshot() == before
    assert session.rng.draws == 0
    assert session.phase is Phase.SELECT


def test_submit_outside_select_phase():
    session, machine = _battle([_mon('A')], [_mon('B')])
    session.phase = Phase.RESOLVING
    with pytest.raises(PhaseError):
        machine.submit_move(session, 'tackle')


def test_speed_tie_uses_coin_flip():
    session, machine = _battle([_mon('A', speed=50)], [_mon('B', speed=50)], 0.4)
    assert machine.turn_order(session) == (Side.PLAYER, Side.NPC)
    session.rng.values = [0.6]
    assert machine.turn_order(session) == (Side.NPC, Side.PLAYER)
    assert session.rng.draws == 2


def test_no_tie_draw_when_speeds_differ():
    session, machine = _battle([_mon('A', speed=40)], [_mon('B', speed=50)])
    assert machine.turn_order(session) == (Side.NPC, Side.PLAYER)
    assert session.rng.draws == 0


def test_paralysis_halves_effective_speed():
    mon = _mon('Par', speed=101)
    engine = StatusConditionEngine()
    mon.status = StatusConditionState(StatusCondition.PARALYSIS)
    assert effective_speed(mon, engine) == 50
    mon.stages.set('speed', 2)
    assert effective_speed(mon, engine) == 101


def test_status_move_logs_stat_drop():
    session, machine = _battle([_mon('Cub', speed=100, moves=(GROWL,))], [_mon('Foe', speed=10, moves=(SPLASH,))])
    lines = machine.submit_move(session, 'growl')
    assert lines[:2] == ["Cub used Growl!", "Foe's Attack fell!"]


def test_poison_tick_can_end_the_battle():
    session, machine = _battle([_mon('A', speed=100, moves=(SPLASH,))], [_mon('B', speed=10, hp=16, moves=(SPLASH,))])
    foe = session.active(Side.NPC)
    foe.status = StatusConditionState(StatusCondition.POISON)
    foe.current_hp = 2
    lines = machine.submit_move(session, 'splash')
    assert lines[-3:] == ["B is hurt by poison!", "B fainted!", "You won the battle!"]
    assert session.winner is Side.PLAYER


def test_end_of_turn_ticks_first_actor_first():
    session, machine = _battle([_mon('A', speed=100, moves=(SPLASH,))], [_mon('B', speed=10, moves=(SPLASH,))])
    session.active(Side.PLAYER).status = StatusConditionState(StatusCondition.BURN)
    session.active(Side.NPC).status = StatusConditionState(StatusCondition.POISON)
    lines = machine.submit_move(session, 'splash')
    assert lines[-2:] == ["A is hurt by its burn!", "B is hurt by poison!"]
    assert session.active(Side.PLAYER).current_hp == 200 - 12
    assert session.active(Side.NPC).current_hp == 200 - 25


def test_run_battle_finishes():
    session = BattleSession.start([_mon('A', speed=100, hp=400)], [_mon('B', speed=10)], seed=3)
    machine = BattleStateMachine(ai=FirstMoveAI())
    winner = machine.run_battle(session, lambda s: 'tackle')
    assert winner is Side.PLAYER
    assert session.log[-1] == "You won the battle!"
