from pokeduel.battle.effects import MoveEffectResolver
from pokeduel.battle.models import BattleCreature, EffectTarget, Heal, StatChange, StatusApply, StatusCondition
from pokeduel.battle.rng import Rng
from pokeduel.battle.stages import Stat


class ScriptedRng(Rng):
    def __init__(self, *values: float):
        super().__init__(0)
        self.values = list(values)

    def next(self) -> float:
        self.draws += 1
        return self.values.pop(0) if self.values else 0.0


def _mon(name, types=('normal',)):
    return BattleCreature(id=name.lower(), name=name, types=types, level=50,
                          stats={'hp': 100, 'atk': 50, 'def': 50, 'sp_atk': 50, 'sp_def': 50, 'speed': 50})


def test_stat_drop_on_opponent():
    user, foe = _mon('User'), _mon('Foe')
    res = MoveEffectResolver().resolve(StatChange(Stat.ATTACK, -1), user, foe, ScriptedRng())
    assert res.applied and res.message == "Foe's Attack fell!"
    assert foe.stages.attack == -1 and user.stages.attack == 0


def test_self_boost_messages():
    user, foe = _mon('User'), _mon('Foe')
    r = MoveEffectResolver()
    assert r.resolve(StatChange('speed', 2, EffectTarget.SELF), user, foe, ScriptedRng()).message == "User's Speed rose sharply!"
    assert r.resolve(StatChange('speed', 3, 'self'), user, foe, ScriptedRng()).message == "User's Speed rose drastically!"
    assert user.stages.speed == 5


def test_capped_stage_reports_no_change():
    user, foe = _mon('User'), _mon('Foe')
    foe.stages.set(Stat.DEFENSE, -6)
    res = MoveEffectResolver().resolve(StatChange('def', -1), user, foe, ScriptedRng())
    assert not res.applied
    assert res.message == "Foe's Defense won't go any lower!"


def test_failed_chance_roll_changes_nothing():
    user, foe = _mon('User'), _mon('Foe')
    rng = ScriptedRng(0.5)
    res = MoveEffectResolver().resolve(StatusApply(StatusCondition.BURN, chance=10), user, foe, rng)
    assert res.applied is False and res.message is None
    assert foe.status is None
    assert rng.draws == 1


def test_electric_type_ignores_paralysis():
    user, zap = _mon('User'), _mon('Zap', types=('electric',))
    res = MoveEffectResolver().resolve(StatusApply('paralysis'), user, zap, ScriptedRng())
    assert not res.applied
    assert res.message == "It doesn't affect Zap..."
    assert zap.status is None


def test_status_applied_message():
    user, foe = _mon('User'), _mon('Foe')
    res = MoveEffectResolver().resolve(StatusApply(StatusCondition.POISON), user, foe, ScriptedRng())
    assert res.applied and res.message == "Foe was poisoned!"
    assert foe.condition is StatusCondition.POISON


def test_heal_restores_percentage():
    user, foe = _mon('User'), _mon('Foe')
    r = MoveEffectResolver()
    full = r.resolve(Heal(50), user, foe, ScriptedRng())
    assert not full.applied and full.message == "User's HP is full!"
    user.take_damage(70)
    res = r.resolve(Heal(50), user, foe, ScriptedRng())
    assert res.applied and res.message == "User regained health!"
    assert user.current_hp == 80
