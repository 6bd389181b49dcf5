from pokeduel.battle.typechart import TypeEffectivenessTable, DEFAULT_TYPE_CHART, effectiveness_label


def test_builtin_chart_has_eighteen_types():
    assert len(DEFAULT_TYPE_CHART) == 18
    assert len(TypeEffectivenessTable()) == 18


def test_single_and_dual_type_multipliers():
    t = TypeEffectivenessTable()
    assert t.multiplier('fire', ['grass']) == 2.0
    assert t.multiplier('water', ('fire', 'rock')) == 4.0
    assert t.multiplier('fire', ('water', 'rock')) == 0.25
    assert t.multiplier('electric', ('water', 'ground')) == 0.0
    assert t.multiplier('normal', 'ghost') == 0.0


def test_lookup_is_case_insensitive():
    t = TypeEffectivenessTable()
    assert t.multiplier('Fire', ['GRASS']) == 2.0


def test_unknown_types_are_neutral():
    t = TypeEffectivenessTable()
    assert t.multiplier('shadow', ['fire']) == 1.0
    assert t.multiplier('fire', ['shadow']) == 1.0
    assert not t.knows_type('shadow')
    assert t.knows_type('Normal')


def test_partial_custom_chart_defaults_to_neutral():
    t = TypeEffectivenessTable({'Fire': {'Grass': 2}})
    assert t.multiplier('fire', ['grass']) == 2.0
    assert t.multiplier('water', ['fire']) == 1.0
    assert t.multiplier('fire', ['water']) == 1.0


def test_effectiveness_labels():
    assert effectiveness_label(0) == 'no effect'
    assert effectiveness_label(4.0) == 'super effective'
    assert effectiveness_label(0.5) == 'not very effective'
    assert effectiveness_label(1.0) == 'neutral'
