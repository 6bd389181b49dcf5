from pokeduel.core.types import format_types, status_badge, strip_markup, type_abbreviation


def test_type_abbreviations_primary():
    assert type_abbreviation('fire') == 'FIR'
    assert type_abbreviation('ground') == 'GRN'
    assert type_abbreviation('Fairy') == 'FAI'


def test_format_types_dual():
    out = format_types(('fire', 'flying'))
    assert strip_markup(out) == 'FIR/FLY'


def test_status_badges():
    assert strip_markup(status_badge('badly-poisoned')) == 'TOX'
    assert strip_markup(status_badge('paralysis')) == 'PAR'
    assert status_badge(None) == ''
