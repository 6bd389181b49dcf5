"""Attacking type x defending type(s) multiplier lookup.

The chart itself comes from a collaborator (a JSON file or the built-in
``DEFAULT_TYPE_CHART``); this module only looks up and combines entries.
Absent pairs count as neutral so an incomplete chart never breaks a battle.
"""
from __future__ import annotations
from typing import Dict, Iterable, Mapping, Optional, Union

TypeChart = Mapping[str, Mapping[str, float]]

DEFAULT_TYPE_CHART: Dict[str, Dict[str, float]] = {
    "normal":  {"rock": 0.5, "ghost": 0.0, "steel": 0.5},
    "fire":    {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 2.0, "bug": 2.0, "rock": 0.5, "dragon": 0.5, "steel": 2.0},
    "water":   {"fire": 2.0, "water": 0.5, "grass": 0.5, "ground": 2.0, "rock": 2.0, "dragon": 0.5},
    "grass":   {"fire": 0.5, "water": 2.0, "grass": 0.5, "poison": 0.5, "ground": 2.0, "flying": 0.5, "bug": 0.5, "rock": 2.0, "dragon": 0.5, "steel": 0.5},
    "electric":{"water": 2.0,"electric": 0.5,"grass": 0.5,"ground": 0.0,"flying": 2.0,"dragon": 0.5},
    "ice":     {"fire": 0.5,"water": 0.5,"grass": 2.0,"ice": 0.5,"ground": 2.0,"flying": 2.0,"dragon": 2.0,"steel": 0.5},
    "fighting":{"normal": 2.0,"ice": 2.0,"rock": 2.0,"dark": 2.0,"steel": 2.0,"poison": 0.5,"flying": 0.5,"psychic": 0.5,"bug": 0.5,"ghost": 0.0,"fairy": 0.5},
    "poison":  {"grass": 2.0,"poison": 0.5,"ground": 0.5,"rock": 0.5,"ghost": 0.5,"steel": 0.0,"fairy": 2.0},
    "ground":  {"fire": 2.0,"electric": 2.0,"poison": 2.0,"rock": 2.0,"steel": 2.0,"grass": 0.5,"bug": 0.5,"flying": 0.0},
    "flying":  {"grass": 2.0,"fighting": 2.0,"bug": 2.0,"electric": 0.5,"rock": 0.5,"steel": 0.5},
    "psychic": {"fighting": 2.0,"poison": 2.0,"psychic": 0.5,"steel": 0.5,"dark": 0.0},
    "bug":     {"grass": 2.0,"psychic": 2.0,"dark": 2.0,"fire": 0.5,"fighting": 0.5,"poison": 0.5,"flying": 0.5,"ghost": 0.5,"steel": 0.5,"fairy": 0.5},
    "rock":    {"fire": 2.0,"ice": 2.0,"flying": 2.0,"bug": 2.0,"fighting": 0.5,"ground": 0.5,"steel": 0.5},
    "ghost":   {"ghost": 2.0,"psychic": 2.0,"dark": 0.5,"normal": 0.0},
    "dragon":  {"dragon": 2.0,"steel": 0.5,"fairy": 0.0},
    "dark":    {"ghost": 2.0,"psychic": 2.0,"fighting": 0.5,"dark": 0.5,"fairy": 0.5},
    "steel":   {"ice": 2.0,"rock": 2.0,"fairy": 2.0,"fire": 0.5,"water": 0.5,"electric": 0.5,"steel": 0.5},
    "fairy":   {"fighting": 2.0,"dragon": 2.0,"dark": 2.0,"fire": 0.5,"poison": 0.5,"steel": 0.5},
}


def normalize_chart(chart: TypeChart) -> Dict[str, Dict[str, float]]:
    """Lower-case every key and coerce multipliers to float."""
    out: Dict[str, Dict[str, float]] = {}
    for atk, row in chart.items():
        out[str(atk).lower()] = {str(d).lower(): float(m) for d, m in (row or {}).items()}
    return out


class TypeEffectivenessTable:
    def __init__(self, chart: Optional[TypeChart] = None):
        self.chart = normalize_chart(chart if chart is not None else DEFAULT_TYPE_CHART)

    def single(self, attacking_type: str, defending_type: str) -> float:
        return self.chart.get(attacking_type.lower(), {}).get(defending_type.lower(), 1.0)

    def multiplier(self, attacking_type: str, defending_types: Union[str, Iterable[str]]) -> float:
        if isinstance(defending_types, str):
            defending_types = (defending_types,)
        mult = 1.0
        for t in defending_types:
            mult *= self.single(attacking_type, t)
        return mult

    def knows_type(self, type_name: str) -> bool:
        t = type_name.lower()
        if t in self.chart:
            return True
        return any(t in row for row in self.chart.values())

    def __len__(self) -> int:
        return len(self.chart)


def effectiveness_label(mult: float) -> str:
    if mult == 0:
        return "no effect"
    if mult > 1:
        return "super effective"
    if mult < 1:
        return "not very effective"
    return "neutral"

__all__ = ["TypeEffectivenessTable", "DEFAULT_TYPE_CHART", "TypeChart", "normalize_chart", "effectiveness_label"]
