"""Global type metadata: colors & abbreviations.

Provides:
  TYPE_COLORS_HEX: mapping type -> hex color string (#RRGGBB)
  TYPE_ABBREVIATIONS: mapping type -> 3-letter abbreviation (upper)
  STATUS_ABBREVIATIONS: mapping status condition -> badge text
  helper functions for rich markup used by the battle panels.
"""
from __future__ import annotations
from typing import Dict, Iterable, Optional
import re

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "ice": "ICE",
    "fighting": "FGT",
    "poison": "PSN",
    "ground": "GRN",
    "flying": "FLY",
    "psychic": "PSY",
    "bug": "BUG",
    "rock": "RCK",
    "ghost": "GHO",
    "dragon": "DRA",
    "dark": "DRK",
    "steel": "STL",
    "fairy": "FAI",
}

STATUS_ABBREVIATIONS: Dict[str, str] = {
    "paralysis": "PAR",
    "sleep": "SLP",
    "poison": "PSN",
    "badly-poisoned": "TOX",
    "burn": "BRN",
    "freeze": "FRZ",
}

STATUS_COLORS: Dict[str, str] = {
    "paralysis": "yellow",
    "sleep": "grey62",
    "poison": "magenta",
    "badly-poisoned": "magenta",
    "burn": "red",
    "freeze": "cyan",
}

def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(type_name.lower(), type_name[:3].upper())

def type_markup(type_name: str, text: Optional[str] = None) -> str:
    """Wrap text in rich markup using the type's color."""
    text = text if text is not None else type_abbreviation(type_name)
    hex_color = TYPE_COLORS_HEX.get(type_name.lower())
    if not hex_color:
        return text
    return f"[{hex_color}]{text}[/{hex_color}]"

def format_types(types: Iterable[str]) -> str:
    return '/'.join(type_markup(t) for t in types)

def status_badge(condition: Optional[str]) -> str:
    if not condition:
        return ""
    abbr = STATUS_ABBREVIATIONS.get(condition, condition[:3].upper())
    color = STATUS_COLORS.get(condition, "white")
    return f"[bold {color}]{abbr}[/bold {color}]"

MARKUP_RE = re.compile(r"\[/?[^\[\]]*\]")

def strip_markup(s: str) -> str:
    return MARKUP_RE.sub('', s)

__all__ = [
    'TYPE_COLORS_HEX','TYPE_ABBREVIATIONS','STATUS_ABBREVIATIONS',
    'type_abbreviation','type_markup','format_types','status_badge','strip_markup'
]
