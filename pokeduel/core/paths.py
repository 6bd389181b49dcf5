"""
Centralized path helpers (works with the current flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokeduel/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'pokeduel')
ASSETS = ROOT / "assets"
ROSTERS = ASSETS / "rosters"
