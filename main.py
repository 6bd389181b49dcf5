#!/usr/bin/env python3
"""
Pokeduel - terminal creature battles

Thin wrapper around the CLI so the game can be started without installing:

    python main.py --player player --npc rival
"""

import sys

from pokeduel.cli import run

if __name__ == "__main__":
    sys.exit(run())
