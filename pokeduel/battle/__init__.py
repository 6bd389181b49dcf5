"""
Battle engine package.
Modules:
- rng.py (seeded random source)
- typechart.py / stages.py / status.py (rule tables)
- damage.py / effects.py (per-action mechanics)
- ai.py (opponent move policies)
- session.py / core.py (battle state and turn resolution)
- factory.py (roster data -> creatures)
"""
from .core import BattleStateMachine
from .session import BattleSession, Side, Phase
from .rng import Rng
__all__ = ["BattleStateMachine", "BattleSession", "Side", "Phase", "Rng"]
