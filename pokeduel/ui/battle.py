"""Terminal battle UI built on rich.

Pure presentation: every function reads the session and prints; none of them
touch battle state. Tests pass a recording ``Console`` and inspect the text.
"""
from __future__ import annotations
from typing import List, Optional

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokeduel.battle.models import BattleCreature, Move
from pokeduel.battle.session import BattleSession, Side
from pokeduel.battle.typechart import TypeEffectivenessTable, effectiveness_label
from pokeduel.core.types import format_types, status_badge, type_markup

console = Console()

HP_BAR_LENGTH = 20

_STAGE_SHORT = {
    "attack": "Atk", "defense": "Def", "sp_atk": "SpA", "sp_def": "SpD",
    "speed": "Spe", "accuracy": "Acc", "evasion": "Eva",
}


def hp_bar(current: int, max_hp: int, length: int = HP_BAR_LENGTH) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]FAINTED[/red]"
    percent = current / max_hp
    filled = max(1, int(percent * length))
    if percent > 0.5:
        color = "green"
    elif percent > 0.2:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (length - filled)}[/dim]"

def stage_summary(creature: BattleCreature) -> str:
    parts = [f"{_STAGE_SHORT[k]} {v:+d}" for k, v in creature.stages.as_dict().items() if v]
    return ", ".join(parts)

def creature_panel(creature: BattleCreature, title: str, remaining: Optional[int] = None) -> Panel:
    header = f"[bold bright_white]{creature.name} Lv{creature.level}[/bold bright_white]"
    badge = status_badge(creature.condition.value if creature.condition else None)
    if badge:
        header += f" {badge}"
    lines = [
        header,
        f"[bright_white][[/bright_white]{format_types(creature.types)}[bright_white]][/bright_white]",
        f"HP: {creature.current_hp}/{creature.max_hp}",
        hp_bar(creature.current_hp or 0, creature.max_hp),
    ]
    stages = stage_summary(creature)
    if stages:
        lines.append(f"[dim]{stages}[/dim]")
    if remaining is not None:
        lines.append(f"[dim]Team: {remaining} able[/dim]")
    return Panel("\n".join(lines), title=f"[bright_white bold]{title}[/bright_white bold]",
                 box=ROUNDED, width=40, padding=(0, 1))

def render_field(session: BattleSession, out: Optional[Console] = None):
    out = out or console
    npc_panel = creature_panel(session.active(Side.NPC), "OPPONENT", session.remaining(Side.NPC))
    player_panel = creature_panel(session.active(Side.PLAYER), "YOUR TEAM", session.remaining(Side.PLAYER))
    out.print(f"[bold]Turn {session.turn}[/bold]")
    out.print(Align.center(Columns([npc_panel, player_panel], equal=True, expand=False, padding=(0, 4))))


def _move_power(move: Move) -> str:
    return str(move.power) if move.is_damaging else "-"

def _move_accuracy(move: Move) -> str:
    return "-" if move.always_hits else f"{move.accuracy}%"

def move_table(creature: BattleCreature, defender: Optional[BattleCreature] = None,
               type_table: Optional[TypeEffectivenessTable] = None) -> Table:
    table = Table(title="[bold]SELECT MOVE[/bold]", box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Move", style="bright_white")
    table.add_column("Type")
    table.add_column("Cat.")
    table.add_column("Pow", justify="right")
    table.add_column("Acc", justify="right")
    if defender is not None:
        table.add_column("vs. foe")
    tt = type_table or TypeEffectivenessTable()
    for i, m in enumerate(creature.moves, 1):
        row: List[str] = [str(i), m.name, type_markup(m.type, m.type.upper()), m.category.value,
                          _move_power(m), _move_accuracy(m)]
        if defender is not None:
            row.append(effectiveness_label(tt.multiplier(m.type, defender.types)) if m.is_damaging else "")
        table.add_row(*row)
    return table

def render_moves(creature: BattleCreature, defender: Optional[BattleCreature] = None,
                 type_table: Optional[TypeEffectivenessTable] = None, out: Optional[Console] = None):
    (out or console).print(move_table(creature, defender, type_table))

def render_result(session: BattleSession, out: Optional[Console] = None):
    out = out or console
    if session.winner is None:
        out.print(Panel("[yellow]The battle did not finish.[/yellow]", box=ROUNDED))
        return
    won = session.winner is Side.PLAYER
    text = "[bold green]VICTORY[/bold green]" if won else "[bold red]DEFEAT[/bold red]"
    out.print(Panel(Align.center(f"{text}\n[dim]{session.turn} turns, seed {session.rng.seed}[/dim]"), box=ROUNDED))

__all__ = ["hp_bar", "stage_summary", "creature_panel", "render_field", "move_table", "render_moves", "render_result", "console"]
