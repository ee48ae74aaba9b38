"""
Rich-based terminal renderer: resource bar, village grid, buildings table, event log.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional

import sys

from rich.console import Console
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table
from rich import box

from village.config import GRID_SIZE
from village.engine.construction import upgrade_cost
from village.engine.economy import production_for
from village.engine.grid import occupant_at
from village.engine.registry import config_for, constructible_kinds
from village.engine.state import Position
from village.engine.troops import trainable_capacity, training_cost

if TYPE_CHECKING:
    from village.engine.combat import CombatResult
    from village.engine.state import GameState
    from village.session import VillageSession

# Reconfigure stdout for UTF-8 so Rich box-drawing chars and building symbols work on Windows
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")

console = Console(legacy_windows=False)


class Renderer:
    def __init__(self, console_: Optional[Console] = None):
        self._console = console_ or console

    def render(self, session: "VillageSession") -> None:
        gs = session.state
        self._console.rule(f"[bold cyan]Tick {session.ticks}[/bold cyan]")
        self._console.print(_resource_bar(gs))
        self._console.print(Columns([_village_grid(gs), _buildings_table(gs)]))

        log_lines = session.recent_log(5)
        log_text = "\n".join(log_lines) if log_lines else "(no events)"
        self._console.print(Panel(log_text, title="[bold yellow]Village Log[/bold yellow]",
                                  border_style="yellow"))

    def render_combat(self, result: "CombatResult") -> None:
        color = "yellow" if result.fallback else "green"
        body = (
            f"\"{result.report}\"\n\n"
            f"Gold: [gold1]+{result.gold_looted}[/gold1]  "
            f"Elixir: [magenta]+{result.elixir_looted}[/magenta]  "
            f"Troops lost: [red]{result.troops_lost}[/red]"
        )
        self._console.print(Panel(body, title="[bold]Battle Report[/bold]", border_style=color))

    def render_build_menu(self) -> None:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kind", style="dim")
        table.add_column("Building")
        table.add_column("Cost", justify="right")
        table.add_column("Description")
        for kind in constructible_kinds():
            cfg = config_for(kind)
            table.add_row(kind.slug, f"{cfg.symbol} {cfg.name}",
                          f"{cfg.base_cost} {cfg.cost_resource}", cfg.description)
        self._console.print(table)


def _resource_bar(gs: "GameState") -> Panel:
    gold_rate, elixir_rate = production_for(gs)
    capacity = trainable_capacity(gs)
    content = (
        f"Gold: [gold1]{int(gs.gold)}[/gold1] (+{gold_rate:g}/tick)  "
        f"Elixir: [magenta]{int(gs.elixir)}[/magenta] (+{elixir_rate:g}/tick)  "
        f"Troops: [red]{gs.troops}[/red]  "
        f"Train: {capacity} for {training_cost(capacity)} elixir"
    )
    return Panel(content, border_style="cyan")


def _village_grid(gs: "GameState") -> Panel:
    grid = Table(box=box.SIMPLE_HEAD, show_header=True, padding=(0, 0), expand=False)
    grid.add_column("", style="dim", justify="right")
    for x in range(GRID_SIZE):
        grid.add_column(str(x), justify="center", min_width=2)

    for y in range(GRID_SIZE):
        row = []
        for x in range(GRID_SIZE):
            building = occupant_at(gs.buildings, Position(x, y))
            row.append(config_for(building.kind).symbol if building else "[dim]·[/dim]")
        grid.add_row(str(y), *row)

    return Panel(grid, title="[bold white]Village[/bold white]", border_style="green")


def _buildings_table(gs: "GameState") -> Panel:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Id", style="dim")
    table.add_column("Building")
    table.add_column("Lvl", justify="right")
    table.add_column("At")
    table.add_column("Upgrade", justify="right")

    for b in gs.buildings:
        cfg = config_for(b.kind)
        table.add_row(
            b.id,
            f"{cfg.symbol} {cfg.name}",
            str(b.level),
            str(b.position),
            f"{upgrade_cost(cfg.base_cost, b.level)} {cfg.cost_resource}",
        )

    return Panel(table, title="[bold white]Buildings[/bold white]", border_style="white")
