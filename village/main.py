"""
Village Raid — CLI entry point.

Usage:
    village-raid                              # offline: raids use the fallback battle formula
    village-raid --model claude-sonnet-4-6    # narrated raids (needs ANTHROPIC_API_KEY)
    village-raid --model gpt-4o --tick 0.5    # faster production (needs OPENAI_API_KEY)

Commands inside the game:
    build <kind> <x> <y>   place a building (kinds: mine, collector, barracks, cannon)
    upgrade <id>           upgrade a building by one level
    train                  train a batch of barbarians
    attack                 raid the goblin village with every troop
    menu                   list buildings and costs
    show                   redraw the village
    quit
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional, Tuple

# Ensure UTF-8 output on Windows terminals
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8")

from rich.logging import RichHandler

from village import config
from village.display.renderer import Renderer, console
from village.engine.state import BuildingKind, Position
from village.narrators import make_narrator
from village.oracle import CombatOracle
from village.session import ProductionScheduler, VillageSession


class CommandError(ValueError):
    pass


def parse_command(line: str) -> Tuple[str, tuple]:
    """Split an input line into (verb, args), converting kinds, coordinates and ids."""
    parts = line.strip().split()
    if not parts:
        return "show", ()
    verb, rest = parts[0].lower(), parts[1:]

    if verb == "build":
        if len(rest) != 3:
            raise CommandError("usage: build <kind> <x> <y>")
        try:
            kind = BuildingKind(rest[0].upper())
        except ValueError:
            raise CommandError(f"unknown building kind '{rest[0]}'")
        try:
            pos = Position(int(rest[1]), int(rest[2]))
        except ValueError:
            raise CommandError("coordinates must be integers")
        return verb, (kind, pos)
    if verb == "upgrade":
        if len(rest) != 1:
            raise CommandError("usage: upgrade <id>")
        return verb, (rest[0],)
    if verb in ("train", "attack", "menu", "show", "quit", "exit"):
        return verb, ()
    raise CommandError(f"unknown command '{verb}'")


def make_oracle(model_id: Optional[str], timeout: float) -> CombatOracle:
    narrator = make_narrator(model_id) if model_id else None
    return CombatOracle(narrator=narrator, timeout=timeout)


async def run_command(session: VillageSession, renderer: Renderer, verb: str, args: tuple) -> bool:
    """Execute one command. Returns False when the player wants to leave."""
    if verb in ("quit", "exit"):
        return False
    if verb == "menu":
        renderer.render_build_menu()
        return True

    err = None
    if verb == "build":
        err = session.build(*args)
    elif verb == "upgrade":
        err = session.upgrade(*args)
    elif verb == "train":
        err = session.train()
    elif verb == "attack":
        console.print("[dim]Your barbarians march on the goblin village...[/dim]")
        err = await session.attack()
        if err is None and session.last_combat is not None:
            renderer.render_combat(session.last_combat)

    if err is not None:
        console.print(f"[bold red]{err.message}[/bold red]")
    renderer.render(session)
    return True


def save_snapshot(session: VillageSession, log_dir: str, seq: int) -> None:
    """Write one snapshot per command; `seq` keeps commands within the same tick apart."""
    os.makedirs(log_dir, exist_ok=True)
    path = os.path.join(log_dir, f"cmd_{seq:05d}_tick_{session.ticks:05d}.json")
    snapshot = {
        "command": seq,
        "tick": session.ticks,
        "state": session.state.to_dict(),
        "last_combat": session.last_combat.to_dict() if session.last_combat else None,
        "log": session.log,
    }
    with open(path, "w") as f:
        json.dump(snapshot, f, indent=2)


async def main():
    parser = argparse.ArgumentParser(description="Village Raid — build, train, raid")
    parser.add_argument("--model", default=None,
                        help="Narrator model ID (e.g. claude-sonnet-4-6, gpt-4o). "
                             "Omit to resolve raids offline.")
    parser.add_argument("--tick", type=float, default=config.TICK_SECONDS,
                        help=f"Seconds per production tick (default: {config.TICK_SECONDS})")
    parser.add_argument("--timeout", type=float, default=config.ORACLE_TIMEOUT_SECONDS,
                        help=f"Narrator timeout in seconds (default: {config.ORACLE_TIMEOUT_SECONDS})")
    parser.add_argument("--log-dir", default=None,
                        help="Directory to save a JSON snapshot after each command")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Diagnostic log level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        oracle = make_oracle(args.model, args.timeout)
    except EnvironmentError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[bold red]Invalid model:[/bold red] {e}")
        sys.exit(1)

    console.print("[bold cyan]Village Raid[/bold cyan] — your village awaits, chief.\n")
    narrator_desc = args.model or "offline (fallback battles)"
    console.print(f"  Narrator: [cyan]{narrator_desc}[/cyan]")
    console.print(f"  Production tick: {args.tick}s\n")

    session = VillageSession(oracle=oracle)
    renderer = Renderer()
    scheduler = ProductionScheduler(session, period=args.tick)
    scheduler.start()
    renderer.render(session)

    commands = 0
    try:
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            try:
                verb, cmd_args = parse_command(line)
            except CommandError as e:
                console.print(f"[bold red]{e}[/bold red]")
                continue
            if not await run_command(session, renderer, verb, cmd_args):
                break
            commands += 1
            if args.log_dir:
                save_snapshot(session, args.log_dir, commands)
    finally:
        await scheduler.stop()

    console.rule("[bold]Farewell[/bold]")
    state = session.state
    console.print(f"Final treasury — Gold: {int(state.gold)}  Elixir: {int(state.elixir)}  "
                  f"Troops: {state.troops}")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
