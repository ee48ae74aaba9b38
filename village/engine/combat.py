"""
Combat result contract: sanitise narrator output, offline fallback, apply loot/losses.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any

from village.config import FALLBACK_LOOT_PER_TROOP, FALLBACK_LOSS_RATE
from village.engine.ledger import credit
from village.engine.state import GameState

DEFAULT_REPORT = "The battle was a blur of chaos!"
FALLBACK_REPORT = (
    "The battle was simulated offline due to a mystical interference (API error). "
    "Your troops fought bravely."
)

REQUIRED_INT_FIELDS = ("goldLooted", "elixirLooted", "troopsLost")


class InvalidCombatResponse(ValueError):
    """The narrator answered, but not with a usable battle result."""


@dataclass(frozen=True)
class CombatResult:
    report: str
    gold_looted: int
    elixir_looted: int
    troops_lost: int
    fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "report": self.report,
            "goldLooted": self.gold_looted,
            "elixirLooted": self.elixir_looted,
            "troopsLost": self.troops_lost,
            "fallback": self.fallback,
        }


def sanitise_response(raw: Any, troops_sent: int) -> CombatResult:
    """
    Validate and clamp raw narrator output.
    Raises InvalidCombatResponse if the shape is wrong; out-of-range numbers are clamped.
    """
    if not isinstance(raw, dict):
        raise InvalidCombatResponse(f"expected an object, got {type(raw).__name__}")
    for key in REQUIRED_INT_FIELDS:
        value = raw.get(key)
        # bool is an int subclass; a JSON true is not a loot amount
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidCombatResponse(f"'{key}' must be an integer, got {value!r}")

    report = raw.get("report")
    if not isinstance(report, str) or not report.strip():
        report = DEFAULT_REPORT

    return CombatResult(
        report=report,
        gold_looted=max(0, raw["goldLooted"]),
        elixir_looted=max(0, raw["elixirLooted"]),
        troops_lost=max(0, min(troops_sent, raw["troopsLost"])),
    )


def fallback_result(troops_sent: int) -> CombatResult:
    return CombatResult(
        report=FALLBACK_REPORT,
        gold_looted=troops_sent * FALLBACK_LOOT_PER_TROOP,
        elixir_looted=troops_sent * FALLBACK_LOOT_PER_TROOP,
        troops_lost=min(troops_sent, math.floor(troops_sent * FALLBACK_LOSS_RATE)),
        fallback=True,
    )


def apply_combat_result(gs: GameState, result: CombatResult) -> GameState:
    """Credit loot and remove fallen troops. Call exactly once per finished attack."""
    looted = credit(gs, gold=result.gold_looted, elixir=result.elixir_looted)
    return looted.evolve(troops=max(0, looted.troops - result.troops_lost))
