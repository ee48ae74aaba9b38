"""
Economy ledger: credit/debit gold, elixir and troops without ever going negative.
"""
from __future__ import annotations
import math
from typing import Optional, Tuple

from village.engine.errors import InsufficientFunds
from village.engine.state import GameState

LEDGER_FIELDS = ("gold", "elixir", "troops")


def balance(state: GameState, resource: str) -> float:
    if resource not in LEDGER_FIELDS:
        raise ValueError(f"Unknown resource '{resource}'")
    return getattr(state, resource)


def credit(state: GameState, gold: float = 0, elixir: float = 0, troops: int = 0) -> GameState:
    """Add non-negative deltas. Gold and elixir may be fractional during accrual."""
    if gold < 0 or elixir < 0 or troops < 0:
        raise ValueError("credit deltas must be non-negative; use debit to spend")
    return state.evolve(
        gold=state.gold + gold,
        elixir=state.elixir + elixir,
        troops=state.troops + troops,
    )


def debit(state: GameState, resource: str, amount: float) -> Tuple[GameState, Optional[InsufficientFunds]]:
    """Spend `amount` of `resource`. Returns the input state untouched if the balance is short."""
    if amount < 0:
        raise ValueError("debit amount must be non-negative")
    if not can_afford(state, resource, amount):
        return state, InsufficientFunds(resource=resource, required=math.ceil(amount))
    return state.evolve(**{resource: balance(state, resource) - amount}), None


def can_afford(state: GameState, resource: str, amount: float) -> bool:
    return balance(state, resource) >= amount
