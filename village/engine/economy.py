"""
Economy tick: per-building production credited to the ledger.
"""
from typing import Tuple

from village.config import PRODUCTION_RATE_PER_LEVEL
from village.engine.ledger import credit
from village.engine.registry import config_for
from village.engine.state import GameState


def production_for(gs: GameState) -> Tuple[float, float]:
    """Return (gold, elixir) produced by one tick."""
    gains = {"gold": 0.0, "elixir": 0.0}
    for b in gs.buildings:
        resource = config_for(b.kind).produces
        if resource is not None:
            gains[resource] += b.level * PRODUCTION_RATE_PER_LEVEL
    return gains["gold"], gains["elixir"]


def production_tick(gs: GameState) -> GameState:
    """Apply one tick of production. Returns `gs` itself when nothing produces."""
    gold_gain, elixir_gain = production_for(gs)
    if gold_gain == 0 and elixir_gain == 0:
        return gs
    return credit(gs, gold=gold_gain, elixir=elixir_gain)
