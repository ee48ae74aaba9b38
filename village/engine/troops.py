"""
Troop training: capacity from Barracks levels, paid in elixir, all or nothing.
"""
from __future__ import annotations
from dataclasses import replace

from village.config import TROOP_TRAIN_AMOUNT, TROOP_COST_ELIXIR
from village.engine.construction import ActionResult
from village.engine.errors import NoBarracks
from village.engine.ledger import credit, debit
from village.engine.registry import config_for
from village.engine.state import GameState


def trainable_capacity(gs: GameState) -> int:
    """Troops one training batch yields: TROOP_TRAIN_AMOUNT per Barracks level."""
    return sum(
        b.level * TROOP_TRAIN_AMOUNT
        for b in gs.buildings
        if config_for(b.kind).trains_troops
    )


def training_cost(capacity: int) -> int:
    return capacity * TROOP_COST_ELIXIR


def train(gs: GameState) -> ActionResult:
    capacity = trainable_capacity(gs)
    if capacity == 0:
        return gs, NoBarracks()

    paid, err = debit(gs, "elixir", training_cost(capacity))
    if err:
        return gs, replace(err, troops=capacity)
    return credit(paid, troops=capacity), None
