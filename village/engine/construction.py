"""
Construction and upgrades: affordability checks, then debit + grid change together.
"""
from __future__ import annotations
import math
from typing import Optional, Tuple

from village.config import UPGRADE_COST_MULTIPLIER
from village.engine.errors import CellOccupied, GameError, NotConstructible, NotFound, OutOfBounds
from village.engine.grid import find_building, in_bounds, occupant_at, place, upgrade_building
from village.engine.ledger import debit
from village.engine.registry import config_for
from village.engine.state import Building, BuildingKind, GameState, Position

ActionResult = Tuple[GameState, Optional[GameError]]


def upgrade_cost(base_cost: int, current_level: int) -> int:
    return math.floor(base_cost * UPGRADE_COST_MULTIPLIER ** current_level)


def next_building_id(gs: GameState, kind: BuildingKind) -> str:
    # Buildings are never removed, so the running count is a unique suffix.
    return f"{kind.slug}-{len(gs.buildings) + 1}"


def build(gs: GameState, kind: BuildingKind, pos: Position) -> ActionResult:
    """
    Place a new level-1 building at `pos`, paying its base cost.
    On any error the input state is returned as-is.
    """
    kind = BuildingKind(kind)
    cfg = config_for(kind)
    if not cfg.constructible:
        return gs, NotConstructible(kind=kind)
    if not in_bounds(pos):
        return gs, OutOfBounds(position=pos)
    # Occupancy is checked before cost so it fails regardless of balance.
    if occupant_at(gs.buildings, pos) is not None:
        return gs, CellOccupied(position=pos)

    paid, err = debit(gs, cfg.cost_resource, cfg.base_cost)
    if err:
        return gs, err
    building = Building(id=next_building_id(gs, kind), kind=kind, level=1, position=pos)
    buildings, err = place(paid.buildings, building)
    if err:
        return gs, err
    return paid.evolve(buildings=buildings), None


def upgrade(gs: GameState, building_id: str) -> ActionResult:
    """Raise a building by one level for floor(base_cost * 1.5 ** level)."""
    building = find_building(gs.buildings, building_id)
    if building is None:
        return gs, NotFound(building_id=building_id)
    cfg = config_for(building.kind)
    cost = upgrade_cost(cfg.base_cost, building.level)

    paid, err = debit(gs, cfg.cost_resource, cost)
    if err:
        return gs, err
    buildings, err = upgrade_building(paid.buildings, building_id)
    if err:
        return gs, err
    return paid.evolve(buildings=buildings), None
