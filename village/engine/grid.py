"""
Village grid: sparse placement of buildings, at most one per cell.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Optional, Tuple

from village.config import GRID_SIZE
from village.engine.errors import CellOccupied, NotFound
from village.engine.state import Building, Position

Buildings = Tuple[Building, ...]


def in_bounds(pos: Position) -> bool:
    return 0 <= pos.x < GRID_SIZE and 0 <= pos.y < GRID_SIZE


def occupant_at(buildings: Buildings, pos: Position) -> Optional[Building]:
    for b in buildings:
        if b.position == pos:
            return b
    return None


def find_building(buildings: Buildings, building_id: str) -> Optional[Building]:
    for b in buildings:
        if b.id == building_id:
            return b
    return None


def place(buildings: Buildings, building: Building) -> Tuple[Buildings, Optional[CellOccupied]]:
    if occupant_at(buildings, building.position) is not None:
        return buildings, CellOccupied(position=building.position)
    return buildings + (building,), None


def upgrade_building(buildings: Buildings, building_id: str) -> Tuple[Buildings, Optional[NotFound]]:
    """Raise one building's level by exactly one, keeping its id and position."""
    if find_building(buildings, building_id) is None:
        return buildings, NotFound(building_id=building_id)
    return tuple(
        replace(b, level=b.level + 1) if b.id == building_id else b
        for b in buildings
    ), None
