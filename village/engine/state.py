"""
GameState, Building, Position dataclasses — immutable values, JSON-serialisable.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Tuple

from village.config import GRID_SIZE, INITIAL_GOLD, INITIAL_ELIXIR


class BuildingKind(str, Enum):
    TOWN_HALL = "TOWN_HALL"
    MINE = "MINE"
    COLLECTOR = "COLLECTOR"
    BARRACKS = "BARRACKS"
    CANNON = "CANNON"

    @property
    def slug(self) -> str:
        return self.value.lower()


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Building:
    id: str
    kind: BuildingKind
    level: int
    position: Position

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "level": self.level,
            **self.position.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Building":
        return cls(
            id=str(data["id"]),
            kind=BuildingKind(data["kind"]),
            level=int(data["level"]),
            position=Position(int(data["x"]), int(data["y"])),
        )


@dataclass(frozen=True)
class GameState:
    """
    The aggregate root. Every operation returns a new GameState instead of
    mutating this one, so a failed action can hand back the input unchanged.
    """
    gold: float = INITIAL_GOLD
    elixir: float = INITIAL_ELIXIR
    troops: int = 0
    buildings: Tuple[Building, ...] = field(default_factory=tuple)

    @classmethod
    def new_game(cls) -> "GameState":
        center = GRID_SIZE // 2
        town_hall = Building(
            id=f"{BuildingKind.TOWN_HALL.slug}-1",
            kind=BuildingKind.TOWN_HALL,
            level=1,
            position=Position(center, center),
        )
        return cls(buildings=(town_hall,))

    def evolve(self, **changes: Any) -> "GameState":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "gold": self.gold,
            "elixir": self.elixir,
            "troops": self.troops,
            "buildings": [b.to_dict() for b in self.buildings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        return cls(
            gold=float(data.get("gold", 0)),
            elixir=float(data.get("elixir", 0)),
            troops=int(data.get("troops", 0)),
            buildings=tuple(Building.from_dict(b) for b in data.get("buildings", [])),
        )
