"""
Engine errors. These are returned next to the unchanged state, never raised.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from village.engine.state import BuildingKind, Position


@dataclass(frozen=True)
class GameError:
    @property
    def message(self) -> str:
        return "That action is not possible right now."


@dataclass(frozen=True)
class CellOccupied(GameError):
    position: Position

    @property
    def message(self) -> str:
        return "Space already occupied!"


@dataclass(frozen=True)
class OutOfBounds(GameError):
    position: Position

    @property
    def message(self) -> str:
        return f"{self.position} is outside the village."


@dataclass(frozen=True)
class NotConstructible(GameError):
    kind: BuildingKind

    @property
    def message(self) -> str:
        return f"{self.kind.slug.replace('_', ' ').title()} cannot be built."


@dataclass(frozen=True)
class InsufficientFunds(GameError):
    resource: str
    required: int
    troops: Optional[int] = None  # set when the shortfall is a training batch

    @property
    def message(self) -> str:
        msg = f"Not enough {self.resource.title()}! Need {self.required}"
        if self.troops is not None:
            msg += f" for {self.troops} troops."
        return msg


@dataclass(frozen=True)
class NotFound(GameError):
    building_id: str

    @property
    def message(self) -> str:
        return f"No building with id '{self.building_id}'."


@dataclass(frozen=True)
class NoBarracks(GameError):
    @property
    def message(self) -> str:
        return "You need a Barracks to train troops!"


@dataclass(frozen=True)
class NoTroops(GameError):
    @property
    def message(self) -> str:
        return "You need troops to attack!"


@dataclass(frozen=True)
class AttackInProgress(GameError):
    @property
    def message(self) -> str:
        return "Your army is already on the march!"
