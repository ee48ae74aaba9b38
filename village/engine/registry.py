"""
Building registry: static BuildingConfig per BuildingKind, built from config.BUILDINGS.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

from village.config import BUILDINGS
from village.engine.state import BuildingKind


@dataclass(frozen=True)
class BuildingConfig:
    kind: BuildingKind
    name: str
    symbol: str
    cost_resource: str      # "gold" or "elixir"
    base_cost: int
    description: str
    produces: Optional[str]  # resource credited each tick, if any
    trains_troops: bool
    constructible: bool


def _load() -> Dict[BuildingKind, BuildingConfig]:
    registry = {}
    for kind in BuildingKind:
        raw = BUILDINGS[kind.value]
        registry[kind] = BuildingConfig(kind=kind, **raw)
    return registry


_REGISTRY = _load()


def config_for(kind: BuildingKind) -> BuildingConfig:
    return _REGISTRY[BuildingKind(kind)]


def constructible_kinds() -> List[BuildingKind]:
    """Kinds a player may place, in table order (the Town Hall is placed once at game start)."""
    return [kind for kind, cfg in _REGISTRY.items() if cfg.constructible]
