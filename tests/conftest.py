# tests/conftest.py
import pytest

from village.engine.state import BuildingKind, GameState

from helpers import make_building


@pytest.fixture
def new_game():
    """The standard starting village: 500 gold, 500 elixir, Town Hall at (6, 6)."""
    return GameState.new_game()


@pytest.fixture
def rich_village():
    """A village with one of everything and deep pockets."""
    return GameState(
        gold=10_000,
        elixir=10_000,
        troops=0,
        buildings=(
            make_building(BuildingKind.TOWN_HALL, 6, 6, id="town_hall-1"),
            make_building(BuildingKind.MINE, 0, 0, level=2, id="mine-2"),
            make_building(BuildingKind.COLLECTOR, 1, 0, id="collector-3"),
            make_building(BuildingKind.BARRACKS, 2, 0, level=3, id="barracks-4"),
            make_building(BuildingKind.CANNON, 3, 0, id="cannon-5"),
        ),
    )
