# tests/test_economy.py
import pytest

from village.engine.construction import build, upgrade, upgrade_cost
from village.engine.economy import production_for, production_tick
from village.engine.errors import (
    CellOccupied, InsufficientFunds, NotConstructible, NotFound, OutOfBounds,
)
from village.engine.grid import find_building, occupant_at
from village.engine.state import BuildingKind, GameState, Position

from helpers import make_building

# ==========================================
# 1. PRODUCTION
# ==========================================

def test_production_sums_levels(rich_village):
    # Mine level 2 -> 3 gold, Collector level 1 -> 1.5 elixir
    assert production_for(rich_village) == (3.0, 1.5)


def test_tick_credits_ledger(rich_village):
    state = production_tick(rich_village)
    assert state.gold == 10_003.0
    assert state.elixir == 10_001.5
    assert state.troops == rich_village.troops


def test_tick_without_producers_is_a_no_op(new_game):
    barracks = make_building(BuildingKind.BARRACKS, 1, 1)
    gs = new_game.evolve(buildings=new_game.buildings + (barracks,))
    assert production_tick(gs) is gs
    assert production_tick(new_game) is new_game


def test_ticks_accumulate_fractions():
    gs = GameState(gold=0, elixir=0, buildings=(make_building(BuildingKind.COLLECTOR, 0, 0),))
    for _ in range(3):
        gs = production_tick(gs)
    assert gs.elixir == pytest.approx(4.5)
    assert gs.gold == 0


# ==========================================
# 2. CONSTRUCTION
# ==========================================

def test_build_barracks_debits_gold(new_game):
    state, err = build(new_game, BuildingKind.BARRACKS, Position(1, 1))
    assert err is None
    assert state.gold == 300
    assert state.elixir == 500
    barracks = occupant_at(state.buildings, Position(1, 1))
    assert barracks.kind == BuildingKind.BARRACKS
    assert barracks.level == 1
    assert barracks.id == "barracks-2"


def test_build_mine_debits_elixir(new_game):
    state, err = build(new_game, BuildingKind.MINE, Position(0, 0))
    assert err is None
    assert state.gold == 500
    assert state.elixir == 400


def test_building_ids_are_unique(new_game):
    state, _ = build(new_game, BuildingKind.COLLECTOR, Position(0, 0))
    state, _ = build(state, BuildingKind.COLLECTOR, Position(0, 1))
    ids = [b.id for b in state.buildings]
    assert len(ids) == len(set(ids))


def test_build_occupied_fails_regardless_of_funds(new_game):
    broke = new_game.evolve(gold=0, elixir=0)
    for gs in (new_game, broke):
        state, err = build(gs, BuildingKind.CANNON, Position(6, 6))
        assert state is gs
        assert isinstance(err, CellOccupied)


def test_build_insufficient_funds(new_game):
    poor = new_game.evolve(gold=199)
    state, err = build(poor, BuildingKind.BARRACKS, Position(1, 1))
    assert state is poor
    assert err == InsufficientFunds(resource="gold", required=200)
    assert err.message == "Not enough Gold! Need 200"


def test_build_out_of_bounds(new_game):
    state, err = build(new_game, BuildingKind.MINE, Position(12, 0))
    assert state is new_game
    assert isinstance(err, OutOfBounds)


def test_town_hall_cannot_be_built(new_game):
    state, err = build(new_game.evolve(gold=5000), BuildingKind.TOWN_HALL, Position(0, 0))
    assert isinstance(err, NotConstructible)
    assert occupant_at(state.buildings, Position(0, 0)) is None


# ==========================================
# 3. UPGRADES
# ==========================================

@pytest.mark.parametrize("base,level,expected", [
    (200, 1, 300),
    (200, 2, 450),
    (100, 1, 150),
    (100, 3, 337),
    (250, 2, 562),
])
def test_upgrade_cost_formula(base, level, expected):
    assert upgrade_cost(base, level) == expected


@pytest.mark.parametrize("base", [1, 100, 200, 250, 1000])
def test_upgrade_cost_strictly_increasing(base):
    costs = [upgrade_cost(base, level) for level in range(1, 12)]
    assert all(a < b for a, b in zip(costs, costs[1:]))


def test_upgrade_raises_level_by_one(rich_village):
    state, err = upgrade(rich_village, "barracks-4")
    assert err is None
    assert find_building(state.buildings, "barracks-4").level == 4
    # level 3 barracks: floor(200 * 1.5 ** 3) = 675 gold
    assert state.gold == 10_000 - 675
    assert state.elixir == 10_000


def test_upgrade_mine_costs_elixir(rich_village):
    state, err = upgrade(rich_village, "mine-2")
    assert err is None
    assert state.elixir == 10_000 - 225
    assert state.gold == 10_000


def test_upgrade_missing_building(rich_village):
    state, err = upgrade(rich_village, "ghost-1")
    assert state is rich_village
    assert err == NotFound(building_id="ghost-1")


def test_upgrade_insufficient_funds_is_atomic(rich_village):
    poor = rich_village.evolve(gold=674)
    state, err = upgrade(poor, "barracks-4")
    assert state is poor
    assert err == InsufficientFunds(resource="gold", required=675)
    assert find_building(state.buildings, "barracks-4").level == 3


def test_resources_never_negative_after_spending_spree(new_game):
    gs = new_game
    positions = [Position(x, 0) for x in range(12)]
    for pos in positions:
        for kind in (BuildingKind.CANNON, BuildingKind.MINE):
            gs, _ = build(gs, kind, pos)
            assert gs.gold >= 0 and gs.elixir >= 0
