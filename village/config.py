"""
Game constants: grid size, starting resources, production, training, combat fallback, buildings.
"""

GRID_SIZE = 12

INITIAL_GOLD = 500
INITIAL_ELIXIR = 500

# Production per tick, per building level
PRODUCTION_RATE_PER_LEVEL = 1.5

TICK_SECONDS = 1.0

# upgrade cost = floor(base_cost * multiplier ** current_level)
UPGRADE_COST_MULTIPLIER = 1.5

# Troops gained per Barracks level on each training batch
TROOP_TRAIN_AMOUNT = 5
TROOP_COST_ELIXIR = 10

# Narrator prompt hint: max loot per troop sent
MAX_LOOT_PER_TROOP = 30

# Offline combat formula, used whenever the narrator fails
FALLBACK_LOOT_PER_TROOP = 10
FALLBACK_LOSS_RATE = 0.2

ORACLE_TIMEOUT_SECONDS = 30.0

# Building definitions: name, symbol, cost resource, base cost, description,
# resource produced per tick (None if none), whether it trains troops.
BUILDINGS = {
    "TOWN_HALL": {
        "name": "Town Hall",
        "symbol": "🏰",
        "cost_resource": "gold",
        "base_cost": 1000,
        "description": "The heart of your village.",
        "produces": None,
        "trains_troops": False,
        "constructible": False,
    },
    "MINE": {
        "name": "Gold Mine",
        "symbol": "⛏️",
        "cost_resource": "elixir",
        "base_cost": 100,
        "description": "Produces Gold over time.",
        "produces": "gold",
        "trains_troops": False,
        "constructible": True,
    },
    "COLLECTOR": {
        "name": "Elixir Collector",
        "symbol": "⚗️",
        "cost_resource": "gold",
        "base_cost": 100,
        "description": "Produces Elixir over time.",
        "produces": "elixir",
        "trains_troops": False,
        "constructible": True,
    },
    "BARRACKS": {
        "name": "Barracks",
        "symbol": "⚔️",
        "cost_resource": "gold",
        "base_cost": 200,
        "description": "Allows you to train troops.",
        "produces": None,
        "trains_troops": True,
        "constructible": True,
    },
    "CANNON": {
        "name": "Cannon",
        "symbol": "💣",
        "cost_resource": "gold",
        "base_cost": 250,
        "description": "Defends your village.",
        "produces": None,
        "trains_troops": False,
        "constructible": True,
    },
}
