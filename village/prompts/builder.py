"""
Builds the narrator persona and the per-attack battle prompt.
"""
from __future__ import annotations

from village.config import MAX_LOOT_PER_TROOP

SYSTEM_PROMPT = "You are an epic battle narrator for a fantasy strategy base-building game."

ATTACK_PROMPT = """\
The player is attacking an enemy goblin village with an army of {troops} barbarians.
Generate a thrilling, 2-sentence battle report describing the clash.
Determine the outcome and loot. The enemy defenses vary in strength randomly.
Max potential loot is around {max_loot} gold and elixir.
The more troops used, the higher the chance of securing big loot, but also expect some losses in combat.
"""

RESULT_FIELDS = {
    "report": "A short, exciting 2-sentence story about how the battle went.",
    "goldLooted": "Amount of gold stolen from the enemy. Scale based on troop count.",
    "elixirLooted": "Amount of elixir stolen from the enemy. Scale based on troop count.",
    "troopsLost": "Number of troops that died. Must be between 0 and the total troops sent.",
}


def build_attack_prompt(troops: int) -> str:
    return ATTACK_PROMPT.format(troops=troops, max_loot=troops * MAX_LOOT_PER_TROOP)


def result_schema() -> dict:
    """JSON schema of the battle result every narrator must return."""
    return {
        "type": "object",
        "properties": {
            name: {
                "type": "string" if name == "report" else "integer",
                "description": desc,
            }
            for name, desc in RESULT_FIELDS.items()
        },
        "required": list(RESULT_FIELDS),
    }
