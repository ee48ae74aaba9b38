# tests/test_combat.py
import asyncio
import time

import pytest

from village.engine.combat import (
    DEFAULT_REPORT, FALLBACK_REPORT, CombatResult, InvalidCombatResponse,
    apply_combat_result, fallback_result, sanitise_response,
)
from village.engine.state import GameState
from village.oracle import CombatOracle, OracleState
from village.prompts.builder import build_attack_prompt, result_schema

from helpers import FakeNarrator


def resolve(oracle, troops):
    return asyncio.run(oracle.resolve_attack(troops))


# ==========================================
# 1. SANITISING NARRATOR OUTPUT
# ==========================================

def test_sanitise_passes_valid_response():
    raw = {"report": "Goblins fled!", "goldLooted": 120, "elixirLooted": 80, "troopsLost": 3}
    result = sanitise_response(raw, troops_sent=10)
    assert result == CombatResult("Goblins fled!", 120, 80, 3)
    assert not result.fallback


def test_troops_lost_clamped_to_troops_sent():
    raw = {"report": "Ouch.", "goldLooted": 10, "elixirLooted": 10, "troopsLost": 15}
    assert sanitise_response(raw, troops_sent=10).troops_lost == 10


def test_negative_values_clamped_to_zero():
    raw = {"report": "Odd.", "goldLooted": -50, "elixirLooted": -1, "troopsLost": -4}
    result = sanitise_response(raw, troops_sent=10)
    assert result.gold_looted == 0
    assert result.elixir_looted == 0
    assert result.troops_lost == 0


@pytest.mark.parametrize("report", [None, "", "   ", 42])
def test_missing_report_gets_default(report):
    raw = {"goldLooted": 1, "elixirLooted": 1, "troopsLost": 0}
    if report is not None:
        raw["report"] = report
    assert sanitise_response(raw, troops_sent=5).report == DEFAULT_REPORT


@pytest.mark.parametrize("raw", [
    None,
    [],
    "not json",
    {"report": "x", "elixirLooted": 1, "troopsLost": 0},
    {"report": "x", "goldLooted": "lots", "elixirLooted": 1, "troopsLost": 0},
    {"report": "x", "goldLooted": 1.5, "elixirLooted": 1, "troopsLost": 0},
    {"report": "x", "goldLooted": True, "elixirLooted": 1, "troopsLost": 0},
])
def test_malformed_responses_rejected(raw):
    with pytest.raises(InvalidCombatResponse):
        sanitise_response(raw, troops_sent=5)


# ==========================================
# 2. FALLBACK & APPLYING RESULTS
# ==========================================

def test_fallback_for_ten_troops():
    result = fallback_result(10)
    assert result.gold_looted == 100
    assert result.elixir_looted == 100
    assert result.troops_lost == 2
    assert result.report == FALLBACK_REPORT
    assert result.fallback


@pytest.mark.parametrize("troops", [1, 4, 5, 7, 99])
def test_fallback_within_bounds(troops):
    result = fallback_result(troops)
    assert 0 <= result.troops_lost <= troops
    assert result.gold_looted >= 0 and result.elixir_looted >= 0


def test_apply_combat_result():
    gs = GameState(gold=300, elixir=450, troops=5)
    state = apply_combat_result(gs, CombatResult("Won.", 50, 50, 1))
    assert (state.gold, state.elixir, state.troops) == (350, 500, 4)


def test_apply_never_drops_troops_below_zero():
    gs = GameState(gold=0, elixir=0, troops=2)
    state = apply_combat_result(gs, CombatResult("Lost.", 0, 0, 5))
    assert state.troops == 0


# ==========================================
# 3. ORACLE CLIENT
# ==========================================

def test_oracle_resolves_through_narrator():
    narrator = FakeNarrator({"report": "Victory!", "goldLooted": 200,
                             "elixirLooted": 150, "troopsLost": 1})
    oracle = CombatOracle(narrator=narrator)
    result = resolve(oracle, 10)
    assert result == CombatResult("Victory!", 200, 150, 1)
    assert oracle.state == OracleState.RESOLVED
    assert narrator.calls == [10]


def test_oracle_clamps_narrator_overreach():
    narrator = FakeNarrator({"report": "Carnage.", "goldLooted": -5,
                             "elixirLooted": 30, "troopsLost": 15})
    result = resolve(CombatOracle(narrator=narrator), 10)
    assert result.troops_lost == 10
    assert result.gold_looted == 0


def test_oracle_falls_back_on_api_error(caplog):
    oracle = CombatOracle(narrator=FakeNarrator(RuntimeError("Anthropic API error: 529")))
    result = resolve(oracle, 10)
    assert result == fallback_result(10)
    assert oracle.state == OracleState.FALLBACK_RESOLVED
    assert "529" in oracle.last_error
    assert "Combat simulation failed" in caplog.text


def test_oracle_falls_back_on_malformed_answer():
    oracle = CombatOracle(narrator=FakeNarrator({"report": "I forgot the numbers"}))
    result = resolve(oracle, 5)
    assert result.fallback
    assert result.troops_lost == 1


def test_oracle_without_narrator_uses_fallback():
    oracle = CombatOracle()
    assert oracle.state == OracleState.IDLE
    assert resolve(oracle, 10) == fallback_result(10)


def test_oracle_times_out_into_fallback():
    class SlowNarrator(FakeNarrator):
        def narrate(self, troops):
            time.sleep(0.5)
            return super().narrate(troops)

    narrator = SlowNarrator({"report": "Too late", "goldLooted": 1,
                             "elixirLooted": 1, "troopsLost": 0})
    oracle = CombatOracle(narrator=narrator, timeout=0.05)
    result = resolve(oracle, 10)
    assert result.fallback
    assert "timed out" in oracle.last_error


@pytest.mark.parametrize("troops", [0, -3, 2.5, True])
def test_oracle_rejects_bad_troop_counts(troops):
    with pytest.raises(ValueError):
        resolve(CombatOracle(), troops)


# ==========================================
# 4. PROMPT
# ==========================================

def test_attack_prompt_mentions_troops_and_loot_hint():
    prompt = build_attack_prompt(7)
    assert "7 barbarians" in prompt
    assert "210 gold and elixir" in prompt


def test_result_schema_requires_every_field():
    schema = result_schema()
    assert set(schema["required"]) == {"report", "goldLooted", "elixirLooted", "troopsLost"}
    assert schema["properties"]["report"]["type"] == "string"
    assert schema["properties"]["troopsLost"]["type"] == "integer"
