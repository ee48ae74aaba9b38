"""
Game session: owns the mutable GameState reference, the event log and the production loop.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Callable, List, Optional

from village.config import TICK_SECONDS
from village.engine.combat import CombatResult, apply_combat_result
from village.engine.construction import build, upgrade
from village.engine.economy import production_tick
from village.engine.errors import AttackInProgress, GameError, NoTroops
from village.engine.grid import find_building
from village.engine.registry import config_for
from village.engine.state import BuildingKind, GameState, Position
from village.engine.troops import train
from village.oracle import CombatOracle

logger = logging.getLogger(__name__)


class VillageSession:
    """
    Single-player session. Every action swaps `self.state` for the value the
    engine returns, so production ticks and player actions never interleave
    mid-mutation. Only one attack may be in flight at a time.
    """

    def __init__(self, oracle: Optional[CombatOracle] = None,
                 state: Optional[GameState] = None,
                 on_change: Optional[Callable[[GameState], None]] = None):
        self.state = state if state is not None else GameState.new_game()
        self.oracle = oracle if oracle is not None else CombatOracle()
        self.ticks = 0
        self.log: List[str] = []
        self.last_combat: Optional[CombatResult] = None
        self._attacking = False
        self._on_change = on_change

    # ── Event log ──

    def add_log(self, msg: str):
        self.log.append(f"[T{self.ticks}] {msg}")

    def recent_log(self, n: int = 5) -> List[str]:
        return self.log[-n:]

    @property
    def attacking(self) -> bool:
        return self._attacking

    def _commit(self, new_state: GameState) -> None:
        if new_state is self.state:
            return
        self.state = new_state
        if self._on_change:
            self._on_change(new_state)

    def _reject(self, err: GameError) -> GameError:
        self.add_log(err.message)
        logger.debug("Action rejected: %r", err)
        return err

    # ── Actions ──

    def tick(self) -> None:
        self.ticks += 1
        self._commit(production_tick(self.state))

    def build(self, kind: BuildingKind, pos: Position) -> Optional[GameError]:
        new_state, err = build(self.state, kind, pos)
        if err:
            return self._reject(err)
        self._commit(new_state)
        self.add_log(f"Built {config_for(kind).name} at {pos}")
        return None

    def upgrade(self, building_id: str) -> Optional[GameError]:
        new_state, err = upgrade(self.state, building_id)
        if err:
            return self._reject(err)
        self._commit(new_state)
        building = find_building(new_state.buildings, building_id)
        self.add_log(f"Upgraded {config_for(building.kind).name} to level {building.level}")
        return None

    def train(self) -> Optional[GameError]:
        before = self.state.troops
        new_state, err = train(self.state)
        if err:
            return self._reject(err)
        self._commit(new_state)
        self.add_log(f"Trained {new_state.troops - before} barbarians")
        return None

    async def attack(self) -> Optional[GameError]:
        """Send every troop on a raid; loot and losses land on the state current at completion."""
        if self._attacking:
            return self._reject(AttackInProgress())
        troops_sent = self.state.troops
        if troops_sent <= 0:
            return self._reject(NoTroops())

        self._attacking = True
        try:
            result = await self.oracle.resolve_attack(troops_sent)
        finally:
            self._attacking = False

        self.last_combat = result
        self._commit(apply_combat_result(self.state, result))
        self.add_log(
            f"Raid with {troops_sent} troops: +{result.gold_looted} gold, "
            f"+{result.elixir_looted} elixir, -{result.troops_lost} troops"
        )
        return None


class ProductionScheduler:
    """Calls session.tick() every `period` seconds until stopped."""

    def __init__(self, session: VillageSession, period: float = TICK_SECONDS):
        self.session = session
        self.period = period
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            self.session.tick()
