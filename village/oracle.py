"""
Combat oracle client: ask the narrator for a battle result, clamp it, or fall back offline.
"""
from __future__ import annotations
import asyncio
import logging
from enum import Enum
from typing import Optional

from village.config import ORACLE_TIMEOUT_SECONDS
from village.engine.combat import CombatResult, fallback_result, sanitise_response
from village.narrators.base import Narrator

logger = logging.getLogger(__name__)


class OracleState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    RESOLVED = "resolved"
    FAILED = "failed"
    FALLBACK_RESOLVED = "fallback_resolved"


class CombatOracle:
    """
    Resolves attacks through an external narrator. Never raises for narrator
    failures: timeouts, API errors and malformed answers all end in the
    deterministic fallback result.
    """

    def __init__(self, narrator: Optional[Narrator] = None,
                 timeout: float = ORACLE_TIMEOUT_SECONDS):
        self.narrator = narrator
        self.timeout = timeout
        self.state = OracleState.IDLE
        self.last_error: Optional[str] = None

    async def resolve_attack(self, troops_sent: int) -> CombatResult:
        if isinstance(troops_sent, bool) or not isinstance(troops_sent, int) or troops_sent <= 0:
            raise ValueError(f"troops_sent must be a positive integer, got {troops_sent!r}")

        self.state = OracleState.REQUESTING
        self.last_error = None
        try:
            raw = await self._ask_narrator(troops_sent)
            result = sanitise_response(raw, troops_sent)
        except asyncio.TimeoutError:
            return self._fail(troops_sent, f"narrator timed out after {self.timeout}s")
        except Exception as e:
            return self._fail(troops_sent, str(e) or type(e).__name__)

        self.state = OracleState.RESOLVED
        logger.debug("Narrator resolved attack with %d troops: %s", troops_sent, result)
        return result

    async def _ask_narrator(self, troops_sent: int) -> dict:
        if self.narrator is None:
            raise RuntimeError("no narrator configured")
        return await asyncio.wait_for(
            asyncio.to_thread(self.narrator.narrate, troops_sent),
            timeout=self.timeout,
        )

    def _fail(self, troops_sent: int, reason: str) -> CombatResult:
        self.state = OracleState.FAILED
        self.last_error = reason
        logger.warning("Combat simulation failed (%s); using offline result", reason)
        result = fallback_result(troops_sent)
        self.state = OracleState.FALLBACK_RESOLVED
        return result
