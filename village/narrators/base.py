"""
Abstract Narrator base class.
"""
from __future__ import annotations
from abc import ABC, abstractmethod


class Narrator(ABC):
    def __init__(self, model_id: str):
        self.model_id = model_id

    @abstractmethod
    def narrate(self, troops: int) -> dict:
        """
        Given the number of troops sent, return the raw battle result dict with keys:
        report, goldLooted, elixirLooted, troopsLost.
        Raise on transport or API errors; the caller falls back.
        """
        ...
