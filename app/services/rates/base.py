from __future__ import annotations

"""Rate provider abstraction.

A provider answers one question: how many units of ``target`` one unit of
``source`` buys right now. Everything about when to ask lives in the session.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

Pair = Tuple[str, str]


@dataclass(frozen=True)
class RateQuote:
    source: str
    target: str
    rate: float
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def pair(self) -> Pair:
        return (self.source, self.target)


class RateProvider(ABC):
    name: str = "abstract"

    @abstractmethod
    async def get_pair_rate(self, source: str, target: str) -> float:
        """Return units of target per 1 unit of source.

        Raises ServiceError / OfflineError; never returns a non-positive rate.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
