from __future__ import annotations

"""Wall-clock deadlines for a single pipeline stage.

A Deadline is minted when a stage starts and bounds only the awaitable handed
to ``run``. Deadlines are never derived from one another: the client, the
upstream fetch and the store insert each get their own.
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, TypeVar

from .errors import DeadlineExceeded

T = TypeVar("T")


@dataclass(frozen=True)
class Deadline:
    expires_at: float  # time.monotonic() reading
    budget: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(expires_at=time.monotonic() + seconds, budget=seconds)

    def remaining(self) -> float:
        return self.expires_at - time.monotonic()

    def expired(self) -> bool:
        return self.remaining() <= 0

    async def run(self, aw: Awaitable[T]) -> T:
        """Await ``aw``, raising DeadlineExceeded if it outlives the deadline.

        An awaitable handed in after expiry is closed without being scheduled.
        """
        if self.expired():
            if asyncio.iscoroutine(aw):
                aw.close()
            raise DeadlineExceeded(self.budget)
        try:
            return await asyncio.wait_for(aw, timeout=self.remaining())
        except asyncio.TimeoutError as e:
            raise DeadlineExceeded(self.budget) from e
