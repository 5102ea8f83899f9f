import asyncio
from abc import ABC, abstractmethod


class RateLimiter(ABC):
    """Pause taken between two consecutive article requests."""

    @abstractmethod
    async def wait(self) -> None: ...


class FixedDelayRateLimiter(RateLimiter):
    def __init__(self, delay: float) -> None:
        self.delay = delay

    async def wait(self) -> None:
        await asyncio.sleep(self.delay)


class NoDelayRateLimiter(RateLimiter):
    async def wait(self) -> None:
        return None
