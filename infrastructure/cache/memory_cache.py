import asyncio
import contextlib
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    data: Any
    expires_at: float


class MemoryCache:
    """Process-local key/value cache with per-entry expiry.

    Expiry is checked on every read against a monotonic clock, so an entry is
    never served past its deadline whether or not the sweeper is running.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._sweeper: asyncio.Task | None = None

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.data

    def set(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = _Entry(data=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def _sweep_forever(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            removed = self.sweep()
            if removed:
                logger.debug(f"Swept {removed} expired cache entries")

    def start_sweeper(self, interval: float) -> None:
        if interval <= 0 or self._sweeper is not None:
            return
        self._sweeper = asyncio.create_task(self._sweep_forever(interval))

    async def close(self) -> None:
        if self._sweeper is not None:
            self._sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweeper
            self._sweeper = None
        self.clear()
