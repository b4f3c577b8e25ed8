import asyncio
import logging
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from dataclasses import dataclass, field

from application.services.currency_service import CurrencyService
from domain.exceptions.currency import UpstreamUnavailable
from infrastructure.cache.durable_rate_cache import DurableRateCache
from infrastructure.cache.memory_cache import MemoryCache
from infrastructure.providers.rate_api import RateAPIClient

logger = logging.getLogger(__name__)


@dataclass
class _InFlight:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    waiters: int = 0


def normalize_code(code: str) -> str:
    return code.strip().upper()


def make_cache_key(base: str, targets: list[str]) -> str:
    # Target order is kept as requested, so "EUR,JPY" and "JPY,EUR" are cached separately.
    return f"{base}:{','.join(targets)}"


class RateService:
    def __init__(
        self,
        client: RateAPIClient,
        durable_cache: DurableRateCache,
        response_cache: MemoryCache,
        currency_service: CurrencyService,
        default_base: str = "USD",
        response_ttl: float = 5 * 60,
        single_flight: bool = False,
    ):
        self.client = client
        self.durable_cache = durable_cache
        self.response_cache = response_cache
        self.currency_service = currency_service
        self.default_base = default_base
        self.response_ttl = response_ttl
        self.single_flight = single_flight
        self._inflight: dict[str, _InFlight] = {}

    async def resolve_rates(self, base: str | None = None, targets: list[str] | None = None) -> dict:
        """Rates from ``base`` to each target, as ``{"base": ..., "rates": {...}}``.

        With no targets every supported currency is priced. Any target that
        cannot be resolved fails the whole request with ``UpstreamUnavailable``.
        """
        base = normalize_code(base) if base and base.strip() else self.default_base
        codes = [normalize_code(t) for t in targets or [] if t.strip()]
        if not codes:
            codes = sorted(await self.currency_service.get_supported_currencies())

        key = make_cache_key(base, codes)
        cached = self.response_cache.get(key)
        if cached is not None:
            return cached

        async with self._guard(key):
            if self.single_flight:
                cached = self.response_cache.get(key)
                if cached is not None:
                    return cached

            rates: dict[str, float] = {}
            for target in codes:
                rates[target] = await self.get_rate(base, target)

            response = {"base": base, "rates": rates}
            self.response_cache.set(key, response, self.response_ttl)
            return response

    async def get_rate(self, base: str, target: str) -> float:
        if target == base:
            return 1.0

        entry = await self.durable_cache.get(base, target)
        if entry is not None:
            return entry.rate

        try:
            fetched = await self.client.fetch_latest(base, [target])
        except UpstreamUnavailable as e:
            logger.error(f"Failed to fetch rate {base}->{target}: {e}")
            raise

        entry = await self.durable_cache.put(base, target, fetched[target])
        return entry.rate

    def _guard(self, key: str) -> AbstractAsyncContextManager:
        if not self.single_flight:
            return nullcontext()
        return self._hold(key)

    @asynccontextmanager
    async def _hold(self, key: str):
        # The entry lives only while some request holds or waits on it.
        inflight = self._inflight.get(key)
        if inflight is None:
            inflight = self._inflight[key] = _InFlight()
        inflight.waiters += 1
        try:
            async with inflight.lock:
                yield
        finally:
            inflight.waiters -= 1
            if inflight.waiters == 0:
                del self._inflight[key]
