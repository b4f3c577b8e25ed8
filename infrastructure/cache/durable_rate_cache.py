import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from domain.exceptions.currency import StoreError
from domain.models.currency import RateEntry
from infrastructure.persistence.store import KeyValueStore

logger = logging.getLogger(__name__)

RATES_TABLE = "rates_cache"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DurableRateCache:
    """Read-through rate cache persisted in the ``rates_cache`` table.

    Entries older than ``max_age`` are reported as absent but left in place;
    the next successful fetch overwrites them.
    """

    def __init__(
        self,
        store: KeyValueStore,
        max_age: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.max_age = max_age
        self._clock = clock

    def is_fresh(self, entry: RateEntry) -> bool:
        return self._clock() - entry.updated_at < self.max_age

    async def lookup(self, base: str, target: str) -> RateEntry | None:
        """Return the stored entry regardless of age."""
        try:
            row = await self.store.select(
                RATES_TABLE, {"base_currency": base, "target_currency": target}
            )
        except StoreError as e:
            logger.warning(f"Durable cache read failed for {base}->{target}, treating as miss: {e}")
            return None

        if row is None:
            return None

        updated_at = row["updated_at"]
        # SQLite drops tzinfo on the way back
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=UTC)

        try:
            return RateEntry(
                base=row["base_currency"],
                target=row["target_currency"],
                rate=float(row["rate"]),
                updated_at=updated_at,
            )
        except ValueError as e:
            logger.warning(f"Ignoring invalid durable cache row for {base}->{target}: {e}")
            return None

    async def get(self, base: str, target: str) -> RateEntry | None:
        entry = await self.lookup(base, target)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    async def put(self, base: str, target: str, rate: float) -> RateEntry:
        entry = RateEntry(base=base, target=target, rate=rate, updated_at=self._clock())
        try:
            await self.store.upsert(
                RATES_TABLE,
                {
                    "base_currency": entry.base,
                    "target_currency": entry.target,
                    "rate": entry.rate,
                    "updated_at": entry.updated_at,
                },
            )
        except StoreError as e:
            logger.error(f"Durable cache write failed for {base}->{target}: {e}")
        return entry
