"""
Shared test doubles: controllable clocks and an in-memory table store.
"""

from datetime import UTC, datetime, timedelta

import pytest


class FakeMonotonic:
    """Stand-in for time.monotonic that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWallClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 11, 5, 10, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryStore:
    """Dict-backed implementation of the select/upsert/insert/update contract."""

    KEYS = {
        "rates_cache": ("base_currency", "target_currency"),
        "users": ("user_id",),
    }

    def __init__(self):
        self.tables: dict[str, dict[tuple, dict]] = {name: {} for name in self.KEYS}
        self.calls: list[tuple[str, str]] = []

    def _key(self, table: str, row: dict) -> tuple:
        return tuple(row[column] for column in self.KEYS[table])

    async def select(self, table, filters):
        self.calls.append(("select", table))
        for row in self.tables[table].values():
            if all(row.get(k) == v for k, v in filters.items()):
                return dict(row)
        return None

    async def upsert(self, table, row):
        self.calls.append(("upsert", table))
        self.tables[table][self._key(table, row)] = dict(row)

    async def insert(self, table, row):
        self.calls.append(("insert", table))
        key = self._key(table, row)
        if key in self.tables[table]:
            from domain.exceptions.currency import StoreError

            raise StoreError(f"duplicate key {key}")
        self.tables[table][key] = dict(row)
        return dict(row)

    async def update(self, table, filters, patch):
        self.calls.append(("update", table))
        count = 0
        for row in self.tables[table].values():
            if all(row.get(k) == v for k, v in filters.items()):
                row.update(patch)
                count += 1
        return count


@pytest.fixture
def monotonic_clock():
    return FakeMonotonic()


@pytest.fixture
def wall_clock():
    return FakeWallClock()


@pytest.fixture
def memory_store():
    return InMemoryStore()
