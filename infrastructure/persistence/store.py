import logging
from typing import Any

from sqlalchemy import inspect, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.future import select

from domain.exceptions.currency import StoreError
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.currency import Base, RateCacheDB, UserDB

logger = logging.getLogger(__name__)

TABLES: dict[str, type[Base]] = {
	RateCacheDB.__tablename__: RateCacheDB,
	UserDB.__tablename__: UserDB,
}

UPSERT_INSERTS = {
	'sqlite': sqlite.insert,
	'postgresql': postgresql.insert,
}


def _to_row(instance: Base) -> dict[str, Any]:
	return {attr.key: getattr(instance, attr.key) for attr in inspect(instance).mapper.column_attrs}


class KeyValueStore:
	"""Table-oriented key-value access on top of the SQL database.

	Each call runs in its own transaction. Database failures surface as
	``StoreError``; callers decide whether to propagate or degrade.
	"""

	def __init__(self, database: Database):
		self.database = database

	def _model(self, table: str) -> type[Base]:
		try:
			return TABLES[table]
		except KeyError as e:
			raise StoreError(f'Unknown table: {table}') from e

	async def select(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
		model = self._model(table)
		async with self.database.session(f'select on {table}') as session:
			result = await session.execute(select(model).filter_by(**filters).limit(1))
			instance = result.scalars().first()
			return _to_row(instance) if instance is not None else None

	async def upsert(self, table: str, row: dict[str, Any]) -> None:
		"""Insert ``row`` or overwrite the row with the same primary key in one statement."""
		model = self._model(table)
		try:
			dialect_insert = UPSERT_INSERTS[self.database.dialect]
		except KeyError as e:
			raise StoreError(f'upsert is not supported on {self.database.dialect}') from e

		key_columns = [column.name for column in model.__table__.primary_key.columns]
		stmt = dialect_insert(model.__table__).values(**row)
		stmt = stmt.on_conflict_do_update(
			index_elements=key_columns,
			set_={name: value for name, value in row.items() if name not in key_columns},
		)
		async with self.database.session(f'upsert on {table}') as session:
			await session.execute(stmt)

	async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
		model = self._model(table)
		async with self.database.session(f'insert on {table}') as session:
			instance = model(**row)
			session.add(instance)
			await session.flush()
			return _to_row(instance)

	async def update(self, table: str, filters: dict[str, Any], patch: dict[str, Any]) -> int:
		model = self._model(table)
		async with self.database.session(f'update on {table}') as session:
			result = await session.execute(update(model).filter_by(**filters).values(**patch))
			return result.rowcount
