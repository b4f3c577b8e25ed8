import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from domain.exceptions.currency import InvalidUserIdError, UserNotFoundError
from domain.models.currency import UserProfile
from infrastructure.persistence.store import KeyValueStore

logger = logging.getLogger(__name__)

USERS_TABLE = 'users'


def validate_user_id(user_id: str) -> str:
	try:
		return str(uuid.UUID(user_id))
	except (ValueError, AttributeError, TypeError) as e:
		raise InvalidUserIdError(f'Invalid user id: {user_id!r}') from e


def _to_profile(row: dict) -> UserProfile:
	return UserProfile(
		user_id=row['user_id'],
		base_currency=row['base_currency'],
		favorites=list(row['favorites'] or []),
		created_at=row['created_at'],
		updated_at=row['updated_at'],
	)


class UserService:
	def __init__(
		self,
		store: KeyValueStore,
		default_base: str = 'USD',
		clock: Callable[[], datetime] = lambda: datetime.now(UTC),
	):
		self.store = store
		self.default_base = default_base
		self._clock = clock

	async def create_user(self, user_id: str | None = None) -> UserProfile:
		now = self._clock()
		row = await self.store.insert(
			USERS_TABLE,
			{
				'user_id': user_id or str(uuid.uuid4()),
				'base_currency': self.default_base,
				'favorites': [],
				'created_at': now,
				'updated_at': now,
			},
		)
		logger.info(f'Created user {row["user_id"]}')
		return _to_profile(row)

	async def find_user(self, user_id: str) -> UserProfile | None:
		row = await self.store.select(USERS_TABLE, {'user_id': user_id})
		return _to_profile(row) if row is not None else None

	async def get_user(self, user_id: str) -> UserProfile:
		profile = await self.find_user(user_id)
		if profile is None:
			raise UserNotFoundError(f'User {user_id} not found')
		return profile

	async def update_user(
		self,
		user_id: str,
		base_currency: str | None = None,
		favorites: list[str] | None = None,
	) -> None:
		await self.get_user(user_id)

		patch: dict = {'updated_at': self._clock()}
		if base_currency:
			patch['base_currency'] = base_currency
		if favorites is not None:
			patch['favorites'] = favorites

		await self.store.update(USERS_TABLE, {'user_id': user_id}, patch)
