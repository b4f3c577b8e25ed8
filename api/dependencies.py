import logging
from datetime import timedelta

from application.services import CurrencyService, RateService, UserService
from config.settings import Settings, get_settings
from infrastructure.cache.durable_rate_cache import DurableRateCache
from infrastructure.cache.memory_cache import MemoryCache
from infrastructure.persistence.database import Database
from infrastructure.persistence.store import KeyValueStore
from infrastructure.providers import RateAPIClient

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	store: KeyValueStore | None = None
	rate_client: RateAPIClient | None = None
	response_cache: MemoryCache | None = None
	durable_cache: DurableRateCache | None = None
	currency_service: CurrencyService | None = None
	rate_service: RateService | None = None
	user_service: UserService | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.db = Database(settings.DATABASE_URL)
	deps.store = KeyValueStore(deps.db)
	deps.rate_client = RateAPIClient(settings.CURRENCY_API_URL, timeout=settings.UPSTREAM_TIMEOUT)
	deps.response_cache = MemoryCache()
	deps.durable_cache = DurableRateCache(
		deps.store, max_age=timedelta(seconds=settings.RATE_MAX_AGE_SECONDS)
	)
	deps.currency_service = CurrencyService(
		deps.rate_client,
		success_ttl=settings.CURRENCY_LIST_TTL_SECONDS,
		failure_ttl=settings.CURRENCY_LIST_FAILURE_TTL_SECONDS,
	)
	deps.rate_service = RateService(
		client=deps.rate_client,
		durable_cache=deps.durable_cache,
		response_cache=deps.response_cache,
		currency_service=deps.currency_service,
		default_base=settings.DEFAULT_BASE_CURRENCY,
		response_ttl=settings.RESPONSE_CACHE_TTL_SECONDS,
		single_flight=settings.RATES_SINGLE_FLIGHT,
	)
	deps.user_service = UserService(deps.store, default_base=settings.DEFAULT_BASE_CURRENCY)
	logger.info('Dependencies initialized')


async def startup_dependencies(settings: Settings | None = None) -> None:
	settings = settings or get_settings()
	if deps.db is None or deps.response_cache is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	await deps.db.create_tables()
	logger.info('Database tables created')

	deps.response_cache.start_sweeper(settings.CACHE_SWEEP_INTERVAL_SECONDS)


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.response_cache:
		await deps.response_cache.close()
	if deps.currency_service:
		deps.currency_service.invalidate()
	if deps.rate_client:
		await deps.rate_client.close()
	if deps.db:
		await deps.db.close()

	for name in AppDependencies.__annotations__:
		setattr(deps, name, None)

	logger.info('Cleanup complete')


def get_currency_service() -> CurrencyService:
	if deps.currency_service is None:
		raise RuntimeError('Currency service not initialized')
	return deps.currency_service


def get_rate_service() -> RateService:
	if deps.rate_service is None:
		raise RuntimeError('Rate service not initialized')
	return deps.rate_service


def get_user_service() -> UserService:
	if deps.user_service is None:
		raise RuntimeError('User service not initialized')
	return deps.user_service
