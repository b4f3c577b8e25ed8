from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./currency_rates.db'

	CURRENCY_API_URL: str = 'https://api.frankfurter.app'
	UPSTREAM_TIMEOUT: int = 10

	# Caching
	DEFAULT_BASE_CURRENCY: str = 'USD'
	RATE_MAX_AGE_SECONDS: int = 24 * 60 * 60
	RESPONSE_CACHE_TTL_SECONDS: int = 5 * 60
	CURRENCY_LIST_TTL_SECONDS: int = 60 * 60
	CURRENCY_LIST_FAILURE_TTL_SECONDS: int = 5 * 60
	CACHE_SWEEP_INTERVAL_SECONDS: int = 60
	RATES_SINGLE_FLIGHT: bool = False

	# Visitor identity
	USER_ID_HEADER: str = 'x-user-id'
	USER_ID_COOKIE: str = 'user_id'

	# Application
	APP_NAME: str = 'Currency Rates API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
