import logging
import time
from collections.abc import Callable

from domain.exceptions.currency import UpstreamUnavailable
from infrastructure.providers.rate_api import RateAPIClient

logger = logging.getLogger(__name__)


class CurrencyService:
	"""Keeps the single process-wide list of supported currency codes.

	A successful upstream fetch is reused for ``success_ttl`` seconds. A failed
	one is remembered as an empty set for the shorter ``failure_ttl`` so the
	upstream is retried soon without being hammered on every request.
	"""

	def __init__(
		self,
		client: RateAPIClient,
		success_ttl: float = 60 * 60,
		failure_ttl: float = 5 * 60,
		clock: Callable[[], float] = time.monotonic,
	):
		self.client = client
		self.success_ttl = success_ttl
		self.failure_ttl = failure_ttl
		self._clock = clock
		self._currencies: frozenset[str] | None = None
		self._expires_at = 0.0

	async def get_supported_currencies(self) -> frozenset[str]:
		if self._currencies is not None and self._clock() < self._expires_at:
			return self._currencies

		try:
			codes = await self.client.fetch_currency_list()
		except UpstreamUnavailable as e:
			logger.warning(f'Failed to fetch currencies, serving empty list: {e}')
			return self._store(frozenset(), self.failure_ttl)

		logger.info(f'Loaded {len(codes)} supported currencies')
		return self._store(frozenset(codes), self.success_ttl)

	def _store(self, currencies: frozenset[str], ttl: float) -> frozenset[str]:
		self._currencies = currencies
		self._expires_at = self._clock() + ttl
		return currencies

	def invalidate(self) -> None:
		self._currencies = None
		self._expires_at = 0.0
