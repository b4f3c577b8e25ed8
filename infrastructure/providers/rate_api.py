import logging
import math

import httpx

from domain.exceptions.currency import RateNotFoundError, UpstreamUnavailable

logger = logging.getLogger(__name__)


class RateAPIClient:
    """Thin client for the upstream exchange-rate provider.

    Every call issues exactly one outbound request. Failures are raised as
    ``UpstreamUnavailable``; retrying is left to the caller.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "rate-api"

    async def _request(self, endpoint: str, params: dict | None = None):
        url = f"{self.base_url}/{endpoint}"

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"Rate API HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamUnavailable(f"Rate API request failed: {e.__class__.__name__}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"Rate API response parsing error: {str(e)}") from e

    async def fetch_latest(self, base: str, symbols: list[str]) -> dict[str, float]:
        data = await self._request("latest", {"base": base, "symbols": ",".join(symbols)})

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            logger.error(f"Invalid rate API response for {base}: {str(data)[:200]}")
            raise UpstreamUnavailable(f"Rate API returned no rates for {base}")

        result: dict[str, float] = {}
        for symbol in symbols:
            try:
                value = rates[symbol]
            except KeyError as e:
                raise RateNotFoundError(f"Missing rate for {base} -> {symbol}") from e

            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value <= 0
            ):
                raise UpstreamUnavailable(f"Invalid rate for {base} -> {symbol}: {value!r}")
            result[symbol] = float(value)

        return result

    async def fetch_currency_list(self) -> set[str]:
        data = await self._request("currencies")

        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Invalid currency list response: {str(data)[:200]}")

        return set(data.keys())

    async def close(self) -> None:
        await self._client.aclose()
