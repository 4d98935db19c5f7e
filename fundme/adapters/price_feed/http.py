"""HTTP price feed adapter.

Implements PriceFeedPort by querying a REST price service. Expected
response from `GET /api/v1/price/latest`:

    {"answer": 200000000000, "decimals": 8, "version": 4}

`version` is optional and defaults to 0.
"""

import logging
from typing import Any

import httpx

from fundme.core.models import PriceQuote
from fundme.core.ports import PriceFeedPort

logger = logging.getLogger(__name__)

LATEST_PRICE_PATH = "/api/v1/price/latest"


def _is_integer(value: object) -> bool:
    # JSON true/false decode to bool, which is an int subclass.
    return isinstance(value, int) and not isinstance(value, bool)


class HttpPriceFeedAdapter(PriceFeedPort):
    """REST-backed price feed via httpx."""

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the HTTP price feed.

        Args:
            api_url: Base URL for the price service.
            api_key: Optional bearer token.
            timeout_seconds: Request timeout.
            transport: Optional httpx transport (used to stub the service).
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=self._get_headers(),
            timeout=timeout_seconds,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Build request headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client."""
        await self.client.aclose()

    async def _fetch_latest(self) -> dict[str, Any]:
        try:
            response = await self.client.get(LATEST_PRICE_PATH)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch price from {self.api_url}: {e}")
            raise

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected price payload: {data!r}")
        return data

    async def get_price(self) -> PriceQuote:
        """Return the latest quote from the price service.

        Raises:
            httpx.HTTPError: If the service is unreachable or errors.
            ValueError: If the payload is malformed.
        """
        data = await self._fetch_latest()
        answer = data.get("answer")
        decimals = data.get("decimals")
        if not _is_integer(answer) or not _is_integer(decimals):
            raise ValueError(f"Price payload missing integer answer/decimals: {data!r}")

        quote = PriceQuote(answer=answer, decimals=decimals)
        logger.debug(
            f"Fetched price {answer} ({decimals} decimals)",
            extra={"answer": answer, "decimals": decimals},
        )
        return quote

    async def get_version(self) -> int:
        data = await self._fetch_latest()
        version = data.get("version", 0)
        if not _is_integer(version):
            raise ValueError(f"Price payload has non-integer version: {data!r}")
        return version
