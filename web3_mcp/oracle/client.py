"""
Thin HTTP client for the Pyth Hermes price service.

Turns the oracle's mantissa/exponent encoding into plain decimal prices and maps
transport or protocol failures to internal exceptions that the tool layer turns
into ``{"success": False, "error": ...}`` results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

import httpx

from web3_mcp.config import Web3McpConfig, default_config
from web3_mcp.oracle.feeds import normalize_feed_id

logger = logging.getLogger(__name__)

LATEST_PRICES_PATH = "/v2/updates/price/latest"
PRICE_FEEDS_PATH = "/v2/price_feeds"


class OracleError(Exception):
    """Base exception for oracle errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OracleUnavailableError(OracleError):
    """Raised when the oracle service cannot be reached."""


def normalize_price(mantissa: Any, exponent: Any) -> Optional[float]:
    """
    Return ``mantissa * 10**exponent`` as a float.

    A negative exponent divides and a non-negative one multiplies. Unparseable
    input and a zero price yield None.
    """
    try:
        value = Decimal(str(mantissa).strip()).scaleb(int(exponent))
    except (InvalidOperation, TypeError, ValueError):
        return None
    if value == 0:
        return None
    return float(value)


def to_iso_timestamp(epoch_seconds: Any) -> Optional[str]:
    try:
        seconds = int(epoch_seconds)
    except (TypeError, ValueError):
        return None
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class PriceUpdate:
    id: str
    price: Optional[float]
    publish_time: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "price": self.price, "publishTime": self.publish_time}


def _parse_update(feed_id: str, raw: Optional[Dict[str, Any]]) -> PriceUpdate:
    # The EMA price is used rather than the aggregate price field.
    ema = raw.get("ema_price") if isinstance(raw, dict) else None
    if not isinstance(ema, dict):
        return PriceUpdate(id=feed_id, price=None, publish_time=None)
    return PriceUpdate(
        id=feed_id,
        price=normalize_price(ema.get("price"), ema.get("expo")),
        publish_time=to_iso_timestamp(ema.get("publish_time")),
    )


class HermesClient:
    """Async client for the Hermes price update and feed search endpoints."""

    def __init__(
        self,
        config: Web3McpConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.hermes_url, timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(path, params=params)
        except httpx.RequestError as exc:
            logger.warning("Oracle unreachable for path %s", path)
            raise OracleUnavailableError("Oracle unreachable") from exc

        if response.status_code >= 400:
            message = "Oracle request failed."
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and isinstance(data.get("message"), str):
                message = data["message"]
            raise OracleError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise OracleError("Unexpected response from oracle.", status_code=response.status_code) from exc

    async def get_latest_prices(self, feed_ids: Sequence[str]) -> List[PriceUpdate]:
        """
        Fetch the latest EMA price for each feed id in one request.

        The result has exactly one entry per requested id, in request order.
        Feeds the oracle did not return come back with ``price=None``.
        """
        ids = [feed_id for feed_id in feed_ids if isinstance(feed_id, str) and feed_id.strip()]
        if not ids or len(ids) != len(feed_ids):
            raise ValueError("feed_ids must be a non-empty list of feed id strings")

        data = await self._request(
            LATEST_PRICES_PATH,
            params={"ids[]": [feed_id.strip() for feed_id in ids], "parsed": "true"},
        )
        if not isinstance(data, dict):
            raise OracleError("Unexpected response from oracle.")

        parsed = data.get("parsed") or []
        by_id: Dict[str, Dict[str, Any]] = {}
        if isinstance(parsed, list):
            for entry in parsed:
                if isinstance(entry, dict) and isinstance(entry.get("id"), str):
                    by_id[normalize_feed_id(entry["id"])] = entry

        return [_parse_update(feed_id, by_id.get(normalize_feed_id(feed_id))) for feed_id in ids]

    async def search_feeds(self, query: str, asset_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Search price feeds by free-text query and optional asset type."""
        params: Dict[str, Any] = {"query": query}
        if asset_type:
            params["asset_type"] = asset_type
        data = await self._request(PRICE_FEEDS_PATH, params=params)
        if not isinstance(data, list):
            raise OracleError("Unexpected response from oracle.")
        return [entry for entry in data if isinstance(entry, dict)]


default_client = HermesClient()
