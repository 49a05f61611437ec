import logging
from typing import Any, Dict, List, Optional

import httpx

from pc_recommender.core.config import Settings
from pc_recommender.schemas.pc import RawListing

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/amazon/search"


class CanopySearchError(ValueError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


def _format_price(value: float) -> str:
    # 700.0 => "700"
    return str(int(value)) if float(value).is_integer() else str(value)


class CanopyClient:
    """
    Thin async wrapper around Canopy's Amazon product search.

    Usage:
        client = CanopyClient(base_url="https://...", api_key="...")
        results = await client.search_amazon("gaming pc", max_price=999, limit=40)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        auth_header_name: str = "Authorization",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.auth_header_name = auth_header_name or "Authorization"
        self.timeout = timeout
        self._transport = transport

    async def search_amazon(
        self,
        search_term: str,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Returns the raw product results (title, url, asin, price{value,...}, mainImageUrl, ...).
        Raises CanopySearchError on a non-2xx response or an unexpected payload.
        """
        params: Dict[str, Any] = {"searchTerm": search_term}
        if min_price is not None:
            params["minPrice"] = _format_price(min_price)
        if max_price is not None:
            params["maxPrice"] = _format_price(max_price)
        if limit is not None:
            params["limit"] = str(limit)

        headers = {self.auth_header_name: self.api_key}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(f"{self.base_url}{SEARCH_PATH}", params=params, headers=headers)
            if r.status_code >= 400:
                raise CanopySearchError(
                    f"Canopy search failed: {r.status_code} {r.reason_phrase}",
                    status_code=r.status_code,
                    body=r.text[:2000],
                )
            try:
                data = r.json()
            except ValueError:
                raise CanopySearchError(
                    "Canopy returned a non-JSON response",
                    status_code=r.status_code,
                    body=r.text[:2000],
                )

        try:
            results = data["data"]["amazonProductSearchResults"]["productResults"]["results"]
        except (KeyError, TypeError):
            raise CanopySearchError(f"Unexpected Canopy response shape; raw={str(data)[:500]}")

        return results or []


def _price_value(price: Any) -> Optional[float]:
    if isinstance(price, dict):
        value = price.get("value")
    else:
        value = price
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def to_raw_listing(result: Dict[str, Any]) -> RawListing:
    return RawListing(
        title=result.get("title"),
        url=result.get("url"),
        price=_price_value(result.get("price")),
        image_url=result.get("mainImageUrl"),
    )


def get_canopy_client_from_settings(settings: Settings) -> Optional[CanopyClient]:
    """
    Returns None when CANOPY_API_KEY or CANOPY_BASE_URL is missing.
    """
    api_key = (settings.CANOPY_API_KEY or "").strip()
    base_url = (settings.CANOPY_BASE_URL or "").strip()

    logger.info("Canopy env check: has_api_key=%s has_base_url=%s", bool(api_key), bool(base_url))
    if not api_key or not base_url:
        return None

    return CanopyClient(
        base_url=base_url,
        api_key=api_key,
        auth_header_name=settings.CANOPY_AUTH_HEADER_NAME,
        timeout=settings.SEARCH_TIMEOUT_SECONDS,
    )
