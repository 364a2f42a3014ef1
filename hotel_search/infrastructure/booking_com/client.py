"""
Booking.com (RapidAPI) HTTP client.

Architecture:
    BookingComClient
        ├── httpx.AsyncClient (base URL, RapidAPI headers, timeout)
        ├── get_json (request + uniform error mapping)
        └── one method per upstream capability

Error Mapping:
    upstream answered with an error status   → UpstreamError(status, upstream message)
    no response (timeout, refused, dropped)  → UpstreamUnavailableError (503)
    anything else                            → UpstreamError (500)

No retries: a failed call is reported to the caller once.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from hotel_search.core.config.constants import (
    DEFAULT_ADULTS,
    DEFAULT_CURRENCY,
    DEFAULT_DEST_TYPE,
    DEFAULT_LOCALE,
    DEFAULT_NEARBY_RADIUS,
    DEFAULT_NEARBY_TYPES,
    DEFAULT_ORDER_BY,
    DEFAULT_PAGE,
    DEFAULT_REVIEW_LANGUAGE,
    DEFAULT_REVIEW_SORT,
    DEFAULT_ROOMS,
    HEADER_RAPIDAPI_HOST,
    HEADER_RAPIDAPI_KEY,
)
from hotel_search.core.exceptions import UpstreamError, UpstreamUnavailableError
from hotel_search.core.logging.logger import get_logger

logger = get_logger(__name__)


class BookingComClient:
    """
    Async client for the Booking.com API on RapidAPI.

    STAGE-4: Upstream fetch

    Usage:
        client = BookingComClient(api_key="...")
        hotels = await client.search_hotels({"destId": "-2601889", ...})
        await client.aclose()
    """

    def __init__(
        self,
        api_key: str | None,
        host: str = "booking-com.p.rapidapi.com",
        base_url: str = "https://booking-com.p.rapidapi.com/v1",
        timeout: float = 10.0,
        locale: str = DEFAULT_LOCALE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            api_key: RapidAPI key sent as X-RapidAPI-Key
            host: RapidAPI host header
            base_url: API root
            timeout: Per-request timeout in seconds
            locale: Locale sent when the caller gives none
            transport: Custom transport (httpx.MockTransport in tests)
        """
        headers = {HEADER_RAPIDAPI_HOST: host}
        if api_key:
            headers[HEADER_RAPIDAPI_KEY] = api_key

        self._locale = locale
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

        if not api_key:
            logger.warning("RAPIDAPI_KEY is not set; upstream calls will be rejected", stage="4.0")

    @classmethod
    def from_settings(cls, settings, transport: httpx.AsyncBaseTransport | None = None) -> "BookingComClient":
        api = settings.booking_api
        return cls(
            api_key=api.RAPIDAPI_KEY,
            host=api.RAPIDAPI_HOST,
            base_url=api.BOOKING_API_BASE_URL,
            timeout=api.BOOKING_API_TIMEOUT,
            locale=api.BOOKING_API_LOCALE,
            transport=transport,
        )

    @property
    def locale(self) -> str:
        return self._locale

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        error_message: str = "Error calling Booking.com API",
    ) -> Any:
        """
        GET path and return the decoded JSON body.

        Args:
            path: Endpoint path relative to the base URL
            params: Query parameters (None values are dropped)
            error_message: Message used when the upstream gives none

        Raises:
            UpstreamError: Mapped from the failure (see module docstring)
        """
        query = {name: value for name, value in (params or {}).items() if value is not None}

        try:
            response = await self._client.get(path, params=query)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _upstream_message(e.response) or error_message
            logger.warning(
                "Upstream returned error status",
                stage="4.1",
                path=path,
                status_code=status,
                upstream_message=message,
            )
            raise UpstreamError(message, status_code=status, details={"path": path})

        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            logger.error("No response from upstream", stage="4.2", path=path, error=str(e))
            raise UpstreamUnavailableError(
                details={"path": path, "original_error": e.__class__.__name__}
            )

        except (httpx.HTTPError, ValueError) as e:
            logger.error("Upstream request failed", stage="4.3", path=path, error=str(e))
            raise UpstreamError(
                error_message,
                status_code=500,
                details={"path": path, "original_error": e.__class__.__name__},
            )

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def search_locations(self, query: str, locale: str | None = None) -> Any:
        return await self.get_json(
            "/hotels/locations",
            {"name": query, "locale": locale or self._locale},
            error_message="Error searching locations",
        )

    async def search_hotels(self, params: Mapping[str, Any]) -> Any:
        """
        Search hotels at a destination.

        Expects camelCase keys as received from our API
        (destId, checkIn, checkOut, rooms, adults, ...).
        """
        return await self.get_json(
            "/hotels/search",
            {
                "checkin_date": params["checkIn"],
                "checkout_date": params["checkOut"],
                "units": "metric",
                "room_number": params.get("rooms") or DEFAULT_ROOMS,
                "adults_number": params.get("adults") or DEFAULT_ADULTS,
                "dest_id": params["destId"],
                "dest_type": params.get("destType") or DEFAULT_DEST_TYPE,
                "locale": params.get("locale") or self._locale,
                "order_by": params.get("orderBy") or DEFAULT_ORDER_BY,
                "filter_by_currency": params.get("currency") or DEFAULT_CURRENCY,
                "page_number": params.get("page") or DEFAULT_PAGE,
                "categories_filter_ids": params.get("categories") or "",
            },
            error_message="Error searching hotels",
        )

    async def _hotel_resource(self, path: str, hotel_id: str, what: str) -> Any:
        return await self.get_json(
            path,
            {"hotel_id": hotel_id, "locale": self._locale},
            error_message=f"Error fetching {what}",
        )

    async def get_hotel_details(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/data", hotel_id, "hotel details")

    async def get_hotel_description(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/description", hotel_id, "hotel description")

    async def get_hotel_photos(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/photos", hotel_id, "hotel photos")

    async def get_hotel_facilities(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/facilities", hotel_id, "hotel facilities")

    async def get_hotel_amenities(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/amenities", hotel_id, "hotel amenities")

    async def get_hotel_policies(self, hotel_id: str) -> Any:
        return await self._hotel_resource("/hotels/policies", hotel_id, "hotel policies")

    async def get_hotel_reviews(self, hotel_id: str, params: Mapping[str, Any]) -> Any:
        return await self.get_json(
            "/hotels/reviews",
            {
                "hotel_id": hotel_id,
                "locale": params.get("locale") or self._locale,
                "sort_type": params.get("sortType") or DEFAULT_REVIEW_SORT,
                "page_number": params.get("page") or DEFAULT_PAGE,
                "language_filter": params.get("language") or DEFAULT_REVIEW_LANGUAGE,
            },
            error_message="Error fetching hotel reviews",
        )

    async def get_room_availability(self, hotel_id: str, params: Mapping[str, Any]) -> Any:
        return await self.get_json(
            "/hotels/room-availability",
            {
                "hotel_id": hotel_id,
                "arrival_date": params["checkIn"],
                "departure_date": params["checkOut"],
                "guest_qty": params.get("guests") or DEFAULT_ADULTS,
                "room_qty": params.get("rooms") or DEFAULT_ROOMS,
                "currency": params.get("currency") or DEFAULT_CURRENCY,
                "locale": params.get("locale") or self._locale,
            },
            error_message="Error fetching room availability",
        )

    async def get_nearby_attractions(self, hotel_id: str, params: Mapping[str, Any]) -> Any:
        return await self.get_json(
            "/hotels/nearby-places",
            {
                "hotel_id": hotel_id,
                "locale": params.get("locale") or self._locale,
                "radius": params.get("radius") or DEFAULT_NEARBY_RADIUS,
                "types": params.get("types") or DEFAULT_NEARBY_TYPES,
            },
            error_message="Error fetching nearby attractions",
        )

    async def get_exchange_rates(self, currency: str = DEFAULT_CURRENCY) -> Any:
        return await self.get_json(
            "/meta/exchange-rates",
            {"currency": currency, "locale": self._locale},
            error_message="Error fetching exchange rates",
        )

    async def get_property_types(self) -> Any:
        return await self.get_json(
            "/meta/property-types",
            {"locale": self._locale},
            error_message="Error fetching property types",
        )


def _upstream_message(response: httpx.Response) -> str | None:
    """The ``message`` field of an upstream error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
