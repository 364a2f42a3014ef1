"""
Hotel Search Service
====================

One operation per upstream capability. Each operation:

1. Validates its inputs (400 before any cache or upstream interaction)
2. Derives a deterministic cache key
3. Delegates to the CacheManager with the category's TTL, using the
   Booking.com client call as the fetch-on-miss function

TTL categories:
    search        locations, hotel search
    details       hotel data, description, nearby places, exchange rates
    reviews       guest reviews
    static        photos, facilities, amenities, policies, property types
    availability  room availability

Upstream errors raised by the client propagate unchanged; the cache
manager never retries them.
"""

from collections.abc import Callable, Mapping
from typing import Any

from hotel_search.application.validators.search_validator import SearchValidator
from hotel_search.core.config.constants import CACHE_KEY_PREFIX, DEFAULT_CURRENCY, CacheCategory
from hotel_search.core.exceptions import InvalidUpstreamResponseError
from hotel_search.core.logging.logger import get_logger, log_stage
from hotel_search.infrastructure.booking_com.client import BookingComClient
from hotel_search.infrastructure.cache.cache_manager import CacheManager, CacheStatistics
from hotel_search.infrastructure.cache.keys import derive_cache_key
from hotel_search.infrastructure.cache.options import CacheTTLPolicy

logger = get_logger(__name__)

# Query parameters each operation forwards upstream, and therefore keys on
SEARCH_PARAMS = (
    "destId", "checkIn", "checkOut", "rooms", "adults", "destType",
    "locale", "orderBy", "currency", "page", "categories",
)
REVIEW_PARAMS = ("locale", "sortType", "page", "language")
AVAILABILITY_PARAMS = ("checkIn", "checkOut", "guests", "rooms", "currency", "locale")
NEARBY_PARAMS = ("locale", "radius", "types")


def _pick(params: Mapping[str, Any] | None, names: tuple[str, ...]) -> dict[str, Any]:
    params = params or {}
    return {name: params[name] for name in names if params.get(name) not in (None, "")}


class HotelSearchService:
    """
    Cached facade over the Booking.com API.

    Usage:
        service = HotelSearchService(cache_manager, client)
        hotels = await service.search_hotels(
            {"destId": "-2601889", "checkIn": "2024-05-01", "checkOut": "2024-05-05"}
        )
    """

    def __init__(
        self,
        cache_manager: CacheManager,
        client: BookingComClient,
        ttl_policy: CacheTTLPolicy | None = None,
        key_prefix: str = CACHE_KEY_PREFIX,
        compress: bool = True,
        validator: SearchValidator | None = None,
    ):
        self._cache = cache_manager
        self._client = client
        self._ttl_policy = ttl_policy or CacheTTLPolicy()
        self._key_prefix = key_prefix
        self._compress = compress
        self._validator = validator or SearchValidator()

    async def _cached(
        self,
        category: CacheCategory,
        resource_type: str,
        resource_id: str,
        fetch_fn: Callable[[], Any],
        params: Mapping[str, Any] | None = None,
        force_refresh: bool = False,
    ) -> Any:
        key = derive_cache_key(resource_type, resource_id, params, prefix=self._key_prefix)
        options = self._ttl_policy.options_for(
            category, force_refresh=force_refresh, compress=self._compress
        )
        log_stage(
            logger,
            "3.1",
            "Cached lookup",
            level="debug",
            cache_key=key,
            category=category.value,
            ttl=options.ttl_seconds,
        )
        return await self._cache.get(key, fetch_fn, options)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search_locations(self, query: str, force_refresh: bool = False) -> Any:
        """Search cities, regions and landmarks by name."""
        name = self._validator.validate_query(query)
        return await self._cached(
            CacheCategory.SEARCH,
            "locations",
            self._client.locale,
            lambda: self._client.search_locations(name),
            params={"name": name},
            force_refresh=force_refresh,
        )

    async def search_hotels(self, params: Mapping[str, Any], force_refresh: bool = False) -> Any:
        """
        Search hotels at a destination for a stay.

        STAGE-3.2: Hotel search

        Requires destId, checkIn and checkOut. Returns the upstream
        ``result`` list.

        Raises:
            InvalidInputError / InvalidDateRangeError: Bad parameters (400)
            InvalidUpstreamResponseError: Upstream body has no result (500)
            UpstreamError: Upstream failure
        """
        arrival, departure = self._validator.validate_search_params(params)
        query = _pick(params, SEARCH_PARAMS)
        query["checkIn"], query["checkOut"] = arrival.isoformat(), departure.isoformat()
        query["destId"] = self._validator.validate_identifier(query["destId"], "destination ID")

        async def fetch():
            body = await self._client.search_hotels(query)
            if not isinstance(body, dict) or body.get("result") is None:
                raise InvalidUpstreamResponseError(details={"destId": query["destId"]})
            return body["result"]

        return await self._cached(
            CacheCategory.SEARCH,
            "search",
            query["destId"],
            fetch,
            params=query,
            force_refresh=force_refresh,
        )

    # -------------------------------------------------------------------------
    # Hotel Resources
    # -------------------------------------------------------------------------

    async def get_hotel_details(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.DETAILS,
            "details",
            hotel_id,
            lambda: self._client.get_hotel_details(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_hotel_description(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.DETAILS,
            "description",
            hotel_id,
            lambda: self._client.get_hotel_description(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_hotel_reviews(
        self,
        hotel_id: str,
        params: Mapping[str, Any] | None = None,
        force_refresh: bool = False,
    ) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        query = _pick(params, REVIEW_PARAMS)
        return await self._cached(
            CacheCategory.REVIEWS,
            "reviews",
            hotel_id,
            lambda: self._client.get_hotel_reviews(hotel_id, query),
            params=query,
            force_refresh=force_refresh,
        )

    async def get_hotel_photos(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.STATIC,
            "photos",
            hotel_id,
            lambda: self._client.get_hotel_photos(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_room_availability(
        self,
        hotel_id: str,
        params: Mapping[str, Any],
        force_refresh: bool = False,
    ) -> Any:
        """Live room availability; same date rules as hotel search."""
        hotel_id = self._validator.validate_identifier(hotel_id)
        params = params or {}
        arrival, departure = self._validator.validate_date_range(
            params.get("checkIn"), params.get("checkOut")
        )
        query = _pick(params, AVAILABILITY_PARAMS)
        query["checkIn"], query["checkOut"] = arrival.isoformat(), departure.isoformat()
        return await self._cached(
            CacheCategory.AVAILABILITY,
            "availability",
            hotel_id,
            lambda: self._client.get_room_availability(hotel_id, query),
            params=query,
            force_refresh=force_refresh,
        )

    async def get_hotel_facilities(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.STATIC,
            "facilities",
            hotel_id,
            lambda: self._client.get_hotel_facilities(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_hotel_amenities(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.STATIC,
            "amenities",
            hotel_id,
            lambda: self._client.get_hotel_amenities(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_hotel_policies(self, hotel_id: str, force_refresh: bool = False) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        return await self._cached(
            CacheCategory.STATIC,
            "policies",
            hotel_id,
            lambda: self._client.get_hotel_policies(hotel_id),
            force_refresh=force_refresh,
        )

    async def get_nearby_attractions(
        self,
        hotel_id: str,
        params: Mapping[str, Any] | None = None,
        force_refresh: bool = False,
    ) -> Any:
        hotel_id = self._validator.validate_identifier(hotel_id)
        query = _pick(params, NEARBY_PARAMS)
        return await self._cached(
            CacheCategory.DETAILS,
            "nearby",
            hotel_id,
            lambda: self._client.get_nearby_attractions(hotel_id, query),
            params=query,
            force_refresh=force_refresh,
        )

    # -------------------------------------------------------------------------
    # Reference Data
    # -------------------------------------------------------------------------

    async def get_exchange_rates(
        self, currency: str = DEFAULT_CURRENCY, force_refresh: bool = False
    ) -> Any:
        currency = self._validator.validate_currency(currency)
        return await self._cached(
            CacheCategory.DETAILS,
            "exchange-rates",
            currency,
            lambda: self._client.get_exchange_rates(currency),
            force_refresh=force_refresh,
        )

    async def get_property_types(self, force_refresh: bool = False) -> Any:
        return await self._cached(
            CacheCategory.STATIC,
            "property-types",
            self._client.locale,
            self._client.get_property_types,
            force_refresh=force_refresh,
        )

    # -------------------------------------------------------------------------
    # Cache Administration
    # -------------------------------------------------------------------------

    async def invalidate_cache(self, pattern: str | None = None) -> dict[str, int | None]:
        """Invalidate by substring, or everything when pattern is empty."""
        pattern = pattern.strip() if pattern else None
        log_stage(logger, "3.9", "Cache invalidation requested", pattern=pattern)
        return await self._cache.invalidate(pattern or None)

    def cache_statistics(self) -> CacheStatistics:
        return self._cache.statistics()
