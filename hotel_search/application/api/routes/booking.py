"""
Booking Routes
==============

Thin HTTP layer over HotelSearchService. Handlers only translate query
parameters into service arguments and wrap results in the success
envelope; validation, caching and upstream calls live in the service.

Every read route accepts ``refresh=true`` to bypass the cache and
repopulate it from Booking.com.

Rate limits (per X-API-Key, falling back to client IP):
    search routes   RATE_LIMIT_SEARCH
    detail routes   RATE_LIMIT_DETAILS
    cache routes    RATE_LIMIT_CACHE (admin key required)
"""

from fastapi import APIRouter, Query, Request

from hotel_search.application.api.dependencies import AdminGuard, SearchServiceDep
from hotel_search.application.api.models.envelope import ErrorResponse, SuccessResponse, envelope
from hotel_search.core.config.constants import DEFAULT_CURRENCY
from hotel_search.rate_limiting import cache_limit, details_limit, get_rate_limit_manager, search_limit

router = APIRouter(
    prefix="/booking",
    tags=["Booking"],
    responses={
        200: {"model": SuccessResponse},
        400: {"model": ErrorResponse, "description": "Invalid parameters"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        503: {"model": ErrorResponse, "description": "No response from Booking.com"},
    },
)

rate_limits = get_rate_limit_manager()

RefreshQuery = Query(False, description="Bypass the cache and refetch from Booking.com")


# ============================================================================
# SEARCH
# ============================================================================


@router.get("/locations")
@rate_limits.limit(search_limit)
async def search_locations(
    request: Request,
    service: SearchServiceDep,
    query: str | None = Query(None, description="City, region or landmark name"),
    refresh: bool = RefreshQuery,
):
    """Look up destination IDs by name."""
    return envelope(await service.search_locations(query, force_refresh=refresh))


@router.get("/hotels/search")
@rate_limits.limit(search_limit)
async def search_hotels(
    request: Request,
    service: SearchServiceDep,
    dest_id: str | None = Query(None, alias="destId"),
    check_in: str | None = Query(None, alias="checkIn", description="YYYY-MM-DD"),
    check_out: str | None = Query(None, alias="checkOut", description="YYYY-MM-DD"),
    adults: str | None = Query(None),
    rooms: str | None = Query(None),
    dest_type: str | None = Query(None, alias="destType"),
    locale: str | None = Query(None),
    order_by: str | None = Query(None, alias="orderBy"),
    currency: str | None = Query(None),
    page: str | None = Query(None),
    categories: str | None = Query(None),
    refresh: bool = RefreshQuery,
):
    """
    Search hotels at a destination.

    destId, checkIn and checkOut are required; checkOut must be after checkIn.
    """
    params = {
        "destId": dest_id,
        "checkIn": check_in,
        "checkOut": check_out,
        "adults": adults,
        "rooms": rooms,
        "destType": dest_type,
        "locale": locale,
        "orderBy": order_by,
        "currency": currency,
        "page": page,
        "categories": categories,
    }
    return envelope(await service.search_hotels(params, force_refresh=refresh))


# ============================================================================
# HOTEL RESOURCES
# ============================================================================


@router.get("/hotels/{hotel_id}")
@rate_limits.limit(details_limit)
async def get_hotel_details(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_details(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/description")
@rate_limits.limit(details_limit)
async def get_hotel_description(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_description(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/reviews")
@rate_limits.limit(details_limit)
async def get_hotel_reviews(
    request: Request,
    hotel_id: str,
    service: SearchServiceDep,
    locale: str | None = Query(None),
    sort_type: str | None = Query(None, alias="sortType"),
    page: str | None = Query(None),
    language: str | None = Query(None),
    refresh: bool = RefreshQuery,
):
    params = {"locale": locale, "sortType": sort_type, "page": page, "language": language}
    return envelope(await service.get_hotel_reviews(hotel_id, params, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/photos")
@rate_limits.limit(details_limit)
async def get_hotel_photos(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_photos(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/rooms")
@rate_limits.limit(details_limit)
async def get_room_availability(
    request: Request,
    hotel_id: str,
    service: SearchServiceDep,
    check_in: str | None = Query(None, alias="checkIn", description="YYYY-MM-DD"),
    check_out: str | None = Query(None, alias="checkOut", description="YYYY-MM-DD"),
    guests: str | None = Query(None),
    rooms: str | None = Query(None),
    currency: str | None = Query(None),
    locale: str | None = Query(None),
    refresh: bool = RefreshQuery,
):
    """Live availability; cached for a short time only."""
    params = {
        "checkIn": check_in,
        "checkOut": check_out,
        "guests": guests,
        "rooms": rooms,
        "currency": currency,
        "locale": locale,
    }
    return envelope(await service.get_room_availability(hotel_id, params, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/facilities")
@rate_limits.limit(details_limit)
async def get_hotel_facilities(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_facilities(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/amenities")
@rate_limits.limit(details_limit)
async def get_hotel_amenities(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_amenities(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/policies")
@rate_limits.limit(details_limit)
async def get_hotel_policies(
    request: Request, hotel_id: str, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_hotel_policies(hotel_id, force_refresh=refresh))


@router.get("/hotels/{hotel_id}/nearby")
@rate_limits.limit(details_limit)
async def get_nearby_attractions(
    request: Request,
    hotel_id: str,
    service: SearchServiceDep,
    locale: str | None = Query(None),
    radius: str | None = Query(None, description="Meters"),
    types: str | None = Query(None),
    refresh: bool = RefreshQuery,
):
    params = {"locale": locale, "radius": radius, "types": types}
    return envelope(await service.get_nearby_attractions(hotel_id, params, force_refresh=refresh))


# ============================================================================
# REFERENCE DATA
# ============================================================================


@router.get("/exchange-rates")
@rate_limits.limit(details_limit)
async def get_exchange_rates(
    request: Request,
    service: SearchServiceDep,
    currency: str = Query(DEFAULT_CURRENCY, description="ISO 4217 base currency"),
    refresh: bool = RefreshQuery,
):
    return envelope(await service.get_exchange_rates(currency, force_refresh=refresh))


@router.get("/property-types")
@rate_limits.limit(details_limit)
async def get_property_types(
    request: Request, service: SearchServiceDep, refresh: bool = RefreshQuery
):
    return envelope(await service.get_property_types(force_refresh=refresh))


# ============================================================================
# CACHE ADMINISTRATION
# ============================================================================


@router.get("/cache/stats", dependencies=[AdminGuard])
@rate_limits.limit(cache_limit)
async def get_cache_stats(request: Request, service: SearchServiceDep):
    """Hit/miss counters, Tier 1 key count and approximate memory."""
    return envelope(service.cache_statistics().to_dict())


@router.delete("/cache", dependencies=[AdminGuard])
@rate_limits.limit(cache_limit)
async def clear_cache(
    request: Request,
    service: SearchServiceDep,
    pattern: str | None = Query(None, description="Substring of keys to remove; empty clears all"),
):
    """Invalidate matching entries in both tiers."""
    removed = await service.invalidate_cache(pattern)
    return {
        "success": True,
        "message": f"Cache cleared for pattern: {pattern}" if pattern else "Cache cleared",
        "data": removed,
    }
