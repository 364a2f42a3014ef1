"""
Upstream Test Factory

Builds BookingComClient instances backed by httpx.MockTransport, so tests
exercise the real request building and error mapping without a network.
"""

from collections.abc import Callable
from typing import Any

import httpx

from hotel_search.infrastructure.booking_com.client import BookingComClient

Responder = dict | list | httpx.Response | Callable[[httpx.Request], httpx.Response]

BASE_URL = "https://booking-com.p.rapidapi.com/v1"


class UpstreamStub:
    """
    Fake Booking.com API.

    Routes map an endpoint path (relative to /v1) to a JSON body, a ready
    httpx.Response, or a callable producing one. Unknown paths answer 404.
    Every request is recorded.
    """

    def __init__(self, routes: dict[str, Responder] | None = None):
        self.routes: dict[str, Responder] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")

        responder = self.routes.get(path)
        if responder is None:
            return httpx.Response(404, json={"message": f"No route for {path}"})
        if isinstance(responder, httpx.Response):
            return responder
        if callable(responder):
            return responder(request)
        return httpx.Response(200, json=responder)

    def calls_to(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == f"/v1{path}")

    def last_params(self, path: str) -> dict[str, Any]:
        for request in reversed(self.requests):
            if request.url.path == f"/v1{path}":
                return dict(request.url.params)
        raise AssertionError(f"No request was made to {path}")

    def client(self, api_key: str | None = "test-rapidapi-key", **kwargs) -> BookingComClient:
        return BookingComClient(
            api_key=api_key,
            base_url=BASE_URL,
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )


def raising(error: Exception) -> Callable[[httpx.Request], httpx.Response]:
    """Responder that fails the request with a transport error."""

    def respond(request: httpx.Request) -> httpx.Response:
        raise error

    return respond


class UpstreamTestFactory:
    """Canned Booking.com responses."""

    @staticmethod
    def hotel_search_body(count: int = 2) -> dict[str, Any]:
        return {
            "result": [
                {"hotel_id": 1000 + i, "hotel_name": f"Hotel {i}", "min_total_price": 120.0 + i}
                for i in range(count)
            ],
            "count": count,
        }

    @staticmethod
    def stub(**routes: Responder) -> UpstreamStub:
        return UpstreamStub(routes)

    @staticmethod
    def full_stub() -> UpstreamStub:
        """Stub answering every endpoint the client knows."""
        return UpstreamStub(
            {
                "/hotels/locations": [{"dest_id": "-2601889", "dest_type": "city", "name": "London"}],
                "/hotels/search": UpstreamTestFactory.hotel_search_body(),
                "/hotels/data": {"hotel_id": 1001, "name": "The Savoy"},
                "/hotels/description": [{"description": "Riverside luxury hotel"}],
                "/hotels/reviews": {"result": [{"average_score": 9.1}], "count": 1},
                "/hotels/photos": [{"url_max": "https://example.com/1.jpg"}],
                "/hotels/room-availability": [{"block_id": "b1", "price": 450}],
                "/hotels/facilities": [{"facility_name": "Spa"}],
                "/hotels/amenities": [{"amenity": "WiFi"}],
                "/hotels/policies": {"checkin": "15:00", "checkout": "11:00"},
                "/hotels/nearby-places": {"landmarks": [{"name": "Covent Garden"}]},
                "/meta/exchange-rates": {"base_currency": "USD", "exchange_rates": [{"currency": "EUR"}]},
                "/meta/property-types": [{"id": 204, "name": "Hotels"}],
            }
        )
