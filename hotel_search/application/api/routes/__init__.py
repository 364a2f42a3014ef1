from hotel_search.application.api.routes.booking import router as booking_router
from hotel_search.application.api.routes.health import router as health_router

__all__ = ["booking_router", "health_router"]
