"""
Application Services

Business logic between the HTTP routes and the infrastructure adapters.
"""

from hotel_search.application.services.hotel_search_service import HotelSearchService

__all__ = ["HotelSearchService"]
