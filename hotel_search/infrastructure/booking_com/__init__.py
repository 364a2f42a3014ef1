from hotel_search.infrastructure.booking_com.client import BookingComClient

__all__ = ["BookingComClient"]
