"""
Infrastructure Layer

Adapters to external systems: the two-tier cache and the Booking.com API.
"""
