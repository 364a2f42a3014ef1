"""
Hotel Search Service

Caching proxy in front of the Booking.com hotel-search API, with a two-tier
(in-process + Redis) cache.
"""

__version__ = "1.0.0"
