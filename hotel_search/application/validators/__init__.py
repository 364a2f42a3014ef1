"""
Validators Module

Request validation for the hotel search service.
"""

from hotel_search.application.validators.search_validator import SearchValidator

__all__ = ["SearchValidator"]
