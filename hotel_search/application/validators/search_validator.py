"""
Search Request Validator

Validates hotel search inputs before any cache or upstream interaction.
Every failure raises a 400-class ValidationError with a message safe to
show to API clients.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from hotel_search.core.config.constants import CACHE_KEY_DELIMITER, DATE_FORMAT_HINT
from hotel_search.core.exceptions import InvalidDateRangeError, InvalidInputError
from hotel_search.core.logging.logger import get_logger

logger = get_logger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CURRENCY_PATTERN = re.compile(r"^[A-Za-z]{3}$")


class SearchValidator:
    """
    Validation rules for the Booking.com integration.

    Rules:
    - Dates are ISO ``YYYY-MM-DD`` calendar dates
    - Check-out must be strictly after check-in (same-day is rejected)
    - Hotel IDs are non-empty and never contain the cache key delimiter
    - Currency codes are three letters
    """

    MISSING_SEARCH_FIELDS = "Please provide destination ID, check-in and check-out dates"
    MISSING_STAY_DATES = "Please provide check-in and check-out dates"
    INVALID_DATE = f"Invalid date format. Please use {DATE_FORMAT_HINT} format"
    INVALID_RANGE = "Check-out date must be after check-in date"

    def parse_date(self, value: Any) -> date:
        """
        Parse an ISO calendar date.

        Raises:
            InvalidInputError: If the value is not a valid YYYY-MM-DD date
        """
        if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value.strip()):
            raise InvalidInputError(self.INVALID_DATE, details={"value": str(value)})
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            raise InvalidInputError(self.INVALID_DATE, details={"value": value})

    def validate_date_range(
        self,
        check_in: Any,
        check_out: Any,
        missing_message: str = MISSING_STAY_DATES,
    ) -> tuple[date, date]:
        """
        Validate a stay's dates.

        Returns:
            (check_in, check_out) as dates

        Raises:
            InvalidInputError: Missing or malformed date
            InvalidDateRangeError: check_out is not after check_in
        """
        if not check_in or not check_out:
            raise InvalidInputError(missing_message)

        arrival = self.parse_date(check_in)
        departure = self.parse_date(check_out)

        if arrival >= departure:
            raise InvalidDateRangeError(
                self.INVALID_RANGE,
                details={"checkIn": arrival.isoformat(), "checkOut": departure.isoformat()},
            )

        return arrival, departure

    def validate_search_params(self, params: Mapping[str, Any]) -> tuple[date, date]:
        """
        Validate hotel search parameters.

        STAGE-1.2: Search request validation

        Requires destId, checkIn and checkOut.
        """
        if not params.get("destId") or not params.get("checkIn") or not params.get("checkOut"):
            raise InvalidInputError(self.MISSING_SEARCH_FIELDS)

        self.validate_identifier(params["destId"], "destination ID")
        return self.validate_date_range(
            params["checkIn"], params["checkOut"], missing_message=self.MISSING_SEARCH_FIELDS
        )

    def validate_identifier(self, value: Any, field_name: str = "hotel ID") -> str:
        """
        Validate an identifier that becomes part of a cache key.

        Raises:
            InvalidInputError: Empty, or contains the key delimiter
        """
        identifier = str(value).strip() if value is not None else ""
        if not identifier:
            raise InvalidInputError(f"Please provide a {field_name}")
        if CACHE_KEY_DELIMITER in identifier:
            raise InvalidInputError(
                f"Invalid {field_name}: must not contain '{CACHE_KEY_DELIMITER}'",
                details={"value": identifier},
            )
        return identifier

    def validate_query(self, query: Any) -> str:
        """Validate a free-text location query."""
        text = query.strip() if isinstance(query, str) else ""
        if not text:
            raise InvalidInputError("Please provide a search query")
        return text

    def validate_currency(self, currency: Any) -> str:
        """Validate a currency code, returning it upper-cased."""
        if not isinstance(currency, str) or not CURRENCY_PATTERN.match(currency.strip()):
            raise InvalidInputError(
                "Invalid currency code. Please use a 3-letter ISO code such as USD",
                details={"value": str(currency)},
            )
        return currency.strip().upper()
