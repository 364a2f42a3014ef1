"""
Unit Tests for SearchValidator

Tests date parsing, stay ranges and identifier rules.
"""

from datetime import date

import pytest

from hotel_search.application.validators import SearchValidator
from hotel_search.core.exceptions import InvalidDateRangeError, InvalidInputError


@pytest.fixture
def validator():
    return SearchValidator()


@pytest.mark.unit
class TestDates:
    def test_parse_valid_date(self, validator):
        assert validator.parse_date("2024-05-01") == date(2024, 5, 1)

    @pytest.mark.parametrize("value", ["2024-5-1", "01/05/2024", "2024-02-30", "tomorrow", None, 20240501])
    def test_parse_invalid_date(self, validator, value):
        with pytest.raises(InvalidInputError) as exc_info:
            validator.parse_date(value)

        assert exc_info.value.message == "Invalid date format. Please use YYYY-MM-DD format"

    def test_valid_range(self, validator):
        assert validator.validate_date_range("2024-05-01", "2024-05-05") == (
            date(2024, 5, 1),
            date(2024, 5, 5),
        )

    def test_one_night_is_valid(self, validator):
        validator.validate_date_range("2024-12-31", "2025-01-01")

    def test_same_day_rejected(self, validator):
        with pytest.raises(InvalidDateRangeError):
            validator.validate_date_range("2024-05-01", "2024-05-01")

    def test_missing_date_uses_given_message(self, validator):
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate_date_range("2024-05-01", "", missing_message="dates please")

        assert exc_info.value.message == "dates please"


@pytest.mark.unit
class TestSearchParams:
    def test_valid_search(self, validator, london_search_params):
        assert validator.validate_search_params(london_search_params) == (
            date(2024, 5, 1),
            date(2024, 5, 5),
        )

    def test_missing_dest_id(self, validator):
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate_search_params({"checkIn": "2024-05-01", "checkOut": "2024-05-05"})

        assert exc_info.value.status_code == 400


@pytest.mark.unit
class TestIdentifiersAndCodes:
    def test_identifier_is_stripped(self, validator):
        assert validator.validate_identifier(" 1001 ") == "1001"

    def test_integer_identifier(self, validator):
        assert validator.validate_identifier(1001) == "1001"

    def test_identifier_with_delimiter_rejected(self, validator):
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate_identifier("booking:1001")

        assert exc_info.value.details == {"value": "booking:1001"}

    def test_empty_identifier_message_names_field(self, validator):
        with pytest.raises(InvalidInputError) as exc_info:
            validator.validate_identifier(None, "destination ID")

        assert exc_info.value.message == "Please provide a destination ID"

    def test_currency_uppercased(self, validator):
        assert validator.validate_currency("gbp") == "GBP"

    @pytest.mark.parametrize("value", ["", "US", "USDT", "U$D", None])
    def test_invalid_currency(self, validator, value):
        with pytest.raises(InvalidInputError):
            validator.validate_currency(value)
