"""
Unit Tests for Cache Key Derivation

Keys must be deterministic: the same logical query always maps to the
same key, whatever order its parameters arrive in.
"""

import pytest

from hotel_search.infrastructure.cache.keys import canonical_params, derive_cache_key


@pytest.mark.unit
class TestDeriveCacheKey:
    def test_key_without_params(self):
        assert derive_cache_key("details", "1001") == "booking:details:1001"

    def test_key_with_params_sorted(self):
        key = derive_cache_key("search", "london", {"b": 2, "a": 1})

        assert key == 'booking:search:london:{"a":1,"b":2}'

    def test_parameter_order_does_not_matter(self):
        first = derive_cache_key(
            "search", "-2601889", {"checkIn": "2024-05-01", "checkOut": "2024-05-05", "adults": "2"}
        )
        second = derive_cache_key(
            "search", "-2601889", {"adults": "2", "checkOut": "2024-05-05", "checkIn": "2024-05-01"}
        )

        assert first == second

    def test_different_params_give_different_keys(self):
        first = derive_cache_key("search", "-2601889", {"checkIn": "2024-05-01"})
        second = derive_cache_key("search", "-2601889", {"checkIn": "2024-05-02"})

        assert first != second

    def test_empty_params_add_no_suffix(self):
        assert derive_cache_key("photos", "1001", {}) == "booking:photos:1001"

    def test_none_values_are_dropped(self):
        assert derive_cache_key("reviews", "1001", {"page": "0", "locale": None}) == derive_cache_key(
            "reviews", "1001", {"page": "0"}
        )

    def test_all_none_params_add_no_suffix(self):
        assert derive_cache_key("reviews", "1001", {"locale": None}) == "booking:reviews:1001"

    def test_custom_prefix(self):
        assert derive_cache_key("details", 42, prefix="staging") == "staging:details:42"

    def test_integer_id_stringified(self):
        assert derive_cache_key("details", 1001) == derive_cache_key("details", "1001")


@pytest.mark.unit
class TestCanonicalParams:
    def test_nested_values_sorted(self):
        assert canonical_params({"z": {"b": 1, "a": 2}}) == '{"z":{"a":2,"b":1}}'

    def test_none_when_empty(self):
        assert canonical_params(None) is None
        assert canonical_params({}) is None
