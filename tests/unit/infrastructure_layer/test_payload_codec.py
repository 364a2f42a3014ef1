"""
Unit Tests for PayloadCodec

Tests tier 2 serialization with and without compression, and decode failures.
"""

import base64
import gzip

import orjson
import pytest

from hotel_search.core.exceptions import CacheDecodeError
from hotel_search.infrastructure.cache.codec import PayloadCodec


@pytest.fixture
def codec():
    return PayloadCodec()


@pytest.fixture
def hotel_list():
    return [{"hotel_id": i, "hotel_name": "Grand Hotel London", "review_score": 8.7} for i in range(50)]


@pytest.mark.unit
class TestPayloadCodec:
    def test_compressed_payload_is_base64_gzip_json(self, codec, hotel_list):
        payload = codec.encode(hotel_list)

        assert payload.isascii()
        raw = gzip.decompress(base64.b64decode(payload))
        assert orjson.loads(raw) == hotel_list

    def test_compressed_round_trip(self, codec, hotel_list):
        assert codec.decode(codec.encode(hotel_list)) == hotel_list

    def test_compression_shrinks_repetitive_documents(self, codec, hotel_list):
        assert len(codec.encode(hotel_list)) < len(codec.encode(hotel_list, compress=False))

    def test_uncompressed_payload_is_plain_json(self, codec):
        payload = codec.encode({"hotel_id": 1}, compress=False)

        assert payload == '{"hotel_id":1}'
        assert codec.decode(payload, compress=False) == {"hotel_id": 1}

    def test_corrupt_payload_raises_decode_error(self, codec):
        with pytest.raises(CacheDecodeError):
            codec.decode("not base64 at all!!")

    def test_valid_base64_but_not_gzip_raises_decode_error(self, codec):
        payload = base64.b64encode(b'{"hotel_id": 1}').decode("ascii")

        with pytest.raises(CacheDecodeError):
            codec.decode(payload)

    def test_mismatched_compression_setting_raises_decode_error(self, codec):
        payload = codec.encode({"hotel_id": 1})

        with pytest.raises(CacheDecodeError):
            codec.decode(payload, compress=False)

    def test_unserializable_value_raises_type_error(self, codec):
        with pytest.raises(TypeError):
            codec.encode({"callback": object()})
