"""
Payload Codec for the distributed cache tier.

Values are serialized with orjson. When compression is on, the JSON bytes
are gzipped and base64-encoded so the payload stays a plain ASCII string
that any Redis client can store and return unchanged.

Trade-off: gzip costs CPU on every tier 2 write and read, and buys a
4-10x smaller footprint for the large, repetitive JSON documents the
Booking.com API returns.
"""

import base64
import gzip
import zlib
from typing import Any

import orjson

from hotel_search.core.exceptions import CacheDecodeError


class PayloadCodec:
    """
    Encodes values for tier 2 storage and decodes them back.

    STAGE-2.6: Payload (de)compression
    """

    def __init__(self, compresslevel: int = 6):
        self._compresslevel = compresslevel

    def encode(self, value: Any, compress: bool = True) -> str:
        """
        Serialize a value to a storable string.

        Raises:
            TypeError: If the value is not JSON-serializable
        """
        raw = orjson.dumps(value)
        if not compress:
            return raw.decode("utf-8")

        compressed = gzip.compress(raw, compresslevel=self._compresslevel)
        return base64.b64encode(compressed).decode("ascii")

    def decode(self, payload: str | bytes, compress: bool = True) -> Any:
        """
        Restore a value from a stored payload.

        Raises:
            CacheDecodeError: If the payload is corrupt or was written
                with a different compression setting
        """
        try:
            if not compress:
                return orjson.loads(payload)

            compressed = base64.b64decode(payload, validate=True)
            return orjson.loads(gzip.decompress(compressed))
        except (ValueError, OSError, EOFError, zlib.error) as e:
            raise CacheDecodeError.from_exception(
                e,
                message=f"Failed to decode cached payload: {e}",
                compressed=compress,
            )
