"""
Tests for data-URI helpers.
"""

import binascii

import pytest

from hycom.utils.qr_code import PNG_DATA_URI_PREFIX, decode_data_uri, encode_data_uri


class TestDecodeDataUri:

    def test_strips_png_prefix(self):
        assert decode_data_uri("data:image/png;base64,AAAA") == b"\x00\x00\x00"

    def test_raw_base64_unchanged(self):
        assert decode_data_uri("aGVsbG8=") == b"hello"

    def test_round_trip(self):
        """Bytes encoded as a PNG data-URI decode back to the original."""
        raw = b"\x89PNG\r\n\x1a\n\x00\x01\xfe\xff"

        encoded = encode_data_uri(raw)

        assert encoded.startswith(PNG_DATA_URI_PREFIX)
        assert decode_data_uri(encoded) == raw

    def test_other_prefix_is_not_stripped(self):
        with pytest.raises(binascii.Error):
            decode_data_uri("data:image/svg+xml;base64,AAAA")
