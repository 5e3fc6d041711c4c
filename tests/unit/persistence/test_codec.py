"""Unit tests for record encoding."""

import pytest

from skylogin.persistence.codec import decode_value, encode_value
from skylogin.persistence.error import RecordSerializationError


class TestCodec:
    """Tests for encode_value/decode_value."""

    def test_encodes_compact_json(self):
        assert encode_value("k", {"handle": "alice.test", "n": [1, 2]}) == (
            '{"handle":"alice.test","n":[1,2]}'
        )

    def test_decodes_bytes_and_text(self):
        assert decode_value("k", '{"a":null}') == {"a": None}
        assert decode_value("k", b'{"a":true}') == {"a": True}

    def test_nan_is_rejected(self):
        """NaN is not valid JSON and must not be written."""
        with pytest.raises(RecordSerializationError):
            encode_value("k", {"ratio": float("nan")})

    def test_error_names_the_key(self):
        with pytest.raises(RecordSerializationError) as exc_info:
            decode_value("did:plc:broken", "{")

        assert exc_info.value.key == "did:plc:broken"
        assert "did:plc:broken" in str(exc_info.value)
