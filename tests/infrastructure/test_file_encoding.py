"""File Encoding — data URL encoding limits and decoding."""

import pytest

from shipyard.core.errors import EncodeError
from shipyard.infrastructure.file_encoding import decode_data_url, encode_file


def test_encode_produces_data_url():
    assert encode_file(b"abc", "a.png", "image/png", 10) == "data:image/png;base64,YWJj"


def test_encode_defaults_content_type():
    assert encode_file(b"abc", "a.bin", None, 10).startswith("data:application/octet-stream;base64,")


@pytest.mark.parametrize("data, limit", [(b"", 10), (b"x" * 11, 10), ("text", 10)])
def test_encode_rejects(data, limit):
    with pytest.raises(EncodeError) as exc_info:
        encode_file(data, "a.png", "image/png", limit)
    assert exc_info.value.filename == "a.png"


def test_decode_data_url():
    assert decode_data_url("data:image/png;base64,YWJj") == ("image/png", b"abc")


def test_decode_rejects_plain_url():
    with pytest.raises(ValueError):
        decode_data_url("https://example.com/ship.png")
