"""File Encoding — turn uploaded bytes into a storable data URL.

Invariants:
    - encode_file either returns a complete "data:<type>;base64,<payload>" string or raises EncodeError
    - Files larger than the configured limit are rejected, never truncated
    - Nothing here touches AppState

Design Decisions:
    - Data URLs keep images inline in the JSON documents, like the browser profile did
"""

import base64
import binascii
import logging

from shipyard.core.errors import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def encode_file(
    data: bytes, filename: str, content_type: str | None, max_bytes: int,
) -> str:
    if not isinstance(data, (bytes, bytearray)):
        raise EncodeError(filename, "file content is not binary")
    if not data:
        raise EncodeError(filename, "file is empty")
    if len(data) > max_bytes:
        raise EncodeError(
            filename, f"file is larger than {max_bytes} bytes",
        )
    try:
        payload = base64.b64encode(bytes(data)).decode("ascii")
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.warning(f"Encoding {filename} failed: {e}")
        raise EncodeError(filename, "could not encode file")
    return f"data:{content_type or DEFAULT_CONTENT_TYPE};base64,{payload}"


def decode_data_url(value: str) -> tuple[str, bytes]:
    """Split a data URL back into (content_type, bytes)."""
    header, sep, payload = value.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("not a base64 data URL")
    content_type = header[len("data:"):-len(";base64")]
    return content_type, base64.b64decode(payload)
