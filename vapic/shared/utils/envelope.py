"""Base64 JSON envelope used by the vapic header protocol.

Header value = base64(UTF-8 JSON object), e.g. {"version": "1.2.3"}.
"""

import base64
import binascii
import json
from typing import Any

from vapic.core.constants import ENVELOPE_VERSION_FIELD


class EnvelopeDecodeError(ValueError):
    """Raised when a header value is not base64 of a UTF-8 JSON object."""


def encode_envelope(obj: dict[str, Any]) -> str:
    """Return base64 of the compact UTF-8 JSON encoding of obj."""
    raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_envelope(value: str) -> dict[str, Any]:
    """Decode a header value produced by encode_envelope.

    Raises:
        EnvelopeDecodeError: If value is not valid base64, UTF-8 or JSON,
            or does not decode to a JSON object.
    """
    try:
        raw = base64.b64decode(value.strip(), validate=True)
        obj = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise EnvelopeDecodeError(f"Unable to parse: {value}") from e
    if not isinstance(obj, dict):
        raise EnvelopeDecodeError(f"Unable to parse: {value}")
    return obj


def version_envelope(version: str) -> str:
    """Return the envelope announcing a resolved version."""
    return encode_envelope({ENVELOPE_VERSION_FIELD: version})


def version_from_envelope(value: str) -> str | None:
    """Return the version carried by an envelope, or None when absent or empty.

    Raises:
        EnvelopeDecodeError: If value cannot be decoded, or version is not a string.
    """
    version = decode_envelope(value).get(ENVELOPE_VERSION_FIELD)
    if version is None or version == "":
        return None
    if not isinstance(version, str):
        raise EnvelopeDecodeError(f"Unable to parse: {value}")
    return version
