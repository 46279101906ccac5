"""Shared utilities: base64 JSON header envelope."""

from vapic.shared.utils.envelope import (
    EnvelopeDecodeError,
    decode_envelope,
    encode_envelope,
    version_envelope,
    version_from_envelope,
)

__all__ = [
    "EnvelopeDecodeError",
    "decode_envelope",
    "encode_envelope",
    "version_envelope",
    "version_from_envelope",
]
