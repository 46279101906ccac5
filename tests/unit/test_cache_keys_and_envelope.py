"""Tests for cache key resolution and the base64 JSON header envelope."""

import base64

import pytest

from vapic.domain.exceptions import InputException
from vapic.infrastructure.cache.keys import resolve_cache_key
from vapic.shared.utils.envelope import (
    EnvelopeDecodeError,
    decode_envelope,
    encode_envelope,
    version_envelope,
    version_from_envelope,
)


class TestResolveCacheKey:
    def test_plain_concatenation(self) -> None:
        assert resolve_cache_key("vapic:/", "/a/b") == "vapic://a/b"

    def test_no_normalization(self) -> None:
        assert resolve_cache_key("p:", "/A/") != resolve_cache_key("p:", "/a")

    def test_deterministic(self) -> None:
        assert resolve_cache_key("p:", "/x") == resolve_cache_key("p:", "/x")

    @pytest.mark.parametrize(("prefix", "path", "field"), [("", "/x", "prefix"), ("p:", "", "resource_path")])
    def test_empty_inputs_are_input_errors(self, prefix: str, path: str, field: str) -> None:
        with pytest.raises(InputException) as exc_info:
            resolve_cache_key(prefix, path)
        assert exc_info.value.error_code == "INPUT_ERROR"
        assert exc_info.value.details == {"field": field}


class TestEnvelope:
    def test_version_envelope_is_base64_json(self) -> None:
        value = version_envelope("1.2.3")
        assert base64.b64decode(value) == b'{"version":"1.2.3"}'
        assert version_from_envelope(value) == "1.2.3"

    def test_decode_object(self) -> None:
        assert decode_envelope(encode_envelope({"a": 1})) == {"a": 1}

    @pytest.mark.parametrize(
        "raw",
        [
            "foobar",
            "not base64!",
            base64.b64encode(b"not json").decode(),
            base64.b64encode(b"[1, 2]").decode(),
            base64.b64encode(b"\xff\xfe").decode(),
        ],
    )
    def test_unparsable(self, raw: str) -> None:
        with pytest.raises(EnvelopeDecodeError):
            decode_envelope(raw)

    def test_missing_version_is_none(self) -> None:
        assert version_from_envelope(encode_envelope({})) is None

    def test_non_string_version_rejected(self) -> None:
        with pytest.raises(EnvelopeDecodeError):
            version_from_envelope(encode_envelope({"version": 3}))
