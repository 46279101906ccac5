"""Immutable cache options, validated once at construction.

CacheOptions replaces per-call option merging: engines and middleware read
their defaults from one frozen instance. Build it directly, or from
settings via Settings.to_cache_options().
"""

import logging
from dataclasses import dataclass, field

from vapic.core.constants import DEFAULT_CACHE_PREFIX, DEFAULT_PERMITTED_AGE
from vapic.domain.enums import ReadMatchType, WriteMatchType
from vapic.domain.exceptions import InputException, InvalidParameterException
from vapic.domain.value_objects.version import parse_version_tag


def coerce_read_match_type(value: ReadMatchType | str) -> ReadMatchType:
    """Return value as ReadMatchType.

    Raises:
        InputException: If value is not a recognized read match type.
    """
    try:
        return ReadMatchType(value)
    except ValueError:
        raise InputException(
            f"Unrecognised version match type: {value}", field="version_match_type"
        ) from None


def coerce_write_match_type(value: WriteMatchType | str) -> WriteMatchType:
    """Return value as WriteMatchType.

    Raises:
        InputException: If value is not a recognized write match type.
    """
    try:
        return WriteMatchType(value)
    except ValueError:
        raise InputException(
            f"Unrecognised version match type: {value}", field="version_match_type"
        ) from None


def validate_max_versions(value: object) -> int:
    """Return value if it is a positive int (bool rejected).

    Raises:
        InvalidParameterException: Otherwise.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidParameterException("max_versions", value)
    return value


@dataclass(frozen=True)
class CacheOptions:
    """Defaults for versioned cache reads, writes and request negotiation.

    Attributes:
        cache_version: Version tag of the running application.
        prefix: Cache key prefix.
        permitted_age: Cache-Control max-age (seconds) on read success.
        read_match_type: Default read mode.
        write_match_type: Default write mode.
        max_versions: Retained versions per key after a write; None disables culling.
        read_version_from_header: Honor the vapic request header.
        logger: Receives cache-miss diagnostics (error(msg, *args)).
    """

    cache_version: str
    prefix: str = DEFAULT_CACHE_PREFIX
    permitted_age: int = DEFAULT_PERMITTED_AGE
    read_match_type: ReadMatchType = ReadMatchType.EXACT
    write_match_type: WriteMatchType = WriteMatchType.EXACT
    max_versions: int | None = None
    read_version_from_header: bool = False
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("vapic.cache"),
        compare=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        if not self.cache_version:
            raise InputException("cache version unspecified", field="cache_version")
        parse_version_tag(self.cache_version)
        if not self.prefix:
            raise InputException("prefix unspecified", field="prefix")
        age = self.permitted_age
        if isinstance(age, bool) or not isinstance(age, int) or age < 0:
            raise InvalidParameterException("permitted_age", age)
        object.__setattr__(
            self, "read_match_type", coerce_read_match_type(self.read_match_type)
        )
        object.__setattr__(
            self, "write_match_type", coerce_write_match_type(self.write_match_type)
        )
        if self.max_versions is not None:
            validate_max_versions(self.max_versions)
