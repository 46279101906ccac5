"""Domain layer: match types, exceptions and version ordering.

No dependencies on infrastructure or presentation.
"""

from vapic.domain.enums import ReadMatchType, WriteMatchType
from vapic.domain.exceptions import (
    BackingStoreException,
    CacheMissException,
    InputException,
    InvalidParameterException,
    MalformedVersionException,
    NoQualifyingVersionException,
    VapicException,
)

__all__ = [
    "BackingStoreException",
    "CacheMissException",
    "InputException",
    "InvalidParameterException",
    "MalformedVersionException",
    "NoQualifyingVersionException",
    "ReadMatchType",
    "VapicException",
    "WriteMatchType",
]
