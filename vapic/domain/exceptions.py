"""Domain exceptions for vapic.

Every engine failure is one of these types. The negotiation middleware
attaches them to the request state; the API layer maps error_code to an
HTTP status in app exception handlers.
"""

from typing import Any


class VapicException(Exception):
    """Base exception for all vapic errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. cache_key, requested_version).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": {k: _jsonable(v) for k, v in self.details.items()},
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseException):
        return str(value)
    if isinstance(value, tuple):
        return list(value)
    return value


class InputException(VapicException):
    """Raised when a required input is missing or invalid. No store access is attempted."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = "INPUT_ERROR",
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the input failure.
            field: Optional option or argument that failed validation.
            error_code: Machine-readable code (subclasses override).
        """
        details = {"field": field} if field else {}
        super().__init__(message, error_code, details)


class InvalidParameterException(InputException):
    """Raised when a numeric option is out of range (e.g. max_versions < 1)."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"invalid {field}: {value!r}", field, "INVALID_PARAMETER")
        self.details["value"] = value


class MalformedVersionException(VapicException):
    """Raised when a stored or requested version is not valid semantic-version text."""

    def __init__(self, version: Any) -> None:
        """Initialize with the offending version value.

        Args:
            version: The text (or object) that failed to parse.
        """
        super().__init__(
            f"Malformed version: {version!r}",
            "MALFORMED_VERSION",
            {"version": version if isinstance(version, str) else repr(version)},
        )


class BackingStoreException(VapicException):
    """Raised when the backing store fails a command (transport or operation error)."""

    def __init__(self, operation: str, cache_key: str, cause: BaseException) -> None:
        """Initialize with the failed operation and its cause.

        Args:
            operation: Store command that failed (e.g. 'hkeys').
            cache_key: Key the command was issued against.
            cause: Original exception raised by the store client.
        """
        super().__init__(
            f"Backing store {operation} failed for {cache_key}: {cause}",
            "BACKING_STORE_ERROR",
            {"operation": operation, "cache_key": cache_key},
        )
        self.operation = operation
        self.cache_key = cache_key
        self.cause = cause


class CacheMissException(VapicException):
    """Raised when an exact lookup finds nothing (missing field or store error)."""

    def __init__(
        self,
        cache_key: str,
        requested_version: str,
        underlying_error: BaseException | None = None,
    ) -> None:
        """Initialize with the key, version and optional underlying error.

        Args:
            cache_key: Key that was looked up.
            requested_version: Version tag that was looked up.
            underlying_error: Store error, or None when the field was missing.
        """
        super().__init__(
            f"Cache miss: {cache_key} at {requested_version}",
            "CACHE_MISS",
            {
                "cache_key": cache_key,
                "requested_version": requested_version,
                "underlying_error": underlying_error,
            },
        )
        self.cache_key = cache_key
        self.requested_version = requested_version
        self.underlying_error = underlying_error


class NoQualifyingVersionException(VapicException):
    """Raised when latest-up-to-current finds no stored version <= the requested one.

    An expected outcome (the resource exists, but not at or below this
    version), so it is not logged. Carries the full sorted version list.
    """

    def __init__(
        self,
        cache_key: str,
        requested_version: str,
        available_versions: list[str],
    ) -> None:
        super().__init__(
            f"No version of {cache_key} at or below {requested_version}",
            "NO_QUALIFYING_VERSION",
            {
                "cache_key": cache_key,
                "requested_version": requested_version,
                "available_versions": list(available_versions),
            },
        )
        self.cache_key = cache_key
        self.requested_version = requested_version
        self.available_versions = list(available_versions)
