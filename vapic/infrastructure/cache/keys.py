"""Cache key resolution. Single place for key format (DRY).

A cache key is prefix + resource path, concatenated verbatim: no trailing
slash or case normalization, so reads must use exactly what writes used.
"""

from vapic.domain.exceptions import InputException


def resolve_cache_key(prefix: str, resource_path: str) -> str:
    """Return the backing-store key for a resource.

    Args:
        prefix: Key prefix (e.g. 'vapic:/').
        resource_path: Resource path (e.g. '/api/v1/resources/report').

    Returns:
        prefix + resource_path.

    Raises:
        InputException: If prefix or resource_path is empty.
    """
    if not prefix:
        raise InputException("prefix unspecified", field="prefix")
    if not resource_path:
        raise InputException("resource path unspecified", field="resource_path")
    return f"{prefix}{resource_path}"
