"""Domain value objects: semantic-version ordering of version tags."""

from vapic.domain.value_objects.version import (
    compare_version_tags,
    is_valid_version_tag,
    parse_version_tag,
    select_latest_up_to,
    sort_version_tags,
)

__all__ = [
    "compare_version_tags",
    "is_valid_version_tag",
    "parse_version_tag",
    "select_latest_up_to",
    "sort_version_tags",
]
