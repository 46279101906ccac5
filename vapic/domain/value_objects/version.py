"""Version ordering: semantic-version precedence over version tag strings.

Tags are parsed with semver. Build metadata is dropped before comparison
so it never affects order; pre-releases sort before their release.
Any malformed tag fails the operation that used it.
"""

from collections.abc import Iterable, Sequence

from semver import Version

from vapic.domain.exceptions import MalformedVersionException


def parse_version_tag(tag: str) -> Version:
    """Parse a version tag for ordering (build metadata removed).

    Args:
        tag: Semantic-version text (e.g. '1.2.3', '1.2.3-rc.1+build.5').

    Returns:
        semver Version without build metadata.

    Raises:
        MalformedVersionException: If tag is not a string or not valid semver.
    """
    if not isinstance(tag, str):
        raise MalformedVersionException(tag)
    try:
        version = Version.parse(tag)
    except ValueError as e:
        raise MalformedVersionException(tag) from e
    return version.replace(build=None)


def is_valid_version_tag(tag: str) -> bool:
    """Return True if tag parses as semantic-version text."""
    try:
        parse_version_tag(tag)
    except MalformedVersionException:
        return False
    return True


def compare_version_tags(a: str, b: str) -> int:
    """Return -1, 0 or 1 as a precedes, equals or follows b."""
    return parse_version_tag(a).compare(parse_version_tag(b))


def sort_version_tags(tags: Iterable[str]) -> list[str]:
    """Return tags sorted ascending by semantic-version precedence.

    Stable: tags of equal precedence (differing only in build metadata)
    keep their input order. Sorting an already sorted list is a no-op.

    Raises:
        MalformedVersionException: If any tag is malformed.
    """
    keyed = [(parse_version_tag(tag), tag) for tag in tags]
    keyed.sort(key=lambda pair: pair[0])
    return [tag for _, tag in keyed]


def select_latest_up_to(sorted_tags: Sequence[str], target: str) -> str | None:
    """Return the rightmost tag that is <= target, or None when none qualifies.

    Args:
        sorted_tags: Tags in ascending order (see sort_version_tags).
        target: Upper bound (inclusive).

    Raises:
        MalformedVersionException: If target or a scanned tag is malformed.
    """
    bound = parse_version_tag(target)
    for tag in reversed(sorted_tags):
        if parse_version_tag(tag) <= bound:
            return tag
    return None
