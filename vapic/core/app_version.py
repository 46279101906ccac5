"""Host application version discovery.

The cache stores values under the version of the application that produced
them, so the default cache version is the host's own version. Resolution
order, first hit wins:

1. explicit CACHE_VERSION setting (environment or .env);
2. installed metadata of the configured host distribution;
3. [project].version of pyproject.toml in the current working directory;
4. this package's own installed version.

Discovered versions are PEP 440 text ("1.2", "2.0.0rc1", "1.0.0.dev1") and
are converted to semver ("1.2.0", "2.0.0-rc.1", "1.0.0-dev.1"). A discovered
version that cannot be converted is logged and the next source is tried.
An explicit version is returned unchanged.
"""

import logging
import re
import tomllib
from importlib import metadata
from pathlib import Path

import semver

from vapic.core.constants import FALLBACK_APP_VERSION, PACKAGE_DISTRIBUTION

logger = logging.getLogger(__name__)

_PEP440 = re.compile(
    r"""
    ^v?
    (?P<release>\d+(?:\.\d+){0,2})
    (?:[-_.]?(?P<pre_label>a|alpha|b|beta|c|rc|pre|preview)[-_.]?(?P<pre_n>\d*))?
    (?:[-_.]?(?:post|rev|r)[-_.]?(?P<post_n>\d*))?
    (?:[-_.]?dev[-_.]?(?P<dev_n>\d*))?
    (?:\+(?P<local>[a-z0-9]+(?:[-_.][a-z0-9]+)*))?
    $
    """,
    re.VERBOSE | re.IGNORECASE,
)

_PRE_LABELS = {
    "a": "alpha",
    "alpha": "alpha",
    "b": "beta",
    "beta": "beta",
    "c": "rc",
    "rc": "rc",
    "pre": "rc",
    "preview": "rc",
}


def to_semver(version: str) -> str | None:
    """Convert PEP 440 version text to semver text.

    Pre-releases map to alpha/beta/rc identifiers and dev releases to a dev
    identifier, so they still sort below the final release. Post releases and
    local labels become build metadata, which ordering ignores.

    Returns:
        Semver text, or None when the version has no semver equivalent
        (epochs, more than three release components).
    """
    text = version.strip()
    if semver.Version.is_valid(text):
        return text
    match = _PEP440.match(text)
    if match is None:
        return None
    release = ".".join(str(int(part)) for part in match["release"].split("."))
    parsed = semver.Version.parse(release, optional_minor_and_patch=True)

    prerelease: list[str] = []
    if match["pre_label"]:
        prerelease += [_PRE_LABELS[match["pre_label"].lower()], str(int(match["pre_n"] or 0))]
    if match["dev_n"] is not None:
        prerelease += ["dev", str(int(match["dev_n"] or 0))]
    build: list[str] = []
    if match["post_n"] is not None:
        build += ["post", str(int(match["post_n"] or 0))]
    if match["local"]:
        build += re.split(r"[-_.]", match["local"].lower())

    return str(
        parsed.replace(
            prerelease=".".join(prerelease) or None,
            build=".".join(build) or None,
        )
    )


def _discovered(version: str | None, source: str) -> str | None:
    if not version:
        return None
    converted = to_semver(version)
    if converted is None:
        logger.warning(
            "Ignoring version %r from %s: not convertible to semver", version, source
        )
    return converted


def _distribution_version(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def _pyproject_version(directory: Path) -> str | None:
    path = directory / "pyproject.toml"
    if not path.is_file():
        return None
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        logger.warning("Unreadable pyproject.toml at %s", path)
        return None
    version = data.get("project", {}).get("version")
    return version if isinstance(version, str) and version else None


def resolve_app_version(
    explicit: str | None = None,
    host_distribution: str | None = None,
    cwd: Path | None = None,
) -> str:
    """Return the running application's version as semver text.

    Args:
        explicit: Configured version; returned as-is when set.
        host_distribution: Installed distribution name of the host app.
        cwd: Directory searched for pyproject.toml (default: Path.cwd()).

    Returns:
        Version text; FALLBACK_APP_VERSION when nothing usable is found.
    """
    if explicit:
        return explicit
    if host_distribution:
        version = _discovered(
            _distribution_version(host_distribution), f"distribution {host_distribution}"
        )
        if version:
            return version
    directory = cwd or Path.cwd()
    version = _discovered(_pyproject_version(directory), str(directory / "pyproject.toml"))
    if version:
        return version
    version = _discovered(
        _distribution_version(PACKAGE_DISTRIBUTION), f"distribution {PACKAGE_DISTRIBUTION}"
    )
    return version or FALLBACK_APP_VERSION
