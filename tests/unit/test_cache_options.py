"""Tests for CacheOptions, Settings.to_cache_options and host version discovery."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from vapic.core.app_version import resolve_app_version, to_semver
from vapic.core.config import Settings
from vapic.core.constants import DEFAULT_CACHE_PREFIX, DEFAULT_PERMITTED_AGE
from vapic.core.options import CacheOptions
from vapic.domain.enums import ReadMatchType, WriteMatchType
from vapic.domain.exceptions import (
    InputException,
    InvalidParameterException,
    MalformedVersionException,
)
from vapic.domain.value_objects.version import compare_version_tags


class TestCacheOptions:
    def test_defaults(self) -> None:
        opts = CacheOptions(cache_version="1.2.3")
        assert opts.prefix == DEFAULT_CACHE_PREFIX == "vapic:/"
        assert opts.permitted_age == DEFAULT_PERMITTED_AGE == 60
        assert opts.read_match_type is ReadMatchType.EXACT
        assert opts.write_match_type is WriteMatchType.EXACT
        assert opts.max_versions is None
        assert opts.read_version_from_header is False
        assert opts.logger.name == "vapic.cache"

    def test_match_types_from_strings(self) -> None:
        opts = CacheOptions(
            cache_version="1.0.0",
            read_match_type="latestUpToCurrent",
            write_match_type="skipWhenSameAsLatest",
        )
        assert opts.read_match_type is ReadMatchType.LATEST_UP_TO_CURRENT
        assert opts.write_match_type is WriteMatchType.SKIP_WHEN_SAME_AS_LATEST

    def test_immutable(self) -> None:
        opts = CacheOptions(cache_version="1.0.0")
        with pytest.raises(AttributeError):
            opts.prefix = "other:"  # type: ignore[misc]

    @pytest.mark.parametrize("max_versions", [0, -1, 1.5, True, "3"])
    def test_invalid_max_versions(self, max_versions: object) -> None:
        with pytest.raises(InvalidParameterException):
            CacheOptions(cache_version="1.0.0", max_versions=max_versions)  # type: ignore[arg-type]

    def test_unrecognised_match_type(self) -> None:
        with pytest.raises(InputException, match="Unrecognised version match type"):
            CacheOptions(cache_version="1.0.0", read_match_type="closest")

    def test_write_match_type_not_valid_for_reads(self) -> None:
        with pytest.raises(InputException):
            CacheOptions(cache_version="1.0.0", read_match_type="skipWhenSameAsLatest")

    def test_malformed_cache_version(self) -> None:
        with pytest.raises(MalformedVersionException):
            CacheOptions(cache_version="latest")

    def test_empty_prefix_and_negative_age(self) -> None:
        with pytest.raises(InputException):
            CacheOptions(cache_version="1.0.0", prefix="")
        with pytest.raises(InvalidParameterException):
            CacheOptions(cache_version="1.0.0", permitted_age=-1)


class TestSettings:
    def test_to_cache_options(self) -> None:
        settings = Settings(
            _env_file=None,
            cache_version="2.0.0",
            cache_prefix="custom-prefix:/",
            cache_permitted_age=120,
            cache_read_match_type="latestUpToCurrent",
            cache_max_versions=3,
            cache_read_version_from_header=True,
        )
        opts = settings.to_cache_options()
        assert opts.cache_version == "2.0.0"
        assert opts.prefix == "custom-prefix:/"
        assert opts.permitted_age == 120
        assert opts.read_match_type is ReadMatchType.LATEST_UP_TO_CURRENT
        assert opts.max_versions == 3
        assert opts.read_version_from_header is True

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_VERSION", "3.1.4")
        monkeypatch.setenv("CACHE_WRITE_MATCH_TYPE", "skipWhenSameAsLatest")
        settings = Settings(_env_file=None)
        assert settings.resolved_cache_version() == "3.1.4"
        assert settings.to_cache_options().write_match_type is WriteMatchType.SKIP_WHEN_SAME_AS_LATEST

    @pytest.mark.parametrize(
        "overrides",
        [
            {"cache_read_match_type": "nearest"},
            {"cache_write_match_type": "latestUpToCurrent"},
            {"cache_max_versions": 0},
            {"cache_permitted_age": -5},
        ],
    )
    def test_invalid_settings_rejected(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)


class TestResolveAppVersion:
    def test_explicit_wins(self, tmp_path: Path) -> None:
        assert resolve_app_version(explicit="9.9.9", cwd=tmp_path) == "9.9.9"

    def test_host_distribution(self, tmp_path: Path) -> None:
        with patch("vapic.core.app_version.metadata.version", return_value="4.5.6") as version:
            assert resolve_app_version(host_distribution="host-app", cwd=tmp_path) == "4.5.6"
        version.assert_called_once_with("host-app")

    def test_pyproject_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "host"\nversion = "7.8.9"\n')
        assert resolve_app_version(cwd=tmp_path) == "7.8.9"

    def test_falls_back_to_own_version(self, tmp_path: Path) -> None:
        with patch("vapic.core.app_version._distribution_version", return_value=None):
            assert resolve_app_version(cwd=tmp_path) == "0.0.0"
        with patch("vapic.core.app_version._distribution_version", return_value="0.1.0"):
            assert resolve_app_version(cwd=tmp_path) == "0.1.0"

    def test_unknown_host_distribution_falls_through(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "1.1.1"\n')
        assert resolve_app_version(host_distribution="no-such-dist-xyz", cwd=tmp_path) == "1.1.1"

    @pytest.mark.parametrize(
        ("pyproject_version", "expected"),
        [("1.2", "1.2.0"), ("2.0.0rc1", "2.0.0-rc.1"), ("v3", "3.0.0")],
    )
    def test_pyproject_version_converted_to_semver(
        self, tmp_path: Path, pyproject_version: str, expected: str
    ) -> None:
        (tmp_path / "pyproject.toml").write_text(f'[project]\nversion = "{pyproject_version}"\n')
        assert resolve_app_version(cwd=tmp_path) == expected

    def test_distribution_version_converted_to_semver(self, tmp_path: Path) -> None:
        with patch("vapic.core.app_version.metadata.version", return_value="1.0.0.dev1"):
            assert resolve_app_version(host_distribution="host-app", cwd=tmp_path) == "1.0.0-dev.1"

    def test_unconvertible_version_falls_through(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "2.0.1"\n')
        with patch("vapic.core.app_version.metadata.version", return_value="1!2.0"):
            with caplog.at_level("WARNING", logger="vapic.core.app_version"):
                assert resolve_app_version(host_distribution="host-app", cwd=tmp_path) == "2.0.1"
        assert "not convertible to semver" in caplog.text

    def test_explicit_version_not_converted(self, tmp_path: Path) -> None:
        assert resolve_app_version(explicit="2.0.0rc1", cwd=tmp_path) == "2.0.0rc1"

    @pytest.mark.parametrize("pyproject_version", ["1.2", "2.0.0rc1"])
    def test_settings_accept_discovered_pep440_version(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, pyproject_version: str
    ) -> None:
        monkeypatch.delenv("CACHE_VERSION", raising=False)
        monkeypatch.delenv("HOST_DISTRIBUTION", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pyproject.toml").write_text(f'[project]\nversion = "{pyproject_version}"\n')
        opts = Settings(_env_file=None).to_cache_options()
        assert opts.cache_version == to_semver(pyproject_version)


class TestToSemver:
    @pytest.mark.parametrize(
        ("pep440", "expected"),
        [
            ("1.2.3", "1.2.3"),
            ("1.0.0-rc.1", "1.0.0-rc.1"),
            ("1", "1.0.0"),
            ("01.02", "1.2.0"),
            ("1.0a1", "1.0.0-alpha.1"),
            ("1.0b2", "1.0.0-beta.2"),
            ("1.0.0rc", "1.0.0-rc.0"),
            ("2.0.0rc1.dev3", "2.0.0-rc.1.dev.3"),
            ("1.0.0.post2", "1.0.0+post.2"),
            ("1.0.0+ubuntu_1", "1.0.0+ubuntu.1"),
        ],
    )
    def test_converts(self, pep440: str, expected: str) -> None:
        assert to_semver(pep440) == expected

    @pytest.mark.parametrize("pep440", ["1!2.0", "1.2.3.4", "latest", ""])
    def test_unconvertible(self, pep440: str) -> None:
        assert to_semver(pep440) is None

    def test_pre_release_sorts_below_release(self) -> None:
        assert compare_version_tags(to_semver("2.0.0rc1"), to_semver("2.0.0")) < 0
