"""Tests for cleanup_gha_caches/config.py module."""

from __future__ import annotations

from pathlib import Path

import pytest

from cleanup_gha_caches.config import (
    BYTES_PER_MIB,
    DEFAULT_API_URL,
    SweepConfig,
    _resolve_env_path,
    build_config,
    load_token_from_env,
    resolve_api_url,
    resolve_repository,
    threshold_mb_to_bytes,
)
from cleanup_gha_caches.errors import ConfigurationError
from tests.assertions import assert_equal


class TestThresholdConversion:
    """Tests for threshold_mb_to_bytes."""

    def test_default_one_mib(self):
        assert_equal(threshold_mb_to_bytes(1), 1_048_576)

    def test_numeric_strings_and_floats(self):
        assert_equal(threshold_mb_to_bytes("2"), 2 * BYTES_PER_MIB)
        assert_equal(threshold_mb_to_bytes("0.5"), BYTES_PER_MIB // 2)
        assert_equal(threshold_mb_to_bytes(" 250 "), 250 * BYTES_PER_MIB)

    def test_zero_is_allowed(self):
        assert_equal(threshold_mb_to_bytes("0"), 0)

    @pytest.mark.parametrize("value", ["-1", -0.5, "abc", "", "nan", "inf", None, True])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ConfigurationError):
            threshold_mb_to_bytes(value)


class TestSweepConfig:
    """Tests for the SweepConfig value type."""

    def test_defaults(self):
        config = SweepConfig(repository="noraneko/noraneko", token="t")

        assert_equal(config.size_threshold_bytes, 1_048_576)
        assert config.dry_run is False
        assert_equal(config.api_url, DEFAULT_API_URL)
        assert_equal(config.per_page, 100)
        assert_equal(config.threshold_mb, 1.0)

    def test_negative_threshold_rejected(self):
        with pytest.raises(ConfigurationError):
            SweepConfig(repository="a/b", token="t", size_threshold_bytes=-1)

    @pytest.mark.parametrize("repository", ["", "noraneko", "a/b/c", "owner/ name"])
    def test_invalid_repository_rejected(self, repository):
        with pytest.raises(ConfigurationError):
            SweepConfig(repository=repository, token="t")

    def test_missing_token_rejected(self):
        with pytest.raises(ConfigurationError, match="token"):
            SweepConfig(repository="a/b", token="")

    @pytest.mark.parametrize("per_page", [0, 101])
    def test_per_page_bounds(self, per_page):
        with pytest.raises(ConfigurationError):
            SweepConfig(repository="a/b", token="t", per_page=per_page)


class TestTokenLoading:
    """Tests for load_token_from_env and env path resolution."""

    def test_resolve_env_path_prefers_explicit(self, tmp_path):
        explicit = str(tmp_path / "explicit.env")
        assert_equal(_resolve_env_path(explicit), explicit)

    def test_resolve_env_path_uses_env_var(self, isolated_github_env):
        assert_equal(_resolve_env_path(), isolated_github_env)

    def test_resolve_env_path_falls_back_to_home(self, monkeypatch):
        monkeypatch.delenv("CACHE_SWEEP_ENV_FILE")
        assert_equal(_resolve_env_path(), str(Path.home() / ".env"))

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghs_env")
        assert_equal(load_token_from_env(), "ghs_env")

    def test_gh_token_fallback(self, monkeypatch):
        monkeypatch.setenv("GH_TOKEN", "gho_cli")
        assert_equal(load_token_from_env(), "gho_cli")

    def test_token_from_env_file(self, tmp_path):
        env_file = tmp_path / "sweep.env"
        env_file.write_text("GITHUB_TOKEN=ghs_from_file\n")
        assert_equal(load_token_from_env(str(env_file)), "ghs_from_file")

    def test_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghs_env")
        env_file = tmp_path / "sweep.env"
        env_file.write_text("GITHUB_TOKEN=ghs_from_file\n")
        assert_equal(load_token_from_env(str(env_file)), "ghs_env")

    def test_missing_token_raises(self, isolated_github_env):
        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            load_token_from_env()


class TestRepositoryAndApi:
    """Tests for repository and API URL resolution."""

    def test_explicit_repository(self):
        assert_equal(resolve_repository("Floorp-Projects/Noraneko"), "Floorp-Projects/Noraneko")

    def test_repository_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "nora/neko")
        assert_equal(resolve_repository(), "nora/neko")

    def test_missing_repository(self):
        with pytest.raises(ConfigurationError, match="GITHUB_REPOSITORY"):
            resolve_repository()

    def test_api_url_default_and_override(self, monkeypatch):
        assert_equal(resolve_api_url(), DEFAULT_API_URL)
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        assert_equal(resolve_api_url(), "https://ghe.example.com/api/v3")


class TestBuildConfig:
    """Tests for build_config."""

    def test_builds_complete_config(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghs_env")
        monkeypatch.setenv("GITHUB_REPOSITORY", "nora/neko")

        config = build_config(size_threshold_mb="5", dry_run=True)

        assert_equal(config.repository, "nora/neko")
        assert_equal(config.token, "ghs_env")
        assert_equal(config.size_threshold_bytes, 5 * BYTES_PER_MIB)
        assert config.dry_run is True

    def test_bad_threshold_reported_before_token_lookup(self, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "nora/neko")
        with pytest.raises(ConfigurationError, match="numeric"):
            build_config(size_threshold_mb="lots")
