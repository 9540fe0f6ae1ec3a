"""Tests for registry host resolution."""

from __future__ import annotations

import pytest

from gemauth.auth.hosts import (
    DEFAULT_HOST,
    HOST_ENV_VAR,
    HostResolver,
    display_name,
)
from gemauth.exceptions import ConfigError, MissingHostError
from gemauth.models import GlobalConfig


def _resolver(environ=None, disabled: bool = False) -> HostResolver:
    return HostResolver(
        GlobalConfig(disable_default_gem_server=disabled),
        environ if environ is not None else {},
    )


class TestResolve:
    def test_default_host(self) -> None:
        assert _resolver().resolve() == DEFAULT_HOST

    def test_env_overrides_default(self) -> None:
        resolver = _resolver({HOST_ENV_VAR: "https://gems.example.com"})
        assert resolver.resolve() == "https://gems.example.com"

    def test_explicit_overrides_env(self) -> None:
        resolver = _resolver({HOST_ENV_VAR: "https://gems.example.com"})
        assert resolver.resolve("https://other.example") == "https://other.example"

    def test_empty_env_counts_as_unset(self) -> None:
        assert _resolver({HOST_ENV_VAR: ""}).resolve() == DEFAULT_HOST

    def test_disabled_default_resolves_nothing(self) -> None:
        assert _resolver(disabled=True).resolve() is None

    def test_disabled_default_still_honours_env(self) -> None:
        resolver = _resolver({HOST_ENV_VAR: "https://gems.example.com"}, disabled=True)
        assert resolver.resolve() == "https://gems.example.com"

    def test_reads_process_environment_when_not_given(self, monkeypatch) -> None:
        resolver = HostResolver(GlobalConfig())
        assert resolver.resolve() == DEFAULT_HOST
        monkeypatch.setenv(HOST_ENV_VAR, "https://late.example")
        assert resolver.resolve() == "https://late.example"


class TestRequire:
    def test_returns_resolved_host(self) -> None:
        assert _resolver().require() == DEFAULT_HOST

    def test_missing_host_raises(self) -> None:
        with pytest.raises(MissingHostError, match="You must specify a gem server"):
            _resolver(disabled=True).require()

    def test_missing_host_is_a_config_error(self) -> None:
        with pytest.raises(ConfigError):
            _resolver(disabled=True).require()

    def test_explicit_host_satisfies_disabled_default(self) -> None:
        assert _resolver(disabled=True).require("https://x.example") == "https://x.example"


def test_display_name() -> None:
    assert display_name(DEFAULT_HOST) == "RubyGems.org"
    assert display_name("https://gems.example.com") == "https://gems.example.com"
