"""Shared test fixtures for gemauth.

Provides reusable fixtures for isolated config environments, credential
files, scripted interactive channels, fake registries, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import yaml

from gemauth.auth import AuthContext, CredentialStore
from gemauth.models import GlobalConfig
from gemauth.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clear_host_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never let the developer's RUBYGEMS_HOST leak into a test."""
    monkeypatch.delenv("RUBYGEMS_HOST", raising=False)
    monkeypatch.delenv("GEMAUTH_CREDENTIALS", raising=False)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, forces the XDG layout,
    and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("gemauth.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials_path(tmp_path: Path) -> Path:
    """Path of a (not yet existing) credential file."""
    return tmp_path / "gem" / "credentials"


@pytest.fixture
def write_credentials(credentials_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes a credential mapping as YAML."""

    def _write(keys: dict[str, Any]) -> Path:
        credentials_path.parent.mkdir(parents=True, exist_ok=True)
        credentials_path.write_text(yaml.safe_dump(keys, sort_keys=False), encoding="utf-8")
        return credentials_path

    return _write


@pytest.fixture
def read_credentials(credentials_path: Path) -> Callable[[], dict[str, Any]]:
    """Return a helper that reads the credential file back as a dict."""

    def _read() -> dict[str, Any]:
        return yaml.safe_load(credentials_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def make_context(credentials_path: Path) -> Callable[..., AuthContext]:
    """Return a factory for an AuthContext over the test credential file."""

    def _make(
        environ: dict[str, str] | None = None,
        key_name: str | None = None,
        config: GlobalConfig | None = None,
    ) -> AuthContext:
        return AuthContext(
            config or GlobalConfig(),
            CredentialStore(credentials_path),
            environ=environ if environ is not None else {},
            key_name=key_name,
        )

    return _make


# ---------------------------------------------------------------------------
# Fake registry
# ---------------------------------------------------------------------------


class FakeRegistry:
    """Serve canned responses by URL and record every request received."""

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, str]] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, url: str, body: str, status_code: int = 200) -> None:
        self.responses[url] = (status_code, body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses.get(str(request.url), (404, "Not Found"))
        return httpx.Response(status_code, text=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def registry() -> FakeRegistry:
    """A fake registry; unknown URLs answer 404."""
    return FakeRegistry()


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output():
    """Install a quiet, plain OutputManager for tests that don't care about output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
