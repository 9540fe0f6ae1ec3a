"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for gemauth:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.gemauth/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~gemauth.models.GlobalConfig`
  JSON file storing defaults (credential file location, whether the
  public registry may be used implicitly, HTTP settings).
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and global config into the effective settings.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so that a concurrent reader never sees a torn file.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from gemauth.exceptions import ConfigError
from gemauth.models import GlobalConfig

_APP_NAME = "gemauth"
_CONFIG_FILENAME = "config.json"
_CREDENTIALS_FILENAME = "credentials.yaml"

CREDENTIALS_ENV_VAR = "GEMAUTH_CREDENTIALS"
"""Environment variable overriding the credential file location."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/gemauth/`` (default ``~/.config/gemauth/``).
    On macOS/Windows: ``~/.gemauth/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (credentials, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/gemauth/`` (default ``~/.local/share/gemauth/``).
    On macOS/Windows: ``~/.gemauth/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_credentials_path() -> Path:
    """Return the default credential file path, ``<data_dir>/credentials.yaml``."""
    return get_data_dir() / _CREDENTIALS_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    When *mode* is given it is applied to the temp file before any content
    is written. On success the temp file is renamed over *path*; on any
    failure the temp file is cleaned up and *path* is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~gemauth.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk.

    Args:
        config: The configuration to save.
    """
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    cli_credentials_path: Optional[str] = None,
) -> tuple[GlobalConfig, Path]:
    """Resolve config and the credential file location.

    Precedence for the credential file (high to low):
        1. CLI flag (``--credentials``)
        2. Environment variable (``GEMAUTH_CREDENTIALS``)
        3. User config (``credentials_path`` in ``config.json``)
        4. Default (``<data_dir>/credentials.yaml``)

    An environment variable that is set but empty counts as unset.

    Returns:
        A tuple of ``(global_config, credentials_path)``.
    """
    global_cfg = load_global_config()

    resolved: Optional[str] = global_cfg.credentials_path
    env_path = os.environ.get(CREDENTIALS_ENV_VAR)
    if env_path:
        resolved = env_path
    if cli_credentials_path is not None:
        resolved = cli_credentials_path

    if resolved is None:
        return global_cfg, get_credentials_path()
    return global_cfg, Path(resolved).expanduser()
