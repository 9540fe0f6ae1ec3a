"""Persistent, host-keyed credential store.

Credentials live in a single YAML mapping file (by default
``~/.local/share/gemauth/credentials.yaml``) from *key name* to *secret
token*. A key name is either the reserved default-key symbol
``:rubygems_api_key``, another ``:name`` symbol chosen by the user, or a
literal registry URL such as ``https://gems.example.com``. This is the
same layout RubyGems uses, so an existing ``~/.gem/credentials`` file can
be pointed at directly.

Files are written atomically via :func:`gemauth.config._atomic_write`
with ``0o600`` permissions so that secrets are never world-readable,
even momentarily.

See Also:
    :class:`~gemauth.auth.keys.KeyResolver` -- decides which entry applies.
    :class:`~gemauth.auth.sign_in.SignIn` -- writes new entries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from gemauth.config import _atomic_write
from gemauth.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_KEY_NAME = ":rubygems_api_key"
"""Key name of the default credential entry."""


class CredentialStore:
    """Read/write the credential set backed by one YAML file.

    The file is read lazily on first access and the loaded mapping is
    owned by this instance for the rest of the command run. Every
    :meth:`set` rewrites the whole file, keeping every other entry (and
    its position) exactly as it was loaded.

    Args:
        path: Location of the credential file. It need not exist yet.

    Example::

        store = CredentialStore(Path("~/.gem/credentials").expanduser())
        store.set(DEFAULT_KEY_NAME, "a5fdbb6ba150cbb83aad2bb2fede64cf04045390")
        assert store.get(DEFAULT_KEY_NAME).startswith("a5fd")
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._keys: Optional[dict[Any, Any]] = None

    @property
    def path(self) -> Path:
        """The filesystem path to the credential file."""
        return self._path

    def load(self) -> dict[Any, Any]:
        """(Re)read the credential file into memory.

        A missing or empty file yields an empty set.

        Returns:
            The loaded mapping. Callers must not mutate it; use :meth:`set`.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or
                its top level is not a mapping.
        """
        keys: dict[Any, Any] = {}
        if self._path.is_file():
            try:
                text = self._path.read_text(encoding="utf-8")
                data = yaml.safe_load(text)
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigError(
                    f"Cannot read credential file {self._path}: {exc}"
                ) from exc
            if data is not None and not isinstance(data, dict):
                raise ConfigError(
                    f"Credential file {self._path} must contain a mapping of "
                    f"key names to API keys, got {type(data).__name__}"
                )
            keys = data or {}
        logger.debug("Loaded %d credential(s) from %s", len(keys), self._path)
        self._keys = keys
        return keys

    @property
    def keys(self) -> dict[Any, Any]:
        """The in-memory credential set, loading it on first access."""
        if self._keys is None:
            return self.load()
        return self._keys

    def get(self, name: str) -> Optional[str]:
        """Return the token stored under *name*, or ``None`` when absent."""
        value = self.keys.get(name)
        if value is None:
            return None
        return str(value)

    def names(self) -> list[str]:
        """Return every key name in file order."""
        return [str(name) for name in self.keys]

    def __contains__(self, name: object) -> bool:
        return name in self.keys

    def set(self, name: str, token: str) -> None:
        """Insert or overwrite one entry and persist the whole set.

        Args:
            name: Key name (default-key symbol, ``:name`` symbol, or host URL).
            token: The secret API key.

        Raises:
            ConfigError: If the existing file cannot be loaded, or the new
                file cannot be written. The file on disk is then unchanged.
        """
        keys = dict(self.keys)
        keys[name] = token
        self._persist(keys)
        self._keys = keys

    def _persist(self, keys: dict[Any, Any]) -> None:
        text = yaml.safe_dump(keys, default_flow_style=False, sort_keys=False)
        try:
            _atomic_write(self._path, text, mode=0o600)
        except OSError as exc:
            raise ConfigError(f"Cannot write credential file {self._path}: {exc}") from exc
        logger.debug("Wrote %d credential(s) to %s", len(keys), self._path)
