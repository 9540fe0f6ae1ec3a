"""API key resolution.

The key for a command is chosen by precedence (high to low):

1. a key name explicitly selected by the caller (``--key``); if it is not
   in the credential store that is a :class:`~gemauth.exceptions.ConfigError`,
   never a fallback,
2. the entry whose key name is exactly the resolved host URL,
3. the default key entry.

Host resolution here never sees a per-call explicit host: the host used
for the lookup comes from ``RUBYGEMS_HOST`` or the default registry only.
A missing key is reported as ``None``; deciding whether that is an error
is left to the caller, since read-only operations work without one.
"""

from __future__ import annotations

from typing import Optional

from gemauth.auth.credential_store import DEFAULT_KEY_NAME, CredentialStore
from gemauth.auth.hosts import HostResolver
from gemauth.exceptions import ConfigError


def symbol_name(name: str) -> str:
    """Return *name* in ``:name`` symbol form (``other`` -> ``:other``)."""
    if name.startswith(":"):
        return name
    return f":{name}"


class KeyResolver:
    """Pick the API key for one command.

    Args:
        store: The credential set to look keys up in.
        hosts: Host resolver used for the host-qualified lookup.
    """

    def __init__(self, store: CredentialStore, hosts: HostResolver) -> None:
        self._store = store
        self._hosts = hosts

    def _find(self, name: str) -> tuple[str, str]:
        for candidate in (name, symbol_name(name)):
            token = self._store.get(candidate)
            if token is not None:
                return candidate, token
        raise ConfigError(
            f"No such API key: {name!r}. Please add it to your credentials "
            "file (done automatically on the first `gemauth signin`)."
        )

    def verify(self, name: str) -> str:
        """Return the token for an explicitly named key.

        *name* is matched as written first, then in its ``:name`` symbol
        form, so ``other`` finds an entry written as ``:other``.

        Raises:
            ConfigError: If no entry matches, naming the requested key.
        """
        return self._find(name)[1]

    def resolve_name(self, explicit_key_name: Optional[str] = None) -> Optional[str]:
        """Return the key name that :meth:`resolve` would use, or ``None``."""
        if explicit_key_name is not None:
            return self._find(explicit_key_name)[0]

        host = self._hosts.resolve()
        if host is not None and self._store.get(host) is not None:
            return host
        if self._store.get(DEFAULT_KEY_NAME) is not None:
            return DEFAULT_KEY_NAME
        return None

    def resolve(self, explicit_key_name: Optional[str] = None) -> Optional[str]:
        """Return the API key that applies, or ``None`` when there is none.

        Args:
            explicit_key_name: Key name selected by the caller, if any.

        Raises:
            ConfigError: If *explicit_key_name* is given but not stored.
        """
        if explicit_key_name is not None:
            return self.verify(explicit_key_name)

        host = self._hosts.resolve()
        if host is not None:
            token = self._store.get(host)
            if token is not None:
                return token
        return self._store.get(DEFAULT_KEY_NAME)
