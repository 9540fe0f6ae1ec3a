"""Per-command authentication context.

An :class:`AuthContext` is built once by the command layer and passed
explicitly to everything that needs host or key resolution. It replaces
any process-wide credential state: two contexts never share a loaded
credential set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from gemauth.auth.credential_store import CredentialStore
from gemauth.auth.hosts import HostResolver
from gemauth.auth.keys import KeyResolver
from gemauth.models import GlobalConfig


class AuthContext:
    """Configuration, credentials, and caller choices for one command run.

    Args:
        config: The effective global configuration.
        store: The credential store for this run.
        environ: Environment mapping for host resolution (``None`` reads
            :data:`os.environ` at call time).
        key_name: Key name selected by the caller (``--key``), if any.
    """

    def __init__(
        self,
        config: GlobalConfig,
        store: CredentialStore,
        environ: Optional[Mapping[str, str]] = None,
        key_name: Optional[str] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.key_name = key_name
        self.hosts = HostResolver(config, environ)
        self.keys = KeyResolver(store, self.hosts)

    def api_key(self) -> Optional[str]:
        """Resolve the API key for this command, honouring ``key_name``."""
        return self.keys.resolve(self.key_name)
