"""Registry host resolution.

The host for an operation is chosen by precedence (high to low):

1. an explicit host passed by the caller for this operation,
2. the ``RUBYGEMS_HOST`` environment variable, when set to a non-empty string,
3. the canonical public registry, :data:`DEFAULT_HOST`, unless the
   ``disable_default_gem_server`` config flag is set, in which case no
   host resolves at all.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from gemauth.exceptions import MissingHostError
from gemauth.models import GlobalConfig

DEFAULT_HOST = "https://rubygems.org"
"""URL of the canonical public registry."""

DEFAULT_HOST_NAME = "RubyGems.org"
"""Public name of :data:`DEFAULT_HOST`, used in user-facing messages."""

HOST_ENV_VAR = "RUBYGEMS_HOST"
"""Environment variable overriding the registry host."""


def display_name(host: str) -> str:
    """Return the public registry's name for :data:`DEFAULT_HOST`, else *host*."""
    if host == DEFAULT_HOST:
        return DEFAULT_HOST_NAME
    return host


class HostResolver:
    """Pick the registry host for one operation.

    Args:
        config: Global config; only ``disable_default_gem_server`` is read.
        environ: Environment mapping to consult. ``None`` reads
            :data:`os.environ` at call time.
    """

    def __init__(
        self,
        config: GlobalConfig,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config = config
        self._environ = environ

    def env_host(self) -> Optional[str]:
        """Return the environment override, treating an empty value as unset."""
        environ = os.environ if self._environ is None else self._environ
        return environ.get(HOST_ENV_VAR) or None

    def default_host(self) -> Optional[str]:
        """Return :data:`DEFAULT_HOST`, or ``None`` when the default is disabled."""
        if self._config.disable_default_gem_server:
            return None
        return DEFAULT_HOST

    def resolve(self, explicit_host: Optional[str] = None) -> Optional[str]:
        """Return the host for this operation.

        Args:
            explicit_host: Host chosen by the caller. Returned unchanged
                when given.

        Returns:
            The resolved host URL, or ``None`` if no host applies.
        """
        if explicit_host is not None:
            return explicit_host
        return self.env_host() or self.default_host()

    def require(self, explicit_host: Optional[str] = None) -> str:
        """Like :meth:`resolve`, but fail when no host applies.

        Raises:
            MissingHostError: If no explicit host is given, ``RUBYGEMS_HOST``
                is unset or empty, and the default registry is disabled.
        """
        host = self.resolve(explicit_host)
        if host is None:
            raise MissingHostError(
                "You must specify a gem server. Pass --host, set "
                f"{HOST_ENV_VAR}, or run `gemauth config set "
                "disable_default_gem_server false`."
            )
        return host
