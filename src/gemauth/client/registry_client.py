"""Synchronous registry client with host resolution, push-host guard, and key injection.

This module provides :class:`RegistryClient`, the one place gemauth sends
HTTP requests to a registry. It wraps :class:`httpx.Client` and layers on,
in this order:

- **Host resolution** -- explicit host, then ``RUBYGEMS_HOST``, then the
  default registry; no host at all is a
  :class:`~gemauth.exceptions.MissingHostError`.
- **Push-host guard** -- the package's allow-list is checked before the
  API key is even looked up.
- **Key injection** -- the resolved API key is sent as the raw
  ``Authorization`` header value, the RubyGems convention.
- **Error mapping** -- network failures become
  :class:`~gemauth.exceptions.TransportError`. HTTP status codes are left
  to the caller.

No request is retried: one failed attempt ends the invocation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

import httpx

from gemauth import __version__
from gemauth.auth.context import AuthContext
from gemauth.auth.push_host import check_allowed_push_host
from gemauth.exceptions import AuthError, TransportError
from gemauth.output import get_output


class RegistryClient:
    """Synchronous HTTP client for registry API calls.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        context: Per-command auth context (config, credentials, ``--key``).
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with RegistryClient(context) as client:
            response = client.request("DELETE", "api/v1/gems/yank", content=...)
    """

    def __init__(
        self,
        context: AuthContext,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._context = context
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RegistryClient:
        config = self._context.config.request
        self._client = httpx.Client(
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=self._transport,
            headers={"User-Agent": f"gemauth/{__version__}"},
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def resolve_host(self, host: Optional[str] = None) -> str:
        """Resolve the target host, failing when none applies.

        Raises:
            MissingHostError: If no explicit host is given, ``RUBYGEMS_HOST``
                is unset, and the default registry is disabled.
        """
        return self._context.hosts.require(host)

    def request(
        self,
        method: str,
        path: str,
        *,
        host: Optional[str] = None,
        allowed_push_hosts: Iterable[str] = (),
        authorize: bool = True,
        auth: Optional[httpx.Auth] = None,
        headers: Optional[dict[str, str]] = None,
        content: Optional[Any] = None,
    ) -> httpx.Response:
        """Send one request to a registry.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            path: API path, e.g. ``api/v1/gems``. Joined to the host with
                exactly one slash.
            host: Explicit host for this request.
            allowed_push_hosts: The package's push-host allow-list. Empty
                means unrestricted.
            authorize: Send the resolved API key. Sign-in passes ``False``
                and supplies *auth* instead.
            auth: Extra :mod:`httpx` auth, e.g. :class:`httpx.BasicAuth`.
            headers: Extra request headers.
            content: Raw request body.

        Returns:
            The :class:`httpx.Response`, whatever its status code.

        Raises:
            MissingHostError: If no host resolves.
            PolicyViolationError: If the host is not in *allowed_push_hosts*.
            AuthError: If *authorize* is set and no API key resolves.
            ConfigError: If ``--key`` names a key that is not stored.
            TransportError: On network / timeout errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        target = self.resolve_host(host)
        check_allowed_push_host(target, allowed_push_hosts)

        merged_headers: dict[str, str] = {}
        if authorize:
            api_key = self._context.api_key()
            if api_key is None:
                raise AuthError(
                    f"No API key available for {target}. Run `gemauth signin` first."
                )
            merged_headers["Authorization"] = api_key
        merged_headers.update(headers or {})

        url = f"{target.rstrip('/')}/{path.lstrip('/')}"
        get_output().debug(f"{method.upper()} {url}")

        try:
            response = self._client.request(
                method.upper(),
                url,
                headers=merged_headers,
                content=content,
                auth=auth,
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        get_output().debug(f"HTTP {response.status_code} from {url}")
        return response
