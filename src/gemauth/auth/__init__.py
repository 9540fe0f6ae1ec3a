"""Credential resolution and sign-in for registry clients.

This package decides which API key applies to which registry host and
obtains new keys through the interactive sign-in exchange.

The main entry points are:

- :class:`CredentialStore` -- the host-keyed credential file.
- :class:`HostResolver` -- explicit host, then ``RUBYGEMS_HOST``, then the
  default registry.
- :class:`KeyResolver` -- ``--key`` selection, then host-qualified key,
  then the default key.
- :func:`check_allowed_push_host` -- the package push-host allow-list guard.
- :class:`AuthContext` -- the per-command bundle of the above.
- :class:`SignIn` -- prompt, authenticate, persist.

Typical usage::

    from gemauth.auth import AuthContext, CredentialStore

    context = AuthContext(config, CredentialStore(path), key_name=None)
    api_key = context.api_key()   # None when no key applies
"""

from gemauth.auth.context import AuthContext
from gemauth.auth.credential_store import DEFAULT_KEY_NAME, CredentialStore
from gemauth.auth.hosts import DEFAULT_HOST, HOST_ENV_VAR, HostResolver
from gemauth.auth.keys import KeyResolver
from gemauth.auth.push_host import check_allowed_push_host
from gemauth.auth.sign_in import SignIn, SignInOutcome, SignInResult

__all__ = [
    "AuthContext",
    "CredentialStore",
    "DEFAULT_HOST",
    "DEFAULT_KEY_NAME",
    "HOST_ENV_VAR",
    "HostResolver",
    "KeyResolver",
    "SignIn",
    "SignInOutcome",
    "SignInResult",
    "check_allowed_push_host",
]
