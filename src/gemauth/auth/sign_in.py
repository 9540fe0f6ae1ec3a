"""Interactive sign-in: exchange an email and password for a new API key.

One :meth:`SignIn.run` goes through a short, linear sequence:

1. **Short-circuit** -- if an API key already resolves for the command
   (see :class:`~gemauth.auth.keys.KeyResolver`), stop silently. This
   never clobbers a key the user chose deliberately.
2. **Prompt** -- ask for email and password on the interactive channel.
3. **Authenticate** -- ``POST <host>/api/v1/api_key`` with HTTP Basic auth.
4. **Interpret** -- on 200 the body is the new key and is persisted; any
   other status raises :class:`~gemauth.exceptions.AuthError` carrying
   the body verbatim, and nothing is persisted.

There is no retry. The key is written only after the success branch is
reached, so an interrupted prompt or request leaves the store untouched.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import httpx

from gemauth.auth.context import AuthContext
from gemauth.auth.credential_store import DEFAULT_KEY_NAME
from gemauth.auth.hosts import DEFAULT_HOST, display_name
from gemauth.exceptions import AuthError
from gemauth.ui import UserInterface

if TYPE_CHECKING:
    from gemauth.client import RegistryClient

logger = logging.getLogger(__name__)

API_KEY_PATH = "api/v1/api_key"


class SignInOutcome(str, enum.Enum):
    """How a sign-in run ended."""

    SKIPPED = "skipped"
    SIGNED_IN = "signed_in"


@dataclass
class SignInResult:
    """Result of one :meth:`SignIn.run`.

    Attributes:
        outcome: Whether a key was minted or an existing one was kept.
        host: Host signed in to (``None`` when skipped).
        key_name: Credential key name the new key was stored under.
    """

    outcome: SignInOutcome
    host: Optional[str] = None
    key_name: Optional[str] = None


@dataclass
class SignInSession:
    """Identity collected for one sign-in attempt. Never persisted."""

    host: str
    email: str
    password: str = field(repr=False)

    @property
    def basic_auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self.email, self.password)


class SignIn:
    """Run the sign-in exchange against one registry.

    Args:
        context: Per-command auth context; its credential store receives
            the new key.
        ui: Interactive channel for prompts and the success message.
        client: An open :class:`~gemauth.client.RegistryClient`.

    Example::

        with RegistryClient(context) as client:
            SignIn(context, ConsoleUI(), client).run(host="https://gems.example")
    """

    def __init__(
        self,
        context: AuthContext,
        ui: UserInterface,
        client: RegistryClient,
    ) -> None:
        self._context = context
        self._ui = ui
        self._client = client

    def run(self, host: Optional[str] = None) -> SignInResult:
        """Sign in, unless an API key already applies.

        Args:
            host: Explicit host for this sign-in. When given it is both the
                target and the key name the new key is stored under.

        Returns:
            A :class:`SignInResult`.

        Raises:
            ConfigError: If ``--key`` names a key that is not stored, or the
                new key cannot be written to the credential file.
            MissingHostError: If no host resolves.
            AuthError: If the registry answers with anything but 200.
            TransportError: On network failure.
        """
        if self._context.api_key() is not None:
            logger.debug("API key already configured; skipping sign-in")
            return SignInResult(outcome=SignInOutcome.SKIPPED)

        sign_in_host = self._context.hosts.require(host)

        session = self._prompt(sign_in_host)
        token = self._authenticate(session)

        key_name = self._storage_key_name(host, sign_in_host)
        self._context.store.set(key_name, token)
        self._ui.info("Signed in.")
        logger.debug("Stored new API key for %s under %r", sign_in_host, key_name)
        return SignInResult(
            outcome=SignInOutcome.SIGNED_IN, host=sign_in_host, key_name=key_name
        )

    def _prompt(self, host: str) -> SignInSession:
        self._ui.info(f"Enter your {display_name(host)} credentials.")
        self._ui.info(f"Don't have an account yet? Create one at {host}/sign_up")
        email = self._ui.prompt("   Email: ")
        password = self._ui.prompt_secret("Password: ")
        return SignInSession(host=host, email=email, password=password)

    def _authenticate(self, session: SignInSession) -> str:
        response = self._client.request(
            "POST",
            API_KEY_PATH,
            host=session.host,
            authorize=False,
            auth=session.basic_auth,
        )
        if response.status_code != httpx.codes.OK:
            logger.debug("Sign-in to %s failed with HTTP %d", session.host, response.status_code)
            raise AuthError(response.text)
        return response.text.strip()

    @staticmethod
    def _storage_key_name(explicit_host: Optional[str], sign_in_host: str) -> str:
        # Keys for a RUBYGEMS_HOST server are stored under that host, never
        # as the default key.
        if explicit_host is not None:
            return explicit_host
        if sign_in_host != DEFAULT_HOST:
            return sign_in_host
        return DEFAULT_KEY_NAME
