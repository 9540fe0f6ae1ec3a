"""Built-in CLI sub-commands for gemauth.

This package groups all Typer command modules that form the CLI's
command tree:

* :mod:`~gemauth.commands.signin` -- obtain a new API key.
* :mod:`~gemauth.commands.keys` -- inspect stored and resolved API keys.
* :mod:`~gemauth.commands.host` -- print the resolved registry host.
* :mod:`~gemauth.commands.request` -- send an authorized registry request.
* :mod:`~gemauth.commands.config` -- view and modify global settings.

It also holds the command boundary shared by all of them:
:func:`build_context` turns the root options into an
:class:`~gemauth.auth.AuthContext`, and :func:`handle_errors` is the only
place a :class:`~gemauth.exceptions.GemAuthError` becomes an error
message and an exit status.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

import httpx
import typer

from gemauth.auth import AuthContext, CredentialStore
from gemauth.config import resolve_config
from gemauth.exceptions import GemAuthError
from gemauth.ui import ConsoleUI, UserInterface


@contextmanager
def handle_errors(ui: Optional[UserInterface] = None) -> Iterator[None]:
    """Report a :class:`~gemauth.exceptions.GemAuthError` and exit with its code.

    Args:
        ui: Channel that receives the error message (default: the console).

    Raises:
        typer.Exit: With the error's ``exit_code``.
    """
    try:
        yield
    except GemAuthError as exc:
        (ui or ConsoleUI()).error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def build_context(ctx: typer.Context) -> AuthContext:
    """Build the :class:`~gemauth.auth.AuthContext` for this command run.

    Reads ``--credentials`` and ``--key`` from ``ctx.obj`` (set by
    :func:`~gemauth.app.main_callback`).

    Raises:
        ConfigError: If the global config file is invalid.
    """
    obj = _root_obj(ctx)
    config, credentials_path = resolve_config(obj.get("credentials"))
    return AuthContext(
        config,
        CredentialStore(credentials_path),
        key_name=obj.get("key"),
    )


def get_transport(ctx: typer.Context) -> Optional[httpx.BaseTransport]:
    """Return an HTTP transport injected through ``ctx.obj["transport"]``, if any."""
    return _root_obj(ctx).get("transport")


def _root_obj(ctx: typer.Context) -> dict:
    return ctx.find_root().obj or {}
