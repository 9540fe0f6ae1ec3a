"""Sign-in command -- obtain a new API key from a registry.

Typical workflow::

    gemauth signin                                   # RubyGems.org
    gemauth signin --host https://gems.example.com   # a private server
"""

from __future__ import annotations

from typing import Optional

import typer

from gemauth.auth import SignIn
from gemauth.client import RegistryClient
from gemauth.commands import build_context, get_transport, handle_errors
from gemauth.ui import ConsoleUI


def signin_command(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None, "--host", help="Registry to sign in to (default: $RUBYGEMS_HOST or RubyGems.org)."
    ),
) -> None:
    """Sign in to a registry and store the API key it issues.

    Does nothing when an API key already applies to the current command
    (including one selected with ``--key``). With ``--host`` the new key
    is stored under that host; otherwise it becomes the default key.

    Raises:
        typer.Exit: With code 3 if the registry rejects the credentials,
            6 on network failure, 1 if no host or ``--key`` resolves.

    Example::

        gemauth signin --host https://gems.example.com
    """
    ui = ConsoleUI()
    with handle_errors(ui):
        context = build_context(ctx)
        with RegistryClient(context, transport=get_transport(ctx)) as client:
            SignIn(context, ui, client).run(host=host)
