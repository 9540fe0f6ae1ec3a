"""Host command -- print the registry host that applies."""

from __future__ import annotations

from typing import Optional

import typer

from gemauth.commands import build_context, handle_errors
from gemauth.output import print_data


def host_command(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, "--host", help="Explicit host override."),
) -> None:
    """Print the resolved registry host to stdout.

    Precedence: ``--host``, then ``$RUBYGEMS_HOST`` (if non-empty), then
    https://rubygems.org unless ``disable_default_gem_server`` is set.
    """
    with handle_errors():
        context = build_context(ctx)
        print_data(context.hosts.require(host))
