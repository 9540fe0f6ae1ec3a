"""Keys commands -- inspect stored and resolved API keys.

Tokens are never printed in full; only the first four characters are
shown.

Typical workflow::

    gemauth keys list          # every stored key, the active one marked
    gemauth keys show          # the host and key the next command would use
    gemauth keys verify other  # check that --key other would work
"""

from __future__ import annotations

import typer

from gemauth.commands import build_context, handle_errors
from gemauth.output import info, print_table, success, suggest


keys_app = typer.Typer(no_args_is_help=True)


def mask(token: str) -> str:
    """Return *token* with everything after its first four characters hidden."""
    if len(token) <= 8:
        return "*" * len(token)
    return token[:4] + "..."


@keys_app.command("list")
def keys_list(ctx: typer.Context) -> None:
    """List every stored API key, marking the one that currently applies.

    Example::

        gemauth keys list
        gemauth --json keys list
    """
    with handle_errors():
        context = build_context(ctx)
        names = context.store.names()
        if not names:
            info(f"No API keys stored in {context.store.path}.")
            suggest("Sign in: gemauth signin")
            return
        active = context.keys.resolve_name(context.key_name)

        rows = []
        for name in names:
            token = context.store.get(name) or ""
            rows.append([name, mask(token), "*" if name == active else ""])
        print_table(["Key Name", "API Key", "Active"], rows, title="Stored API Keys")


@keys_app.command("show")
def keys_show(ctx: typer.Context) -> None:
    """Show the host and API key the next registry command would use.

    A missing key is reported, not treated as an error.
    """
    with handle_errors():
        context = build_context(ctx)
        host = context.hosts.resolve()
        name = context.keys.resolve_name(context.key_name)
        if name is None:
            info(f"No API key applies to {host or 'any host'}.")
            suggest("Sign in: gemauth signin")
            return
        token = context.store.get(name) or ""
        print_table(
            ["Field", "Value"],
            [
                ["Host", host or "-"],
                ["Key Name", name],
                ["API Key", mask(token)],
                ["Credentials", str(context.store.path)],
            ],
            title="Resolved API Key",
        )


@keys_app.command("verify")
def keys_verify(
    ctx: typer.Context,
    name: str = typer.Argument(help="Key name, as passed to --key."),
) -> None:
    """Check that an explicitly named API key is stored.

    Raises:
        typer.Exit: With code 1 if the key is not stored.
    """
    with handle_errors():
        context = build_context(ctx)
        context.keys.verify(name)
        success(f'API key "{name}" is configured.')
