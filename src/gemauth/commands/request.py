"""Request command -- send an authorized request to a registry.

This is the generic form of what publish, owner, and yank commands do:
resolve the host, apply the package's push-host allow-list, sign in if
no API key applies, then send the request with the key attached.

Typical workflow::

    gemauth request GET api/v1/gems
    gemauth request DELETE api/v1/gems/yank --data "gem_name=freebird&version=1.0.1" \\
        --metadata freebird.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gemauth.auth import SignIn, SignInOutcome, check_allowed_push_host
from gemauth.client import RegistryClient
from gemauth.client.response import format_api_response
from gemauth.commands import build_context, get_transport, handle_errors
from gemauth.exit_codes import EXIT_AUTH_FAILURE, EXIT_GENERIC_FAILURE
from gemauth.package import load_package_metadata
from gemauth.ui import ConsoleUI


def request_command(
    ctx: typer.Context,
    method: str = typer.Argument(help="HTTP method, e.g. GET, POST, DELETE."),
    path: str = typer.Argument(help="API path, e.g. api/v1/gems."),
    host: Optional[str] = typer.Option(None, "--host", help="Registry host for this request."),
    allowed_push_host: Optional[list[str]] = typer.Option(
        None,
        "--allowed-push-host",
        help="Host the package may be pushed to (repeatable).",
    ),
    metadata: Optional[Path] = typer.Option(
        None,
        "--metadata",
        help="Package metadata file (YAML/JSON) declaring allowed_push_host.",
    ),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Raw request body."),
) -> None:
    """Send one authorized request and print the response.

    The push-host allow-list (from ``--allowed-push-host`` and
    ``--metadata``) is checked before sign-in or any network call.

    Raises:
        typer.Exit: With the error's exit code, or 3 / 1 when the registry
            answers 401-403 / another error status.
    """
    ui = ConsoleUI()
    with handle_errors(ui):
        context = build_context(ctx)
        allowed = list(allowed_push_host or [])
        if metadata is not None:
            allowed.extend(load_package_metadata(metadata).allowed_push_hosts)

        with RegistryClient(context, transport=get_transport(ctx)) as client:
            check_allowed_push_host(client.resolve_host(host), allowed)

            result = SignIn(context, ui, client).run(host=host)
            if result.outcome is SignInOutcome.SIGNED_IN:
                context.key_name = result.key_name

            response = client.request(
                method,
                path,
                host=host,
                allowed_push_hosts=allowed,
                content=data,
            )

    format_api_response(response)
    if response.status_code in (401, 403):
        raise typer.Exit(code=EXIT_AUTH_FAILURE)
    if response.status_code >= 400:
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)
