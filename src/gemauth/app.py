"""Typer application and CLI entry point for gemauth.

This module wires together the top-level Typer application and registers
the built-in commands (``signin``, ``keys``, ``host``, ``request``,
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer
app. Commands report their own errors through
:func:`gemauth.commands.handle_errors`; anything that still escapes is
reported here, and unexpected exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`gemauth.commands`: Context construction and the error boundary.
    :mod:`gemauth.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from gemauth import __version__
from gemauth.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="gemauth",
    help="Resolve, store, and obtain API keys for package registries.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"gemauth {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Use the named API key from the credentials file."
    ),
    credentials: Optional[str] = typer.Option(
        None, "--credentials", help="Credentials file path (default: $GEMAUTH_CREDENTIALS)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~gemauth.output.OutputManager` from
    CLI flags and stores shared options (``key``, ``credentials``,
    ``force``) in the Typer context so that commands can read them via
    ``ctx.obj``. Values already present in ``ctx.obj`` (such as an
    injected ``transport``) are kept.
    """
    from gemauth.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[debug] %(name)s: %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["key"] = key
    ctx.obj["credentials"] = credentials
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from gemauth.commands.config import config_app  # noqa: E402
from gemauth.commands.host import host_command  # noqa: E402
from gemauth.commands.keys import keys_app  # noqa: E402
from gemauth.commands.request import request_command  # noqa: E402
from gemauth.commands.signin import signin_command  # noqa: E402

app.command("signin")(signin_command)
app.command("host")(host_command)
app.command("request")(request_command)
app.add_typer(keys_app, name="keys", help="Inspect stored and resolved API keys.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from gemauth.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``gemauth`` console script.

    Unhandled :class:`~gemauth.exceptions.GemAuthError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from gemauth.exceptions import GemAuthError
        from gemauth.output import error

        if isinstance(exc, GemAuthError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
