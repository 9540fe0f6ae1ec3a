"""gemauth -- resolve, store, and use API keys for package registries.

This package answers two questions for a package-manager client: which
API key applies to which registry host, and how to obtain a new key
from a registry through the interactive sign-in exchange.

Typical workflow::

    gemauth signin                          # mint a key for RubyGems.org
    gemauth signin --host https://gems.example   # key for a private host
    gemauth keys show                       # which key applies right now

Modules:
    app: Typer application and CLI entry point.
    auth: Credential store, host/key resolution, push-host guard, sign-in.
    client: Authorized HTTP dispatch to a registry.
    models: Pydantic models for configuration.
    config: XDG-aware configuration loading and atomic writes.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    ui: The interactive channel used by sign-in and error reporting.
"""

__version__ = "0.1.0"
