"""Exception hierarchy for gemauth.

All exceptions inherit from :class:`GemAuthError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gemauth.exit_codes`.
Core code (resolvers, sign-in, the registry client) only raises these;
the command layer in :mod:`gemauth.commands` is the one place that turns
them into an error message and a process exit status.

Subclass hierarchy::

    GemAuthError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- AuthError             (exit 3)
    +-- TransportError        (exit 6)
    +-- PolicyViolationError  (exit 8)
    +-- ConfigError           (exit 1)
        +-- MissingHostError  (exit 1)
"""

from gemauth.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_POLICY_VIOLATION,
)


class GemAuthError(Exception):
    """Base exception for all gemauth errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`gemauth.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(GemAuthError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(GemAuthError):
    """Raised when the registry rejects a sign-in, or no API key is available.

    For a rejected sign-in the message is the registry's response body,
    verbatim.
    """

    exit_code = EXIT_AUTH_FAILURE


class TransportError(GemAuthError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class PolicyViolationError(GemAuthError):
    """Raised when a target host is not in a package's push-host allow-list."""

    exit_code = EXIT_POLICY_VIOLATION


class ConfigError(GemAuthError):
    """Raised for configuration problems (unknown key name, unreadable credential file)."""

    exit_code = EXIT_GENERIC_FAILURE


class MissingHostError(ConfigError):
    """Raised when no registry host can be resolved for a request that needs one."""
