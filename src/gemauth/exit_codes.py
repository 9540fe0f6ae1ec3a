"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~gemauth.exceptions.GemAuthError` subclass.
Shell wrappers can inspect the exit code to tell a rejected sign-in from
a network failure without parsing stderr.

Example::

    $ gemauth signin
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the registry rejected the credentials
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error, or a configuration problem."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""Sign-in was rejected, or no API key is available for an authorized request."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_POLICY_VIOLATION = 8
"""The target host is not allowed by the package's push-host allow-list."""
