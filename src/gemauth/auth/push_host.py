"""Push-host allow-list guard.

A package may declare the hosts it may be pushed to. When that list is
non-empty, an authorized request to any other host is refused before
any network I/O, so the API key is never sent to it.
"""

from __future__ import annotations

from collections.abc import Iterable

from gemauth.exceptions import PolicyViolationError


def check_allowed_push_host(target_host: str, allowed_hosts: Iterable[str]) -> None:
    """Refuse *target_host* unless it is in *allowed_hosts*.

    Matching is exact string equality; there is no wildcard or prefix
    matching. An empty *allowed_hosts* allows every host.

    Raises:
        PolicyViolationError: Naming both the rejected and the allowed hosts.
    """
    allowed = list(allowed_hosts)
    if not allowed or target_host in allowed:
        return
    permitted = ", ".join(f'"{host}"' for host in allowed)
    raise PolicyViolationError(
        f'"{target_host}" is not allowed by the gemspec, '
        f"which only allows {permitted}"
    )
