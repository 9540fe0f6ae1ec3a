"""HTTP client module for gemauth.

Provides :class:`RegistryClient`, a blocking client that wraps
:mod:`httpx` with host resolution, the push-host guard, and API key
injection.

Example::

    from gemauth.client import RegistryClient

    with RegistryClient(context) as client:
        resp = client.request("GET", "api/v1/gems")
"""

from gemauth.client.registry_client import RegistryClient

__all__ = ["RegistryClient"]
