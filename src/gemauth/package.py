"""Package metadata consumed by the push-host guard.

Only the slice of gem metadata that authorization needs is modelled: the
optional ``allowed_push_host`` entry. A gemspec stores it as a single URL;
a list of URLs is accepted as well.

Metadata files are YAML or JSON documents shaped like::

    name: freebird
    version: 1.0.1
    metadata:
      allowed_push_host: https://privategemserver.example
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from gemauth.exceptions import ConfigError

ALLOWED_PUSH_HOST_KEY = "allowed_push_host"


class PackageMetadata(BaseModel):
    """Name, version, and free-form metadata of one package."""

    name: Optional[str] = None
    version: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def allowed_push_hosts(self) -> list[str]:
        """Hosts this package may be pushed to; empty means unrestricted."""
        value = self.metadata.get(ALLOWED_PUSH_HOST_KEY)
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        return [str(host) for host in value]


def load_package_metadata(path: str | Path) -> PackageMetadata:
    """Load package metadata from a YAML or JSON file.

    Args:
        path: File path. ``.json`` files are parsed as JSON, anything else
            as YAML (which also accepts JSON).

    Raises:
        ConfigError: If the file cannot be read or parsed, or does not
            describe a package.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read package metadata {path}: {exc}") from exc

    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid package metadata {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Package metadata {path} must be a mapping")
    try:
        return PackageMetadata.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid package metadata {path}: {exc}") from exc
