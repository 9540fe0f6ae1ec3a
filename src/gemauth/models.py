"""Pydantic models for gemauth configuration.

:class:`GlobalConfig` is serialised as JSON in the user's config directory
and loaded by :func:`~gemauth.config.load_global_config`. Unknown keys are
preserved in ``model_extra`` so that a newer config file does not lose
settings when an older client rewrites it.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestConfig(BaseModel):
    """HTTP settings for requests sent to a registry."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class GlobalConfig(BaseModel):
    """Global gemauth configuration.

    Stored at ``<config_dir>/config.json`` and managed via
    :func:`~gemauth.config.load_global_config` and
    :func:`~gemauth.config.save_global_config`. Fields here have the
    lowest precedence; environment variables and CLI flags override them.

    Example::

        GlobalConfig(
            credentials_path="~/.gem/credentials",
            disable_default_gem_server=True,
        )
    """

    model_config = ConfigDict(extra="allow")

    credentials_path: Optional[str] = Field(
        default=None,
        description="Path to the credential file (default: <data_dir>/credentials.yaml)",
    )
    disable_default_gem_server: bool = Field(
        default=False,
        description="Never fall back to https://rubygems.org when no host is given",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
