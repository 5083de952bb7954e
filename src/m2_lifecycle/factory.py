"""Wire a ready-to-use :class:`ApplicationResource` from resolved configuration."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from m2_lifecycle.client.applications import ApplicationsClient
from m2_lifecycle.client.controlplane import ControlPlaneClient
from m2_lifecycle.config.manager import ConfigManager
from m2_lifecycle.lifecycle.resource import ApplicationResource
from m2_lifecycle.logging import configure_logging


def make_client(
    manager: ConfigManager,
    profile: str | None = None,
    url: str | None = None,
    token: str | None = None,
) -> ControlPlaneClient:
    """Create a ControlPlaneClient from arguments, env vars, or a config profile."""
    resolved = manager.resolve_profile(profile_name=profile, url=url, token=token)
    return ControlPlaneClient(resolved)


@contextmanager
def application_resource(
    profile: str | None = None,
    url: str | None = None,
    token: str | None = None,
    *,
    manager: ConfigManager | None = None,
    setup_logging: bool = False,
) -> Iterator[ApplicationResource]:
    """Yield an ApplicationResource bound to one control-plane connection.

    The underlying HTTP connection pool is closed on exit.
    """
    manager = manager or ConfigManager()
    config = manager.config
    if setup_logging:
        configure_logging(config.log_level, json_output=config.log_format == "json")
    with make_client(manager, profile, url, token) as client:
        yield ApplicationResource(ApplicationsClient(client), config.lifecycle)
