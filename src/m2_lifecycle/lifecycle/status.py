"""Status refreshers: reduce a remote lookup to ``(payload, status)``.

A refresher returns ``Refresh(None, "")`` when the resource is not found, so
the waiter can treat disappearance as a status rather than an error. Any other
lookup failure propagates unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NamedTuple

from m2_lifecycle.client.applications import ApplicationAPI
from m2_lifecycle.client.errors import NotFoundError


class Refresh(NamedTuple):
    payload: Any
    status: str


RefreshFunc = Callable[[], Refresh]

GONE = Refresh(None, "")


def application_status(api: ApplicationAPI, application_id: str) -> RefreshFunc:
    def refresh() -> Refresh:
        try:
            output = api.get_application(application_id)
        except NotFoundError:
            return GONE
        return Refresh(output, output.status)

    return refresh


def application_version_status(
    api: ApplicationAPI, application_id: str, version: int,
) -> RefreshFunc:
    def refresh() -> Refresh:
        try:
            output = api.get_application_version(application_id, version)
        except NotFoundError:
            return GONE
        return Refresh(output, output.status)

    return refresh


def status_reason(payload: Any) -> str:
    """Human-readable failure reason carried by a payload, if any."""
    if payload is None:
        return ""
    reason = getattr(payload, "status_reason", None)
    if not reason:
        latest = getattr(payload, "latest_version", None)
        reason = getattr(latest, "status_reason", None)
    return reason or ""
