"""Idempotency tokens and optimistic-concurrency versioning."""

from __future__ import annotations

import uuid

from m2_lifecycle.client.errors import InvalidDefinitionError, VersionUnknownError
from m2_lifecycle.models.application import UpdateApplicationRequest
from m2_lifecycle.models.resource import ApplicationModel

# Fields UpdateApplication can change in place
WATCHED_FIELDS = ("definition", "description")

# Fields that can only change by replacing the application
REPLACEMENT_FIELDS = ("name", "engine_type", "kms_key_id", "role_arn")


def new_client_token() -> str:
    """Return a token unique to one logical create attempt."""
    return f"m2-lifecycle-{uuid.uuid4().hex}"


def changed_fields(old: ApplicationModel, new: ApplicationModel) -> list[str]:
    return [f for f in WATCHED_FIELDS if getattr(old, f) != getattr(new, f)]


def replacement_fields(old: ApplicationModel, new: ApplicationModel) -> list[str]:
    return [f for f in REPLACEMENT_FIELDS if getattr(old, f) != getattr(new, f)]


def last_known_version(old: ApplicationModel, new: ApplicationModel) -> int:
    """Most recent version observed by either model.

    Versions are assigned by the control plane and only grow, so the larger
    one is never stale relative to the other.
    """
    versions = [v for v in (old.current_version, new.current_version) if v is not None]
    if not versions:
        raise VersionUnknownError(
            f"no version recorded for application {old.application_id}; read it first"
        )
    return max(versions)


def build_update_request(
    old: ApplicationModel, new: ApplicationModel,
) -> UpdateApplicationRequest | None:
    """Request carrying only the changed watched fields, or ``None`` if none changed."""
    changed = changed_fields(old, new)
    if not changed:
        return None
    definition = None
    if "definition" in changed:
        if new.definition is None:
            raise InvalidDefinitionError("definition cannot be removed from an application")
        definition = new.definition.to_api()
    description = None
    if "description" in changed:
        # An empty string clears the description remotely
        description = new.description or ""
    return UpdateApplicationRequest(
        current_application_version=last_known_version(old, new),
        description=description,
        definition=definition,
    )
