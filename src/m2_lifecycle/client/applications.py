"""Application endpoints of the control plane.

:class:`ApplicationAPI` is the contract the lifecycle engine depends on.
:class:`ApplicationsClient` implements it over HTTP; tests substitute an
in-memory fake. Every method raises :class:`~m2_lifecycle.client.errors.NotFoundError`
when the application (or version) does not exist.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from m2_lifecycle.client.controlplane import ControlPlaneClient
from m2_lifecycle.models.application import (
    ApplicationSummary,
    ApplicationVersion,
    CreateApplicationRequest,
    CreateApplicationResponse,
    UpdateApplicationRequest,
)


@runtime_checkable
class ApplicationAPI(Protocol):
    """Remote operations on applications."""

    def create_application(self, request: CreateApplicationRequest) -> CreateApplicationResponse:
        ...

    def get_application(self, application_id: str) -> ApplicationSummary:
        ...

    def get_application_version(self, application_id: str, version: int) -> ApplicationVersion:
        ...

    def update_application(self, application_id: str, request: UpdateApplicationRequest) -> int:
        """Apply changes and return the new application version."""
        ...

    def delete_application(self, application_id: str) -> None:
        ...


class ApplicationsClient:
    """HTTP implementation of :class:`ApplicationAPI`."""

    def __init__(self, client: ControlPlaneClient) -> None:
        self.client = client

    def create_application(self, request: CreateApplicationRequest) -> CreateApplicationResponse:
        data = self.client.post_json("/applications", json=request.to_body())
        return CreateApplicationResponse.model_validate(data)

    def get_application(self, application_id: str) -> ApplicationSummary:
        data = self.client.get_json(f"/applications/{application_id}")
        return ApplicationSummary.model_validate(data)

    def get_application_version(self, application_id: str, version: int) -> ApplicationVersion:
        data = self.client.get_json(f"/applications/{application_id}/versions/{version}")
        return ApplicationVersion.model_validate(data)

    def update_application(self, application_id: str, request: UpdateApplicationRequest) -> int:
        data = self.client.patch_json(f"/applications/{application_id}", json=request.to_body())
        return int(data["applicationVersion"])

    def delete_application(self, application_id: str) -> None:
        self.client.delete(f"/applications/{application_id}")
