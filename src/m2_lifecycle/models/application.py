"""Wire models for the application endpoints of the control plane."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EngineType(str, Enum):
    """Runtime engine an application targets."""

    MICROFOCUS = "microfocus"
    BLUAGE = "bluage"


class ApplicationLifecycle(str, Enum):
    """Status tokens reported on an application."""

    CREATING = "Creating"
    CREATED = "Created"
    AVAILABLE = "Available"
    READY = "Ready"
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPING = "Stopping"
    STOPPED = "Stopped"
    FAILED = "Failed"
    DELETING = "Deleting"
    DELETING_FROM_ENVIRONMENT = "Deleting From Environment"


class ApplicationVersionLifecycle(str, Enum):
    """Status tokens reported on an application version."""

    CREATING = "Creating"
    AVAILABLE = "Available"
    FAILED = "Failed"


class _APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LatestVersion(_APIModel):
    """Summary of the newest version embedded in an application."""

    application_version: int
    status: str = ""
    status_reason: str | None = None
    creation_time: datetime | None = None


class ApplicationSummary(_APIModel):
    """GetApplication response."""

    application_id: str
    application_arn: str | None = None
    name: str | None = None
    description: str | None = None
    engine_type: str | None = None
    environment_id: str | None = None
    kms_key_id: str | None = None
    role_arn: str | None = None
    status: str = ""
    status_reason: str | None = None
    latest_version: LatestVersion | None = None
    tags: dict[str, str] | None = None
    creation_time: datetime | None = None


class ApplicationVersion(_APIModel):
    """GetApplicationVersion response."""

    application_version: int
    name: str | None = None
    description: str | None = None
    definition_content: str | None = None
    status: str = ""
    status_reason: str | None = None
    creation_time: datetime | None = None


class CreateApplicationRequest(_APIModel):
    """CreateApplication request body."""

    client_token: str
    name: str
    engine_type: str
    definition: dict[str, str]
    description: str | None = None
    kms_key_id: str | None = None
    role_arn: str | None = None
    tags: dict[str, str] | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateApplicationResponse(_APIModel):
    """CreateApplication response."""

    application_id: str
    application_arn: str | None = None
    application_version: int | None = None


class UpdateApplicationRequest(_APIModel):
    """UpdateApplication request body; unset fields are left unchanged."""

    current_application_version: int = Field(ge=1)
    description: str | None = None
    definition: dict[str, str] | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def changed(self) -> list[str]:
        return [f for f in ("definition", "description") if getattr(self, f) is not None]
