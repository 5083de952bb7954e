"""Caller-visible application model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from m2_lifecycle.models.application import EngineType
from m2_lifecycle.models.definition import Definition, coerce_definition

NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_\-]{1,59}$"
ARN_PATTERN = r"^arn:[^:]+:[^:]*:[^:]*:[^:]*:.+$"


class Timeouts(BaseModel):
    """Per-operation deadlines in seconds; unset falls back to configured defaults."""

    create: float | None = Field(default=None, gt=0)
    update: float | None = Field(default=None, gt=0)
    delete: float | None = Field(default=None, gt=0)


class ApplicationModel(BaseModel):
    """Desired configuration plus the server-assigned state of one application."""

    # Assigned by the control plane
    application_id: str | None = None
    arn: str | None = None
    current_version: int | None = None
    status: str | None = None

    # Replacement fields
    name: str = Field(pattern=NAME_PATTERN)
    engine_type: EngineType
    kms_key_id: str | None = None
    role_arn: str | None = Field(default=None, pattern=ARN_PATTERN)

    # Updatable fields
    description: str | None = Field(default=None, max_length=500)
    definition: Definition | None = None

    tags: dict[str, str] = Field(default_factory=dict)
    timeouts: Timeouts = Field(default_factory=Timeouts)

    @field_validator("definition", mode="before")
    @classmethod
    def validate_definition(cls, v: object) -> object:
        return coerce_definition(v)
