"""Pydantic data models for the application control plane."""

from m2_lifecycle.models.application import (
    ApplicationLifecycle,
    ApplicationSummary,
    ApplicationVersion,
    ApplicationVersionLifecycle,
    CreateApplicationRequest,
    CreateApplicationResponse,
    EngineType,
    LatestVersion,
    UpdateApplicationRequest,
)
from m2_lifecycle.models.definition import (
    ContentDefinition,
    Definition,
    S3LocationDefinition,
    definition_from_fields,
)
from m2_lifecycle.models.resource import ApplicationModel, Timeouts

__all__ = [
    "ApplicationLifecycle",
    "ApplicationModel",
    "ApplicationSummary",
    "ApplicationVersion",
    "ApplicationVersionLifecycle",
    "ContentDefinition",
    "CreateApplicationRequest",
    "CreateApplicationResponse",
    "Definition",
    "EngineType",
    "LatestVersion",
    "S3LocationDefinition",
    "Timeouts",
    "UpdateApplicationRequest",
    "definition_from_fields",
]
