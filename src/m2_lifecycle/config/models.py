"""Pydantic models for client and lifecycle configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from m2_lifecycle.config.constants import (
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
)


class ControlPlaneProfile(BaseModel):
    """A named control-plane connection profile."""

    name: str
    url: str = Field(description="Control plane base URL, e.g. https://m2.example.com")
    token: str | None = Field(default=None, description="Bearer API token")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class LifecycleSettings(BaseModel):
    """Default deadlines and polling cadence for lifecycle waits."""

    create_timeout: float = Field(default=DEFAULT_OPERATION_TIMEOUT, gt=0)
    update_timeout: float = Field(default=DEFAULT_OPERATION_TIMEOUT, gt=0)
    delete_timeout: float = Field(default=DEFAULT_OPERATION_TIMEOUT, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0)
    delay: float = Field(default=0.0, ge=0, description="Wait before the first poll")
    jitter: float = Field(
        default=0.0, ge=0, lt=1, description="Fractional jitter applied to poll_interval",
    )


class AppConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    profiles: dict[str, ControlPlaneProfile] = Field(default_factory=dict)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
