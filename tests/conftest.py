"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from m2_lifecycle.client.errors import ConflictError, NotFoundError
from m2_lifecycle.config.manager import ConfigManager
from m2_lifecycle.config.models import ControlPlaneProfile, LifecycleSettings
from m2_lifecycle.models.application import (
    ApplicationSummary,
    ApplicationVersion,
    CreateApplicationRequest,
    CreateApplicationResponse,
    LatestVersion,
    UpdateApplicationRequest,
)
from m2_lifecycle.models.resource import ApplicationModel

APP_ID = "y3ca6bhaife2bcvxar3lpivfou"
APP_ARN = f"arn:aws:m2:us-west-2:123456789012:app/{APP_ID}"
DEFINITION = '{"template-version": "2.0", "source-locations": []}'

PROFILE_TOML = """\
default_profile = "test-cp"

[profiles.test-cp]
url = "https://m2.localhost:8443"
token = "test-token"

[profiles.staging]
url = "https://m2-staging.localhost:8443"
verify_ssl = false
"""

# Sentinel status: the fake raises NotFoundError instead of returning a payload
GONE = None


class FakeApplicationAPI:
    """In-memory ApplicationAPI.

    ``app_statuses`` and ``version_statuses`` are consumed one per lookup; the
    last entry repeats. ``GONE`` makes the lookup raise NotFoundError.
    ``errors`` maps a method name to an exception it raises.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.requests: list[Any] = []
        self.errors: dict[str, Exception] = {}
        self.app_statuses: list[str | None] = ["Available"]
        self.version_statuses: list[str | None] = ["Available"]
        self.status_reason: str | None = None
        self.name = "APP1"
        self.engine_type = "microfocus"
        self.description: str | None = None
        self.definition_content = DEFINITION
        self.version = 1

    @property
    def mutating_calls(self) -> list[str]:
        return [c for c in self.calls if not c.startswith("get_")]

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        if method in self.errors:
            raise self.errors[method]

    @staticmethod
    def _next(queue: list[str | None]) -> str | None:
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def create_application(self, request: CreateApplicationRequest) -> CreateApplicationResponse:
        self._enter("create_application")
        self.requests.append(request)
        self.name = request.name
        self.engine_type = request.engine_type
        self.description = request.description
        self.definition_content = request.definition.get("content", DEFINITION)
        return CreateApplicationResponse(
            application_id=APP_ID, application_arn=APP_ARN, application_version=1,
        )

    def get_application(self, application_id: str) -> ApplicationSummary:
        self._enter("get_application")
        status = self._next(self.app_statuses)
        if status is GONE:
            raise NotFoundError(f"Not found: application {application_id}")
        return ApplicationSummary(
            application_id=application_id,
            application_arn=APP_ARN,
            name=self.name,
            engine_type=self.engine_type,
            description=self.description,
            status=status,
            status_reason=self.status_reason,
            latest_version=LatestVersion(application_version=self.version, status="Available"),
        )

    def get_application_version(self, application_id: str, version: int) -> ApplicationVersion:
        self._enter("get_application_version")
        status = self._next(self.version_statuses)
        if status is GONE:
            raise NotFoundError(f"Not found: version {version}")
        return ApplicationVersion(
            application_version=version,
            name=self.name,
            description=self.description,
            definition_content=self.definition_content,
            status=status,
            status_reason=self.status_reason,
        )

    def update_application(self, application_id: str, request: UpdateApplicationRequest) -> int:
        self._enter("update_application")
        self.requests.append(request)
        if request.current_application_version != self.version:
            raise ConflictError(
                f"Conflict: current version is {self.version},"
                f" got {request.current_application_version}"
            )
        if request.description is not None:
            self.description = request.description
        if request.definition is not None:
            self.definition_content = request.definition.get("content", DEFINITION)
        self.version += 1
        return self.version

    def delete_application(self, application_id: str) -> None:
        self._enter("delete_application")


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def configured_manager(tmp_config: Path) -> ConfigManager:
    """ConfigManager over a config file whose default profile is test-cp."""
    tmp_config.write_text(PROFILE_TOML)
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> ControlPlaneProfile:
    """Return a sample control-plane profile for testing."""
    return ControlPlaneProfile(
        name="test-cp",
        url="https://m2.localhost:8443",
        token="test-token",
    )


@pytest.fixture
def fake_api() -> FakeApplicationAPI:
    return FakeApplicationAPI()


@pytest.fixture
def fast_settings() -> LifecycleSettings:
    """Lifecycle settings that poll every millisecond."""
    return LifecycleSettings(
        create_timeout=5.0,
        update_timeout=5.0,
        delete_timeout=5.0,
        poll_interval=0.001,
    )


@pytest.fixture
def app_model() -> ApplicationModel:
    """A desired application that has not been created yet."""
    return ApplicationModel(
        name="APP1",
        engine_type="microfocus",
        description="payroll batch",
        definition={"content": DEFINITION},
    )


@pytest.fixture
def mock_application() -> dict:
    """Sample GetApplication response body."""
    return {
        "applicationId": APP_ID,
        "applicationArn": APP_ARN,
        "name": "APP1",
        "description": "payroll batch",
        "engineType": "microfocus",
        "status": "Available",
        "creationTime": 1700000000.0,
        "latestVersion": {
            "applicationVersion": 1,
            "status": "Available",
            "creationTime": 1700000000.0,
        },
        "tags": {"team": "mainframe"},
    }


@pytest.fixture
def mock_application_version() -> dict:
    """Sample GetApplicationVersion response body."""
    return {
        "applicationVersion": 1,
        "name": "APP1",
        "description": "payroll batch",
        "definitionContent": DEFINITION,
        "status": "Available",
        "creationTime": 1700000000.0,
    }
