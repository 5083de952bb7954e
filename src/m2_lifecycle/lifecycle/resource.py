"""Lifecycle orchestrator for applications.

Each operation issues its mutating call, waits for the control plane to
settle, and reconciles what it observed into a new :class:`ApplicationModel`.
Input models are never modified.

When a wait fails after the control plane has accepted a call, the raised
:class:`M2LifecycleError` carries ``model``, whether the waiter gave up or a
status lookup failed. ``model`` is the input model plus everything
learned so far (at minimum the application identifier). Callers persist it so a
failed create is not orphaned remotely.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import structlog

from m2_lifecycle.client.applications import ApplicationAPI
from m2_lifecycle.client.errors import (
    InvalidDefinitionError,
    M2LifecycleError,
    MissingIdentifierError,
    NotFoundError,
    ReplacementRequiredError,
    VersionUnknownError,
    WaitError,
)
from m2_lifecycle.config.models import LifecycleSettings
from m2_lifecycle.lifecycle.policy import (
    build_update_request,
    new_client_token,
    replacement_fields,
)
from m2_lifecycle.lifecycle.states import (
    APPLICATION_CREATED,
    APPLICATION_DELETED,
    APPLICATION_VERSION_AVAILABLE,
    WaitPlan,
)
from m2_lifecycle.lifecycle.status import (
    RefreshFunc,
    application_status,
    application_version_status,
)
from m2_lifecycle.lifecycle.waiter import StateWaiter, WaitOutcome
from m2_lifecycle.models.application import (
    ApplicationSummary,
    CreateApplicationRequest,
    EngineType,
)
from m2_lifecycle.models.definition import ContentDefinition
from m2_lifecycle.models.resource import ApplicationModel

logger = structlog.get_logger()


class ApplicationResource:
    """Create, read, update and delete applications, waiting on each change."""

    def __init__(
        self,
        api: ApplicationAPI,
        settings: LifecycleSettings | None = None,
        *,
        token_factory: Callable[[], str] = new_client_token,
    ) -> None:
        self.api = api
        self.settings = settings or LifecycleSettings()
        self.token_factory = token_factory

    def create(
        self, model: ApplicationModel, *, cancel: threading.Event | None = None,
    ) -> ApplicationModel:
        if model.definition is None:
            raise InvalidDefinitionError(
                "definition is required: set exactly one of 'content' or 's3_location'"
            )
        request = CreateApplicationRequest(
            client_token=self.token_factory(),
            name=model.name,
            engine_type=model.engine_type.value,
            definition=model.definition.to_api(),
            description=model.description,
            kms_key_id=model.kms_key_id,
            role_arn=model.role_arn,
            tags=model.tags or None,
        )
        log = logger.bind(application_name=model.name)
        log.info("application_create_started")
        output = self.api.create_application(request)

        application_id = output.application_id
        created = model.model_copy(
            update={"application_id": application_id, "arn": output.application_arn},
        )
        log = log.bind(application_id=application_id)
        try:
            outcome = self._wait(
                application_status(self.api, application_id),
                APPLICATION_CREATED,
                self._timeout(model, "create"),
                cancel,
            )
        except M2LifecycleError as exc:
            exc.model = _taint(created, exc)
            log.error("application_create_wait_failed", error=str(exc))
            raise

        result = _flatten_summary(created, outcome.payload)
        log.info(
            "application_created", version=result.current_version, status=result.status,
        )
        return result

    def read(self, model: ApplicationModel) -> ApplicationModel | None:
        """Refresh ``model`` from the control plane; ``None`` if the application is gone."""
        application_id = _require_id(model)
        log = logger.bind(application_id=application_id)
        try:
            app = self.api.get_application(application_id)
        except NotFoundError:
            log.warning("application_not_found")
            return None

        if app.latest_version is None:
            raise VersionUnknownError(
                f"application {application_id} reports no latest version"
            )
        version = app.latest_version.application_version
        # Definition content lives on the version, not the summary
        detail = self.api.get_application_version(application_id, version)

        result = _flatten_summary(model, app)
        update: dict[str, Any] = {"current_version": detail.application_version}
        if detail.definition_content:
            update["definition"] = ContentDefinition(content=detail.definition_content)
        log.debug("application_read", version=detail.application_version, status=app.status)
        return result.model_copy(update=update)

    def update(
        self,
        old: ApplicationModel,
        new: ApplicationModel,
        *,
        cancel: threading.Event | None = None,
    ) -> ApplicationModel:
        replaced = replacement_fields(old, new)
        if replaced:
            raise ReplacementRequiredError(replaced)
        application_id = _require_id(old)
        log = logger.bind(application_id=application_id)

        request = build_update_request(old, new)
        if request is None:
            log.debug("application_update_skipped")
            return old

        log.info(
            "application_update_started",
            changed=request.changed,
            current_version=request.current_application_version,
        )
        version = self.api.update_application(application_id, request)
        if version <= request.current_application_version:
            log.warning(
                "application_version_not_advanced",
                previous=request.current_application_version,
                returned=version,
            )
        log = log.bind(version=version)

        try:
            self._wait(
                application_version_status(self.api, application_id, version),
                APPLICATION_VERSION_AVAILABLE,
                self._timeout(new, "update"),
                cancel,
            )
        except M2LifecycleError as exc:
            # The new version exists remotely; the next update must use it
            exc.model = old.model_copy(update={"current_version": version})
            log.error("application_update_wait_failed", error=str(exc))
            raise

        log.info("application_updated")
        return new.model_copy(
            update={
                "application_id": application_id,
                "arn": old.arn,
                "status": old.status,
                "current_version": version,
            },
        )

    def delete(
        self, model: ApplicationModel, *, cancel: threading.Event | None = None,
    ) -> None:
        application_id = _require_id(model)
        log = logger.bind(application_id=application_id)
        log.info("application_delete_started")
        try:
            self.api.delete_application(application_id)
        except NotFoundError:
            log.info("application_delete_not_found")
            return

        try:
            self._wait(
                application_status(self.api, application_id),
                APPLICATION_DELETED,
                self._timeout(model, "delete"),
                cancel,
            )
        except M2LifecycleError as exc:
            exc.model = model
            log.error("application_delete_wait_failed", error=str(exc))
            raise
        log.info("application_deleted")

    def _timeout(self, model: ApplicationModel, operation: str) -> float:
        configured = getattr(model.timeouts, operation)
        if configured is not None:
            return float(configured)
        return float(getattr(self.settings, f"{operation}_timeout"))

    def _wait(
        self,
        refresh: RefreshFunc,
        plan: WaitPlan,
        timeout: float,
        cancel: threading.Event | None,
    ) -> WaitOutcome:
        waiter = StateWaiter(
            refresh,
            plan,
            timeout,
            poll_interval=self.settings.poll_interval,
            delay=self.settings.delay,
            jitter=self.settings.jitter,
        )
        return waiter.wait(cancel)


def _require_id(model: ApplicationModel) -> str:
    if not model.application_id:
        raise MissingIdentifierError(f"application '{model.name}' has no application_id")
    return model.application_id


def _flatten_summary(model: ApplicationModel, app: ApplicationSummary) -> ApplicationModel:
    update: dict[str, Any] = {
        "application_id": app.application_id,
        "arn": app.application_arn or model.arn,
        "status": app.status or None,
        "description": app.description,
        "kms_key_id": app.kms_key_id,
        "role_arn": app.role_arn,
    }
    if app.tags is not None:
        update["tags"] = dict(app.tags)
    if app.name:
        update["name"] = app.name
    if app.engine_type:
        update["engine_type"] = EngineType(app.engine_type)
    if app.latest_version is not None:
        update["current_version"] = app.latest_version.application_version
    return model.model_copy(update=update)


def _taint(model: ApplicationModel, exc: M2LifecycleError) -> ApplicationModel:
    outcome = exc.outcome if isinstance(exc, WaitError) else None
    if outcome is not None and isinstance(outcome.payload, ApplicationSummary):
        return _flatten_summary(model, outcome.payload)
    return model
