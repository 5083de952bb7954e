"""Typed exceptions for the control-plane client and the lifecycle engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from m2_lifecycle.lifecycle.waiter import WaitOutcome
    from m2_lifecycle.models.resource import ApplicationModel


class M2LifecycleError(Exception):
    """Base exception for m2-lifecycle.

    ``model`` is filled in by the orchestrator when the error interrupts an
    operation the control plane already accepted. It holds the best-known
    partial model, so callers can persist the identifier of a resource that
    exists remotely.
    """

    model: ApplicationModel | None = None


class ConfigurationError(M2LifecycleError):
    """Missing or invalid local configuration."""


class ControlPlaneConnectionError(M2LifecycleError):
    """Cannot reach the control plane (connect, timeout, bad URL)."""


class AuthenticationError(M2LifecycleError):
    """Authentication failed (401/403)."""


class NotFoundError(M2LifecycleError):
    """Resource not found (404)."""


class ConflictError(M2LifecycleError):
    """Resource conflict (409), including stale application versions."""


class ValidationError(M2LifecycleError):
    """Request rejected by the control plane as invalid (400/422)."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(f"Validation error: {detail}" if detail else "Validation error")


class ThrottlingError(M2LifecycleError):
    """Request throttled by the control plane (429)."""


class ControlPlaneAPIError(M2LifecycleError):
    """Generic API error from the control plane."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        super().__init__(f"Control plane returned {status_code}: {detail}")


class InvalidDefinitionError(M2LifecycleError, ValueError):
    """Application definition does not set exactly one source."""


class ReplacementRequiredError(M2LifecycleError):
    """Fields changed that can only be applied by replacing the application."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(
            f"Changing {', '.join(fields)} requires replacing the application"
        )


class MissingIdentifierError(M2LifecycleError, ValueError):
    """Operation needs an application_id the model does not carry."""


class VersionUnknownError(M2LifecycleError):
    """No application version has been observed yet for an update."""


class WaitError(M2LifecycleError):
    """A state wait ended without reaching a target status.

    ``outcome`` holds the last observed payload and status.
    """

    def __init__(self, message: str, outcome: WaitOutcome | None = None) -> None:
        super().__init__(message)
        self.outcome = outcome

    @property
    def last_payload(self) -> Any:
        return self.outcome.payload if self.outcome else None

    @property
    def last_status(self) -> str:
        return self.outcome.status if self.outcome else ""


class ResourceGoneError(WaitError):
    """The resource disappeared during a wait that expected it to exist."""


class UnexpectedStateError(WaitError):
    """The resource reported a status outside the pending and target sets."""

    def __init__(self, status: str, expected: list[str], outcome: WaitOutcome) -> None:
        self.status = status
        self.expected = expected
        self.reason = outcome.reason
        message = f"unexpected state '{status}', wanted target '{', '.join(expected)}'"
        if outcome.reason:
            message += f". last error: {outcome.reason}"
        super().__init__(message, outcome)


class WaitTimeoutError(WaitError):
    """The deadline passed while the resource was still pending."""

    def __init__(self, timeout: float, expected: list[str], outcome: WaitOutcome | None) -> None:
        self.timeout = timeout
        self.expected = expected
        last = outcome.status if outcome else ""
        super().__init__(
            f"timeout while waiting for state to become '{', '.join(expected)}'"
            f" (last state: '{last}', timeout: {timeout:g}s)",
            outcome,
        )


class WaitCancelledError(WaitError):
    """The caller cancelled the wait before it finished."""
