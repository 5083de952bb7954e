"""Tests for the exception hierarchy."""

from __future__ import annotations

from m2_lifecycle.client.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ControlPlaneAPIError,
    ControlPlaneConnectionError,
    InvalidDefinitionError,
    M2LifecycleError,
    MissingIdentifierError,
    NotFoundError,
    ReplacementRequiredError,
    ResourceGoneError,
    ThrottlingError,
    UnexpectedStateError,
    ValidationError,
    WaitCancelledError,
    WaitError,
    WaitTimeoutError,
)
from m2_lifecycle.lifecycle.waiter import WaitOutcome


class TestExceptionHierarchy:
    def test_base_error(self):
        exc = M2LifecycleError("test")
        assert str(exc) == "test"

    def test_transport_errors(self):
        for cls in (
            ControlPlaneConnectionError,
            AuthenticationError,
            NotFoundError,
            ConflictError,
            ThrottlingError,
            ConfigurationError,
        ):
            assert issubclass(cls, M2LifecycleError)

    def test_validation_error(self):
        exc = ValidationError("name too long")
        assert isinstance(exc, M2LifecycleError)
        assert "name too long" in str(exc)

    def test_validation_error_empty(self):
        exc = ValidationError()
        assert "Validation error" in str(exc)

    def test_api_error(self):
        exc = ControlPlaneAPIError(500, "server error")
        assert exc.status_code == 500
        assert "500" in str(exc)
        assert "server error" in str(exc)

    def test_invalid_definition_is_value_error(self):
        exc = InvalidDefinitionError("both set")
        assert isinstance(exc, ValueError)
        assert isinstance(exc, M2LifecycleError)

    def test_missing_identifier_is_value_error(self):
        exc = MissingIdentifierError("no application_id")
        assert isinstance(exc, ValueError)
        assert isinstance(exc, M2LifecycleError)

    def test_model_defaults_to_none(self):
        exc = ThrottlingError("Throttled: slow down")
        assert exc.model is None
        exc.model = "partial"
        assert ThrottlingError("again").model is None

    def test_replacement_required_lists_fields(self):
        exc = ReplacementRequiredError(["name", "engine_type"])
        assert exc.fields == ["name", "engine_type"]
        assert "name, engine_type" in str(exc)


class TestWaitErrors:
    def test_wait_errors_share_base(self):
        for cls in (ResourceGoneError, UnexpectedStateError, WaitTimeoutError, WaitCancelledError):
            assert issubclass(cls, WaitError)

    def test_timeout_is_not_cancelled(self):
        assert not issubclass(WaitTimeoutError, WaitCancelledError)
        assert not issubclass(WaitCancelledError, WaitTimeoutError)

    def test_unexpected_state_embeds_reason(self):
        outcome = WaitOutcome({"id": "x"}, "Failed", "S3 object not found")
        exc = UnexpectedStateError("Failed", ["Available", "Created"], outcome)
        assert exc.status == "Failed"
        assert exc.reason == "S3 object not found"
        assert "unexpected state 'Failed'" in str(exc)
        assert "Available, Created" in str(exc)
        assert "S3 object not found" in str(exc)

    def test_unexpected_state_without_reason(self):
        exc = UnexpectedStateError("Stopped", ["Available"], WaitOutcome(None, "Stopped"))
        assert "last error" not in str(exc)

    def test_timeout_carries_last_outcome(self):
        outcome = WaitOutcome({"id": "x"}, "Creating")
        exc = WaitTimeoutError(0.5, ["Available"], outcome)
        assert exc.timeout == 0.5
        assert exc.last_status == "Creating"
        assert exc.last_payload == {"id": "x"}
        assert "last state: 'Creating'" in str(exc)

    def test_timeout_without_outcome(self):
        exc = WaitTimeoutError(1, ["Available"], None)
        assert exc.last_payload is None
        assert exc.last_status == ""

    def test_model_is_unset_until_orchestrator_fills_it(self):
        assert WaitCancelledError("cancelled").model is None
