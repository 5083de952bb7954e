"""Asynchronous lifecycle engine: refreshers, the state waiter, and the orchestrator."""

from m2_lifecycle.lifecycle.resource import ApplicationResource
from m2_lifecycle.lifecycle.states import (
    APPLICATION_CREATED,
    APPLICATION_DELETED,
    APPLICATION_VERSION_AVAILABLE,
    StatusClass,
    WaitPlan,
)
from m2_lifecycle.lifecycle.status import (
    Refresh,
    application_status,
    application_version_status,
)
from m2_lifecycle.lifecycle.waiter import StateWaiter, WaitOutcome, wait_for_state

__all__ = [
    "APPLICATION_CREATED",
    "APPLICATION_DELETED",
    "APPLICATION_VERSION_AVAILABLE",
    "ApplicationResource",
    "Refresh",
    "StateWaiter",
    "StatusClass",
    "WaitOutcome",
    "WaitPlan",
    "application_status",
    "application_version_status",
    "wait_for_state",
]
