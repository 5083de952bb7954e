"""Status classification and the wait plan of each lifecycle operation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from m2_lifecycle.models.application import (
    ApplicationLifecycle,
    ApplicationVersionLifecycle,
)


class StatusClass(Enum):
    """What an observed status means for the wait in progress."""

    PENDING = "pending"
    TARGET = "target"
    FAILURE = "failure"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class WaitPlan:
    """Pending and target status sets for one lifecycle operation.

    An empty target set means success is the resource disappearing.
    """

    name: str
    pending: frozenset[str]
    target: frozenset[str]

    @classmethod
    def of(
        cls,
        name: str,
        pending: Iterable[str | Enum],
        target: Iterable[str | Enum],
    ) -> WaitPlan:
        return cls(name, frozenset(map(_token, pending)), frozenset(map(_token, target)))

    @property
    def expects_absence(self) -> bool:
        return not self.target

    def classify(self, status: str) -> StatusClass:
        if not status:
            return StatusClass.ABSENT
        if status in self.target:
            return StatusClass.TARGET
        if status in self.pending:
            return StatusClass.PENDING
        return StatusClass.FAILURE


def _token(status: str | Enum) -> str:
    return str(status.value) if isinstance(status, Enum) else str(status)


APPLICATION_CREATED = WaitPlan.of(
    "application_created",
    pending=[ApplicationLifecycle.CREATING],
    target=[ApplicationLifecycle.CREATED, ApplicationLifecycle.AVAILABLE],
)

APPLICATION_VERSION_AVAILABLE = WaitPlan.of(
    "application_version_available",
    pending=[ApplicationVersionLifecycle.CREATING],
    target=[ApplicationVersionLifecycle.AVAILABLE],
)

APPLICATION_DELETED = WaitPlan.of(
    "application_deleted",
    pending=[
        ApplicationLifecycle.DELETING,
        ApplicationLifecycle.DELETING_FROM_ENVIRONMENT,
    ],
    target=[],
)
