"""State waiter: poll a refresher until the resource settles.

The waiter classifies each observed status against a :class:`WaitPlan`:

- target status: return the outcome;
- pending status: sleep ``poll_interval`` and poll again;
- empty status (resource gone): success when the plan's target set is empty,
  otherwise :class:`ResourceGoneError`;
- anything else: :class:`UnexpectedStateError`, without polling again.

Refresher exceptions propagate unchanged. Sleeping is done with
``threading.Event.wait`` on the caller's cancel event, so cancellation wakes
the waiter immediately instead of at the next poll.
"""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass
from typing import Any

import structlog

from m2_lifecycle.client.errors import (
    ResourceGoneError,
    UnexpectedStateError,
    WaitCancelledError,
    WaitTimeoutError,
)
from m2_lifecycle.config.constants import DEFAULT_POLL_INTERVAL
from m2_lifecycle.lifecycle.states import StatusClass, WaitPlan
from m2_lifecycle.lifecycle.status import RefreshFunc, status_reason

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class WaitOutcome:
    """Last observed payload, its status, and the status reason it carried."""

    payload: Any
    status: str
    reason: str = ""


@dataclass
class StateWaiter:
    refresh: RefreshFunc
    plan: WaitPlan
    timeout: float
    poll_interval: float = DEFAULT_POLL_INTERVAL
    delay: float = 0.0
    jitter: float = 0.0

    def wait(self, cancel: threading.Event | None = None) -> WaitOutcome:
        """Block until the plan's target is reached or the wait fails."""
        cancel = cancel or threading.Event()
        log = logger.bind(plan=self.plan.name, timeout=self.timeout)
        deadline = time.monotonic() + self.timeout
        expected = sorted(self.plan.target)
        last: WaitOutcome | None = None
        polls = 0

        if self.delay:
            self._sleep(min(self.delay, self.timeout), cancel, last)

        while True:
            if cancel.is_set():
                raise WaitCancelledError(f"wait for {self.plan.name} cancelled", last)

            payload, status = self.refresh()
            polls += 1
            last = WaitOutcome(payload, status, status_reason(payload))
            kind = self.plan.classify(status)
            log.debug("wait_polled", status=status, classification=kind.value, polls=polls)

            if kind is StatusClass.TARGET:
                return last
            if kind is StatusClass.ABSENT:
                if self.plan.expects_absence:
                    return last
                log.warning("wait_resource_gone", polls=polls)
                raise ResourceGoneError(
                    f"resource not found while waiting for {self.plan.name}", last,
                )
            if kind is StatusClass.FAILURE:
                log.warning("wait_unexpected_state", status=status, reason=last.reason)
                raise UnexpectedStateError(status, expected, last)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                log.warning("wait_timed_out", status=status, polls=polls)
                raise WaitTimeoutError(self.timeout, expected, last)
            self._sleep(min(self._interval(), remaining), cancel, last)

    def _interval(self) -> float:
        if not self.jitter:
            return self.poll_interval
        return self.poll_interval * random.uniform(1 - self.jitter, 1 + self.jitter)

    def _sleep(
        self, seconds: float, cancel: threading.Event, last: WaitOutcome | None,
    ) -> None:
        if cancel.wait(seconds):
            raise WaitCancelledError(f"wait for {self.plan.name} cancelled", last)


def wait_for_state(
    refresh: RefreshFunc,
    plan: WaitPlan,
    *,
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    delay: float = 0.0,
    jitter: float = 0.0,
    cancel: threading.Event | None = None,
) -> WaitOutcome:
    """Convenience wrapper around :meth:`StateWaiter.wait`."""
    waiter = StateWaiter(refresh, plan, timeout, poll_interval, delay, jitter)
    return waiter.wait(cancel)
