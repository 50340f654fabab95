"""
Condition-convergence waits for asynchronously rendering UIs.

Browser pages built on AJAX widgets rarely react to the first click in a
predictable amount of time: JavaScript handlers may not be attached yet,
a modal may still be animating in, or a DataTables "Processing..."
indicator may flash for a few milliseconds (or not at all when the data
is cached).  This module turns those situations into three small,
library-agnostic primitives:

  * :func:`converge` -- perform an action and poll for its effect,
    repeating the action a bounded number of times.
  * :func:`probe_transient` -- tolerate a transient signal that may or may
    not appear, failing only when it appears and never clears.
  * :func:`poll_until` -- poll a single condition against a deadline.

The callers supply the "act" and "observe" capabilities as plain
callables, so nothing here imports Playwright.  Page objects adapt
locators into callables (``locator.click`` / ``locator.is_visible``).

Key Concepts Demonstrated:
- Higher-order functions as the seam between an algorithm and a library
- Typed failures that separate "no effect" from "flaky" convergence
- Injectable clock/sleep so timing logic is unit-testable without waits
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

Action = Callable[[], object]
Condition = Callable[[], bool]
Clock = Callable[[], float]
Sleep = Callable[[float], None]


# =====================================================================
# Outcomes
# =====================================================================


class WaitOutcome(str, Enum):
    """Terminal result of a single waiter invocation."""

    CONVERGED = "converged"
    TIMED_OUT = "timed-out"
    ACTION_FAILED = "action-failed"


class TransientState(str, Enum):
    """What happened to a transient signal while it was being watched."""

    OBSERVED_THEN_CLEARED = "observed-then-cleared"
    NEVER_OBSERVED = "never-observed"
    OBSERVED_AND_STUCK = "observed-and-stuck"


@dataclass(frozen=True)
class WaitAttemptOutcome:
    """
    Result of one :func:`converge` call.

    Attributes:
        outcome: Terminal state of the wait.
        attempts: Number of actions performed (1-indexed); 0 when the
            condition already held before the first action.
        elapsed: Wall-clock seconds spent, including backoff delays.
        flapped: True when the condition was seen true at some point but
            did not stay true.
    """

    outcome: WaitOutcome
    attempts: int
    elapsed: float
    flapped: bool = False

    @property
    def converged(self) -> bool:
        return self.outcome is WaitOutcome.CONVERGED


# =====================================================================
# Errors
# =====================================================================


class ConvergenceError(Exception):
    """Base class for waiter failures."""

    outcome: WaitOutcome = WaitOutcome.TIMED_OUT

    def __init__(self, message: str, *, description: str, attempts: int, elapsed: float):
        super().__init__(message)
        self.description = description
        self.attempts = attempts
        self.elapsed = elapsed

    def as_outcome(self) -> WaitAttemptOutcome:
        """Convert the failure into a :class:`WaitAttemptOutcome` record."""
        return WaitAttemptOutcome(
            outcome=self.outcome,
            attempts=self.attempts,
            elapsed=self.elapsed,
            flapped=getattr(self, "flapped", False),
        )


class ActionFailure(ConvergenceError):
    """
    The supplied action raised.

    The original exception is chained as ``__cause__``.  The waiter never
    retries a failing action; wrap the action yourself if that is wanted.
    """

    outcome = WaitOutcome.ACTION_FAILED

    def __init__(self, *, description: str, attempt: int, elapsed: float):
        super().__init__(
            f"Action for '{description}' failed on attempt {attempt} "
            f"after {elapsed:.2f}s",
            description=description,
            attempts=attempt,
            elapsed=elapsed,
        )

    @property
    def attempt(self) -> int:
        return self.attempts


class ConvergenceTimeoutError(ConvergenceError):
    """
    The condition never became (and stayed) true within the budget.

    ``flapped`` distinguishes the two failure shapes:

    - ``False``: the action never had a visible effect.
    - ``True``: the condition turned true and then reverted.

    ``reason`` overrides the text shown in the message; when omitted it is
    derived from ``flapped`` and whether any action ran.
    """

    outcome = WaitOutcome.TIMED_OUT

    def __init__(
        self,
        *,
        description: str,
        attempts: int,
        elapsed: float,
        flapped: bool = False,
        reason: str | None = None,
    ):
        if reason is None:
            if flapped:
                reason = "condition flipped back"
            elif attempts == 0:
                reason = "condition never held"
            else:
                reason = "action had no effect"
        super().__init__(
            f"'{description}' did not converge after {attempts} attempt(s) "
            f"in {elapsed:.2f}s ({reason})",
            description=description,
            attempts=attempts,
            elapsed=elapsed,
        )
        self.flapped = flapped
        self.reason = reason


class TransientStuckError(ConvergenceError):
    """A transient signal appeared and did not clear in time."""

    def __init__(self, *, description: str, elapsed: float):
        super().__init__(
            f"'{description}' appeared but was still present after {elapsed:.2f}s",
            description=description,
            attempts=1,
            elapsed=elapsed,
        )

    @property
    def state(self) -> TransientState:
        return TransientState.OBSERVED_AND_STUCK


# =====================================================================
# Internal helpers
# =====================================================================


def _validate_durations(**durations: float | None) -> None:
    for name, value in durations.items():
        if value is not None and value < 0:
            raise ValueError(f"{name} must be non-negative, got {value!r}")


def _holds(
    condition: Condition,
    settle: float,
    clock: Clock,
    sleep: Sleep,
    deadline: float | None = None,
) -> bool:
    """
    Return True when a condition that just held is still true after ``settle``.

    The settle pause never runs past ``deadline``; the condition is
    re-checked even when no time is left.
    """
    if settle <= 0:
        return True
    pause = settle
    if deadline is not None:
        pause = min(pause, max(deadline - clock(), 0.0))
    if pause > 0:
        sleep(pause)
    return bool(condition())


def _watch_window(
    condition: Condition,
    window_end: float,
    poll_interval: float,
    settle: float,
    clock: Clock,
    sleep: Sleep,
    deadline: float | None = None,
) -> tuple[bool, bool]:
    """
    Poll ``condition`` until it holds or ``window_end`` passes.

    The condition is always checked at least once, even for a zero-length
    window.

    Returns:
        ``(converged, flapped)``.
    """
    flapped = False
    while True:
        if condition():
            if _holds(condition, settle, clock, sleep, deadline):
                return True, flapped
            flapped = True
        now = clock()
        if now >= window_end:
            return False, flapped
        sleep(min(poll_interval, window_end - now))


# =====================================================================
# Public API
# =====================================================================


def converge(
    action: Action,
    condition: Condition,
    *,
    max_attempts: int = 3,
    per_attempt_timeout: float = 2.0,
    total_timeout: float | None = None,
    poll_interval: float = 0.1,
    backoff: float = 0.5,
    settle: float = 0.0,
    description: str = "condition",
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> WaitAttemptOutcome:
    """
    Repeat ``action`` until ``condition`` converges.

    The condition is checked before anything else, so a state that already
    holds (e.g. the modal is already open) costs zero actions.  Otherwise
    each attempt performs the action once and watches the condition for up
    to ``per_attempt_timeout`` seconds.  Failed attempts are separated by a
    ``backoff`` pause.

    Args:
        action: Side-effecting callable, invoked at most ``max_attempts``
            times.  Must be safe to repeat.
        condition: Zero-argument predicate observing the desired state.
        max_attempts: Upper bound on action invocations (>= 1).
        per_attempt_timeout: Seconds to watch the condition after each action.
        total_timeout: Optional cap in seconds across all attempts.
        poll_interval: Seconds between condition checks.
        backoff: Seconds to pause between a failed attempt and the next one.
        settle: If positive, the condition must still hold this many
            seconds after first being observed.
        description: Human-readable name used in logs and errors.
        clock: Monotonic time source.
        sleep: Blocking sleep function.

    Returns:
        A converged :class:`WaitAttemptOutcome`.

    Raises:
        ValueError: If ``max_attempts`` < 1 or a duration is negative.
        ActionFailure: If ``action`` raises; no further attempts are made.
        ConvergenceTimeoutError: If attempts or ``total_timeout`` run out.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts!r}")
    _validate_durations(
        per_attempt_timeout=per_attempt_timeout,
        total_timeout=total_timeout,
        poll_interval=poll_interval,
        backoff=backoff,
        settle=settle,
    )

    started = clock()
    deadline = started + total_timeout if total_timeout is not None else None
    flapped = False

    if condition():
        if _holds(condition, settle, clock, sleep, deadline):
            elapsed = clock() - started
            logger.debug("'%s' already satisfied, no action needed", description)
            return WaitAttemptOutcome(WaitOutcome.CONVERGED, attempts=0, elapsed=elapsed)
        flapped = True

    attempt = 0
    while attempt < max_attempts:
        if deadline is not None and clock() >= deadline:
            break
        attempt += 1
        logger.debug("'%s': attempt %d/%d", description, attempt, max_attempts)

        try:
            action()
        except Exception as exc:
            elapsed = clock() - started
            logger.error("'%s': action raised on attempt %d: %s", description, attempt, exc)
            raise ActionFailure(
                description=description, attempt=attempt, elapsed=elapsed
            ) from exc

        window_end = clock() + per_attempt_timeout
        if deadline is not None:
            window_end = min(window_end, deadline)

        converged, window_flapped = _watch_window(
            condition, window_end, poll_interval, settle, clock, sleep, deadline
        )
        flapped = flapped or window_flapped
        if converged:
            elapsed = clock() - started
            logger.debug(
                "'%s' converged on attempt %d after %.2fs", description, attempt, elapsed
            )
            return WaitAttemptOutcome(
                WaitOutcome.CONVERGED, attempts=attempt, elapsed=elapsed, flapped=flapped
            )

        if attempt < max_attempts:
            logger.info(
                "Attempt %d failed to satisfy '%s'. Retrying...", attempt, description
            )
            pause = backoff
            if deadline is not None:
                pause = min(pause, max(deadline - clock(), 0.0))
            if pause > 0:
                sleep(pause)

    elapsed = clock() - started
    logger.warning(
        "'%s' did not converge after %d attempt(s) in %.2fs", description, attempt, elapsed
    )
    raise ConvergenceTimeoutError(
        description=description, attempts=attempt, elapsed=elapsed, flapped=flapped
    )


def probe_transient(
    is_present: Condition,
    *,
    appear_timeout: float = 2.0,
    clear_timeout: float = 30.0,
    poll_interval: float = 0.1,
    description: str = "transient signal",
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> TransientState:
    """
    Wait out a signal that may flash briefly, or never show up at all.

    Typical use is a loading indicator: if data is cached the indicator
    never renders, which is fine; if it renders it must go away again.

    Args:
        is_present: Predicate returning True while the signal is showing.
        appear_timeout: Seconds to wait for the signal to show up.
        clear_timeout: Seconds to wait for a shown signal to clear.
        poll_interval: Seconds between checks.
        description: Name used in logs and errors.
        clock: Monotonic time source.
        sleep: Blocking sleep function.

    Returns:
        ``NEVER_OBSERVED`` or ``OBSERVED_THEN_CLEARED``.

    Raises:
        TransientStuckError: If the signal appeared and did not clear.
    """
    _validate_durations(
        appear_timeout=appear_timeout, clear_timeout=clear_timeout, poll_interval=poll_interval
    )
    started = clock()
    appear_deadline = started + appear_timeout

    while not is_present():
        now = clock()
        if now >= appear_deadline:
            logger.debug("'%s' never appeared, assuming safe to proceed", description)
            return TransientState.NEVER_OBSERVED
        sleep(min(poll_interval, appear_deadline - now))

    logger.info("'%s' detected, waiting for it to clear...", description)
    clear_deadline = clock() + clear_timeout
    while is_present():
        now = clock()
        if now >= clear_deadline:
            raise TransientStuckError(description=description, elapsed=now - started)
        sleep(min(poll_interval, clear_deadline - now))

    logger.info("'%s' cleared after %.2fs", description, clock() - started)
    return TransientState.OBSERVED_THEN_CLEARED


def poll_until(
    condition: Condition,
    *,
    timeout: float,
    interval: float = 0.5,
    description: str = "condition",
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> float:
    """
    Poll a single condition until it holds.

    Args:
        condition: Zero-argument predicate.
        timeout: Seconds before giving up.
        interval: Seconds between polls.
        description: Name used in logs and errors.
        clock: Monotonic time source.
        sleep: Blocking sleep function.

    Returns:
        Seconds elapsed until the condition held.

    Raises:
        ConvergenceTimeoutError: With ``attempts`` set to the number of polls.
    """
    _validate_durations(timeout=timeout, interval=interval)
    started = clock()
    deadline = started + timeout
    polls = 0
    while True:
        polls += 1
        if condition():
            return clock() - started
        now = clock()
        if now >= deadline:
            raise ConvergenceTimeoutError(
                description=description,
                attempts=polls,
                elapsed=now - started,
                reason="condition never held",
            )
        sleep(min(interval, deadline - now))
