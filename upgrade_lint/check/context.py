"""
Run context: cooperative cancellation for a diagnostic run.

The executor consults the context before every check. Once the context
is done (explicitly canceled, or its deadline passed) the run stops and
returns what it has. Nothing is interrupted mid-check; long-running
check bodies may poll ``check_context_error`` themselves.

Usage:

    ctx = CheckContext.with_timeout(120)
    executions = executor.execute_all(ctx, target)
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from upgrade_lint.check.errors import (
    CheckCanceledError,
    CheckContextError,
    CheckTimeoutError,
)


class CheckContext:
    """Cancellation signal plus optional deadline.

    Args:
        deadline: Absolute deadline on the ``clock`` timeline, or None.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        deadline: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._deadline = deadline
        self._clock = clock
        self._canceled = threading.Event()

    @classmethod
    def background(cls) -> CheckContext:
        """A context that is never done unless canceled."""
        return cls()

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> CheckContext:
        return cls(deadline=clock() + seconds, clock=clock)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        """Request the run to stop at the next check boundary. Idempotent."""
        self._canceled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def done(self) -> bool:
        return self.err() is not None

    def err(self) -> CheckContextError | None:
        """Why the context is done, or None while it is still live."""
        if self._canceled.is_set():
            return CheckCanceledError()
        if self._deadline is not None and self._clock() >= self._deadline:
            return CheckTimeoutError()
        return None

    def __repr__(self) -> str:
        state = "done" if self.done() else "live"
        return f"<CheckContext {state} deadline={self._deadline!r}>"


def check_context_error(ctx: CheckContext) -> CheckContextError | None:
    """Return an error if ``ctx`` is done, None otherwise.

    Check bodies call this before long operations to honor run-level
    timeouts:

        if (err := check_context_error(ctx)) is not None:
            raise err
    """
    return ctx.err()
