# ==============================================
# RunBudget
# ==============================================
#
# PURPOSE:
#   Enforce a per-call timeout and an overall wall-clock budget for
#   the external collaborator calls of one learning run.
#
# CLASS: RunBudget
# ----------------
#   - __init__(total_seconds: float, clock=time.monotonic)
#   - remaining() -> float
#   - expired -> bool
#   - call(fn, timeout=None, name="collaborator") -> result
#       Runs fn on a worker thread and waits at most
#       min(timeout, remaining budget). Raises BudgetExceededError
#       when the budget is already spent or the wait runs out.
#       Exceptions raised by fn propagate unchanged.
#
# FUNCTIONS:
# ----------
#   - recorded_call(budget, context, name, fn, timeout) -> result
#       Same as RunBudget.call, plus a CallRecord in the LearningContext.
#
#   A timed-out call cannot be killed; its worker thread finishes in
#   the background and its result is discarded.
#
# ==============================================

import concurrent.futures
import time
from typing import Any, Callable, Optional

from ..context import FAILED, OK, TIMEOUT, LearningContext
from ..exceptions import BudgetExceededError


class RunBudget:
    """
    Wall-clock budget shared by every collaborator call of one run.
    """

    def __init__(self, total_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.total_seconds = total_seconds
        self._clock = clock
        self._deadline = clock() + total_seconds

    def remaining(self) -> float:
        return max(0.0, self._deadline - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def call(self, fn: Callable[[], Any], timeout: Optional[float] = None,
             name: str = "collaborator") -> Any:
        """
        Run a collaborator call under the per-call timeout and the run budget.

        Args:
            fn: Zero-argument callable
            timeout: Per-call timeout in seconds (None = whatever budget remains)
            name: Used in error messages

        Returns:
            Whatever fn returns

        Raises:
            BudgetExceededError: Budget spent, or the call did not finish in time
        """
        remaining = self.remaining()
        if remaining <= 0:
            raise BudgetExceededError(f"Run budget of {self.total_seconds}s spent before {name}")

        wait = remaining if timeout is None else min(timeout, remaining)
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(fn)
            try:
                return future.result(timeout=wait)
            except concurrent.futures.TimeoutError:
                future.cancel()
                raise BudgetExceededError(f"{name} did not finish within {wait:.1f}s") from None
        finally:
            executor.shutdown(wait=False)


def recorded_call(
    budget: RunBudget,
    context: Optional[LearningContext],
    name: str,
    fn: Callable[[], Any],
    timeout: Optional[float] = None
) -> Any:
    """
    RunBudget.call that also logs the outcome in the caller's context.

    Failures are recorded and then re-raised for the caller to degrade on.
    """
    started = time.monotonic()
    try:
        result = budget.call(fn, timeout=timeout, name=name)
    except BudgetExceededError as exc:
        if context is not None:
            context.record(name, TIMEOUT, time.monotonic() - started, str(exc))
        raise
    except Exception as exc:
        if context is not None:
            context.record(name, FAILED, time.monotonic() - started,
                           f"{type(exc).__name__}: {exc}")
        raise

    if context is not None:
        context.record(name, OK, time.monotonic() - started, response=result)
    return result
