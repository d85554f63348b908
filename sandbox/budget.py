"""
budget.py — Execution budget for user code
===========================================
User code runs synchronously in the caller's thread, so a runaway loop
would hang the request.  ExecutionBudget installs a trace hook for the
duration of one run and counts executed lines of the user module.  When
the line count or the wall-clock allowance runs out it raises
BudgetExceeded inside the user code.

    with ExecutionBudget(max_steps=100_000, max_seconds=2.0) as budget:
        traverse(...)

Only frames compiled from the sandbox filename are counted; the host
callbacks (visit, get_neighbors, log) run untraced.

BudgetExceeded derives from BaseException so `except Exception` in user
code cannot swallow it (bare `except:` is refused at compile time).
"""

import sys
import time
from typing import Callable, Optional

from sandbox.policy import FILENAME


DEFAULT_STEP_BUDGET = 200_000    # executed user lines per run
DEFAULT_TIME_BUDGET = 2.0        # seconds per run


class BudgetExceeded(BaseException):
    """Raised inside user code when it runs out of steps or time."""


class ExecutionBudget:
    """
    Attributes:
        max_steps   : Line events allowed before the run is stopped.
        max_seconds : Wall-clock allowance for the run.
        steps       : Line events seen so far.
        exhausted   : Reason string once the budget ran out, else None.
    """

    def __init__(
        self,
        max_steps: int = DEFAULT_STEP_BUDGET,
        max_seconds: float = DEFAULT_TIME_BUDGET,
        filename: str = FILENAME,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_steps   = max_steps
        self.max_seconds = max_seconds
        self.filename    = filename
        self.steps       = 0
        self.exhausted: Optional[str] = None

        self._clock    = clock
        self._deadline = 0.0
        self._previous = None

    def __enter__(self) -> "ExecutionBudget":
        self.steps     = 0
        self.exhausted = None
        self._deadline = self._clock() + self.max_seconds
        self._previous = sys.gettrace()
        sys.settrace(self._on_call)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        sys.settrace(self._previous)
        return False

    # ------------------------------------------------------------------
    # Trace hooks
    # ------------------------------------------------------------------
    def _on_call(self, frame, event, arg):
        if frame.f_code.co_filename != self.filename:
            return None
        self._charge()
        return self._on_line

    def _on_line(self, frame, event, arg):
        if event == "line":
            self._charge()
        return self._on_line

    def _charge(self) -> None:
        if self.exhausted:
            raise BudgetExceeded(self.exhausted)
        self.steps += 1
        if self.steps > self.max_steps:
            self.exhausted = f"exceeded the step budget of {self.max_steps} steps"
        elif self._clock() > self._deadline:
            self.exhausted = f"exceeded the time budget of {self.max_seconds:g}s"
        if self.exhausted:
            raise BudgetExceeded(self.exhausted)
