"""
sandbox/
--------
Restricted execution of user-supplied traversal code.

    from sandbox import run_custom_algorithm, SandboxResult, SandboxStatus
"""

from sandbox.budget import BudgetExceeded, ExecutionBudget, DEFAULT_STEP_BUDGET, DEFAULT_TIME_BUDGET
from sandbox.runner import SandboxResult, SandboxStatus, run_custom_algorithm

__all__ = [
    "run_custom_algorithm",
    "SandboxResult",
    "SandboxStatus",
    "ExecutionBudget",
    "BudgetExceeded",
    "DEFAULT_STEP_BUDGET",
    "DEFAULT_TIME_BUDGET",
]
