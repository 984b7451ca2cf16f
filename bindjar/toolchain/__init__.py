"""External tool execution with explicit working directories."""

from bindjar.toolchain.runner import run_checked, run_step
from bindjar.toolchain.types import StepResult

__all__ = ["run_checked", "run_step", "StepResult"]
