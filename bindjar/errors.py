"""Exception hierarchy for the bind pipeline.

Every stage raises a subclass of BindError. The CLI catches BindError,
prints it to stderr and exits non-zero. Nothing in the pipeline retries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bindjar.toolchain.types import StepResult


class BindError(Exception):
    """Base class for all pipeline failures."""


class MissingEnvironmentError(BindError):
    """Raised when a required environment variable is not set."""


class WorkspaceError(BindError):
    """Raised when the scratch workspace cannot be set up."""


class ResolutionError(BindError):
    """Raised when a package cannot be built or its type data located."""

    def __init__(self, message: str, package: Optional[str] = None):
        self.package = package
        super().__init__(message)


class GenerationError(BindError):
    """Raised when the binding generator fails for a package.

    Carries the package short name and the artifact kind being generated.
    """

    def __init__(self, package: str, kind: str, detail: str = ""):
        self.package = package
        self.kind = kind
        message = f"failed to bind {package} ({kind})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AssemblyError(BindError):
    """Raised when the intermediate source tree cannot be assembled."""


class ToolchainError(BindError):
    """Raised when an external tool exits non-zero or cannot be run.

    Carries the step result so callers can inspect the combined output.
    """

    def __init__(self, step_result: StepResult, message: str = ""):
        self.step_result = step_result
        super().__init__(
            message
            or f"{step_result.command}: exit {step_result.exit_code}: {step_result.output}"
        )


class ArchiveError(BindError):
    """Raised when the output archive cannot be written."""
