"""Types for external tool invocations."""

from dataclasses import dataclass


@dataclass
class StepResult:
    """Result of a single external tool invocation (go install, javac, ...).

    stdout and stderr are merged into `output` in the order the tool
    wrote them. A step is successful if exit_code == 0.
    """

    name: str
    command: str
    exit_code: int
    duration_seconds: float
    output: str = ""

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "command": self.command,
            "exit_code": self.exit_code,
            "duration_seconds": round(self.duration_seconds, 3),
            "output_lines": self.output.count("\n") + 1 if self.output else 0,
            "is_success": self.is_success,
        }
