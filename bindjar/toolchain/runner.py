"""External tool execution.

Every tool the pipeline drives (go install, go list, go build, javac, the
binding generator) runs through run_step(). Each call is synchronous and
receives an explicit working directory; nothing here reads or changes the
process working directory.

stdout and stderr are merged so that a failure carries the tool's full
diagnostic output in the order it was written.
"""

import logging
import shlex
import subprocess
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional

from bindjar.core.config import Settings
from bindjar.errors import ToolchainError
from bindjar.toolchain.limits import resource_limiter
from bindjar.toolchain.types import StepResult

logger = logging.getLogger(__name__)

# Default timeout per invocation (seconds)
DEFAULT_TIMEOUT = 600


def run_step(
    name: str,
    args: Sequence[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
    env: Optional[Mapping[str, str]] = None,
    settings: Optional[Settings] = None,
) -> StepResult:
    """Execute a single external tool invocation.

    Captures merged output, exit code, and duration.
    Raises no exceptions; always returns a StepResult.
    A timeout yields exit code -1, a launch failure exit code -2. Output
    is decoded as UTF-8; undecodable bytes become U+FFFD.
    """
    command = shlex.join(str(a) for a in args)
    preexec_fn = None
    if settings is not None:
        preexec_fn = resource_limiter(settings.rlimit_as_bytes, settings.rlimit_cpu_seconds)

    logger.debug("Running step '%s': %s (cwd=%s)", name, command, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            [str(a) for a in args],
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=dict(env) if env is not None else None,
            preexec_fn=preexec_fn,
        )
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=result.returncode,
            duration_seconds=time.monotonic() - start,
            output=result.stdout or "",
        )

    except subprocess.TimeoutExpired:
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=-1,
            duration_seconds=time.monotonic() - start,
            output=f"Timed out after {timeout} seconds",
        )

    except Exception as exc:
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=-2,
            duration_seconds=time.monotonic() - start,
            output=str(exc),
        )

    status = "OK" if step_result.is_success else "FAILED"
    logger.debug(
        "Step '%s' %s (exit=%d, %.1fs)",
        name, status, step_result.exit_code, step_result.duration_seconds,
    )
    return step_result


def run_checked(
    name: str,
    args: Sequence[str],
    cwd: Path,
    settings: Optional[Settings] = None,
    env: Optional[Mapping[str, str]] = None,
) -> StepResult:
    """Run a step and raise ToolchainError unless it succeeded."""
    timeout = settings.toolchain_timeout_seconds if settings else DEFAULT_TIMEOUT
    step_result = run_step(name, args, cwd, timeout=timeout, env=env, settings=settings)
    if not step_result.is_success:
        logger.warning(
            "Step '%s' output (tail):\n%s",
            name,
            _truncate_output(step_result.output),
        )
        raise ToolchainError(step_result)
    return step_result


def _truncate_output(text: str, max_lines: int = 60, max_chars: int = 4000) -> str:
    """Return a concise tail of command output for logs."""
    if not text:
        return ""
    lines = text.splitlines()
    tail = lines[-max_lines:]
    joined = "\n".join(tail)
    if len(joined) > max_chars:
        joined = joined[-max_chars:]
    return joined
