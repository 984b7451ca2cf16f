"""Subprocess resource limits for toolchain invocations.

Provides a `preexec_fn` factory that sets resource limits on child
processes before exec. The wall-clock timeout in subprocess.run() is the
primary guard; rlimits additionally cap address space and CPU time when
configured.

Platform notes:
  - Linux / macOS: `resource` module is available and rlimits are enforced.
  - Windows: no preexec_fn is returned and nothing is applied.

Both limits default to 0 (unset). The Go linker and the JVM reserve large
virtual address ranges, so an address-space cap must be sized generously
when enabled.
"""

import logging
import sys
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def apply_resource_limits(mem_limit_bytes: int = 0, cpu_limit_seconds: int = 0) -> None:
    """Set per-process resource limits before exec. No-op on Windows.

    Executes in the child process context after `fork()` but before
    `exec()`. Non-positive values leave the corresponding limit unchanged.
    """
    if sys.platform == "win32":
        return

    try:
        import resource

        if mem_limit_bytes > 0:
            resource.setrlimit(resource.RLIMIT_AS, (mem_limit_bytes, resource.RLIM_INFINITY))
        if cpu_limit_seconds > 0:
            resource.setrlimit(resource.RLIMIT_CPU, (cpu_limit_seconds, resource.RLIM_INFINITY))

    except (ImportError, ValueError, OSError) as exc:
        logger.warning("Failed to apply resource limits: %s", exc)


def resource_limiter(
    mem_limit_bytes: int = 0,
    cpu_limit_seconds: int = 0,
) -> Optional[Callable[[], None]]:
    """Return a preexec_fn applying the given limits, or None if none are set.

    Returning None keeps subprocess.run() on its fast spawn path when no
    limits are configured.
    """
    if sys.platform == "win32":
        return None
    if mem_limit_bytes <= 0 and cpu_limit_seconds <= 0:
        return None

    logger.debug(
        "Resource limits enabled: mem=%s cpu=%s",
        f"{mem_limit_bytes / (1024**3):.1f}GB" if mem_limit_bytes > 0 else "unlimited",
        f"{cpu_limit_seconds}s" if cpu_limit_seconds > 0 else "unlimited",
    )

    def _preexec() -> None:
        apply_resource_limits(mem_limit_bytes, cpu_limit_seconds)

    return _preexec
