"""Compile the assembled Java source tree."""

import logging
from collections.abc import Sequence
from pathlib import Path

from bindjar.assembly.support import LOADER_JAVA, SEQ_JAVA
from bindjar.core.config import Settings
from bindjar.toolchain.runner import run_checked
from bindjar.workspace.manager import Workspace

logger = logging.getLogger(__name__)


def javac_args(workspace: Workspace, java_files: Sequence[Path], settings: Settings) -> list[str]:
    """Build the javac command line.

    The two fixed support sources are appended after the caller's files.
    -sourcepath covers the parent of the source root so that references
    between files in the `go` Java package resolve.
    """
    files = [
        *java_files,
        workspace.java_dir / SEQ_JAVA,
        workspace.java_dir / LOADER_JAVA,
    ]
    return [
        settings.javac_command,
        "-d", str(workspace.jar_dir),
        "-sourcepath", str(workspace.java_dir / ".."),
        *(str(f) for f in files),
    ]


def build_java(workspace: Workspace, java_files: Sequence[Path], settings: Settings) -> None:
    """Run javac over every Java source in one invocation.

    Raises:
        ToolchainError: With the combined javac output on failure.
    """
    args = javac_args(workspace, java_files, settings)
    logger.info("Compiling %d Java source(s)", len(java_files) + 2)
    run_checked("javac", args, cwd=workspace.java_dir, settings=settings)
