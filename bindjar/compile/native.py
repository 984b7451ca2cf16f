"""Build the JNI shared library from the generated cgo sources."""

import logging
from pathlib import Path

from bindjar.core.config import Settings
from bindjar.toolchain.runner import run_checked
from bindjar.workspace.manager import Workspace

logger = logging.getLogger(__name__)

# Loaded by LoadJNI.java; the archive stores it under classes/go/.
LIBRARY_NAME = "libgojava"


def build_go(workspace: Workspace, settings: Settings) -> Path:
    """Run `go build -buildmode=c-shared` in the main package directory.

    Returns the path of the shared library.

    Raises:
        ToolchainError: With the combined go output on failure.
    """
    dylib = workspace.class_dir / LIBRARY_NAME
    logger.info("Building native library %s", dylib.name)
    run_checked(
        "go build",
        [settings.go_command, "build", "-o", str(dylib), "-buildmode=c-shared", "."],
        cwd=workspace.main_dir,
        settings=settings,
    )
    return dylib
