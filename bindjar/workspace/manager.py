"""Scratch workspace for one build.

Creates a uniquely named temporary directory tree for a single pipeline
run and hands back a teardown callable. Teardown removes the tree and
restores the working directory recorded at begin(); both steps are best
effort and only logged on failure, so cleanup never masks the pipeline's
real outcome.

Later stages pass explicit `cwd=` values to their subprocesses and never
chdir themselves. Restoring the directory in teardown guards against any
collaborator that does.
"""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from bindjar.core.config import Settings
from bindjar.errors import MissingEnvironmentError, WorkspaceError

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "gojava"


@dataclass(frozen=True)
class Workspace:
    """Paths of one build's scratch tree.

    root/
      gojava_bind/        generated cgo sources, support sources, headers
        main/main.go      c-shared entry point
      src/go/             Java sources (generated, extra and support)
      classes/            javac output and archive root
        go/               native library
    """

    root: Path
    invocation_dir: Path

    @property
    def bind_dir(self) -> Path:
        return self.root / "gojava_bind"

    @property
    def main_dir(self) -> Path:
        return self.bind_dir / "main"

    @property
    def main_file(self) -> Path:
        return self.main_dir / "main.go"

    @property
    def java_dir(self) -> Path:
        return self.root / "src" / "go"

    @property
    def jar_dir(self) -> Path:
        return self.root / "classes"

    @property
    def class_dir(self) -> Path:
        return self.jar_dir / "go"

    def resolve_target(self, target: str | os.PathLike) -> Path:
        """Resolve an output path against the directory the build started in."""
        path = Path(target)
        if path.is_absolute():
            return path
        return self.invocation_dir / path


def begin(settings: Settings) -> tuple[Workspace, Callable[[], None]]:
    """Create the scratch root and return it with its teardown.

    Raises:
        MissingEnvironmentError: If JAVA_HOME is not set. Checked before
            anything touches the filesystem.
        WorkspaceError: If the current directory cannot be read or the
            scratch root cannot be created.
    """
    if not settings.java_home:
        raise MissingEnvironmentError("$JAVA_HOME not set")

    try:
        invocation_dir = Path(os.getcwd())
    except OSError as exc:
        raise WorkspaceError(f"cannot read current directory: {exc}") from exc

    try:
        root = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX))
    except OSError as exc:
        raise WorkspaceError(f"cannot create scratch directory: {exc}") from exc

    workspace = Workspace(root=root, invocation_dir=invocation_dir)
    logger.debug("Created workspace %s (invoked from %s)", root, invocation_dir)

    done = False

    def teardown() -> None:
        nonlocal done
        if done:
            return
        done = True
        try:
            shutil.rmtree(root)
        except OSError as exc:
            logger.error("failed to remove temp dir: %s %s", root, exc)
        try:
            os.chdir(invocation_dir)
        except OSError as exc:
            logger.error("failed to change to dir: %s %s", invocation_dir, exc)

    return workspace, teardown


@contextmanager
def build_workspace(settings: Settings) -> Iterator[Workspace]:
    """Context manager around begin(); teardown runs on every exit path."""
    workspace, teardown = begin(settings)
    try:
        yield workspace
    finally:
        teardown()


def create_dirs(*dirs: Path) -> None:
    """Create each directory (and parents) with owner-only permissions."""
    for d in dirs:
        try:
            Path(d).mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspaceError(f"cannot create {d}: {exc}") from exc
