"""Build pipeline: Go packages in, one jar of Java bindings out.

Pipeline:
  1. begin()                 : scratch workspace, JAVA_HOME precondition
  2. load_export_data()      : go install + per-package type data lookup
  3. create_dirs()           : fixed workspace layout
  4. bind_packages()         : four generated artifacts per package
  5. add_extra_files()       : optional user Java sources
  6. create_support_files()  : runtime sources, main.go, cgo flags
  7. build_go()              : c-shared JNI library
  8. build_java()            : javac over every Java source
  9. create_jar()            : deterministic archive at the target path

Stages run strictly in order; the first error aborts and propagates.
Workspace teardown runs on every exit path. No stage changes the process
working directory: every external tool receives its directory as an
explicit cwd, and the target path is resolved against the directory
the build was started from.

Only one build may run per process at a time.
"""

import logging
import os
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from bindjar.assembly import add_extra_files, create_support_files, locate_bind_package
from bindjar.compile import build_go, build_java
from bindjar.core.config import Settings, get_settings
from bindjar.errors import BindError
from bindjar.generator import BindingGenerator, CommandGenerator, bind_packages, java_sources
from bindjar.packaging import create_jar
from bindjar.resolver import PackageDescriptor, load_export_data
from bindjar.workspace import build_workspace, create_dirs

logger = logging.getLogger(__name__)

_build_lock = threading.Lock()


def bind_to_jar(
    target: str | os.PathLike,
    source_dir: Optional[str | os.PathLike],
    packages: Sequence[str],
    *,
    settings: Optional[Settings] = None,
    generator: Optional[BindingGenerator] = None,
) -> Path:
    """Run the full pipeline and return the absolute path of the written jar.

    Args:
        target: Output jar path; relative paths are taken from the current
            directory at call time.
        source_dir: Optional directory of extra Java sources to compile in.
        packages: Go import paths to bind, in order.
        settings: Overrides environment-derived settings.
        generator: Binding generator; defaults to CommandGenerator.

    Raises:
        BindError: Any pipeline failure, including a second concurrent build
            in this process.
    """
    if not _build_lock.acquire(blocking=False):
        raise BindError("another build is already running in this process")
    try:
        return _run(target, source_dir, packages, settings or get_settings(), generator)
    finally:
        _build_lock.release()


def _run(
    target: str | os.PathLike,
    source_dir: Optional[str | os.PathLike],
    packages: Sequence[str],
    settings: Settings,
    generator: Optional[BindingGenerator],
) -> Path:
    with build_workspace(settings) as workspace:
        cwd = workspace.invocation_dir
        jar_path = workspace.resolve_target(target)
        extra_dir = workspace.resolve_target(source_dir) if source_dir else None

        resolved = load_export_data(
            [PackageDescriptor(p) for p in packages],
            cwd=cwd,
            settings=settings,
        )

        create_dirs(workspace.class_dir, workspace.java_dir, workspace.main_dir)

        artifact_sets = bind_packages(
            workspace,
            resolved,
            generator or CommandGenerator(settings, cwd),
        )
        java_files = java_sources(artifact_sets)
        java_files.extend(add_extra_files(workspace.java_dir, extra_dir))

        bind_package = locate_bind_package(settings, cwd)
        create_support_files(workspace, bind_package, settings)

        build_go(workspace, settings)
        build_java(workspace, java_files, settings)

        create_jar(jar_path, workspace.jar_dir)
        return jar_path
