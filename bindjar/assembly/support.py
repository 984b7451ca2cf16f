"""Fixed support files for the bind tree.

The binding runtime ships sources that every generated binding links
against. They are described by SUPPORT_MANIFEST, resolved once against
the install directory of the generator's Go package, and copied into the
workspace alongside two generated files: the c-shared main package and
the cgo flags file pointing at the JNI headers under JAVA_HOME.
"""

import logging
import os
import platform
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from bindjar.assembly.extra_files import copy_file
from bindjar.assembly.templates import render_include, render_main
from bindjar.core.config import Settings
from bindjar.errors import AssemblyError, ToolchainError
from bindjar.toolchain.runner import run_checked
from bindjar.workspace.manager import Workspace

logger = logging.getLogger(__name__)

FLAG_FILE_NAME = "gojavacimport.go"
SEQ_JAVA = "Seq.java"
LOADER_JAVA = "LoadJNI.java"


class SupportTarget(StrEnum):
    """Workspace directory a support file is copied into."""

    BIND = "bind"
    JAVA = "java"


@dataclass(frozen=True)
class SupportFile:
    """One manifest entry.

    dest is a file name inside the target directory; source is relative
    to the bind package directory.
    """

    name: str
    target: SupportTarget
    dest: str
    source: str


SUPPORT_MANIFEST: tuple[SupportFile, ...] = (
    SupportFile("seq-go", SupportTarget.BIND, "seq.go", "seq.go.support"),
    SupportFile("seq-java-go", SupportTarget.BIND, "seq_java.go", "java/seq_android.go.support"),
    SupportFile("seq-c", SupportTarget.BIND, "seq.c", "java/seq_android.c.support"),
    SupportFile("seq-h", SupportTarget.BIND, "seq.h", "java/seq.h"),
    SupportFile("seq-java", SupportTarget.JAVA, SEQ_JAVA, "java/Seq.java"),
    SupportFile("loader-java", SupportTarget.JAVA, LOADER_JAVA, "../../gojava/LoadJNI.java"),
)

# platform.system() names that differ from GOOS
_GOOS_NAMES = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "sunos": "solaris",
}


@dataclass(frozen=True)
class BindPackage:
    """Import path and install directory of the binding runtime package."""

    import_path: str
    dir: Path


def host_os() -> str:
    """Return the host OS in GOOS spelling (the JNI include subdirectory name)."""
    system = platform.system().lower()
    return _GOOS_NAMES.get(system, system)


def locate_bind_package(settings: Settings, cwd: Path) -> BindPackage:
    """Find the install directory of settings.bind_package via `go list`."""
    try:
        step = run_checked(
            "locate bind package",
            [settings.go_command, "list", "-find", "-f", "{{.Dir}}", settings.bind_package],
            cwd=cwd,
            settings=settings,
        )
    except ToolchainError as exc:
        raise AssemblyError(f"cannot locate {settings.bind_package}: {exc}") from exc

    lines = [line.strip() for line in step.output.splitlines() if line.strip()]
    if not lines:
        raise AssemblyError(f"cannot locate {settings.bind_package}: go list printed no directory")
    return BindPackage(import_path=settings.bind_package, dir=Path(lines[-1]))


def resolve_manifest(
    workspace: Workspace,
    bind_dir: Path,
    manifest: Sequence[SupportFile] = SUPPORT_MANIFEST,
) -> list[tuple[Path, Path]]:
    """Turn manifest entries into (destination, source) path pairs."""
    targets = {
        SupportTarget.BIND: workspace.bind_dir,
        SupportTarget.JAVA: workspace.java_dir,
    }
    return [
        (targets[entry.target] / entry.dest, Path(os.path.normpath(bind_dir / entry.source)))
        for entry in manifest
    ]


def create_support_files(
    workspace: Workspace,
    bind_package: BindPackage,
    settings: Settings,
    manifest: Sequence[SupportFile] = SUPPORT_MANIFEST,
) -> list[Path]:
    """Copy the support manifest and write main.go and the cgo flags file.

    Returns every path written, in order. The first failure aborts.

    Raises:
        AssemblyError: If a support source is missing or a write fails.
    """
    written: list[Path] = []
    for dst, src in resolve_manifest(workspace, bind_package.dir, manifest):
        copy_file(dst, src)
        written.append(dst)

    _write_text(workspace.main_file, render_main(bind_package.import_path))
    written.append(workspace.main_file)

    include = Path(settings.java_home) / "include"
    flag_file = workspace.bind_dir / FLAG_FILE_NAME
    _write_text(flag_file, render_include(str(include), str(include / host_os())))
    written.append(flag_file)

    logger.debug("Created %d support file(s) from %s", len(written), bind_package.dir)
    return written


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
        os.chmod(path, 0o600)
    except OSError as exc:
        raise AssemblyError(f"failed to write {path}: {exc}") from exc
