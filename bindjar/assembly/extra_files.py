"""Merge user-supplied Java sources into the workspace source tree."""

import logging
import os
from pathlib import Path
from typing import Optional

from bindjar.errors import AssemblyError

logger = logging.getLogger(__name__)

JAVA_SUFFIX = ".java"


def add_extra_files(java_dir: Path, source_dir: Optional[Path]) -> list[Path]:
    """Copy every .java file under source_dir to the same relative path under java_dir.

    Returns the destination paths in walk order (directories and files
    visited in sorted order). With no source_dir this is a no-op that
    touches nothing. An opted-in directory with no Java files only logs a
    warning.

    Raises:
        AssemblyError: If source_dir cannot be walked or a file cannot be copied.
    """
    if source_dir is None:
        return []

    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise AssemblyError(f"extra source directory not found: {source_dir}")

    extra_files: list[Path] = []
    for src in _walk_files(source_dir):
        rel = src.relative_to(source_dir)
        if not rel.name.endswith(JAVA_SUFFIX):
            continue
        dst = java_dir / rel
        copy_file(dst, src)
        extra_files.append(dst)

    if not extra_files:
        logger.warning(
            "argument -s was passed on command line, but no %s files were found in '%s'",
            JAVA_SUFFIX, source_dir,
        )
    else:
        logger.debug("Added %d extra source file(s) from %s", len(extra_files), source_dir)
    return extra_files


def copy_file(dst: Path, src: Path) -> None:
    """Copy src to dst byte-for-byte with a single whole-buffer write."""
    try:
        data = Path(src).read_bytes()
        Path(dst).parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        Path(dst).write_bytes(data)
        os.chmod(dst, 0o600)
    except OSError as exc:
        raise AssemblyError(f"failed to copy {src} to {dst}: {exc}") from exc


def _walk_files(root: Path):
    """Yield regular files under root, depth first, in sorted order."""

    def _raise(exc: OSError) -> None:
        raise AssemblyError(f"failed to walk {root}: {exc}") from exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                yield path
