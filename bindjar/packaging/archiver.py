"""Jar archiver: writes the compiled output tree into one archive.

The archive always replaces whatever was at the target path. Entries are
the POSIX relative paths of every regular file under the output root;
directories never appear as entries.

Reproducibility:
  - entries are written in sorted path order, not filesystem walk order
  - every entry gets the same timestamp (1980-01-01 00:00:00, the zip
    epoch) and the same permission bits
So unchanged inputs yield a byte-identical archive on any platform.
"""

import logging
import os
import tempfile
import zipfile
from pathlib import Path

from bindjar.errors import ArchiveError

logger = logging.getLogger(__name__)

ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
ENTRY_MODE = 0o644


def list_entries(jar_dir: Path) -> list[tuple[str, Path]]:
    """Return (entry name, file path) for every regular file under jar_dir, sorted."""
    jar_dir = Path(jar_dir)
    entries: list[tuple[str, Path]] = []

    def _raise(exc: OSError) -> None:
        raise ArchiveError(f"failed to walk {jar_dir}: {exc}") from exc

    for dirpath, _dirnames, filenames in os.walk(jar_dir, onerror=_raise):
        for name in filenames:
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            entries.append((path.relative_to(jar_dir).as_posix(), path))

    entries.sort(key=lambda e: e[0])
    return entries


def create_jar(target: Path, jar_dir: Path) -> list[str]:
    """Write every file under jar_dir into a fresh archive at target.

    Any existing file at target is removed first. The archive is built in
    a temporary sibling and renamed onto target only after it was closed
    successfully, so a failed build never leaves an archive behind.

    Returns the entry names in the order written.

    Raises:
        ArchiveError: If the old archive cannot be removed, or the new one
            cannot be opened, written or closed.
    """
    target = Path(target)
    entries = list_entries(jar_dir)

    try:
        target.unlink(missing_ok=True)
    except OSError as exc:
        raise ArchiveError(f"failed to remove existing {target}: {exc}") from exc

    logger.debug("Building %s", target)
    try:
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
    except OSError as exc:
        raise ArchiveError(f"failed to write {target}: {exc}") from exc

    names: list[str] = []
    try:
        with os.fdopen(fd, "wb") as fh:
            with zipfile.ZipFile(fh, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for name, path in entries:
                    logger.debug("Adding %s", name)
                    info = zipfile.ZipInfo(name, date_time=ZIP_EPOCH)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.create_system = 3
                    info.external_attr = (0o100000 | ENTRY_MODE) << 16
                    with zf.open(info, "w") as dst, open(path, "rb") as src:
                        dst.write(src.read())
                    names.append(name)
        os.chmod(tmp_name, ENTRY_MODE)
        os.replace(tmp_name, target)
    except (OSError, zipfile.BadZipFile) as exc:
        _discard(tmp_name)
        raise ArchiveError(f"failed to write {target}: {exc}") from exc

    logger.info("Wrote %d entries to %s", len(names), target)
    return names


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
