"""Type resolution for input packages.

Two phases:
  1. One `go install` over every requested package. This is atomic from
     our side: if any package fails to build, the whole resolution fails
     with the compiler's combined output.
  2. Per package, `go list -export -json` locates the build metadata and
     the export data holding its compiled type information.

Lookups are independent of each other; there is no shared importer
state, so results do not depend on lookup order.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from bindjar.core.config import Settings
from bindjar.errors import ResolutionError, ToolchainError
from bindjar.resolver.types import GoListPackage, PackageDescriptor, ResolvedPackage
from bindjar.toolchain.runner import run_checked

logger = logging.getLogger(__name__)


def load_export_data(
    packages: Sequence[PackageDescriptor],
    *,
    cwd: Path,
    settings: Settings,
) -> list[ResolvedPackage]:
    """Build the packages and return their resolved descriptors in input order.

    Raises:
        ResolutionError: If the list is empty, the install step fails, or
            any single lookup fails. No partial result is returned.
    """
    if not packages:
        raise ResolutionError("no packages to resolve")

    import_paths = [p.import_path for p in packages]
    logger.info("Installing %d package(s): %s", len(import_paths), " ".join(import_paths))

    try:
        run_checked(
            "install",
            [settings.go_command, "install", *import_paths],
            cwd=cwd,
            settings=settings,
        )
    except ToolchainError as exc:
        raise ResolutionError(str(exc)) from exc

    return [resolve_package(path, cwd=cwd, settings=settings) for path in import_paths]


def resolve_package(import_path: str, *, cwd: Path, settings: Settings) -> ResolvedPackage:
    """Locate build metadata and export data for a single package."""
    try:
        step = run_checked(
            f"list {import_path}",
            [settings.go_command, "list", "-export", "-json", import_path],
            cwd=cwd,
            settings=settings,
        )
    except ToolchainError as exc:
        raise ResolutionError(str(exc), package=import_path) from exc

    record = parse_go_list(step.output, import_path)

    if record.error is not None and record.error.err:
        raise ResolutionError(f"{import_path}: {record.error.err}", package=import_path)
    if not record.name:
        raise ResolutionError(f"{import_path}: package name not reported", package=import_path)

    resolved = ResolvedPackage(
        import_path=record.import_path,
        name=record.name,
        dir=Path(record.dir),
        export_file=Path(record.export) if record.export else None,
    )
    logger.debug("Resolved %s -> %s (%s)", import_path, resolved.name, resolved.export_file)
    return resolved


def parse_go_list(output: str, import_path: str) -> GoListPackage:
    """Parse the JSON record `go list -json` printed for one package.

    Output is merged with stderr, so the go tool may print diagnostics
    around the record; decoding starts at the first opening brace and
    stops at the end of the first JSON object.
    """
    start = output.find("{")
    if start < 0:
        raise ResolutionError(f"{import_path}: no package metadata in go list output", package=import_path)
    try:
        payload, _ = json.JSONDecoder().raw_decode(output, start)
        return GoListPackage.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ResolutionError(
            f"{import_path}: cannot parse go list output: {exc}", package=import_path
        ) from exc
