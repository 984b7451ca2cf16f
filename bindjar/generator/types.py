"""Shared types for binding generation.

The generator itself is an external collaborator. This module defines
what the pipeline hands it (GeneratorConfig) and the per-package output
set the driver records (GeneratedArtifactSet).
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import BinaryIO, Optional

from bindjar.resolver.types import ResolvedPackage


class ArtifactKind(StrEnum):
    """The four artifacts generated for every package."""

    GO_MAIN = "go"      # cgo entry points exported to JNI
    JAVA = "java"       # Java class wrapping the package
    JAVA_C = "java-c"   # C glue between JNI and the Go exports
    JAVA_H = "java-h"   # header for the C glue


@dataclass
class PositionTable:
    """File/position table shared across every package in a build.

    Each generated file is registered with its size and receives a base
    offset, so a position is unique across all packages and a reference
    from one package's output into another's resolves unambiguously.
    """

    files: list[tuple[str, int, int]] = field(default_factory=list)
    _next_base: int = 1

    def add_file(self, name: str, size: int) -> int:
        """Register a file and return its base offset."""
        if size < 0:
            raise ValueError(f"negative size for {name}: {size}")
        base = self._next_base
        self.files.append((name, base, size))
        # +1 so the position just past the end of a file is still unique
        self._next_base = base + size + 1
        return base

    def file_at(self, pos: int) -> Optional[str]:
        """Return the name of the file containing pos, if any."""
        for name, base, size in self.files:
            if base <= pos <= base + size:
                return name
        return None


@dataclass
class GeneratorConfig:
    """Everything one generator call needs.

    writer: destination for the generated bytes.
    positions: table shared by every call in the build.
    package: the package being bound.
    all_packages: every package in the build, for cross-package references.
    """

    writer: Optional[BinaryIO]
    positions: PositionTable
    package: ResolvedPackage
    all_packages: list[ResolvedPackage]


@dataclass(frozen=True)
class GeneratedArtifactSet:
    """Paths of the four files generated for one package."""

    package: ResolvedPackage
    go_main: Path
    java_class: Path
    jni_source: Path
    jni_header: Path

    def paths(self) -> list[Path]:
        return [self.go_main, self.java_class, self.jni_source, self.jni_header]
