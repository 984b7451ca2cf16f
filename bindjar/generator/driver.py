"""Artifact generator driver.

For every resolved package, in input order, generates the four binding
artifacts into the scratch workspace:

  bind_dir/go_<name>main.go   cgo entry points       (ArtifactKind.GO_MAIN)
  java_dir/<Name>.java        Java class             (ArtifactKind.JAVA)
  bind_dir/java_<name>.c      JNI glue source        (ArtifactKind.JAVA_C)
  bind_dir/<name>.h           JNI glue header        (ArtifactKind.JAVA_H)

Each artifact is generated into a temporary sibling file and renamed
into place only once the generator returned, so a failed call never
leaves a truncated artifact behind. The first failure aborts the whole
step with a GenerationError naming the package.
"""

import dataclasses
import logging
import os
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from bindjar.errors import GenerationError
from bindjar.generator.protocol import BindingGenerator
from bindjar.generator.types import (
    ArtifactKind,
    GeneratedArtifactSet,
    GeneratorConfig,
    PositionTable,
)
from bindjar.resolver.types import ResolvedPackage
from bindjar.workspace.manager import Workspace

logger = logging.getLogger(__name__)

# Java package override passed to the generator; empty keeps the default.
JAVA_PREFIX = ""


def _gen_go(generator: BindingGenerator, config: GeneratorConfig) -> None:
    generator.generate_go(config)


def _gen_java(generator: BindingGenerator, config: GeneratorConfig) -> None:
    generator.generate_java(config, JAVA_PREFIX, ArtifactKind.JAVA)


def _gen_java_c(generator: BindingGenerator, config: GeneratorConfig) -> None:
    generator.generate_java(config, JAVA_PREFIX, ArtifactKind.JAVA_C)


def _gen_java_h(generator: BindingGenerator, config: GeneratorConfig) -> None:
    generator.generate_java(config, JAVA_PREFIX, ArtifactKind.JAVA_H)


# One generation function per kind. Every ArtifactKind member has an entry.
_GENERATE: dict[ArtifactKind, Callable[[BindingGenerator, GeneratorConfig], None]] = {
    ArtifactKind.GO_MAIN: _gen_go,
    ArtifactKind.JAVA: _gen_java,
    ArtifactKind.JAVA_C: _gen_java_c,
    ArtifactKind.JAVA_H: _gen_java_h,
}


def artifact_path(workspace: Workspace, package: ResolvedPackage, kind: ArtifactKind) -> Path:
    """Return the deterministic output path of one artifact."""
    kind = ArtifactKind(kind)
    if kind is ArtifactKind.GO_MAIN:
        return workspace.bind_dir / f"go_{package.name}main.go"
    if kind is ArtifactKind.JAVA:
        return workspace.java_dir / f"{package.class_name}.java"
    if kind is ArtifactKind.JAVA_C:
        return workspace.bind_dir / f"java_{package.name}.c"
    return workspace.bind_dir / f"{package.name}.h"


def check_class_names(packages: Sequence[ResolvedPackage]) -> None:
    """Fail fast when two packages would produce the same Java class file."""
    seen: dict[str, str] = {}
    for pkg in packages:
        other = seen.get(pkg.class_name)
        if other is not None:
            raise GenerationError(
                pkg.name,
                ArtifactKind.JAVA.value,
                f"class {pkg.class_name} from {pkg.import_path} collides with {other}",
            )
        seen[pkg.class_name] = pkg.import_path


def bind_packages(
    workspace: Workspace,
    packages: Sequence[ResolvedPackage],
    generator: BindingGenerator,
) -> list[GeneratedArtifactSet]:
    """Generate the four artifacts of every package, in input order.

    Returns one GeneratedArtifactSet per package.

    Raises:
        GenerationError: On a class-name collision (before anything is
            written) or on the first failed generator call.
    """
    check_class_names(packages)

    positions = PositionTable()
    all_packages = list(packages)
    results: list[GeneratedArtifactSet] = []

    for pkg in all_packages:
        config = GeneratorConfig(
            writer=None,
            positions=positions,
            package=pkg,
            all_packages=all_packages,
        )
        paths = {
            kind: generate_artifact(workspace, config, generator, kind)
            for kind in ArtifactKind
        }
        results.append(GeneratedArtifactSet(
            package=pkg,
            go_main=paths[ArtifactKind.GO_MAIN],
            java_class=paths[ArtifactKind.JAVA],
            jni_source=paths[ArtifactKind.JAVA_C],
            jni_header=paths[ArtifactKind.JAVA_H],
        ))
        logger.debug("Generated bindings for %s", pkg.import_path)

    logger.info("Generated %d artifact(s) for %d package(s)", 4 * len(results), len(results))
    return results


def generate_artifact(
    workspace: Workspace,
    config: GeneratorConfig,
    generator: BindingGenerator,
    kind: ArtifactKind,
) -> Path:
    """Generate a single artifact and move it into place.

    Raises:
        ValueError: If kind is not an ArtifactKind. This is a caller bug,
            not a generation failure.
        GenerationError: If the file cannot be written or the generator fails.
    """
    kind = ArtifactKind(kind)
    generate = _GENERATE[kind]
    pkg = config.package
    path = artifact_path(workspace, pkg, kind)

    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    except OSError as exc:
        raise GenerationError(pkg.name, kind.value, f"failed to open {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as writer:
            generate(generator, dataclasses.replace(config, writer=writer))
        os.replace(tmp_name, path)
    except GenerationError:
        _discard(tmp_name)
        raise
    except Exception as exc:
        _discard(tmp_name)
        raise GenerationError(pkg.name, kind.value, str(exc)) from exc

    return path


def java_sources(artifact_sets: Sequence[GeneratedArtifactSet]) -> list[Path]:
    """Java class sources recorded for the foreign compiler, in package order."""
    return [s.java_class for s in artifact_sets]


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
