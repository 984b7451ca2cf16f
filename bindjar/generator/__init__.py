"""Binding generation: drive the external generator for each package.

Public API:
    bind_packages(workspace, packages, generator) -> list[GeneratedArtifactSet]
    java_sources(artifact_sets) -> list[Path]
"""

from bindjar.generator.command import CommandGenerator
from bindjar.generator.driver import bind_packages, generate_artifact, java_sources
from bindjar.generator.protocol import BindingGenerator
from bindjar.generator.types import (
    ArtifactKind,
    GeneratedArtifactSet,
    GeneratorConfig,
    PositionTable,
)

__all__ = [
    "bind_packages",
    "generate_artifact",
    "java_sources",
    "ArtifactKind",
    "BindingGenerator",
    "CommandGenerator",
    "GeneratedArtifactSet",
    "GeneratorConfig",
    "PositionTable",
]
