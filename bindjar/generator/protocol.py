"""BindingGenerator protocol.

All generator implementations must conform to this interface. The
pipeline supplies the configuration and the writer; the generator
supplies the bytes.
"""

from typing import Protocol, runtime_checkable

from bindjar.generator.types import ArtifactKind, GeneratorConfig


@runtime_checkable
class BindingGenerator(Protocol):
    """Protocol for binding generator implementations.

    Any exception raised from either method is treated as a generation
    failure for the package in `config.package`.
    """

    def generate_go(self, config: GeneratorConfig) -> None:
        """Write the cgo entry-point source for config.package to config.writer."""
        ...

    def generate_java(self, config: GeneratorConfig, prefix: str, kind: ArtifactKind) -> None:
        """Write one Java-side artifact for config.package to config.writer.

        Args:
            config: Generation configuration; writer is already set.
            prefix: Java package name override; empty for the default.
            kind: One of ArtifactKind.JAVA, JAVA_C, JAVA_H.
        """
        ...
