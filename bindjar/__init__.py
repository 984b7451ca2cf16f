"""Java bindings for Go packages, packaged as a single jar."""

from bindjar.pipeline import bind_to_jar

__all__ = ["bind_to_jar"]
