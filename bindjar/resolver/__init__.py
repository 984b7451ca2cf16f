"""Package resolution: build inputs and locate their compiled type data."""

from bindjar.resolver.resolver import load_export_data, resolve_package
from bindjar.resolver.types import PackageDescriptor, ResolvedPackage

__all__ = ["load_export_data", "resolve_package", "PackageDescriptor", "ResolvedPackage"]
