"""Packaging module for the output archive.

Public API:
    create_jar(target, jar_dir) -> list[str]
"""

from bindjar.packaging.archiver import create_jar, list_entries

__all__ = ["create_jar", "list_entries"]
