"""Scratch workspace lifecycle for a single build."""

from bindjar.workspace.manager import Workspace, begin, build_workspace, create_dirs

__all__ = ["Workspace", "begin", "build_workspace", "create_dirs"]
