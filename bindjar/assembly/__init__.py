"""Tree assembly: extra user sources and fixed support files.

Public API:
    add_extra_files(java_dir, source_dir) -> list[Path]
    locate_bind_package(settings, cwd) -> BindPackage
    create_support_files(workspace, bind_package, settings) -> list[Path]
"""

from bindjar.assembly.extra_files import add_extra_files, copy_file
from bindjar.assembly.support import (
    LOADER_JAVA,
    SEQ_JAVA,
    SUPPORT_MANIFEST,
    BindPackage,
    SupportFile,
    SupportTarget,
    create_support_files,
    host_os,
    locate_bind_package,
)

__all__ = [
    "add_extra_files",
    "copy_file",
    "create_support_files",
    "host_os",
    "locate_bind_package",
    "BindPackage",
    "SupportFile",
    "SupportTarget",
    "LOADER_JAVA",
    "SEQ_JAVA",
    "SUPPORT_MANIFEST",
]
