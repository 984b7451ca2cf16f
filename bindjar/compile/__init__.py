"""External compilers: the Go c-shared build and javac."""

from bindjar.compile.foreign import build_java, javac_args
from bindjar.compile.native import LIBRARY_NAME, build_go

__all__ = ["build_go", "build_java", "javac_args", "LIBRARY_NAME"]
