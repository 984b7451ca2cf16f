"""Text of the two files generated into the bind tree."""

# cgo flags file; the placeholders are the two JNI include directories.
JAVA_INCLUDE = """package gojava_bind

// #cgo CFLAGS: -Wall -I{include} -I{include_os}
import "C"

"""

# c-shared entry point. Imports the binding runtime and the bind package
# one directory up so both are linked into the shared library.
JAVA_MAIN = """package main

import (
\t_ "{bind_import}"
\t_ ".."
)

func main() {{}}
"""


def render_main(bind_import: str) -> str:
    return JAVA_MAIN.format(bind_import=bind_import)


def render_include(include: str, include_os: str) -> str:
    return JAVA_INCLUDE.format(include=include, include_os=include_os)
