"""Shared fixtures for the bindjar test suite.

No test runs a real Go or Java toolchain. Tool invocations are replaced by
FakeToolchain (a subprocess.run stand-in that mimics go and javac output)
and binding generation by FakeGenerator.
"""

import json
import logging
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

from bindjar.core.config import Settings
from bindjar.generator.types import ArtifactKind, GeneratorConfig
from bindjar.resolver.types import ResolvedPackage
from bindjar.workspace.manager import Workspace


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeGenerator:
    """BindingGenerator that writes a small marker per artifact."""

    def __init__(self, fail_on: tuple[str, ArtifactKind] | None = None):
        self.fail_on = fail_on
        self.calls: list[tuple[str, ArtifactKind]] = []

    def generate_go(self, config: GeneratorConfig) -> None:
        self._write(config, ArtifactKind.GO_MAIN)

    def generate_java(self, config: GeneratorConfig, prefix: str, kind: ArtifactKind) -> None:
        self._write(config, kind)

    def _write(self, config: GeneratorConfig, kind: ArtifactKind) -> None:
        name = config.package.name
        self.calls.append((name, kind))
        config.writer.write(f"// {kind.value} for {name}\n".encode())
        if self.fail_on == (name, kind):
            raise RuntimeError(f"cannot bind {name}")


class FakeToolchain:
    """subprocess.run replacement understanding go and javac invocations.

    fail maps a substring of the joined command line to an exit code.
    """

    def __init__(self, bind_dir: Path, fail: dict[str, int] | None = None):
        self.bind_dir = bind_dir
        self.fail = fail or {}
        self.calls: list[tuple[list[str], str]] = []

    def __call__(self, args, cwd=None, **kwargs):
        args = [str(a) for a in args]
        self.calls.append((args, cwd))
        joined = " ".join(args)
        for needle, code in self.fail.items():
            if needle in joined:
                return MagicMock(returncode=code, stdout=f"error running {joined}")

        tool = Path(args[0]).name
        if tool == "go" and args[1] == "install":
            return MagicMock(returncode=0, stdout="")
        if tool == "go" and args[1] == "list" and "-find" in args:
            return MagicMock(returncode=0, stdout=f"{self.bind_dir}\n")
        if tool == "go" and args[1] == "list":
            pkg = args[-1]
            record = {
                "ImportPath": pkg,
                "Name": pkg.rsplit("/", 1)[-1],
                "Dir": f"/src/{pkg}",
                "Export": f"/cache/{pkg.replace('/', '_')}.a",
            }
            return MagicMock(returncode=0, stdout=json.dumps(record, indent="\t"))
        if tool == "go" and args[1] == "build":
            out = Path(args[args.index("-o") + 1])
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(b"\x7fELF shared library")
            return MagicMock(returncode=0, stdout="")
        if tool == "javac":
            out_dir = Path(args[args.index("-d") + 1])
            for arg in args:
                if arg.endswith(".java"):
                    cls = out_dir / "go" / (Path(arg).stem + ".class")
                    cls.parent.mkdir(parents=True, exist_ok=True)
                    cls.write_bytes(b"\xca\xfe\xba\xbe" + Path(arg).stem.encode())
            return MagicMock(returncode=0, stdout="")
        return MagicMock(returncode=127, stdout=f"{args[0]}: command not found")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    java_home = tmp_path / "jdk"
    (java_home / "include").mkdir(parents=True)
    return Settings(java_home=str(java_home))


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    root = tmp_path / "scratch"
    ws = Workspace(root=root, invocation_dir=tmp_path)
    for d in (ws.class_dir, ws.java_dir, ws.main_dir):
        d.mkdir(parents=True)
    return ws


@pytest.fixture
def packages() -> list[ResolvedPackage]:
    return [
        ResolvedPackage(
            import_path="example.com/alpha",
            name="alpha",
            dir=Path("/src/example.com/alpha"),
            export_file=Path("/cache/alpha.a"),
        ),
        ResolvedPackage(
            import_path="example.com/beta",
            name="beta",
            dir=Path("/src/example.com/beta"),
            export_file=Path("/cache/beta.a"),
        ),
    ]


@pytest.fixture
def bind_package_dir(tmp_path: Path) -> Path:
    """A fake install of the binding runtime package with its support files.

    LoadJNI.java lives two levels above the bind directory.
    """
    base = tmp_path / "gopath"
    bind_dir = base / "mod" / "bind"
    (bind_dir / "java").mkdir(parents=True)
    (bind_dir / "seq.go.support").write_text("package gojava_bind // seq\n")
    (bind_dir / "java" / "seq_android.go.support").write_text("package gojava_bind // seq_java\n")
    (bind_dir / "java" / "seq_android.c.support").write_text("/* seq.c */\n")
    (bind_dir / "java" / "seq.h").write_text("/* seq.h */\n")
    (bind_dir / "java" / "Seq.java").write_text("package go;\npublic class Seq {}\n")
    (base / "gojava").mkdir(parents=True)
    (base / "gojava" / "LoadJNI.java").write_text("package go;\npublic class LoadJNI {}\n")
    return bind_dir


@pytest.fixture
def scratch_tmp(tmp_path: Path, monkeypatch) -> Path:
    """Redirect tempfile.mkdtemp into an inspectable directory."""
    scratch = tmp_path / "tmp"
    scratch.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))
    return scratch


@pytest.fixture
def make_generator():
    return FakeGenerator


@pytest.fixture
def make_toolchain(bind_package_dir: Path):
    def _make(fail: dict[str, int] | None = None) -> FakeToolchain:
        return FakeToolchain(bind_package_dir, fail=fail)

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by configure_structlog after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
