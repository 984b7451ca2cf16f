"""Tests for the artifact generator driver."""

from pathlib import Path

import pytest

from bindjar.errors import GenerationError
from bindjar.generator.driver import (
    artifact_path,
    bind_packages,
    check_class_names,
    generate_artifact,
    java_sources,
)
from bindjar.generator.protocol import BindingGenerator
from bindjar.generator.types import ArtifactKind, GeneratorConfig, PositionTable
from bindjar.resolver.types import ResolvedPackage


def _all_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


class TestBindPackages:
    def test_four_artifacts_per_package(self, workspace, packages, make_generator):
        generator = make_generator()
        sets = bind_packages(workspace, packages, generator)

        assert len(sets) == 2
        assert sets[0].go_main == workspace.bind_dir / "go_alphamain.go"
        assert sets[0].java_class == workspace.java_dir / "Alpha.java"
        assert sets[0].jni_source == workspace.bind_dir / "java_alpha.c"
        assert sets[0].jni_header == workspace.bind_dir / "alpha.h"
        for s in sets:
            for path in s.paths():
                assert path.is_file()
        assert len(_all_files(workspace.root)) == 8

    def test_generated_content_lands_in_place(self, workspace, packages, make_generator):
        sets = bind_packages(workspace, packages, make_generator())
        assert sets[1].java_class.read_text() == "// java for beta\n"
        assert sets[1].jni_header.read_text() == "// java-h for beta\n"

    def test_packages_processed_in_input_order(self, workspace, packages, make_generator):
        generator = make_generator()
        bind_packages(workspace, list(reversed(packages)), generator)

        names = [name for name, _ in generator.calls]
        assert names == ["beta"] * 4 + ["alpha"] * 4
        assert [kind for _, kind in generator.calls[:4]] == list(ArtifactKind)

    def test_failure_aborts_and_names_package(self, workspace, packages, make_generator):
        generator = make_generator(fail_on=("beta", ArtifactKind.JAVA_C))

        with pytest.raises(GenerationError) as exc_info:
            bind_packages(workspace, packages, generator)

        assert exc_info.value.package == "beta"
        assert exc_info.value.kind == "java-c"
        assert "beta" in str(exc_info.value)
        assert not (workspace.bind_dir / "java_beta.c").exists()
        assert not (workspace.bind_dir / "beta.h").exists()
        # No temporary leftovers next to the failed artifact
        assert not [p for p in workspace.bind_dir.iterdir() if p.name.startswith(".")]

    def test_class_name_collision_fails_before_generation(self, workspace, make_generator):
        generator = make_generator()
        clashing = [
            ResolvedPackage("example.com/v1/util", "util", Path("/src/v1/util")),
            ResolvedPackage("example.com/v2/util", "util", Path("/src/v2/util")),
        ]

        with pytest.raises(GenerationError, match="collides"):
            bind_packages(workspace, clashing, generator)

        assert generator.calls == []
        assert _all_files(workspace.root) == []

    def test_generator_sees_every_package_and_shared_positions(self, workspace, packages):
        seen = []

        class Recorder:
            def generate_go(self, config):
                seen.append(config)
                config.writer.write(b"package main\n")

            def generate_java(self, config, prefix, kind):
                seen.append(config)
                config.writer.write(b"class X {}\n")

        bind_packages(workspace, packages, Recorder())

        assert all(c.all_packages == packages for c in seen)
        assert len({id(c.positions) for c in seen}) == 1


class TestGenerateArtifact:
    def _config(self, pkg, packages):
        return GeneratorConfig(writer=None, positions=PositionTable(), package=pkg, all_packages=packages)

    def test_rejects_unknown_kind(self, workspace, packages, make_generator):
        generator = make_generator()
        with pytest.raises(ValueError):
            generate_artifact(workspace, self._config(packages[0], packages), generator, "kotlin")
        assert generator.calls == []

    def test_accepts_kind_value_string(self, workspace, packages, make_generator):
        path = generate_artifact(
            workspace, self._config(packages[0], packages), make_generator(), "java-h"
        )
        assert path == workspace.bind_dir / "alpha.h"

    def test_replaces_existing_artifact(self, workspace, packages, make_generator):
        target = workspace.bind_dir / "alpha.h"
        target.write_text("stale")
        generate_artifact(
            workspace, self._config(packages[0], packages), make_generator(), ArtifactKind.JAVA_H
        )
        assert target.read_text() == "// java-h for alpha\n"

    def test_failed_write_keeps_previous_content(self, workspace, packages, make_generator):
        target = workspace.java_dir / "Alpha.java"
        target.write_text("previous")
        generator = make_generator(fail_on=("alpha", ArtifactKind.JAVA))

        with pytest.raises(GenerationError):
            generate_artifact(workspace, self._config(packages[0], packages), generator, ArtifactKind.JAVA)

        assert target.read_text() == "previous"

    def test_unwritable_directory(self, tmp_path, packages, make_generator):
        from bindjar.workspace.manager import Workspace

        ws = Workspace(root=tmp_path / "missing", invocation_dir=tmp_path)
        with pytest.raises(GenerationError, match="failed to open"):
            generate_artifact(ws, self._config(packages[0], packages), make_generator(), ArtifactKind.GO_MAIN)


class TestHelpers:
    def test_artifact_path_every_kind(self, workspace, packages):
        paths = {kind: artifact_path(workspace, packages[0], kind) for kind in ArtifactKind}
        assert len(set(paths.values())) == len(ArtifactKind)

    def test_check_class_names_allows_distinct(self, packages):
        check_class_names(packages)

    def test_java_sources_in_order(self, workspace, packages, make_generator):
        sets = bind_packages(workspace, packages, make_generator())
        assert java_sources(sets) == [
            workspace.java_dir / "Alpha.java",
            workspace.java_dir / "Beta.java",
        ]

    def test_fake_generator_satisfies_protocol(self, make_generator):
        assert isinstance(make_generator(), BindingGenerator)


class TestPositionTable:
    def test_bases_do_not_overlap(self):
        table = PositionTable()
        first = table.add_file("a", 10)
        second = table.add_file("b", 5)
        assert first == 1
        assert second == 12
        assert table.file_at(11) == "a"
        assert table.file_at(12) == "b"
        assert table.file_at(100) is None

    def test_empty_file_still_gets_unique_base(self):
        table = PositionTable()
        assert table.add_file("a", 0) != table.add_file("b", 0)

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            PositionTable().add_file("a", -1)
