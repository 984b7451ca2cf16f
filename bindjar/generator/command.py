"""Binding generator backed by an external executable.

Invokes the configured generator command once per artifact:

    <generator_command> -lang=<kind> -pkg=<import path> -export=<export data>
        -all=<comma-separated import paths> [-prefix=<java package>]

and copies its stdout into the config writer. stderr is kept apart from
the generated bytes and only surfaces in the error on failure.
"""

import logging
import subprocess
from pathlib import Path

from bindjar.core.config import Settings
from bindjar.errors import GenerationError
from bindjar.generator.types import ArtifactKind, GeneratorConfig
from bindjar.toolchain.limits import resource_limiter

logger = logging.getLogger(__name__)


class CommandGenerator:
    """BindingGenerator that shells out to settings.generator_command."""

    def __init__(self, settings: Settings, cwd: Path):
        self._settings = settings
        self._cwd = cwd

    def generate_go(self, config: GeneratorConfig) -> None:
        self._generate(config, ArtifactKind.GO_MAIN, prefix="")

    def generate_java(self, config: GeneratorConfig, prefix: str, kind: ArtifactKind) -> None:
        kind = ArtifactKind(kind)
        if kind is ArtifactKind.GO_MAIN:
            raise ValueError("generate_java does not produce the Go entry point")
        self._generate(config, kind, prefix=prefix)

    def build_args(self, config: GeneratorConfig, kind: ArtifactKind, prefix: str) -> list[str]:
        pkg = config.package
        args = [
            self._settings.generator_command,
            f"-lang={kind.value}",
            f"-pkg={pkg.import_path}",
            f"-export={pkg.export_file or ''}",
            "-all=" + ",".join(p.import_path for p in config.all_packages),
        ]
        if prefix:
            args.append(f"-prefix={prefix}")
        return args

    def _generate(self, config: GeneratorConfig, kind: ArtifactKind, prefix: str) -> None:
        if config.writer is None:
            raise ValueError("generator config has no writer")

        pkg = config.package
        args = self.build_args(config, kind, prefix)
        logger.debug("Generating %s for %s", kind.value, pkg.import_path)

        try:
            result = subprocess.run(
                args,
                cwd=str(self._cwd),
                capture_output=True,
                timeout=self._settings.toolchain_timeout_seconds,
                preexec_fn=resource_limiter(
                    self._settings.rlimit_as_bytes, self._settings.rlimit_cpu_seconds
                ),
            )
        except subprocess.TimeoutExpired:
            raise GenerationError(
                pkg.name, kind.value,
                f"timed out after {self._settings.toolchain_timeout_seconds} seconds",
            )
        except OSError as exc:
            raise GenerationError(pkg.name, kind.value, str(exc)) from exc

        if result.returncode != 0:
            detail = result.stderr.decode("utf-8", errors="replace").strip()
            raise GenerationError(pkg.name, kind.value, f"exit {result.returncode}: {detail}")

        config.writer.write(result.stdout)
        config.positions.add_file(f"{pkg.import_path}#{kind.value}", len(result.stdout))
