from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Build settings loaded from environment variables.

    JAVA_HOME is required for a build but defaults to empty here so that
    the workspace manager can report its absence as a precondition error
    rather than a validation traceback.

    Resource limits
    ───────────────
    rlimit_as_bytes / rlimit_cpu_seconds cap every child process when set
    to a positive value. Zero (the default) leaves the limit untouched;
    the Go linker routinely maps more virtual memory than a fixed cap
    would allow.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Toolchain home: headers for the cgo build come from here.
    java_home: str = ""

    # External tools
    go_command: str = "go"
    javac_command: str = "javac"
    generator_command: str = "gojava-bind"

    # Go package that ships the binding runtime and its support files.
    bind_package: str = "github.com/sridharv/gomobile-java/bind"

    # Per-invocation wall clock timeout for external tools.
    toolchain_timeout_seconds: int = 600

    rlimit_as_bytes: int = 0
    rlimit_cpu_seconds: int = 0

    default_jar: str = "libgojava.jar"

    @field_validator("java_home", mode="before")
    @classmethod
    def strip_java_home(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("toolchain_timeout_seconds")
    @classmethod
    def positive_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("toolchain_timeout_seconds must be > 0")
        return v


def get_settings() -> Settings:
    return Settings()
