"""Types for package resolution.

PackageDescriptor comes from the command line; ResolvedPackage is what
the resolver hands to every later stage and is read-only from then on.
GoListPackage mirrors the subset of `go list -json` output we consume.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class PackageDescriptor:
    """An input package identified by its import path."""

    import_path: str


@dataclass(frozen=True)
class ResolvedPackage:
    """A package with its compiled type information located.

    export_file points at the compiler's export data for the package,
    which is what the binding generator reads type information from.
    """

    import_path: str
    name: str
    dir: Path
    export_file: Optional[Path] = None

    @property
    def class_name(self) -> str:
        """Java class name derived from the package short name."""
        return self.name[:1].upper() + self.name[1:]

    def to_dict(self) -> dict:
        return {
            "import_path": self.import_path,
            "name": self.name,
            "dir": str(self.dir),
            "export_file": str(self.export_file) if self.export_file else None,
        }


class GoListError(BaseModel):
    model_config = ConfigDict(extra="ignore")

    err: str = Field(default="", alias="Err")


class GoListPackage(BaseModel):
    """Subset of a `go list -json` record."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    import_path: str = Field(alias="ImportPath")
    name: str = Field(default="", alias="Name")
    dir: str = Field(default="", alias="Dir")
    export: str = Field(default="", alias="Export")
    error: Optional[GoListError] = Field(default=None, alias="Error")
