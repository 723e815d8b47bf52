"""Data models for the decoded binary lockfile."""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class Envelope:
    """Validated fixed-layout header of a binary lockfile."""

    format: int
    meta_hash: memoryview
    end: int
    list_len: int
    input_alignment: int
    field_count: int
    begin_at: int
    end_at: int


@dataclass
class PackageView:
    """One row of the package table.

    Each attribute is a view into the column it was read from, the row is
    never copied out of the input buffer.
    """

    index: int
    columns: Dict[str, memoryview]

    @property
    def name(self) -> memoryview:
        return self.columns["name"]

    @property
    def resolution(self) -> memoryview:
        return self.columns["resolution"]

    @property
    def dependencies(self) -> memoryview:
        return self.columns["dependencies"]

    @property
    def meta(self) -> memoryview:
        return self.columns["meta"]


@dataclass(frozen=True)
class Resolution:
    """Where a package was obtained from. Empty strings for unsupported tags."""

    tag: int
    url: str = ""
    version: str = ""


@dataclass(frozen=True)
class Dependency:
    """A decoded 26-byte dependency declaration."""

    name: str
    behavior: int
    tag: int
    literal: str


@dataclass
class Package:
    """A fully decoded package, ready for rendering."""

    index: int
    name: str
    resolution: Resolution
    integrity: str
    dependencies: List[Dependency] = field(default_factory=list)
    requested_versions: List[str] = field(default_factory=list)

    @property
    def version(self) -> str:
        return self.resolution.version

    @property
    def url(self) -> str:
        return self.resolution.url


@dataclass
class Lockfile:
    """A decoded binary lockfile. `packages` excludes the synthetic root row."""

    meta_hash: str
    packages: List[Package] = field(default_factory=list)
