"""Core data models shared across resprune components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Union


class AssetFamily(str, Enum):
    """How a resource is declared on disk."""

    FILE = "file"
    VALUE = "value"


class AssetType(Enum):
    """Closed set of resource types tracked by the pruner.

    ``type_name`` is the stable string used in configuration and reports.
    ``color`` exists in both families: value lookups win over file lookups.
    """

    DRAWABLE = ("drawable", AssetFamily.FILE)
    MIPMAP = ("mipmap", AssetFamily.FILE)
    LAYOUT = ("layout", AssetFamily.FILE)
    MENU = ("menu", AssetFamily.FILE)
    ANIMATOR = ("animator", AssetFamily.FILE)
    ANIM = ("anim", AssetFamily.FILE)
    COLOR_STATE_LIST = ("color", AssetFamily.FILE)
    RAW = ("raw", AssetFamily.FILE)

    STRING = ("string", AssetFamily.VALUE)
    COLOR = ("color", AssetFamily.VALUE)
    DIMEN = ("dimen", AssetFamily.VALUE)
    STYLE = ("style", AssetFamily.VALUE)
    BOOL = ("bool", AssetFamily.VALUE)
    INTEGER = ("integer", AssetFamily.VALUE)
    ARRAY = ("array", AssetFamily.VALUE)
    ATTR = ("attr", AssetFamily.VALUE)
    PLURALS = ("plurals", AssetFamily.VALUE)

    def __init__(self, type_name: str, family: AssetFamily) -> None:
        self.type_name = type_name
        self.family = family

    @classmethod
    def file_types(cls) -> List["AssetType"]:
        return [member for member in cls if member.family is AssetFamily.FILE]

    @classmethod
    def value_types(cls) -> List["AssetType"]:
        return [member for member in cls if member.family is AssetFamily.VALUE]

    @classmethod
    def type_names(cls) -> List[str]:
        names: List[str] = []
        for member in cls:
            if member.type_name not in names:
                names.append(member.type_name)
        return names

    @classmethod
    def from_type_name(cls, type_name: str) -> Optional["AssetType"]:
        """Resolve a type name, preferring value types on conflicts."""
        for member in cls.value_types() + cls.file_types():
            if member.type_name == type_name:
                return member
        return None

    @classmethod
    def from_directory_name(cls, dir_name: str) -> Optional["AssetType"]:
        """Resolve ``drawable-hdpi`` style directory names to a file type."""
        base_name = dir_name.split("-", 1)[0]
        for member in cls.file_types():
            if member.type_name == base_name:
                return member
        return None


@dataclass(frozen=True)
class FileLocation:
    """The whole file is the resource."""

    path: Path


@dataclass(frozen=True)
class ElementLocation:
    """A 1-based, inclusive line range inside a shared values file."""

    path: Path
    start_line: int
    end_line: int
    element_text: str = ""

    def __post_init__(self) -> None:
        if self.start_line < 1 or self.start_line > self.end_line:
            raise ValueError(
                f"Invalid element range {self.start_line}-{self.end_line} in {self.path}"
            )


Location = Union[FileLocation, ElementLocation]


@dataclass(frozen=True)
class DeclaredAsset:
    """A resource declared in one of the resource directories."""

    name: str
    asset_type: AssetType
    location: Location
    qualifiers: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("DeclaredAsset.name must not be empty")

    @property
    def path(self) -> Path:
        return self.location.path


class DetectorKind(str, Enum):
    """Which recognition strategy produced a reference."""

    MARKUP_REFERENCE = "markup_reference"
    KOTLIN_SYMBOL = "kotlin_symbol"
    JAVA_SYMBOL = "java_symbol"
    VIEW_BINDING = "view_binding"
    FORMATTED_RESOURCE = "formatted_resource"


@dataclass(frozen=True)
class ReferenceLocation:
    """Where a reference was seen (1-based line and column)."""

    path: Path
    line: int
    column: int


@dataclass(frozen=True)
class Reference:
    """A usage of a resource found in source or markup text."""

    name: str
    asset_type: AssetType
    location: ReferenceLocation
    kind: DetectorKind


@dataclass
class Classification:
    """Outcome of classifying declared assets against references."""

    to_remove: List[DeclaredAsset] = field(default_factory=list)
    to_keep: List[DeclaredAsset] = field(default_factory=list)
    reasons: Dict[DeclaredAsset, str] = field(default_factory=dict)

    def reason_for(self, asset: DeclaredAsset) -> str:
        return self.reasons.get(asset, "Resource is referenced or matches exclude pattern")


@dataclass(frozen=True)
class RemovedAsset:
    asset: DeclaredAsset
    reason: str


@dataclass(frozen=True)
class KeptAsset:
    asset: DeclaredAsset
    reason: str


@dataclass(frozen=True)
class PruneFailure:
    asset: DeclaredAsset
    message: str


@dataclass
class ExecutionReport:
    """What happened when a classification was applied to disk."""

    removed: List[RemovedAsset] = field(default_factory=list)
    kept: List[KeptAsset] = field(default_factory=list)
    failures: List[PruneFailure] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def kept_count(self) -> int:
        return len(self.kept)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def is_success(self) -> bool:
        return not self.failures

    def merge(self, other: "ExecutionReport") -> "ExecutionReport":
        """Return a report combining removals/failures; kept comes from ``other``."""
        return ExecutionReport(
            removed=self.removed + other.removed,
            kept=list(other.kept),
            failures=self.failures + other.failures,
        )


@dataclass
class PruneSummary:
    """Result of a (possibly cascading) prune run."""

    iterations: int
    report: ExecutionReport
    classification: Classification
    declared_count: int = 0
    reference_count: int = 0
