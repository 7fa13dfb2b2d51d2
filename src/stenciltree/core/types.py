"""
Core type definitions for stenciltree.

ComponentRecord and Manifest mirror the subset of Stencil's `docs.json`
output that the dependency tree needs. Node is the presentation-ready
projection handed to the editor host.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FailureReason(StrEnum):
    """Why manifest discovery or loading came up empty."""
    NO_BASE_PATH = "no_base_path"
    CONFIG_NOT_FOUND = "config_not_found"
    MANIFEST_PATH_NOT_DECLARED = "manifest_path_not_declared"
    MANIFEST_FILE_MISSING = "manifest_file_missing"
    MANIFEST_UNREADABLE = "manifest_unreadable"


@dataclass(frozen=True)
class Failure:
    """
    A recoverable failure reported to the host.

    Attributes:
        reason: The failure category.
        message: Human-readable detail for logs and tooltips.
        path: The path that was being inspected, if any.
    """

    reason: FailureReason
    message: str = ""
    path: Optional[Path] = None

    def __str__(self) -> str:
        location = f" ({self.path})" if self.path else ""
        return f"{self.reason.value}: {self.message}{location}"


class ComponentRecord(BaseModel):
    """
    One component entry from `docs.json`.

    Stencil emits many more keys per component (props, events, styles...);
    they are ignored.
    """
    tag: str
    docs: str = ""
    file_path: Optional[str] = Field(default=None, alias="filePath")
    dependents: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Manifest(BaseModel):
    """The parsed `docs.json` document."""
    components: List[ComponentRecord]

    model_config = ConfigDict(frozen=True, extra="ignore")

    def tags(self) -> List[str]:
        return [component.tag for component in self.components]


class Node(BaseModel):
    """
    Presentation-ready projection of a ComponentRecord.

    A Node never references other Nodes. Children are found by looking up
    `dependencies` tags against the materializer's current snapshot.
    """
    tag: str
    docs: str = ""
    resolved_path: Optional[Path] = None
    dependents: Tuple[str, ...] = ()
    dependencies: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def expandable(self) -> bool:
        return len(self.dependencies) > 0

    @property
    def label(self) -> str:
        return self.tag

    @property
    def tooltip(self) -> str:
        return self.docs
