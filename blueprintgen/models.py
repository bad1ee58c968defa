"""Data models for the blueprint engine.

Defines the entity being generated, the per-file action record produced by
the walker, the decisions the conflict resolver can take, and the package
descriptors handed to the package gateway.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FileStatus(str, Enum):
    """Classification of a rendered file against the target tree."""
    CREATE = "create"
    IDENTICAL = "identical"
    CONFLICT = "conflict"


class Decision(str, Enum):
    """What the engine decided to do with a single file."""
    CREATE = "create"
    IDENTICAL = "identical"
    SKIP = "skip"
    OVERWRITE = "overwrite"
    DIFF = "diff"
    QUIT = "quit"
    OVERWRITE_ALL = "overwrite_all"
    SKIP_ALL = "skip_all"
    REMOVE = "remove"


# Decision -> primitive action name in the action table.
DECISION_ACTIONS: dict[Decision, str] = {
    Decision.CREATE: "write",
    Decision.IDENTICAL: "identical",
    Decision.SKIP: "skip",
    Decision.OVERWRITE: "overwrite",
    Decision.REMOVE: "remove",
}


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------

class Entity(BaseModel):
    """The subject of generation, e.g. a component called ``x-foo``."""

    name: Optional[str] = Field(default=None)
    options: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# File action record
# ---------------------------------------------------------------------------

@dataclass
class FileInfo:
    """One file discovered under a blueprint's ``files/`` directory.

    Produced by the walker, finalised by the conflict resolver and discarded
    once the installation finishes.
    """

    source_path: Path
    output_path: Path
    display_path: str
    # Encoded output; binary sources are copied through unrendered.
    rendered: Optional[bytes] = None
    binary: bool = False
    status: Optional[FileStatus] = None
    action: Optional[Decision] = None

    def read_existing(self) -> bytes:
        return self.output_path.read_bytes()


@dataclass
class InstallResult:
    """Summary of one install/uninstall run, grouped by applied decision."""

    blueprint: str
    files: dict[str, list[str]] = field(default_factory=dict)

    def record(self, info: FileInfo) -> None:
        key = info.action.value if info.action else "pending"
        self.files.setdefault(key, []).append(info.display_path)

    def paths(self, decision: Decision) -> list[str]:
        return list(self.files.get(decision.value, []))


# ---------------------------------------------------------------------------
# Package descriptors
# ---------------------------------------------------------------------------

class PackageDescriptor(BaseModel):
    """An npm package to add or remove."""

    name: str
    target: Optional[str] = None

    def spec(self) -> str:
        """``name@target``, or just ``name`` when no target is given."""
        return f"{self.name}@{self.target}" if self.target else self.name


class BowerPackage(BaseModel):
    """A bower endpoint: local ``name``, ``source`` to fetch and ``target`` version."""

    name: str = ""
    source: Optional[str] = None
    target: str = "*"

    def model_post_init(self, __context: Any) -> None:
        if self.source is None:
            self.source = self.name

    def spec(self) -> str:
        """Format as ``[name=]source[#target]``.

        An empty name drops the ``name=`` prefix and a ``*`` target drops the
        ``#target`` suffix.
        """
        prefix = f"{self.name}=" if self.name else ""
        suffix = "" if self.target == "*" else f"#{self.target}"
        return f"{prefix}{self.source}{suffix}"
