"""The installation context: everything one install/uninstall run needs.

A context is created by the caller (CLI, generate task or a hook installing
another blueprint) and owned by a single coordinator run.  Session state such
as "overwrite all" lives here too, so nothing is shared between runs through
module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .models import Entity
from .packages import (
    PackageGateway,
    PackageLike,
    add_addon_to_project,
    add_addons_to_project,
    add_bower_package_to_project,
    add_bower_packages_to_project,
    add_package_to_project,
    add_packages_to_project,
    remove_package_from_project,
    remove_packages_from_project,
)
from .project import Project
from .templates import Renderer, TemplateRenderer
from .ui import UI

if TYPE_CHECKING:
    from .blueprint import Blueprint
    from .registry import BlueprintRegistry


@dataclass
class ConflictSession:
    """Sticky answers given at a conflict prompt."""

    overwrite_all: bool = False
    skip_all: bool = False


@dataclass
class InstallContext:
    """Options and collaborators for one blueprint installation."""

    target: Path = field(default_factory=Path.cwd)
    entity: Optional[Entity] = None
    project: Optional[Project] = None
    ui: Optional[UI] = None
    packages: Optional[PackageGateway] = None
    renderer: Renderer = field(default_factory=TemplateRenderer)
    registry: Optional["BlueprintRegistry"] = None

    dry_run: bool = False
    verbose: bool = False
    pod: bool = False
    dummy: bool = False
    in_repo_addon: Optional[str] = None
    target_files: list[str] = field(default_factory=list)

    # Positional command-line words: [blueprint, entity, extra...].
    args: list[str] = field(default_factory=list)
    raw_args: list[str] = field(default_factory=list)

    origin_blueprint_name: Optional[str] = None
    installing_test: bool = False
    installing_addon: bool = False

    # None means "take it from the project configuration".
    ignored_files: Optional[list[str]] = None
    ignored_update_files: Optional[list[str]] = None
    renamed_files: Optional[dict[str, str]] = None

    session: ConflictSession = field(default_factory=ConflictSession)

    def __post_init__(self) -> None:
        self.target = Path(self.target)
        if self.project is None:
            self.project = Project.from_root(self.target)
        config = self.project.config
        if self.ignored_files is None:
            self.ignored_files = list(config.ignored_files)
        if self.ignored_update_files is None:
            self.ignored_update_files = list(config.ignored_update_files)
        if self.renamed_files is None:
            self.renamed_files = dict(config.renamed_files)

    def derive(self, **changes: Any) -> "InstallContext":
        """Copy this context with *changes* applied."""
        return replace(self, **changes)

    @property
    def entity_name(self) -> Optional[str]:
        return self.entity.name if self.entity else None

    def is_update(self) -> bool:
        """True when generating into a project that already exists."""
        return self.project.exists()

    # -- blueprint lookup ------------------------------------------------------

    def get_registry(self) -> "BlueprintRegistry":
        if self.registry is None:
            from .registry import BlueprintRegistry

            self.registry = BlueprintRegistry.from_project(self.project)
        return self.registry

    def lookup_blueprint(self, name: str, ignore_missing: bool = False) -> Optional["Blueprint"]:
        return self.get_registry().lookup(name, ignore_missing=ignore_missing)

    # -- package helpers -------------------------------------------------------

    async def add_package_to_project(self, name: str, target: Optional[str] = None) -> None:
        await add_package_to_project(self, name, target)

    async def add_packages_to_project(self, packages: Iterable[PackageLike]) -> None:
        await add_packages_to_project(self, packages)

    async def remove_package_from_project(self, name: str) -> None:
        await remove_package_from_project(self, name)

    async def remove_packages_from_project(self, packages: Iterable[PackageLike]) -> None:
        await remove_packages_from_project(self, packages)

    async def add_bower_package_to_project(self, name: str, target: Optional[str] = None) -> None:
        await add_bower_package_to_project(self, name, target)

    async def add_bower_packages_to_project(self, packages: Iterable[Any]) -> None:
        await add_bower_packages_to_project(self, packages)

    async def add_addon_to_project(self, name: str, target: Optional[str] = None) -> None:
        await add_addon_to_project(self, name, target)

    async def add_addons_to_project(self, packages: Iterable[PackageLike]) -> None:
        await add_addons_to_project(self, packages)
