"""Blueprint lookup across the project, its dependencies and the built-ins."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .blueprint import DEFINITION_FILE, FILES_DIR, Blueprint, is_blueprint_dir
from .errors import UnknownBlueprintError
from .project import Project

logger = logging.getLogger(__name__)

BUILTIN_BLUEPRINTS_PATH = Path(__file__).parent / "blueprints"


@dataclass(frozen=True, eq=False)
class BlueprintSource:
    """One place blueprints can come from.

    Either a directory whose sub-directories are blueprints, or an explicit
    name -> directory mapping published by a dependency.
    """

    label: str
    directory: Optional[Path] = None
    mapping: dict[str, Path] = field(default_factory=dict)

    def locate(self, name: str, definition_file: str, files_dir: str) -> Optional[Path]:
        if name in self.mapping:
            return self.mapping[name]
        if self.directory is not None:
            candidate = self.directory / name
            if is_blueprint_dir(candidate, definition_file, files_dir):
                return candidate
        return None

    def names(self, definition_file: str, files_dir: str) -> list[str]:
        names = list(self.mapping)
        if self.directory is not None and self.directory.is_dir():
            names += sorted(
                entry.name
                for entry in self.directory.iterdir()
                if not entry.name.startswith(".")
                and is_blueprint_dir(entry, definition_file, files_dir)
            )
        return names


class BlueprintRegistry:
    """Resolves blueprint names against an ordered list of sources.

    The first source providing a name wins, so a project blueprint shadows a
    dependency's, which shadows a built-in.
    """

    def __init__(
        self,
        sources: list[BlueprintSource],
        definition_file: str = DEFINITION_FILE,
        files_dir: str = FILES_DIR,
    ) -> None:
        self.sources = sources
        self.definition_file = definition_file
        self.files_dir = files_dir
        self._cache: dict[Path, Optional[Blueprint]] = {}

    @classmethod
    def from_project(cls, project: Project, include_builtin: bool = True) -> "BlueprintRegistry":
        sources = [
            BlueprintSource(label=str(path), directory=path)
            for path in project.blueprint_lookup_paths()
        ]
        exposed = project.exposed_blueprints()
        if exposed:
            sources.append(BlueprintSource(label="package.json blueprints", mapping=exposed))
        if include_builtin:
            sources.append(BlueprintSource(label="built-in", directory=BUILTIN_BLUEPRINTS_PATH))
        config = project.config
        return cls(sources, config.definition_file, config.files_dir)

    @classmethod
    def from_paths(cls, paths: list[str | Path], include_builtin: bool = False) -> "BlueprintRegistry":
        sources = [BlueprintSource(label=str(p), directory=Path(p)) for p in paths]
        if include_builtin:
            sources.append(BlueprintSource(label="built-in", directory=BUILTIN_BLUEPRINTS_PATH))
        return cls(sources)

    def _load(self, path: Path) -> Optional[Blueprint]:
        path = path.resolve()
        if path not in self._cache:
            self._cache[path] = Blueprint.load(
                path, definition_file=self.definition_file, files_dir=self.files_dir
            )
        return self._cache[path]

    def lookup(self, name: str, ignore_missing: bool = False) -> Optional[Blueprint]:
        """Find blueprint *name*.

        A name that is itself a path to a blueprint directory is loaded
        directly.  Raises :class:`UnknownBlueprintError` when nothing
        matches, unless *ignore_missing* is set.
        """
        if _looks_like_path(name) and Path(name).is_dir():
            blueprint = self._load(Path(name))
            if blueprint is not None:
                return blueprint

        for source in self.sources:
            path = source.locate(name, self.definition_file, self.files_dir)
            if path is None:
                continue
            blueprint = self._load(path)
            if blueprint is not None:
                logger.debug("Found blueprint %s in %s", name, source.label)
                return blueprint

        if ignore_missing:
            return None
        raise UnknownBlueprintError(name)

    def lookup_paired(self, name: str, suffix: str) -> Optional[Blueprint]:
        """Find the ``<name>-<suffix>`` companion of *name*, if any."""
        return self.lookup(f"{name}-{suffix}", ignore_missing=True)

    def list_blueprints(self) -> dict[str, list[Blueprint]]:
        """Blueprints per source label, shadowed names included once per source."""
        listing: dict[str, list[Blueprint]] = {}
        for source in self.sources:
            found = []
            for name in source.names(self.definition_file, self.files_dir):
                path = source.locate(name, self.definition_file, self.files_dir)
                blueprint = self._load(path) if path is not None else None
                if blueprint is not None:
                    found.append(blueprint)
            if found:
                listing[source.label] = found
        return listing


def _looks_like_path(name: str) -> bool:
    return os.path.isabs(name) or "/" in name or os.sep in name or name.startswith(".")
