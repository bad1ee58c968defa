"""The project collaborator: what the engine knows about the target project.

Reads ``package.json`` for the package name, dependencies and addon flag,
and works out the ordered list of places blueprints are looked up in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import Config
from .utils import load_json

logger = logging.getLogger(__name__)


class Project:
    """A JavaScript project rooted at ``config.project_root``."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.root = Path(config.project_root)
        self._pkg: dict[str, Any] | None = None

    @classmethod
    def from_root(cls, root: str | Path) -> "Project":
        """Create a project for *root*, honouring its ``.blueprintgen.json``."""
        return cls(Config.for_project(Path(root)))

    # -- package.json ------------------------------------------------------

    @property
    def pkg(self) -> dict[str, Any]:
        """Parsed ``package.json``; empty when the project has none yet."""
        if self._pkg is None:
            path = self.config.package_json_path
            self._pkg = load_json(path) if path.exists() else {}
        return self._pkg

    def reload(self) -> None:
        """Forget the cached ``package.json`` (after a package was added)."""
        self._pkg = None

    def name(self) -> str:
        return self.pkg.get("name") or self.root.resolve().name

    def dependencies(self) -> dict[str, str]:
        """Runtime and dev dependencies, in declaration order."""
        return {
            **self.pkg.get("dependencies", {}),
            **self.pkg.get("devDependencies", {}),
        }

    def is_package_missing(self, package_name: str) -> bool:
        """True unless *package_name* is a declared (dev) dependency."""
        return package_name not in self.dependencies()

    def is_addon(self) -> bool:
        return self.config.addon_keyword in self.pkg.get("keywords", [])

    def exists(self) -> bool:
        """True when generating into an already initialised project."""
        return self.config.package_json_path.exists()

    # -- configuration -----------------------------------------------------

    @property
    def pod_module_prefix(self) -> str:
        return self.config.pod_module_prefix or self.pkg.get("podModulePrefix", "")

    def in_repo_addon_path(self, name: str) -> Path:
        return self.root / "lib" / name

    # -- blueprint lookup --------------------------------------------------

    def addon_roots(self) -> list[Path]:
        """Installed dependency packages, in ``package.json`` order."""
        roots = []
        for dep in self.dependencies():
            dep_root = self.config.node_modules_path / dep
            if dep_root.is_dir():
                roots.append(dep_root)
        return roots

    def blueprint_lookup_paths(self) -> list[Path]:
        """Directories holding blueprints, highest priority first.

        The project's own ``blueprints/`` directory comes first, followed by
        the ``blueprints/`` directory of each dependency.  Built-in
        blueprints are appended by the registry.
        """
        paths = []
        local = self.config.project_blueprints_path
        if local.is_dir():
            paths.append(local)
        for dep_root in self.addon_roots():
            candidate = dep_root / "blueprints"
            if candidate.is_dir():
                paths.append(candidate)
        logger.debug("Blueprint lookup paths: %s", [str(p) for p in paths])
        return paths

    def exposed_blueprints(self) -> dict[str, Path]:
        """Blueprints published through a dependency's ``package.json``.

        A dependency may map names to directories with a ``"blueprints"``
        object instead of (or as well as) shipping a ``blueprints/`` folder.
        The first dependency to expose a name wins.
        """
        exposed: dict[str, Path] = {}
        for dep_root in self.addon_roots():
            pkg_path = dep_root / "package.json"
            if not pkg_path.exists():
                continue
            mapping = load_json(pkg_path).get("blueprints")
            if not isinstance(mapping, dict):
                continue
            for name, rel in mapping.items():
                exposed.setdefault(name, (dep_root / rel).resolve())
        return exposed
