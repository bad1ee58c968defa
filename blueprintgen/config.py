"""blueprintgen configuration.

Centralised, typed configuration for the blueprint engine. Settings use a
Pydantic v2 model so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

CONFIG_FILE_NAME = ".blueprintgen.json"


class Config(BaseModel):
    """Global blueprintgen configuration.

    Instances are typically created once by the CLI entry point (or loaded
    from ``.blueprintgen.json`` in the project root) and then handed to the
    :class:`~blueprintgen.project.Project` collaborator.
    """

    project_root: Path = Field(default=Path("."))
    blueprints_dir: str = Field(default="blueprints")
    files_dir: str = Field(default="files")
    definition_file: str = Field(default="index.py")
    node_modules_dir: str = Field(default="node_modules")

    # Files never copied out of a blueprint.
    ignored_files: list[str] = Field(default_factory=lambda: [".DS_Store"])
    # Files skipped when generating into a project that already exists.
    ignored_update_files: list[str] = Field(
        default_factory=lambda: [".gitkeep", "app.css", "LICENSE.md"]
    )
    # Files that cannot be shipped under their real name (npm drops .gitignore).
    renamed_files: dict[str, str] = Field(
        default_factory=lambda: {"gitignore": ".gitignore"}
    )

    pod_module_prefix: str = Field(default="")
    addon_keyword: str = Field(default="ember-addon")

    npm_command: str = Field(default="npm")
    bower_command: str = Field(default="bower")
    command_timeout: int = Field(
        default=300, ge=1, description="Package manager process timeout in seconds"
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def project_blueprints_path(self) -> Path:
        """The project-local blueprints directory."""
        return self.project_root / self.blueprints_dir

    @property
    def node_modules_path(self) -> Path:
        """Where dependency packages are installed."""
        return self.project_root / self.node_modules_dir

    @property
    def package_json_path(self) -> Path:
        return self.project_root / "package.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<project_root>/.blueprintgen.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.project_root / CONFIG_FILE_NAME)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def for_project(cls, root: Path) -> "Config":
        """Load ``.blueprintgen.json`` from *root* if present, else defaults.

        The returned config always points at *root*, whatever the file says.
        """
        config_path = Path(root) / CONFIG_FILE_NAME
        if config_path.exists():
            config = cls.load(config_path)
        else:
            config = cls.from_env()
        return config.model_copy(update={"project_root": Path(root)})

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BLUEPRINTGEN_PROJECT_ROOT, BLUEPRINTGEN_BLUEPRINTS_DIR,
            BLUEPRINTGEN_POD_MODULE_PREFIX, BLUEPRINTGEN_IGNORED_FILES,
            BLUEPRINTGEN_NPM, BLUEPRINTGEN_BOWER, BLUEPRINTGEN_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BLUEPRINTGEN_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["BLUEPRINTGEN_PROJECT_ROOT"])
        if os.environ.get("BLUEPRINTGEN_BLUEPRINTS_DIR"):
            kwargs["blueprints_dir"] = os.environ["BLUEPRINTGEN_BLUEPRINTS_DIR"]
        if os.environ.get("BLUEPRINTGEN_POD_MODULE_PREFIX"):
            kwargs["pod_module_prefix"] = os.environ["BLUEPRINTGEN_POD_MODULE_PREFIX"]
        if os.environ.get("BLUEPRINTGEN_IGNORED_FILES"):
            kwargs["ignored_files"] = [
                f.strip()
                for f in os.environ["BLUEPRINTGEN_IGNORED_FILES"].split(",")
                if f.strip()
            ]
        if os.environ.get("BLUEPRINTGEN_NPM"):
            kwargs["npm_command"] = os.environ["BLUEPRINTGEN_NPM"]
        if os.environ.get("BLUEPRINTGEN_BOWER"):
            kwargs["bower_command"] = os.environ["BLUEPRINTGEN_BOWER"]
        if os.environ.get("BLUEPRINTGEN_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["BLUEPRINTGEN_COMMAND_TIMEOUT"])

        return cls(**kwargs)
