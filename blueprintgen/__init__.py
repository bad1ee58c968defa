"""blueprintgen - render blueprint file trees into JavaScript projects."""

from .blueprint import Blueprint
from .config import Config
from .context import ConflictSession, InstallContext
from .errors import (
    ActionNotFoundError,
    BlueprintError,
    ConflictAbort,
    HookError,
    RenderError,
    UnknownBlueprintError,
    UsageError,
)
from .generate import destroy_from_blueprint, generate_from_blueprint
from .installer import install, uninstall
from .models import Decision, Entity, FileInfo, FileStatus, InstallResult
from .project import Project
from .registry import BlueprintRegistry

__version__ = "0.1.0"

__all__ = [
    "ActionNotFoundError",
    "Blueprint",
    "BlueprintError",
    "BlueprintRegistry",
    "Config",
    "ConflictAbort",
    "ConflictSession",
    "Decision",
    "Entity",
    "FileInfo",
    "FileStatus",
    "HookError",
    "InstallContext",
    "InstallResult",
    "Project",
    "RenderError",
    "UnknownBlueprintError",
    "UsageError",
    "destroy_from_blueprint",
    "generate_from_blueprint",
    "install",
    "uninstall",
]
