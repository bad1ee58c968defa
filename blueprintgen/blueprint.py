"""Blueprint definitions.

A blueprint is a directory::

    <name>/
      index.py     optional definition module
      files/       template tree rendered into the target project

``index.py`` is a plain module.  It may set ``name``, ``description``,
``anonymous_options`` and ``file_map``, and define any of the hook functions
listed in :data:`HOOK_NAMES`.  Every hook receives the blueprint as its first
argument; a hook that wants the default behaviour as well calls
``blueprint.call_default(<hook>, ...)`` explicitly.  Blueprints are never
subclassed: a project blueprint with the same name simply shadows a built-in
one during lookup.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from .actions import DEFAULT_ACTIONS, Action
from .errors import BlueprintError, HookError, UsageError

if TYPE_CHECKING:
    from .context import InstallContext

logger = logging.getLogger(__name__)

DEFINITION_FILE = "index.py"
FILES_DIR = "files"

HOOK_NAMES: tuple[str, ...] = (
    "normalize_entity_name",
    "locals",
    "file_map_tokens",
    "files",
    "before_install",
    "after_install",
    "before_uninstall",
    "after_uninstall",
)

_TRAILING_SEPARATOR_RE = re.compile(r"[/\\]+$")


# ---------------------------------------------------------------------------
# Default hooks
# ---------------------------------------------------------------------------

def validate_entity_name(name: Optional[str]) -> str:
    """Reject missing entity names and names ending in a path separator."""
    if not name:
        raise UsageError(
            "The `generate <entity-name>` command requires an entity name to be "
            "specified. For more details, use `blueprintgen --help`."
        )
    match = _TRAILING_SEPARATOR_RE.search(name)
    if match:
        trimmed = name[: match.start()]
        raise UsageError(
            f'You specified "{name}", but you can\'t use a trailing '
            f'"{match.group(0)[-1]}" as an entity name with generators. '
            f'Please re-run the command with "{trimmed}".'
        )
    return name


def _default_normalize_entity_name(blueprint: "Blueprint", name: Optional[str]) -> str:
    return validate_entity_name(name)


def _default_locals(blueprint: "Blueprint", context: "InstallContext") -> dict[str, Any]:
    return {}


def _default_file_map_tokens(blueprint: "Blueprint", context: "InstallContext") -> dict:
    return {}


def _default_files(blueprint: "Blueprint", files: list[str], context: "InstallContext") -> list[str]:
    return files


def _noop_hook(blueprint: "Blueprint", context: "InstallContext", locals_: dict[str, Any]) -> None:
    return None


DEFAULT_HOOKS: dict[str, Callable[..., Any]] = {
    "normalize_entity_name": _default_normalize_entity_name,
    "locals": _default_locals,
    "file_map_tokens": _default_file_map_tokens,
    "files": _default_files,
    "before_install": _noop_hook,
    "after_install": _noop_hook,
    "before_uninstall": _noop_hook,
    "after_uninstall": _noop_hook,
}


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Blueprint:
    """An immutable, loaded blueprint definition."""

    name: str
    path: Path
    description: str = ""
    anonymous_options: tuple[str, ...] = ()
    file_map: Mapping[str, str] = field(default_factory=dict)
    hooks: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    actions: Mapping[str, Action] = field(default_factory=lambda: dict(DEFAULT_ACTIONS))
    files_dir: str = FILES_DIR

    @property
    def files_path(self) -> Path:
        return self.path / self.files_dir

    # -- hook composition ----------------------------------------------------

    def has_hook(self, name: str) -> bool:
        """True when the definition overrides *name*."""
        return name in self.hooks

    def hook(self, name: str) -> Callable[..., Any]:
        if name not in DEFAULT_HOOKS:
            raise KeyError(f"Unknown blueprint hook: {name}")
        return self.hooks.get(name, DEFAULT_HOOKS[name])

    async def call_hook(self, name: str, *args: Any) -> Any:
        """Run a hook (the override if any) and await its result.

        Errors raised by blueprint code are wrapped in :class:`HookError`;
        engine errors pass through untouched.
        """
        return await self._invoke(name, self.hook(name), args)

    async def call_default(self, name: str, *args: Any) -> Any:
        """Run the engine's default implementation of a hook."""
        return await self._invoke(name, DEFAULT_HOOKS[name], args)

    async def _invoke(self, name: str, fn: Callable[..., Any], args: tuple[Any, ...]) -> Any:
        logger.debug("Running hook %s of blueprint %s", name, self.name)
        try:
            result = fn(self, *args)
            if inspect.isawaitable(result):
                result = await result
        except BlueprintError:
            raise
        except Exception as exc:
            raise HookError(name, self.name, str(exc) or type(exc).__name__) from exc
        return result

    def with_hooks(self, **overrides: Callable[..., Any]) -> "Blueprint":
        """Return a copy with some hooks replaced."""
        unknown = set(overrides) - set(DEFAULT_HOOKS)
        if unknown:
            raise KeyError(f"Unknown blueprint hook(s): {', '.join(sorted(unknown))}")
        return replace(self, hooks={**self.hooks, **overrides})

    def inheriting_locals(self, source: "Blueprint") -> "Blueprint":
        """Paired blueprints without their own ``locals`` reuse *source*'s."""
        if self.has_hook("locals"):
            return self
        source_locals = source.hook("locals")

        def _inherited_locals(_blueprint: "Blueprint", context: "InstallContext") -> Any:
            return source_locals(source, context)

        return self.with_hooks(locals=_inherited_locals)

    # -- file listing --------------------------------------------------------

    def raw_files(self) -> list[str]:
        """Every regular file under ``files/``, as relative POSIX paths.

        Traversal is depth-first with entries sorted by name, so a directory's
        files are listed where the directory sorts among its siblings.
        """
        root = self.files_path
        if not root.is_dir():
            return []
        return list(_walk_sorted(root, ""))

    # -- loading -------------------------------------------------------------

    @classmethod
    def load(
        cls,
        path: str | Path,
        *,
        definition_file: str = DEFINITION_FILE,
        files_dir: str = FILES_DIR,
    ) -> Optional["Blueprint"]:
        """Load the blueprint in directory *path*.

        Returns ``None`` when *path* is not a blueprint directory, i.e. has
        neither a definition module nor a ``files/`` directory.
        """
        path = Path(path).resolve()
        if not is_blueprint_dir(path, definition_file, files_dir):
            return None

        module = None
        definition = path / definition_file
        if definition.is_file():
            module = _import_definition(definition)

        hooks = {}
        attrs: dict[str, Any] = {}
        if module is not None:
            for hook_name in HOOK_NAMES:
                fn = getattr(module, hook_name, None)
                if callable(fn):
                    hooks[hook_name] = fn
            attrs = {
                "name": getattr(module, "name", None),
                "description": getattr(module, "description", None),
                "anonymous_options": getattr(module, "anonymous_options", None),
                "file_map": getattr(module, "file_map", None),
            }

        blueprint = cls(
            name=attrs.get("name") or path.name,
            path=path,
            description=attrs.get("description") or "",
            anonymous_options=tuple(attrs.get("anonymous_options") or ()),
            file_map=dict(attrs.get("file_map") or {}),
            hooks=hooks,
            files_dir=files_dir,
        )
        logger.debug("Loaded blueprint %s from %s", blueprint.name, path)
        return blueprint


def is_blueprint_dir(
    path: Path, definition_file: str = DEFINITION_FILE, files_dir: str = FILES_DIR
) -> bool:
    return path.is_dir() and (
        (path / definition_file).is_file() or (path / files_dir).is_dir()
    )


def has_path_token(files: list[str]) -> bool:
    return any("__path__" in f for f in files)


def supports_addon(files: list[str]) -> bool:
    return any("__root__" in f for f in files)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _walk_sorted(root: Path, prefix: str):
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        rel = f"{prefix}{entry.name}"
        if entry.is_dir(follow_symlinks=True):
            yield from _walk_sorted(Path(entry.path), f"{rel}/")
        elif entry.is_file(follow_symlinks=True):
            yield rel


def _import_definition(definition: Path) -> ModuleType:
    """Execute a blueprint's definition module without touching ``sys.modules``."""
    module_name = f"blueprintgen_definition_{definition.parent.name.replace('-', '_')}"
    spec = importlib.util.spec_from_file_location(module_name, definition)
    if spec is None or spec.loader is None:
        raise BlueprintError(f"Cannot load blueprint definition {definition}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise HookError("load", definition.parent.name, str(exc)) from exc
    return module
