"""Path tokens: ``__name__``, ``__path__``, ``__root__`` and ``__test__``.

Blueprint file paths contain placeholder tokens that are replaced when the
file is mapped into the target tree.  Each token is computed by a function of
the *file map variables* (pod mode, addon flags, blueprint and module names),
and a blueprint's ``file_map_tokens`` hook can add tokens or override the
standard ones.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Any, Callable

from .errors import HookError
from .strings import dasherize, pluralize

if TYPE_CHECKING:
    from .blueprint import Blueprint
    from .context import InstallContext

TokenFn = Callable[[dict[str, Any]], Any]


def generate_file_map_variables(
    blueprint: "Blueprint",
    context: "InstallContext",
    module_name: str,
    custom_locals: dict[str, Any],
    has_path_token: bool,
) -> dict[str, Any]:
    """Collect the inputs token functions work from."""
    project = context.project
    pod_module_prefix = project.pod_module_prefix or ""
    in_addon = project.is_addon() or bool(context.in_repo_addon)

    return {
        "pod": context.pod,
        "pod_path": pod_module_prefix.rsplit("/", 1)[-1],
        "has_path_token": has_path_token,
        "in_addon": in_addon,
        "in_repo_addon": context.in_repo_addon,
        "in_dummy": project.is_addon() and context.dummy,
        "blueprint_name": blueprint.name,
        "origin_blueprint_name": context.origin_blueprint_name or blueprint.name,
        "installing_test": context.installing_test,
        "installing_addon": context.installing_addon,
        "dasherized_module_name": dasherize(module_name),
        "locals": custom_locals,
    }


# ---------------------------------------------------------------------------
# Standard tokens
# ---------------------------------------------------------------------------

def _uses_pod_layout(variables: dict[str, Any]) -> bool:
    return bool(variables["pod"] and variables["has_path_token"])


def _name_token(variables: dict[str, Any]) -> str:
    if _uses_pod_layout(variables):
        return variables["blueprint_name"]
    return variables["dasherized_module_name"]


def _path_token(variables: dict[str, Any]) -> str:
    if _uses_pod_layout(variables):
        return posixpath.join(variables["pod_path"], variables["dasherized_module_name"])
    blueprint_name = variables["blueprint_name"]
    if blueprint_name.endswith("-test"):
        blueprint_name = blueprint_name[: -len("-test")]
    return pluralize(blueprint_name)


def _root_token(variables: dict[str, Any]) -> str:
    if variables["in_repo_addon"]:
        return posixpath.join("lib", variables["in_repo_addon"], "addon")
    if variables["in_dummy"]:
        return posixpath.join("tests", "dummy", "app")
    if variables["in_addon"]:
        return "addon"
    return "app"


def _test_token(variables: dict[str, Any]) -> str:
    if _uses_pod_layout(variables):
        return variables["blueprint_name"]
    return f"{variables['dasherized_module_name']}-test"


STANDARD_TOKENS: dict[str, TokenFn] = {
    "__name__": _name_token,
    "__path__": _path_token,
    "__root__": _root_token,
    "__test__": _test_token,
}


async def file_map_tokens(blueprint: "Blueprint", context: "InstallContext") -> dict[str, TokenFn]:
    """Standard tokens merged with the blueprint's own (its win)."""
    custom = await blueprint.call_hook("file_map_tokens", context) or {}
    if not isinstance(custom, dict):
        raise HookError("file_map_tokens", blueprint.name, "must return a mapping of token functions")
    return {**STANDARD_TOKENS, **custom}


def generate_file_map(variables: dict[str, Any], tokens: dict[str, TokenFn]) -> dict[str, str]:
    """Evaluate every token function against *variables*."""
    file_map = {}
    for token, fn in tokens.items():
        value = fn(variables)
        file_map[token] = "" if value is None else str(value)
    return file_map
