"""Resolve the locals every template of a blueprint is rendered with."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .errors import BlueprintError, HookError
from .strings import camelize, classify, dasherize, decamelize, flatten_package_name
from .tokens import file_map_tokens, generate_file_map, generate_file_map_variables

if TYPE_CHECKING:
    from .blueprint import Blueprint
    from .context import InstallContext

logger = logging.getLogger(__name__)


async def resolve_locals(
    blueprint: "Blueprint",
    context: "InstallContext",
    has_path_token: bool,
) -> dict[str, Any]:
    """Build the template locals for one installation.

    The standard names derived from the package and entity names come first;
    whatever the blueprint's ``locals`` hook returns is layered on top.
    ``fileMap`` is always the engine's own, computed from the path tokens.
    """
    package_name = context.project.name()
    module_name = context.entity_name or package_name
    sanitized_module_name = module_name.replace("/", "-")
    flat_package_name = flatten_package_name(package_name)

    custom_locals = await blueprint.call_hook("locals", context) or {}
    if not isinstance(custom_locals, dict):
        raise HookError("locals", blueprint.name, "must return a mapping")

    variables = generate_file_map_variables(
        blueprint, context, module_name, custom_locals, has_path_token
    )
    tokens = await file_map_tokens(blueprint, context)
    try:
        file_map = generate_file_map(variables, tokens)
    except BlueprintError:
        raise
    except Exception as exc:
        raise HookError("file_map_tokens", blueprint.name, str(exc)) from exc

    standard = {
        "dasherizedPackageName": dasherize(flat_package_name),
        "classifiedPackageName": classify(flat_package_name),
        "dasherizedModuleName": dasherize(module_name),
        "classifiedModuleName": classify(sanitized_module_name),
        "camelizedModuleName": camelize(sanitized_module_name),
        "decamelizedModuleName": decamelize(sanitized_module_name),
        "hasPathToken": has_path_token,
        "targetFiles": list(context.target_files),
        "rawArgs": list(context.raw_args),
    }
    resolved = {**standard, **custom_locals, "fileMap": file_map}
    logger.debug("Locals for %s: %s", blueprint.name, sorted(resolved))
    return resolved
