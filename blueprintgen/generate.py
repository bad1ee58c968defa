"""The generate/destroy task: a blueprint plus its test and addon companions.

``generate component x-foo`` installs ``component``, then ``component-test``
and, in addon projects, ``component-addon`` (or the generic
``addon-import`` re-export) when those exist.  Destroy runs the same set
through uninstall.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, NamedTuple, Optional

from .blueprint import Blueprint, supports_addon
from .context import InstallContext
from .installer import install, uninstall
from .models import Entity, InstallResult
from .registry import BlueprintRegistry

logger = logging.getLogger(__name__)

# Blueprints whose addon re-export would make no sense.
NO_ADDON_BLUEPRINTS = ("mixin", "blueprint-test")


class BlueprintSet(NamedTuple):
    main: Optional[Blueprint]
    test: Optional[Blueprint]
    addon: Optional[Blueprint]


def resolve_blueprint_set(
    name: str,
    context: InstallContext,
    registry: BlueprintRegistry,
    ignore_missing_main: bool = False,
) -> BlueprintSet:
    """Look up *name* and its ``-test``/``-addon`` companions.

    Raises:
        UnknownBlueprintError: *name* is unknown and *ignore_missing_main*
            is not set.
    """
    main = registry.lookup(name, ignore_missing=ignore_missing_main)
    test = registry.lookup_paired(name, "test")
    addon = registry.lookup_paired(name, "addon")

    if (
        addon is None
        and main is not None
        and name not in NO_ADDON_BLUEPRINTS
        and context.entity_name
        and supports_addon(main.raw_files())
    ):
        addon = registry.lookup("addon-import", ignore_missing=True)

    if context.dummy and context.project.is_addon():
        test = None
        addon = None

    return BlueprintSet(main, test, addon)


def _wants_addon(name: str, context: InstallContext) -> bool:
    if "-addon" in name:
        return False
    return context.project.is_addon() or context.in_repo_addon is not None


async def _run_set(
    run: Callable[[Blueprint, InstallContext], Awaitable[InstallResult]],
    name: str,
    context: InstallContext,
    registry: Optional[BlueprintRegistry],
    ignore_missing_main: bool,
) -> list[InstallResult]:
    registry = registry or context.get_registry()
    main, test, addon = resolve_blueprint_set(name, context, registry, ignore_missing_main)
    # A missing entity name still goes through normalize_entity_name.
    main_context = context.derive(
        entity=context.entity or Entity(name=None),
        registry=registry,
        origin_blueprint_name=name,
        args=context.args or [name] + ([context.entity_name] if context.entity_name else []),
    )

    results = []
    if main is not None:
        results.append(await run(main, main_context))
    if test is not None:
        if main is not None:
            test = test.inheriting_locals(main)
        results.append(await run(test, main_context.derive(installing_test=True)))
    if addon is not None and _wants_addon(name, context):
        if main is not None:
            addon = addon.inheriting_locals(main)
        results.append(await run(addon, main_context.derive(installing_addon=True)))
    return results


async def generate_from_blueprint(
    name: str,
    context: InstallContext,
    registry: Optional[BlueprintRegistry] = None,
    ignore_missing_main: bool = False,
) -> list[InstallResult]:
    """Install blueprint *name* and its companions, in that order."""
    logger.debug("Generating %s for %s", name, context.entity_name)
    return await _run_set(install, name, context, registry, ignore_missing_main)


async def destroy_from_blueprint(
    name: str,
    context: InstallContext,
    registry: Optional[BlueprintRegistry] = None,
    ignore_missing_main: bool = False,
) -> list[InstallResult]:
    """Uninstall blueprint *name* and its companions, in that order."""
    logger.debug("Destroying %s for %s", name, context.entity_name)
    return await _run_set(uninstall, name, context, registry, ignore_missing_main)
