"""Install and uninstall a single blueprint.

The install pipeline::

    normalize entity name -> list files -> resolve locals -> before_install
      -> for each file: map, render, classify, resolve conflict, apply
      -> after_install

Files are processed strictly in traversal order and each one is committed
before the next is rendered, so aborting at a prompt leaves every earlier
decision applied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .actions import run_action
from .blueprint import has_path_token
from .conflict import ConflictResolver
from .context import ConflictSession
from .errors import UsageError
from .models import DECISION_ACTIONS, Decision, Entity, InstallResult
from .template_locals import resolve_locals
from .walker import FileTreeWalker, list_files

if TYPE_CHECKING:
    from .blueprint import Blueprint
    from .context import InstallContext

logger = logging.getLogger(__name__)

DRY_RUN_NOTICE = "You specified the dry-run flag, so no changes will be written."
POD_NOTICE = (
    "You specified the pod flag, but this blueprint does not support pod structure. "
    "It will be generated with the default structure."
)


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------

async def normalize_entity(blueprint: "Blueprint", context: "InstallContext") -> "InstallContext":
    """Run ``normalize_entity_name`` and return a context carrying the result.

    A context without an entity (e.g. an app-level blueprint) is left alone.
    """
    if context.entity is None:
        return context
    name = await blueprint.call_hook("normalize_entity_name", context.entity.name)
    entity = Entity(name=name, options=dict(context.entity.options))
    return context.derive(entity=entity)


def _announce(context: "InstallContext", verb: str, blueprint: "Blueprint") -> None:
    if context.ui is None:
        return
    context.ui.write_line(f"{verb} {blueprint.name}", style="bold")
    if context.dry_run:
        context.ui.write_line(DRY_RUN_NOTICE, style="yellow")


def _check_for_pod(context: "InstallContext", path_token: bool) -> None:
    if context.pod and not path_token and context.verbose and context.ui is not None:
        context.ui.write_line(POD_NOTICE, style="yellow")


def _check_in_repo_addon_exists(context: "InstallContext") -> None:
    name = context.in_repo_addon
    if name and not context.project.in_repo_addon_path(name).is_dir():
        raise UsageError(
            f"You specified the in-repo-addon flag, but the in-repo-addon '{name}' "
            "does not exist. Please check the name and try again."
        )


# ---------------------------------------------------------------------------
# Install / uninstall
# ---------------------------------------------------------------------------

async def install(blueprint: "Blueprint", context: "InstallContext") -> InstallResult:
    """Generate *blueprint*'s files into ``context.target``.

    Raises:
        UsageError: bad entity name or missing in-repo addon.
        HookError: a blueprint hook failed.
        RenderError: a template failed to render.
        ConflictAbort: the user chose to quit at a conflict prompt.
    """
    context = context.derive(session=ConflictSession())
    _announce(context, "installing", blueprint)
    context = await normalize_entity(blueprint, context)

    files = await list_files(blueprint, context)
    path_token = has_path_token(files)
    _check_for_pod(context, path_token)
    _check_in_repo_addon_exists(context)

    locals_ = await resolve_locals(blueprint, context, path_token)
    await blueprint.call_hook("before_install", context, locals_)

    result = InstallResult(blueprint=blueprint.name)
    walker = FileTreeWalker(blueprint, context, locals_)
    resolver = ConflictResolver(context)
    for info in walker.walk(files):
        await walker.prepare(info)
        info.action = await resolver.resolve(info)
        await run_action(blueprint.actions, DECISION_ACTIONS[info.action], info, context)
        result.record(info)

    await blueprint.call_hook("after_install", context, locals_)
    logger.info("Installed %s: %s", blueprint.name, {k: len(v) for k, v in result.files.items()})
    return result


async def uninstall(blueprint: "Blueprint", context: "InstallContext") -> InstallResult:
    """Remove the files *blueprint* would generate, if present.

    Existing files are removed without comparing their contents; files the
    blueprint would not have produced are never touched.
    """
    _announce(context, "uninstalling", blueprint)
    context = await normalize_entity(blueprint, context)

    files = await list_files(blueprint, context)
    path_token = has_path_token(files)
    _check_for_pod(context, path_token)
    _check_in_repo_addon_exists(context)

    locals_ = await resolve_locals(blueprint, context, path_token)
    await blueprint.call_hook("before_uninstall", context, locals_)

    result = InstallResult(blueprint=blueprint.name)
    walker = FileTreeWalker(blueprint, context, locals_)
    for info in walker.walk(files):
        if not info.output_path.exists():
            continue
        info.action = Decision.REMOVE
        await run_action(blueprint.actions, DECISION_ACTIONS[Decision.REMOVE], info, context)
        result.record(info)

    await blueprint.call_hook("after_uninstall", context, locals_)
    logger.info("Uninstalled %s: %d file(s)", blueprint.name, len(result.paths(Decision.REMOVE)))
    return result
