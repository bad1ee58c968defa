"""Primitive file actions.

Every decision the conflict resolver takes ends in one of these actions.
Each writes its status line through the UI and, outside dry-run, touches the
filesystem.  Blueprints carry their own copy of :data:`DEFAULT_ACTIONS`, so a
missing entry surfaces as :class:`ActionNotFoundError` rather than silently
doing nothing.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, Mapping

from .errors import ActionNotFoundError
from .models import FileInfo
from .ui import write_status

if TYPE_CHECKING:
    from .context import InstallContext

logger = logging.getLogger(__name__)

Action = Callable[[FileInfo, "InstallContext"], Awaitable[None]]


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------

def write_file(path: Path, content: bytes) -> None:
    """Write *content* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def remove_file(path: Path, stop_at: Path) -> None:
    """Delete *path*, then prune directories it leaves empty up to *stop_at*."""
    path.unlink()
    stop_at = stop_at.resolve()
    parent = path.parent.resolve()
    while parent != stop_at and stop_at in parent.parents:
        try:
            next(parent.iterdir())
        except StopIteration:
            parent.rmdir()
            parent = parent.parent
        else:
            break


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

async def _write(info: FileInfo, context: "InstallContext") -> None:
    write_status(context.ui, "create", info.display_path)
    if not context.dry_run:
        await asyncio.to_thread(write_file, info.output_path, info.rendered or b"")


async def _overwrite(info: FileInfo, context: "InstallContext") -> None:
    write_status(context.ui, "overwrite", info.display_path)
    if not context.dry_run:
        await asyncio.to_thread(write_file, info.output_path, info.rendered or b"")


async def _skip(info: FileInfo, context: "InstallContext") -> None:
    write_status(context.ui, "skip", info.display_path)


async def _identical(info: FileInfo, context: "InstallContext") -> None:
    write_status(context.ui, "identical", info.display_path)


async def _remove(info: FileInfo, context: "InstallContext") -> None:
    write_status(context.ui, "remove", info.display_path)
    if not context.dry_run:
        await asyncio.to_thread(remove_file, info.output_path, context.target)


DEFAULT_ACTIONS: dict[str, Action] = {
    "write": _write,
    "overwrite": _overwrite,
    "skip": _skip,
    "identical": _identical,
    "remove": _remove,
}


async def run_action(
    actions: Mapping[str, Action], name: str, info: FileInfo, context: "InstallContext"
) -> None:
    action = actions.get(name)
    if action is None:
        raise ActionNotFoundError(name)
    logger.debug("%s %s", name, info.output_path)
    await action(info, context)
