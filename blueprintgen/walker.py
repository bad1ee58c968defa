"""File tree walking: from a blueprint's ``files/`` tree to output paths.

The walker lists the blueprint's files, drops ignored ones, maps every path
into the target tree and renders each file on demand.  Files are yielded one
at a time in traversal order so the coordinator can resolve and apply each
before touching the next.
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import posixpath
import re
from typing import TYPE_CHECKING, Any, Iterator

from .errors import HookError, RenderError
from .models import FileInfo, FileStatus

if TYPE_CHECKING:
    from .blueprint import Blueprint
    from .context import InstallContext

logger = logging.getLogger(__name__)


def _matches(path: str, patterns: list[str]) -> bool:
    """Match *path* or its basename against glob *patterns*."""
    base = posixpath.basename(path)
    return any(fnmatch.fnmatchcase(path, p) or fnmatch.fnmatchcase(base, p) for p in patterns)


async def list_files(blueprint: "Blueprint", context: "InstallContext") -> list[str]:
    """The blueprint's files after ignore rules and the ``files`` hook."""
    raw = await asyncio.to_thread(blueprint.raw_files)
    ignored = list(context.ignored_files)
    if context.is_update():
        ignored += context.ignored_update_files
    files = [f for f in raw if not _matches(f, ignored)]

    files = await blueprint.call_hook("files", files, context)
    if not isinstance(files, list):
        raise HookError("files", blueprint.name, "must return a list of paths")
    return files


class FileTreeWalker:
    """Maps and renders the files of one blueprint installation."""

    def __init__(
        self, blueprint: "Blueprint", context: "InstallContext", locals_: dict[str, Any]
    ) -> None:
        self.blueprint = blueprint
        self.context = context
        self.locals = locals_

    def map_file(self, file: str) -> str:
        """Turn a blueprint-relative path into a target-relative one.

        Renamed files first, then the blueprint's static ``file_map`` rules
        (first matching pattern wins, ``:path`` standing for the whole path),
        then token substitution.
        """
        head, base = posixpath.split(file)
        renamed = self.context.renamed_files.get(base)
        if renamed:
            file = posixpath.join(head, renamed)

        for pattern, replacement in self.blueprint.file_map.items():
            if re.search(pattern, file):
                file = replacement.replace(":path", file)
                break

        for token, value in self.locals["fileMap"].items():
            file = file.replace(token, value)
        return posixpath.normpath(file)

    def walk(self, files: list[str]) -> Iterator[FileInfo]:
        """Yield a :class:`FileInfo` per file, honouring ``target_files``."""
        target_files = self.context.target_files
        matched = False
        for file in files:
            display_path = self.map_file(file)
            if target_files and not _matches(display_path, target_files):
                continue
            matched = True
            yield FileInfo(
                source_path=self.blueprint.files_path / file,
                output_path=self.context.target / display_path,
                display_path=display_path,
            )
        if target_files and not matched and self.context.ui is not None:
            self.context.ui.write_line(
                f"The globPattern \"{' '.join(target_files)}\" did not match any files, "
                "so no file updates will be made.",
                style="yellow",
            )

    async def prepare(self, info: FileInfo) -> FileInfo:
        """Render *info* and classify it against the target tree."""
        source = await asyncio.to_thread(info.source_path.read_bytes)
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError:
            info.binary = True
            info.rendered = source
        else:
            try:
                info.rendered = self.context.renderer(text, self.locals).encode("utf-8")
            except Exception as exc:
                raise RenderError(info.display_path, self.blueprint.name, str(exc)) from exc

        if not info.output_path.exists():
            info.status = FileStatus.CREATE
        elif await asyncio.to_thread(info.read_existing) == info.rendered:
            info.status = FileStatus.IDENTICAL
        else:
            info.status = FileStatus.CONFLICT
        return info
