"""Conflict resolution: deciding what to do with a file that already exists."""

from __future__ import annotations

import difflib
import logging
from typing import TYPE_CHECKING

from .errors import ConflictAbort
from .models import Decision, FileInfo, FileStatus
from .ui import Choice, Question

if TYPE_CHECKING:
    from .context import InstallContext

logger = logging.getLogger(__name__)

CONFLICT_CHOICES: list[Choice] = [
    Choice(key="y", name="overwrite", value=Decision.OVERWRITE.value),
    Choice(key="n", name="skip", value=Decision.SKIP.value),
    Choice(key="a", name="overwrite this and all others", value=Decision.OVERWRITE_ALL.value),
    Choice(key="s", name="skip this and all others", value=Decision.SKIP_ALL.value),
    Choice(key="d", name="diff", value=Decision.DIFF.value),
    Choice(key="q", name="quit", value=Decision.QUIT.value),
]


def build_question(display_path: str, show_diff: bool = True) -> Question:
    """The overwrite prompt for *display_path*.

    Once the diff has been shown the diff choice is hidden, but still
    accepted if typed.
    """
    diff = [c for c in CONFLICT_CHOICES if c.value == Decision.DIFF.value]
    choices = [c for c in CONFLICT_CHOICES if show_diff or c not in diff]
    return Question(
        message=f"Overwrite {display_path}?",
        choices=choices,
        default=Decision.SKIP.value,
        hidden_choices=[] if show_diff else diff,
    )


def unified_diff(info: FileInfo) -> list[str]:
    """Diff the existing file against the rendered one."""
    if info.binary:
        return [f"Binary files {info.display_path} differ"]
    current = info.read_existing().decode("utf-8", errors="replace")
    proposed = (info.rendered or b"").decode("utf-8")
    return list(
        difflib.unified_diff(
            current.splitlines(keepends=True),
            proposed.splitlines(keepends=True),
            fromfile=f"{info.display_path} (current)",
            tofile=f"{info.display_path} (new)",
        )
    )


class ConflictResolver:
    """Turns a classified file into a decision.

    New and identical files are decided without asking.  Conflicts honour
    the sticky answers in the context's session, then prompt the user; with
    no UI to prompt through, a conflict is skipped.
    """

    def __init__(self, context: "InstallContext") -> None:
        self.context = context
        self.session = context.session

    async def resolve(self, info: FileInfo) -> Decision:
        if info.status is FileStatus.CREATE:
            return Decision.CREATE
        if info.status is FileStatus.IDENTICAL:
            return Decision.IDENTICAL
        if self.session.overwrite_all:
            return Decision.OVERWRITE
        if self.session.skip_all:
            return Decision.SKIP
        if self.context.ui is None:
            logger.info("No UI to confirm %s; skipping", info.display_path)
            return Decision.SKIP
        return await self._ask(info)

    async def _ask(self, info: FileInfo) -> Decision:
        show_diff = True
        while True:
            answer = await self.context.ui.prompt(build_question(info.display_path, show_diff))
            try:
                decision = Decision(answer)
            except ValueError:
                logger.warning("Unrecognised answer %r for %s; skipping", answer, info.display_path)
                return Decision.SKIP

            if decision is Decision.DIFF:
                self._show_diff(info)
                show_diff = False
                continue
            if decision is Decision.QUIT:
                raise ConflictAbort(info.display_path)
            if decision is Decision.OVERWRITE_ALL:
                self.session.overwrite_all = True
                return Decision.OVERWRITE
            if decision is Decision.SKIP_ALL:
                self.session.skip_all = True
                return Decision.SKIP
            if decision in (Decision.OVERWRITE, Decision.SKIP):
                return decision
            logger.warning("Answer %r is not valid for %s; skipping", answer, info.display_path)
            return Decision.SKIP

    def _show_diff(self, info: FileInfo) -> None:
        ui = self.context.ui
        for line in unified_diff(info):
            line = line.rstrip("\n")
            if line.startswith(("+++", "---")):
                style = "bold"
            elif line.startswith("+"):
                style = "green"
            elif line.startswith("-"):
                style = "red"
            elif line.startswith("@@"):
                style = "cyan"
            else:
                style = None
            ui.write_line(line, style=style)
