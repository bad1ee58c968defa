"""User interaction for the blueprint engine.

The engine only needs three capabilities: write a status line, write raw
text, and ask a question.  ``ConsoleUI`` implements them on a Rich console;
tests and embedding applications can supply any object with the same shape.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .utils import console as default_console


class Choice(BaseModel):
    """One answer the user can pick, selected by its single-letter key."""

    key: str
    name: str
    value: str


class Question(BaseModel):
    """A single request/response prompt."""

    message: str
    choices: list[Choice] = Field(default_factory=list)
    default: Optional[str] = None
    # Values accepted in addition to the displayed choices.
    hidden_choices: list[Choice] = Field(default_factory=list)

    def value_for(self, key: str) -> Optional[str]:
        for choice in self.choices + self.hidden_choices:
            if key in (choice.key, choice.value):
                return choice.value
        return None


class UI(Protocol):
    """What the engine expects from its UI collaborator."""

    def write_line(self, text: str, style: Optional[str] = None) -> None: ...

    def write(self, text: str) -> None: ...

    async def prompt(self, question: Question) -> str: ...


# Colour used for each status label written by the file actions.
STATUS_STYLES: dict[str, str] = {
    "create": "green",
    "identical": "yellow",
    "skip": "yellow",
    "overwrite": "yellow",
    "remove": "red",
    "installing": "bold",
    "uninstalling": "bold",
}


class ConsoleUI:
    """Rich console implementation of :class:`UI`.

    Prompts block on stdin, so they run in a worker thread to keep the event
    loop free.
    """

    def __init__(self, console: Console | None = None, interactive: bool = True) -> None:
        self.console = console or default_console
        self.interactive = interactive

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        if style:
            self.console.print(f"[{style}]{escape(text)}[/{style}]")
        else:
            self.console.print(escape(text))

    def write(self, text: str) -> None:
        self.console.print(escape(text), end="")

    async def prompt(self, question: Question) -> str:
        if not self.interactive:
            return question.default or ""
        return await asyncio.to_thread(self._ask, question)

    def _ask(self, question: Question) -> str:
        legend = ", ".join(f"{c.key}={c.name}" for c in question.choices)
        keys = [c.key for c in question.choices + question.hidden_choices]
        default_key = None
        if question.default:
            default_key = next(
                (c.key for c in question.choices if c.value == question.default), None
            )
        answer = Prompt.ask(
            f"{question.message} [dim]({escape(legend)})[/dim]",
            console=self.console,
            choices=keys,
            default=default_key,
            show_choices=False,
        )
        return question.value_for(answer) or ""


def write_status(ui: UI | None, label: str, path: str) -> None:
    """Write an ``  <label> <path>`` status line, coloured by label."""
    if ui is not None:
        ui.write_line(f"  {label} {path}", style=STATUS_STYLES.get(label))
