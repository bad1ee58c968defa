"""Exceptions raised by the blueprint engine.

``UsageError`` and ``ConflictAbort`` are "silent" errors: the CLI reports
their message on a single line without a traceback.  Everything else carries
enough context (blueprint, hook, file) to diagnose without reading the source.
"""

from __future__ import annotations


class BlueprintError(Exception):
    """Base class for every error raised by the engine."""


class UsageError(BlueprintError):
    """A user-correctable problem with the invocation."""


class UnknownBlueprintError(UsageError):
    """Raised when no lookup path provides the requested blueprint."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown blueprint: {name}")


class ConflictAbort(BlueprintError):
    """Raised when the user aborts at a conflict prompt."""

    def __init__(self, display_path: str) -> None:
        self.display_path = display_path
        super().__init__(f"Aborted at {display_path}; no further files were written.")


class HookError(BlueprintError):
    """Raised when a blueprint lifecycle hook fails."""

    def __init__(self, hook: str, blueprint: str, message: str) -> None:
        self.hook = hook
        self.blueprint = blueprint
        super().__init__(f"Blueprint '{blueprint}' hook '{hook}' failed: {message}")


class RenderError(BlueprintError):
    """Raised when a blueprint file cannot be rendered."""

    def __init__(self, file_path: str, blueprint: str, message: str) -> None:
        self.file_path = file_path
        self.blueprint = blueprint
        super().__init__(
            f"Blueprint '{blueprint}' failed to render {file_path}: {message}"
        )


class ActionNotFoundError(BlueprintError):
    """An expected primitive file action is missing from the action table."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f'Tried to call action "{action}" but it does not exist')
