"""Shared pytest fixtures for the blueprintgen test suite.

Provides reusable fixtures for:
- A temporary target project with a ``package.json``
- A recording UI with scripted prompt answers
- A recording package gateway
- A registry over the fixture blueprints plus the built-ins
- Helpers to write ad-hoc blueprints and list generated files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from blueprintgen.context import InstallContext
from blueprintgen.registry import BlueprintRegistry
from blueprintgen.ui import Question

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BLUEPRINTS_DIR = FIXTURES_DIR / "blueprints"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class RecordingUI:
    """UI double: records every line and answers prompts from a script."""

    def __init__(self, answers: Optional[list[str]] = None) -> None:
        self.lines: list[str] = []
        self.answers = list(answers or [])
        self.questions: list[Question] = []

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        self.lines.append(text)

    def write(self, text: str) -> None:
        self.lines.append(text)

    async def prompt(self, question: Question) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question.message}")
        return self.answers.pop(0)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


class RecordingGateway:
    """Package gateway double: records calls instead of running npm/bower."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    async def add_packages(self, packages, dev=True):
        self.calls.append(("add_packages", [p.spec() for p in packages]))

    async def remove_packages(self, packages, dev=True):
        self.calls.append(("remove_packages", [p.name for p in packages]))

    async def add_bower_packages(self, packages):
        self.calls.append(("add_bower_packages", [p.model_dump() for p in packages]))

    async def add_addons(self, packages):
        self.calls.append(("add_addons", list(packages)))


# ---------------------------------------------------------------------------
# Projects & contexts
# ---------------------------------------------------------------------------

def write_package_json(root: Path, **fields: Any) -> Path:
    pkg = {"name": "mock-project", "version": "0.0.0", **fields}
    path = root / "package.json"
    path.write_text(json.dumps(pkg, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary target project named ``mock-project``."""
    root = tmp_path / "project"
    root.mkdir()
    write_package_json(root)
    yield root


@pytest.fixture
def ui() -> RecordingUI:
    return RecordingUI()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def registry() -> BlueprintRegistry:
    """Fixture blueprints first, built-ins after."""
    return BlueprintRegistry.from_paths([BLUEPRINTS_DIR], include_builtin=True)


@pytest.fixture
def make_context(
    project_dir: Path, ui: RecordingUI, gateway: RecordingGateway, registry: BlueprintRegistry
) -> Callable[..., InstallContext]:
    """Factory for contexts targeting ``project_dir``; keyword args override."""

    def _make(**overrides: Any) -> InstallContext:
        kwargs: dict[str, Any] = {
            "target": project_dir,
            "ui": ui,
            "packages": gateway,
            "registry": registry,
        }
        kwargs.update(overrides)
        return InstallContext(**kwargs)

    return _make


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def write_blueprint(tmp_path: Path) -> Callable[..., Path]:
    """Write an ad-hoc blueprint under ``tmp_path/blueprints``.

    Usage:
        path = write_blueprint("component", {"app/__path__/__name__.js": "x"})
    """

    def _write(name: str, files: dict[str, str], definition: Optional[str] = None) -> Path:
        root = tmp_path / "blueprints" / name
        for rel, content in files.items():
            path = root / "files" / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        if definition is not None:
            (root / "index.py").write_text(definition, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def file_tree() -> Callable[[Path], list[str]]:
    """List files under a directory as sorted relative POSIX paths."""

    def _tree(root: Path, exclude: tuple[str, ...] = ("package.json",)) -> list[str]:
        return sorted(
            p.relative_to(root).as_posix()
            for p in root.rglob("*")
            if p.is_file() and p.relative_to(root).as_posix() not in exclude
        )

    return _tree


@pytest.fixture
def package_json(project_dir: Path) -> Callable[..., Path]:
    """Rewrite the target project's ``package.json`` with extra fields."""

    def _write(**fields: Any) -> Path:
        return write_package_json(project_dir, **fields)

    return _write
