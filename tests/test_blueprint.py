"""Unit tests for blueprint loading and hook composition (blueprintgen.blueprint)."""

from __future__ import annotations

import pytest

from blueprintgen.blueprint import (
    DEFAULT_HOOKS,
    Blueprint,
    has_path_token,
    supports_addon,
    validate_entity_name,
)
from blueprintgen.errors import HookError, UsageError

from conftest import BLUEPRINTS_DIR

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoad:
    def test_load_fixture(self):
        blueprint = Blueprint.load(BLUEPRINTS_DIR / "basic")
        assert blueprint.name == "basic"
        assert blueprint.description == "A basic blueprint"
        assert blueprint.has_hook("before_install")
        assert not blueprint.has_hook("locals")

    def test_not_a_blueprint(self):
        assert Blueprint.load(BLUEPRINTS_DIR / ".notablueprint") is None

    def test_missing_directory(self, tmp_path):
        assert Blueprint.load(tmp_path / "nothing") is None

    def test_files_only_blueprint(self, write_blueprint):
        path = write_blueprint("plain", {"foo.txt": "foo"})
        blueprint = Blueprint.load(path)
        assert blueprint.name == "plain"
        assert blueprint.hooks == {}

    def test_definition_attributes(self, write_blueprint):
        path = write_blueprint(
            "fancy",
            {"x.txt": ""},
            definition=(
                'name = "renamed"\n'
                'anonymous_options = ["name", "path"]\n'
                'file_map = {"^x": "y/:path"}\n'
                "def locals(blueprint, context):\n"
                "    return {}\n"
            ),
        )
        blueprint = Blueprint.load(path)
        assert blueprint.name == "renamed"
        assert blueprint.anonymous_options == ("name", "path")
        assert blueprint.file_map == {"^x": "y/:path"}
        assert blueprint.has_hook("locals")

    def test_broken_definition_raises_hook_error(self, write_blueprint):
        path = write_blueprint("broken", {}, definition="raise RuntimeError('boom')\n")
        with pytest.raises(HookError, match="boom"):
            Blueprint.load(path)

    def test_blueprint_is_immutable(self):
        blueprint = Blueprint.load(BLUEPRINTS_DIR / "basic")
        with pytest.raises(AttributeError):
            blueprint.name = "other"


# ---------------------------------------------------------------------------
# File listing
# ---------------------------------------------------------------------------


class TestRawFiles:
    def test_depth_first_alphabetical(self):
        files = Blueprint.load(BLUEPRINTS_DIR / "basic").raw_files()
        assert files == [
            ".DS_Store",
            ".editorconfig",
            "app/basics/__name__.txt",
            "bar",
            "foo.txt",
            "gitignore",
            "test.txt",
        ]

    def test_no_files_directory(self, write_blueprint):
        path = write_blueprint("empty", {}, definition="")
        assert Blueprint.load(path).raw_files() == []

    def test_token_detection(self):
        assert has_path_token(["app/__path__/__name__.js"])
        assert not has_path_token(["app/__name__.js"])
        assert supports_addon(["__root__/__name__.js"])
        assert not supports_addon(["app/__name__.js"])


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


class TestHooks:
    @pytest.mark.asyncio
    async def test_defaults_when_not_overridden(self, tmp_path):
        blueprint = Blueprint(name="x", path=tmp_path)
        assert blueprint.hook("locals") is DEFAULT_HOOKS["locals"]
        assert await blueprint.call_hook("locals", None) == {}
        assert await blueprint.call_hook("files", ["a"], None) == ["a"]

    @pytest.mark.asyncio
    async def test_override_can_call_default(self, tmp_path):
        async def normalize(blueprint, name):
            return (await blueprint.call_default("normalize_entity_name", name)).upper()

        blueprint = Blueprint(name="x", path=tmp_path, hooks={"normalize_entity_name": normalize})
        assert await blueprint.call_hook("normalize_entity_name", "foo") == "FOO"
        with pytest.raises(UsageError):
            await blueprint.call_hook("normalize_entity_name", "foo/")

    @pytest.mark.asyncio
    async def test_hook_exceptions_wrapped(self, tmp_path):
        def boom(blueprint, context, locals_):
            raise ValueError("kaput")

        blueprint = Blueprint(name="x", path=tmp_path, hooks={"after_install": boom})
        with pytest.raises(HookError) as excinfo:
            await blueprint.call_hook("after_install", None, {})
        assert excinfo.value.hook == "after_install"
        assert excinfo.value.blueprint == "x"
        assert isinstance(excinfo.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_engine_errors_pass_through(self, tmp_path):
        def refuse(blueprint, context):
            raise UsageError("no")

        blueprint = Blueprint(name="x", path=tmp_path, hooks={"locals": refuse})
        with pytest.raises(UsageError, match="no"):
            await blueprint.call_hook("locals", None)

    def test_unknown_hook(self, tmp_path):
        blueprint = Blueprint(name="x", path=tmp_path)
        with pytest.raises(KeyError):
            blueprint.hook("after_everything")
        with pytest.raises(KeyError):
            blueprint.with_hooks(after_everything=lambda bp: None)

    @pytest.mark.asyncio
    async def test_with_hooks_returns_copy(self, tmp_path):
        original = Blueprint(name="x", path=tmp_path)
        changed = original.with_hooks(locals=lambda bp, ctx: {"a": 1})
        assert not original.has_hook("locals")
        assert await changed.call_hook("locals", None) == {"a": 1}

    @pytest.mark.asyncio
    async def test_inheriting_locals(self, tmp_path):
        main = Blueprint(name="main", path=tmp_path, hooks={"locals": lambda bp, ctx: {"from": bp.name}})
        test = Blueprint(name="main-test", path=tmp_path)
        inherited = test.inheriting_locals(main)
        assert await inherited.call_hook("locals", None) == {"from": "main"}

    def test_own_locals_are_kept(self, tmp_path):
        main = Blueprint(name="main", path=tmp_path, hooks={"locals": lambda bp, ctx: {}})
        test = Blueprint(name="main-test", path=tmp_path, hooks={"locals": lambda bp, ctx: {"own": 1}})
        assert test.inheriting_locals(main) is test


# ---------------------------------------------------------------------------
# Entity name validation
# ---------------------------------------------------------------------------


class TestValidateEntityName:
    def test_valid_name(self):
        assert validate_entity_name("foo/bar") == "foo/bar"

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_name(self, name):
        with pytest.raises(UsageError, match="requires an entity name to be specified"):
            validate_entity_name(name)

    def test_trailing_slash(self):
        with pytest.raises(UsageError) as excinfo:
            validate_entity_name("foo/")
        message = str(excinfo.value)
        assert 'You specified "foo/"' in message
        assert 'trailing "/"' in message
        assert 'Please re-run the command with "foo".' in message

    def test_trailing_backslash(self):
        with pytest.raises(UsageError, match=r'trailing "\\"'):
            validate_entity_name("foo\\")
