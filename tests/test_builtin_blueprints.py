"""End-to-end tests for the blueprints shipped with blueprintgen."""

from __future__ import annotations

import pytest

from blueprintgen.errors import UsageError
from blueprintgen.generate import destroy_from_blueprint, generate_from_blueprint
from blueprintgen.installer import install
from blueprintgen.models import Entity

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


def _generate(make_context, name, entity=None, *extra, **options):
    args = [name] + ([entity] if entity else []) + list(extra)
    context = make_context(
        entity=Entity(name=entity) if entity else None, args=args, **options
    )
    return generate_from_blueprint(name, context)


# ---------------------------------------------------------------------------
# server
# ---------------------------------------------------------------------------


class TestServer:
    async def test_generates_index(self, make_context, project_dir, file_tree, gateway):
        await _generate(make_context, "server")
        assert file_tree(project_dir) == ["server/index.js"]
        content = (project_dir / "server/index.js").read_text(encoding="utf-8")
        assert "module.exports = function(app) {" in content
        assert "mocks.forEach(function(route) { route(app); });" in content
        assert "proxies.forEach(function(route) { route(app); });" in content
        assert gateway.calls == [("add_packages", ["morgan@^1.3.2", "glob@^4.0.5"])]

    async def test_jshintrc_with_jshint_dependency(self, make_context, package_json, project_dir, file_tree):
        package_json(devDependencies={"ember-cli-jshint": "*"})
        await _generate(make_context, "server")
        assert file_tree(project_dir) == ["server/.jshintrc", "server/index.js"]

    async def test_entity_name_ignored(self, make_context, project_dir):
        await _generate(make_context, "server", "whatever/")
        assert (project_dir / "server/index.js").exists()

    async def test_only_missing_packages_added(self, make_context, package_json, gateway):
        package_json(devDependencies={"morgan": "^1.3.2"})
        await _generate(make_context, "server")
        assert gateway.calls == [("add_packages", ["glob@^4.0.5"])]

    async def test_dry_run_adds_nothing(self, make_context, gateway, project_dir, file_tree):
        await _generate(make_context, "server", dry_run=True)
        assert gateway.calls == []
        assert file_tree(project_dir) == []


# ---------------------------------------------------------------------------
# http-mock
# ---------------------------------------------------------------------------


class TestHttpMock:
    async def test_generates_mock_and_server(self, make_context, ui, gateway, project_dir, file_tree):
        await _generate(make_context, "http-mock", "foo-bar")

        assert file_tree(project_dir) == ["server/index.js", "server/mocks/foo-bar.js"]
        mock = (project_dir / "server/mocks/foo-bar.js").read_text(encoding="utf-8")
        assert "var fooBarRouter = express.Router();" in mock
        assert "'foo-bar': []" in mock
        assert "app.use('/api/foo-bar', fooBarRouter);" in mock
        assert ui.lines[:2] == ["installing http-mock", "installing server"]
        assert gateway.calls == [
            ("add_packages", ["morgan@^1.3.2", "glob@^4.0.5"]),
            ("add_packages", ["express@^4.8.5"]),
        ]

    async def test_leading_slash_stripped_from_path(self, make_context, project_dir):
        await _generate(make_context, "http-mock", "/users")
        mock = (project_dir / "server/mocks/users.js").read_text(encoding="utf-8")
        assert "app.use('/api/users', " in mock

    async def test_express_already_present(self, make_context, package_json, gateway):
        package_json(devDependencies={"express": "*", "morgan": "*", "glob": "*"})
        await _generate(make_context, "http-mock", "foo")
        assert gateway.calls == []

    async def test_destroy_leaves_server(self, make_context, project_dir, file_tree):
        await _generate(make_context, "http-mock", "foo")
        context = make_context(entity=Entity(name="foo"), args=["http-mock", "foo"])
        await destroy_from_blueprint("http-mock", context)
        assert file_tree(project_dir) == ["server/index.js"]


# ---------------------------------------------------------------------------
# http-proxy
# ---------------------------------------------------------------------------


class TestHttpProxy:
    async def test_generates_proxy(self, make_context, gateway, project_dir, file_tree):
        await _generate(make_context, "http-proxy", "api", "http://localhost:5000")
        assert file_tree(project_dir) == ["server/index.js", "server/proxies/api.js"]
        proxy = (project_dir / "server/proxies/api.js").read_text(encoding="utf-8")
        assert "var proxyPath = '/api';" in proxy
        assert "proxy.web(req, res, { target: 'http://localhost:5000' });" in proxy
        assert ("add_packages", ["http-proxy@^1.1.6"]) in gateway.calls


# ---------------------------------------------------------------------------
# lib
# ---------------------------------------------------------------------------


class TestLib:
    async def test_creates_lib_directory(self, make_context, project_dir, file_tree):
        await _generate(make_context, "lib")
        assert (project_dir / "lib").is_dir()
        assert file_tree(project_dir) == []

    async def test_jshintrc_with_jshint(self, make_context, package_json, project_dir, file_tree):
        package_json(devDependencies={"ember-cli-jshint": "*"})
        await _generate(make_context, "lib")
        assert file_tree(project_dir) == ["lib/.jshintrc"]


# ---------------------------------------------------------------------------
# addon-import
# ---------------------------------------------------------------------------


class TestAddonImport:
    async def test_refuses_direct_call(self, make_context, project_dir, file_tree):
        with pytest.raises(UsageError, match="cannot call the addon-import blueprint directly"):
            await _generate(make_context, "addon-import", "foo")
        assert file_tree(project_dir) == []

    async def test_in_repo_addon_module_path(self, make_context, project_dir):
        (project_dir / "lib/inner").mkdir(parents=True)
        context = make_context(
            entity=Entity(name="x-foo"), in_repo_addon="inner", origin_blueprint_name="component"
        )
        addon_import = context.lookup_blueprint("addon-import")
        await install(addon_import, context)
        assert (project_dir / "lib/inner/app/components/x-foo.js").read_text(encoding="utf-8") == (
            "export { default } from 'inner/components/x-foo';\n"
        )


# ---------------------------------------------------------------------------
# blueprint
# ---------------------------------------------------------------------------


class TestBlueprintBlueprint:
    async def test_scaffolds_definition(self, make_context, project_dir, file_tree):
        await _generate(make_context, "blueprint", "foo")
        assert file_tree(project_dir) == ["blueprints/foo/index.py"]
        assert '"""foo blueprint."""' in (project_dir / "blueprints/foo/index.py").read_text(
            encoding="utf-8"
        )

    async def test_nested_name(self, make_context, project_dir, file_tree):
        await _generate(make_context, "blueprint", "foo/bar")
        assert file_tree(project_dir) == ["blueprints/foo/bar/index.py"]
