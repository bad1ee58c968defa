"""Unit tests for Config (blueprintgen.config).

Tests cover:
- Config defaults and derived paths (properties)
- save/load round trip
- for_project (file present, file absent, root override)
- from_env
- validation
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from blueprintgen.config import CONFIG_FILE_NAME, Config


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_default_values(self):
        config = Config()
        assert config.project_root == Path(".")
        assert config.blueprints_dir == "blueprints"
        assert config.files_dir == "files"
        assert config.definition_file == "index.py"
        assert config.addon_keyword == "ember-addon"
        assert config.npm_command == "npm"
        assert config.bower_command == "bower"

    @pytest.mark.unit
    def test_default_ignore_lists(self):
        config = Config()
        assert config.ignored_files == [".DS_Store"]
        assert config.ignored_update_files == [".gitkeep", "app.css", "LICENSE.md"]
        assert config.renamed_files == {"gitignore": ".gitignore"}

    @pytest.mark.unit
    def test_lists_not_shared_between_instances(self):
        a = Config()
        b = Config()
        a.ignored_files.append("Thumbs.db")
        assert b.ignored_files == [".DS_Store"]

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(command_timeout=0)


# ---------------------------------------------------------------------------
# Derived paths
# ---------------------------------------------------------------------------


class TestConfigPaths:
    @pytest.mark.unit
    def test_derived_paths(self, tmp_path):
        config = Config(project_root=tmp_path)
        assert config.project_blueprints_path == tmp_path / "blueprints"
        assert config.node_modules_path == tmp_path / "node_modules"
        assert config.package_json_path == tmp_path / "package.json"

    @pytest.mark.unit
    def test_custom_blueprints_dir(self, tmp_path):
        config = Config(project_root=tmp_path, blueprints_dir="generators")
        assert config.project_blueprints_path == tmp_path / "generators"


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_save_writes_default_location(self, tmp_path):
        config = Config(project_root=tmp_path, pod_module_prefix="app/pods")
        path = config.save()
        assert path == tmp_path / CONFIG_FILE_NAME
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["pod_module_prefix"] == "app/pods"

    @pytest.mark.unit
    def test_round_trip(self, tmp_path):
        config = Config(project_root=tmp_path, ignored_files=[".DS_Store", "Thumbs.db"])
        loaded = Config.load(config.save())
        assert loaded.ignored_files == [".DS_Store", "Thumbs.db"]
        assert loaded.project_root == tmp_path

    @pytest.mark.unit
    def test_load_invalid_json_raises(self, tmp_path):
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text('{"command_timeout": "soon"}', encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


class TestForProject:
    @pytest.mark.unit
    def test_reads_project_file(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text(
            json.dumps({"blueprints_dir": "gen", "project_root": "/elsewhere"}),
            encoding="utf-8",
        )
        config = Config.for_project(tmp_path)
        assert config.blueprints_dir == "gen"
        assert config.project_root == tmp_path

    @pytest.mark.unit
    def test_defaults_without_file(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.for_project(tmp_path)
        assert config.blueprints_dir == "blueprints"
        assert config.project_root == tmp_path


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class TestFromEnv:
    @pytest.mark.unit
    def test_empty_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_reads_variables(self):
        env = {
            "BLUEPRINTGEN_PROJECT_ROOT": "/tmp/proj",
            "BLUEPRINTGEN_BLUEPRINTS_DIR": "gen",
            "BLUEPRINTGEN_POD_MODULE_PREFIX": "app/pods",
            "BLUEPRINTGEN_IGNORED_FILES": ".DS_Store, Thumbs.db ,",
            "BLUEPRINTGEN_NPM": "pnpm",
            "BLUEPRINTGEN_BOWER": "/usr/bin/bower",
            "BLUEPRINTGEN_COMMAND_TIMEOUT": "42",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.project_root == Path("/tmp/proj")
        assert config.blueprints_dir == "gen"
        assert config.pod_module_prefix == "app/pods"
        assert config.ignored_files == [".DS_Store", "Thumbs.db"]
        assert config.npm_command == "pnpm"
        assert config.bower_command == "/usr/bin/bower"
        assert config.command_timeout == 42
