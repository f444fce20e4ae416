"""Unit tests for ScaffoldConfig (kubescaffold.config).

Tests cover:
- Defaults and derived paths (properties)
- Boilerplate loading, with and without a header file
- PROJECT file loading
- save/load and from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kubescaffold.config import ScaffoldConfig


# ---------------------------------------------------------------------------
# Defaults & derived paths
# ---------------------------------------------------------------------------


class TestScaffoldConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = ScaffoldConfig()
        assert config.output_dir == Path(".")
        assert config.boilerplate_file == Path("hack/boilerplate.go.txt")
        assert config.project_file == Path("PROJECT")
        assert config.force is False
        assert config.quiet is False

    @pytest.mark.unit
    def test_derived_paths(self, tmp_path):
        config = ScaffoldConfig(output_dir=tmp_path)
        assert config.boilerplate_path == tmp_path / "hack" / "boilerplate.go.txt"
        assert config.project_path == tmp_path / "PROJECT"

    @pytest.mark.unit
    def test_string_paths_are_coerced(self):
        config = ScaffoldConfig(output_dir="./operator")
        assert isinstance(config.output_dir, Path)

    @pytest.mark.unit
    def test_invalid_flag(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(force="sometimes")


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class TestLoaders:
    @pytest.mark.unit
    def test_load_boilerplate_strips_trailing_newline(self, project_dir, boilerplate):
        config = ScaffoldConfig(output_dir=project_dir)
        assert config.load_boilerplate() == boilerplate

    @pytest.mark.unit
    def test_missing_boilerplate_is_empty(self, tmp_path):
        config = ScaffoldConfig(output_dir=tmp_path, quiet=True)
        assert config.load_boilerplate() == ""

    @pytest.mark.unit
    def test_load_project(self, project_dir):
        project = ScaffoldConfig(output_dir=project_dir).load_project()
        assert project.repo == "github.com/example/operator"
        assert project.domain == "testproject.org"
        assert project.project_name == "operator"
        assert project.legacy_layout is False

    @pytest.mark.unit
    def test_missing_project_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScaffoldConfig(output_dir=tmp_path).load_project()


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


class TestSerialisation:
    @pytest.mark.unit
    def test_save_and_load(self, tmp_path):
        config = ScaffoldConfig(output_dir=tmp_path / "operator", force=True)
        saved = config.save(tmp_path / "conf" / "scaffold.json")
        assert json.loads(saved.read_text())["force"] is True
        assert ScaffoldConfig.load(saved) == config

    @pytest.mark.unit
    def test_from_env(self, tmp_path):
        env = {
            "KS_OUTPUT_DIR": str(tmp_path),
            "KS_BOILERPLATE": "hack/header.txt",
            "KS_FORCE": "yes",
            "KS_QUIET": "0",
        }
        with patch.dict(os.environ, env, clear=False):
            config = ScaffoldConfig.from_env()
        assert config.output_dir == tmp_path
        assert config.boilerplate_file == Path("hack/header.txt")
        assert config.project_file == Path("PROJECT")
        assert config.force is True
        assert config.quiet is False

    @pytest.mark.unit
    def test_from_env_defaults(self):
        keys = ("KS_OUTPUT_DIR", "KS_BOILERPLATE", "KS_PROJECT_FILE", "KS_FORCE", "KS_QUIET")
        clean = {key: value for key, value in os.environ.items() if key not in keys}
        with patch.dict(os.environ, clean, clear=True):
            config = ScaffoldConfig.from_env()
        assert config == ScaffoldConfig()
