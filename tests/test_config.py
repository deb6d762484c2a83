"""Tests for crategen.config (Config, ProjectPath, Command)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from crategen.config import Command, Config, ProjectPath
from crategen.errors import ParameterError

pytestmark = pytest.mark.unit


class TestLibName:
    def test_derived_from_api_name(self, make_config):
        config = make_config(site_or_api_name="Pet Store API")
        assert config.get_lib_name() == "pet-store-api"

    def test_override_wins(self, make_config):
        config = make_config(lib_name="petstore_client")
        assert config.get_lib_name() == "petstore_client"

    def test_unusable_name_raises(self, make_config):
        config = make_config(site_or_api_name="!!!")
        with pytest.raises(ParameterError):
            config.get_lib_name()


class TestPaths:
    def test_output_project_dir(self, config, tmp_path: Path):
        assert config.get_output_project_dir() == tmp_path / "crates" / "petstore"

    def test_subpath(self, config, tmp_path: Path):
        assert (
            config.get_output_project_subpath(ProjectPath.GITIGNORE_FILE)
            == tmp_path / "crates" / "petstore" / ".gitignore"
        )

    def test_project_path_values(self):
        assert ProjectPath.MAKEFILE.value == "Makefile.toml"
        assert ProjectPath.GENERATOR_CONFIG.value == "generator_config.yaml"
        assert ProjectPath.TEMP_DIR.value == ".crategen"


class TestSpecFileName:
    def test_from_local_path(self, config):
        assert config.try_get_spec_file_name() == "openapi.yaml"

    def test_local_path_preferred_over_url(self, make_config):
        config = make_config(api_spec_url="https://example.com/spec.json")
        assert config.try_get_spec_file_name() == "openapi.yaml"

    def test_from_url(self, make_config):
        config = make_config(
            local_api_spec_filepath=None,
            api_spec_url="https://example.com/v3/spec.json?download=1",
        )
        assert config.try_get_spec_file_name() == "spec.json"

    def test_missing_raises(self, make_config):
        config = make_config(local_api_spec_filepath=None)
        with pytest.raises(ParameterError):
            config.try_get_spec_file_name()

    def test_url_without_path_raises(self, make_config):
        config = make_config(local_api_spec_filepath=None, api_spec_url="https://example.com")
        with pytest.raises(ParameterError):
            config.try_get_spec_file_name()


class TestCommand:
    def test_default_is_generate(self, config):
        assert config.command is Command.GENERATE
        assert config.is_test_generation is False

    def test_test_generation(self, test_generation_config):
        assert test_generation_config.is_test_generation is True

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.api_url = "https://other.example.com"


class TestFromEnv:
    def test_reads_variables(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CRATEGEN_API_NAME", "petstore")
        monkeypatch.setenv("CRATEGEN_API_URL", "https://petstore3.swagger.io/api/v3")
        monkeypatch.setenv("CRATEGEN_API_SPEC_URL", "https://example.com/spec.json")
        monkeypatch.setenv("CRATEGEN_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("CRATEGEN_COMMAND", "test-generation")
        monkeypatch.delenv("CRATEGEN_SPEC_FILE", raising=False)
        monkeypatch.delenv("CRATEGEN_LIB_NAME", raising=False)

        config = Config.from_env()

        assert config.site_or_api_name == "petstore"
        assert config.api_spec_url == "https://example.com/spec.json"
        assert config.output_dir == tmp_path
        assert config.local_api_spec_filepath is None
        assert config.command is Command.TEST_GENERATION

    def test_missing_required(self, monkeypatch):
        monkeypatch.delenv("CRATEGEN_API_NAME", raising=False)
        monkeypatch.setenv("CRATEGEN_API_URL", "https://example.com")
        with pytest.raises(ParameterError, match="CRATEGEN_API_NAME"):
            Config.from_env()
