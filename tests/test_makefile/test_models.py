"""Tests for the Makefile env and task models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from crategen.errors import ParameterError
from crategen.makefile.models import MakefileEnv, NamedTask, Task

pytestmark = pytest.mark.unit

EXPECTED_ENV_KEYS = {
    "API_URL",
    "API_NAME",
    "LIB_NAME",
    "OUTPUT_DIR",
    "OUTPUT_TEMP_DIR",
    "OPEN_API_GENERATOR_CLI_URL",
    "OPEN_API_GENERATOR_CLI_SUBDIR",
    "OPEN_API_GENERATOR_CLI_PATH",
    "OPEN_API_GENERATOR_CLI_SCRIPT",
    "OPEN_API_GENERATOR_CONFIG_FILE",
    "OPEN_API_GENERATOR_CONFIG_PATH",
    "SPEC_FILE_DOWNLOAD_DIR",
    "SPEC_FILE_NAME",
    "SPEC_FILE_PATH",
    "SPEC_FILE_URL",
}


class TestMakefileEnv:
    def test_exact_key_set(self, config):
        env = MakefileEnv.from_config(config)
        assert set(env.to_table()) == EXPECTED_ENV_KEYS

    def test_values_from_config(self, config):
        table = MakefileEnv.from_config(config).to_table()
        assert table["API_NAME"] == "petstore"
        assert table["API_URL"] == "https://petstore3.swagger.io/api/v3"
        assert table["LIB_NAME"] == "petstore"
        assert table["SPEC_FILE_NAME"] == "openapi.yaml"
        assert table["OUTPUT_DIR"] == "."
        assert table["OUTPUT_TEMP_DIR"] == "./.crategen"

    def test_spec_url_empty_when_absent(self, config):
        assert MakefileEnv.from_config(config).spec_file_url == ""

    def test_spec_url_literal(self, make_config):
        config = make_config(api_spec_url="https://example.com/spec.json")
        assert MakefileEnv.from_config(config).spec_file_url == "https://example.com/spec.json"

    def test_substitution_tokens_kept_verbatim(self, config):
        table = MakefileEnv.from_config(config).to_table()
        assert (
            table["OPEN_API_GENERATOR_CLI_PATH"]
            == "${OPEN_API_GENERATOR_CLI_SUBDIR}/${OPEN_API_GENERATOR_CLI_SCRIPT}"
        )
        assert table["OPEN_API_GENERATOR_CONFIG_PATH"] == "${OPEN_API_GENERATOR_CONFIG_FILE}"
        assert table["SPEC_FILE_DOWNLOAD_DIR"] == "${OUTPUT_TEMP_DIR}/specdl"
        assert table["SPEC_FILE_PATH"] == "${SPEC_FILE_NAME}"

    def test_tool_constants(self, config):
        table = MakefileEnv.from_config(config).to_table()
        assert table["OPEN_API_GENERATOR_CLI_SCRIPT"] == "openapi-generator-cli"
        assert table["OPEN_API_GENERATOR_CLI_SUBDIR"] == "bin/openapitools"
        assert table["OPEN_API_GENERATOR_CONFIG_FILE"] == "generator_config.yaml"
        assert table["OPEN_API_GENERATOR_CLI_URL"].endswith("openapi-generator-cli.sh")

    def test_missing_spec_name_raises(self, make_config):
        config = make_config(local_api_spec_filepath=None)
        with pytest.raises(ParameterError):
            MakefileEnv.from_config(config)

    def test_validates_from_aliases(self, config):
        env = MakefileEnv.from_config(config)
        assert MakefileEnv.model_validate(env.to_table()) == env

    def test_frozen(self, config):
        env = MakefileEnv.from_config(config)
        with pytest.raises(ValidationError):
            env.api_url = "x"


class TestTask:
    def test_none_fields_omitted(self):
        task = Task(description="d", command="mkdir", args=["-p", "out"])
        assert task.to_table() == {"description": "d", "command": "mkdir", "args": ["-p", "out"]}

    def test_empty_task(self):
        assert Task().to_table() == {}


class TestNamedTask:
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            NamedTask(name="", task=Task())

    def test_name_with_space_rejected(self):
        with pytest.raises(ValidationError):
            NamedTask(name="bad name", task=Task())
