"""Pydantic models for the ``cargo-make`` Makefile.

``MakefileEnv`` is the ``[env]`` table and ``Task`` one ``[tasks.<name>]``
table.  Values containing ``${NAME}`` tokens are kept verbatim: cargo-make
expands them when it runs a task.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crategen.config import Config, ProjectPath


def _to_env_name(name: str) -> str:
    return name.upper()


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class MakefileEnv(BaseModel):
    """The ``[env]`` table of the generated Makefile."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=_to_env_name,
        populate_by_name=True,
    )

    # Default config file name for OpenAPI Generator
    OPEN_API_GENERATOR_CONFIG_FILE: ClassVar[str] = ProjectPath.GENERATOR_CONFIG.value
    # Default download url for the OpenAPI Generator CLI wrapper script
    OPEN_API_GENERATOR_CLI_URL: ClassVar[str] = (
        "https://raw.githubusercontent.com/OpenAPITools/openapi-generator/"
        "master/bin/utils/openapi-generator-cli.sh"
    )
    # Default local dir of the CLI, relative to $HOME
    OPEN_API_GENERATOR_CLI_SUBDIR: ClassVar[str] = "bin/openapitools"
    OPEN_API_GENERATOR_CLI_SCRIPT: ClassVar[str] = "openapi-generator-cli"

    api_url: str
    api_name: str
    lib_name: str
    output_dir: str
    output_temp_dir: str
    open_api_generator_cli_url: str
    open_api_generator_cli_subdir: str
    open_api_generator_cli_path: str
    open_api_generator_cli_script: str
    open_api_generator_config_file: str
    open_api_generator_config_path: str
    spec_file_download_dir: str
    spec_file_name: str
    spec_file_path: str
    spec_file_url: str

    @classmethod
    def from_config(cls, config: Config) -> "MakefileEnv":
        """Resolve every env entry from the CLI context.

        Raises:
            ParameterError: If the lib name or spec file name cannot be derived.
        """
        return cls(
            api_url=config.api_url,
            api_name=config.site_or_api_name,
            lib_name=config.get_lib_name(),
            output_dir=".",
            output_temp_dir=f"./{ProjectPath.TEMP_DIR.value}",
            open_api_generator_cli_url=cls.OPEN_API_GENERATOR_CLI_URL,
            open_api_generator_cli_subdir=cls.OPEN_API_GENERATOR_CLI_SUBDIR,
            open_api_generator_cli_path=(
                "${OPEN_API_GENERATOR_CLI_SUBDIR}/${OPEN_API_GENERATOR_CLI_SCRIPT}"
            ),
            open_api_generator_cli_script=cls.OPEN_API_GENERATOR_CLI_SCRIPT,
            open_api_generator_config_file=cls.OPEN_API_GENERATOR_CONFIG_FILE,
            open_api_generator_config_path="${OPEN_API_GENERATOR_CONFIG_FILE}",
            spec_file_download_dir="${OUTPUT_TEMP_DIR}/specdl",
            spec_file_name=config.try_get_spec_file_name(),
            spec_file_path="${SPEC_FILE_NAME}",
            spec_file_url=config.api_spec_url or "",
        )

    def to_table(self) -> dict[str, str]:
        """Entries keyed by their SCREAMING_SNAKE_CASE env names."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class Task(BaseModel):
    """A single cargo-make task definition.

    A task either runs ``command`` with ``args`` or feeds ``script`` to
    ``script_runner``.  ``condition_script`` gates execution: a non-zero
    exit skips the task.
    """

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    command: Optional[str] = None
    args: Optional[list[str]] = None
    dependencies: Optional[list[str]] = None
    condition_script: Optional[list[str]] = None
    script_runner: Optional[str] = None
    script_runner_args: Optional[list[str]] = None
    script_extension: Optional[str] = None
    script: Optional[str] = None

    def to_table(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class NamedTask(BaseModel):
    """A ``Task`` together with the key it is stored under."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    task: Task

    @field_validator("name")
    @classmethod
    def _no_whitespace(cls, value: str) -> str:
        if value.strip() != value or " " in value:
            raise ValueError(f"task name must not contain spaces: {value!r}")
        return value
