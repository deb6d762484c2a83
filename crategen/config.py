"""crategen configuration.

The resolved command-line context for one invocation.  Pydantic v2 models
validate the values once at construction time; everything downstream (the
scaffolder, the Makefile builder, the YAML writers) only reads from it.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from crategen.errors import ParameterError
from crategen.utils import sanitize_name


class Command(str, Enum):
    """The subcommand that produced this configuration."""

    GENERATE = "generate"
    TEST_GENERATION = "test-generation"


class ProjectPath(str, Enum):
    """Fixed paths inside the generated crate, relative to its root."""

    TEMP_DIR = ".crategen"
    GITIGNORE_FILE = ".gitignore"
    MAKEFILE = "Makefile.toml"
    GENERATOR_CONFIG = "generator_config.yaml"
    CARGO_TOML = "Cargo.toml"


class Config(BaseModel):
    """Resolved parameters for one scaffolding run.

    Instances are created by the CLI entry point (or ``from_env``) and passed
    through the rest of the system.  They are frozen.
    """

    model_config = {"frozen": True}

    site_or_api_name: str = Field(..., description="Name of the API or site the crate targets")
    api_url: str = Field(..., description="Base URL of the API")
    api_spec_url: Optional[str] = Field(
        default=None, description="Where the OpenAPI specification can be downloaded"
    )
    local_api_spec_filepath: Optional[Path] = Field(
        default=None, description="Local OpenAPI specification file"
    )
    output_dir: Path = Field(default=Path("."), description="Parent directory of the crate")
    lib_name: Optional[str] = Field(default=None, description="Crate name override")
    command: Command = Field(default=Command.GENERATE)

    @property
    def is_test_generation(self) -> bool:
        return self.command is Command.TEST_GENERATION

    # ------------------------------------------------------------------
    # Derived names and paths
    # ------------------------------------------------------------------

    def get_lib_name(self) -> str:
        """Crate name: the explicit override or the sanitised API name.

        Raises:
            ParameterError: If no usable name can be derived.
        """
        name = sanitize_name(self.lib_name or self.site_or_api_name)
        if not name:
            raise ParameterError(
                f"Cannot derive a crate name from `{self.lib_name or self.site_or_api_name}`"
            )
        return name

    def get_output_project_dir(self) -> Path:
        """Root directory of the crate being scaffolded."""
        return self.output_dir / self.get_lib_name()

    def get_output_project_subpath(self, path: ProjectPath) -> Path:
        return self.get_output_project_dir() / path.value

    def try_get_spec_file_name(self) -> str:
        """File name the spec is stored under inside the crate.

        Taken from the local spec path, or else from the last segment of the
        spec download URL.

        Raises:
            ParameterError: If neither source yields a file name.
        """
        if self.local_api_spec_filepath is not None and self.local_api_spec_filepath.name:
            return self.local_api_spec_filepath.name
        if self.api_spec_url:
            segment = urlparse(self.api_spec_url).path.rstrip("/").rsplit("/", 1)[-1]
            if segment:
                return segment
        raise ParameterError(
            "Missing spec file name: pass a local spec file or a spec URL ending in a file name"
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables:
            CRATEGEN_API_NAME (required), CRATEGEN_API_URL (required),
            CRATEGEN_API_SPEC_URL, CRATEGEN_SPEC_FILE, CRATEGEN_OUTPUT_DIR,
            CRATEGEN_LIB_NAME, CRATEGEN_COMMAND.

        Raises:
            ParameterError: If a required variable is unset.
        """
        missing = [
            name for name in ("CRATEGEN_API_NAME", "CRATEGEN_API_URL")
            if not os.environ.get(name)
        ]
        if missing:
            raise ParameterError(f"Missing environment variables: {', '.join(missing)}")

        spec_file = os.environ.get("CRATEGEN_SPEC_FILE")
        return cls(
            site_or_api_name=os.environ["CRATEGEN_API_NAME"],
            api_url=os.environ["CRATEGEN_API_URL"],
            api_spec_url=os.environ.get("CRATEGEN_API_SPEC_URL") or None,
            local_api_spec_filepath=Path(spec_file) if spec_file else None,
            output_dir=Path(os.environ.get("CRATEGEN_OUTPUT_DIR", ".")),
            lib_name=os.environ.get("CRATEGEN_LIB_NAME") or None,
            command=Command(os.environ.get("CRATEGEN_COMMAND", Command.GENERATE.value)),
        )
