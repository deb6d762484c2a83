"""OpenAPI Generator configuration and spec file handling.

Writes the ``generator_config.yaml`` read by the ``generate`` tasks, copies a
user supplied spec into the crate and, for test generation, writes the
built-in Petstore spec.
"""

from __future__ import annotations

import asyncio

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crategen.config import Config, ProjectPath
from crategen.errors import FileOperationError, ParameterError, SerializationError
from crategen.testing import PETSTORE_YAML
from crategen.utils import write_file


class RustGeneratorConfigs(BaseModel):
    """Options of the OpenAPI Generator ``rust`` generator.

    See https://openapi-generator.tech/docs/generators/rust/
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    best_fit_int: bool = Field(default=False, description="Use best fitting integer type")
    enum_name_suffix: str = Field(default="", description="Suffix appended to all enum names")
    hide_generation_timestamp: bool = Field(default=True)
    library: str = Field(default="reqwest", description="hyper or reqwest")
    package_name: str = Field(default="openapi", description="Rust package name")
    package_version: str = Field(default="1.0.0")
    prefer_unsigned_int: bool = Field(default=False)
    support_async: bool = Field(default=True, description="reqwest only")
    support_middleware: bool = Field(default=False, description="reqwest only")
    support_multiple_responses: bool = Field(default=False, description="reqwest only")
    use_single_request_parameter: bool = Field(default=False)
    with_aws_v4_signature: bool = Field(default=False, alias="withAWSV4Signature")

    @classmethod
    def new(cls, config: Config) -> "RustGeneratorConfigs":
        return cls(package_name=config.get_lib_name())

    def to_yaml(self) -> str:
        try:
            return yaml.safe_dump(self.model_dump(by_alias=True), sort_keys=False)
        except yaml.YAMLError as exc:
            raise SerializationError(f"Could not encode generator configs: {exc}") from exc

    async def write_to_yaml_file(self, config: Config) -> None:
        """Write ``generator_config.yaml`` into the crate root."""
        output_file_path = config.get_output_project_subpath(ProjectPath.GENERATOR_CONFIG)
        await write_file(output_file_path, self.to_yaml(), "OpenAPI rust generator configs")


async def copy_spec_file(config: Config) -> None:
    """Copy the local spec file into the crate under its resolved name.

    Nothing happens without a local spec, or when the spec already is that
    file (test generation writes it in place).
    """
    source = config.local_api_spec_filepath
    if source is None:
        return
    destination = config.get_output_project_dir() / config.try_get_spec_file_name()
    if source.resolve() == destination.resolve():
        return
    try:
        contents = await asyncio.to_thread(source.read_bytes)
    except OSError as exc:
        raise FileOperationError(f"Could not read spec file {source}: {exc}", source) from exc
    await write_file(destination, contents, "Copy spec file")


async def create_testing_spec_file(config: Config) -> None:
    """Write the built-in Petstore spec to the configured local spec path.

    Raises:
        ParameterError: If no local spec path was resolved.
    """
    output_file_path = config.local_api_spec_filepath
    if output_file_path is None:
        raise ParameterError("Testing YAML spec path missing")
    await write_file(output_file_path, PETSTORE_YAML, "Created source OpenAPI testing YAML")
