"""Cargo manifest maintenance for generated crates.

OpenAPI Generator writes a ``Cargo.toml`` that lags behind the crates the
generated code actually uses.  ``CargoConfigurator`` records the
dependencies a reqwest based client needs and adds them with ``cargo add``.

A configurator is serialised to YAML and embedded in the ``generate-all``
task of the Makefile, so the same routine runs again after every
regeneration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from crategen import __version__
from crategen.config import Config, ProjectPath
from crategen.errors import FileOperationError, ProcessError, SerializationError
from crategen.utils import console, format_output, run_command

THIS_CRATE_NAME = "crategen"


class CargoDependency(BaseModel):
    """One ``[dependencies]`` entry to ensure in the generated crate."""

    name: str
    version: str
    features: list[str] = Field(default_factory=list)
    default_features: bool = True

    def cargo_add_args(self) -> list[str]:
        args = ["cargo", "add", f"{self.name}@{self.version}"]
        if self.features:
            args.extend(["--features", ",".join(self.features)])
        if not self.default_features:
            args.append("--no-default-features")
        return args


def _default_dependencies() -> list[CargoDependency]:
    return [
        CargoDependency(name="serde", version="1", features=["derive"]),
        CargoDependency(name="serde_derive", version="1"),
        CargoDependency(name="serde_json", version="1"),
        CargoDependency(name="serde_with", version="3", features=["base64"]),
        CargoDependency(name="url", version="2"),
        CargoDependency(name="uuid", version="1", features=["serde", "v4"]),
        CargoDependency(name="reqwest", version="0.12", features=["json", "multipart"]),
    ]


class CargoConfigurator(BaseModel):
    """Dependency update routine for a generated crate."""

    this_crate_name: str = Field(default=THIS_CRATE_NAME)
    this_crate_ver: str = Field(default=__version__)
    crate_dir: str = Field(default=".", description="Crate root, relative to where the task runs")
    dependencies: list[CargoDependency] = Field(default_factory=_default_dependencies)

    @classmethod
    def new(cls, config: Config) -> "CargoConfigurator":
        """Configurator for the crate described by *config*.

        The embedded task runs from the crate root, so ``crate_dir`` stays
        ``"."``; resolving the lib name here surfaces a bad configuration
        before anything is serialised.
        """
        config.get_lib_name()
        return cls()

    # ------------------------------------------------------------------
    # YAML round trip
    # ------------------------------------------------------------------

    def to_yaml(self) -> str:
        try:
            return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)
        except yaml.YAMLError as exc:
            raise SerializationError(f"Could not encode cargo configurator: {exc}") from exc

    @classmethod
    def from_yaml(cls, text: str) -> "CargoConfigurator":
        try:
            data: Any = yaml.safe_load(text)
            return cls.model_validate(data)
        except (yaml.YAMLError, ValidationError) as exc:
            raise SerializationError(f"Could not decode cargo configurator: {exc}") from exc

    # ------------------------------------------------------------------
    # Manifest update
    # ------------------------------------------------------------------

    def cargo_add_commands(self) -> list[list[str]]:
        return [dependency.cargo_add_args() for dependency in self.dependencies]

    async def update_cargo_toml(self) -> None:
        """Run ``cargo add`` for every dependency, stopping at the first failure.

        Raises:
            FileOperationError: If ``crate_dir`` has no ``Cargo.toml``.
            ProcessError: If ``cargo`` is missing or exits non-zero.
        """
        manifest = Path(self.crate_dir) / ProjectPath.CARGO_TOML.value
        if not manifest.is_file():
            raise FileOperationError(f"No manifest at {manifest}", manifest)
        for cmd in self.cargo_add_commands():
            returncode, stdout, stderr = await run_command(cmd, cwd=self.crate_dir)
            if returncode != 0:
                output = format_output(returncode, stdout, stderr)
                raise ProcessError(
                    f"`{' '.join(cmd)}` failed\n{output}",
                    command=" ".join(cmd),
                    output=output,
                )
            console.print(f"[green]+[/green] {' '.join(cmd[2:])}")
