"""crategen -- scaffold Rust client crates driven by OpenAPI Generator.

Creates a new library crate, then writes a ``cargo-make`` ``Makefile.toml``
whose tasks download the API specification, run the generator and tidy up
the generated code.

Quick usage::

    from crategen import Config, scaffold_crate

    config = Config(site_or_api_name="petstore", api_url="https://petstore3.swagger.io/api/v3")
    await scaffold_crate(config)
"""

__version__ = "0.3.0"

from crategen.config import Command, Config, ProjectPath
from crategen.scaffolder import install_cargo_make, scaffold_crate

__all__ = [
    "Command",
    "Config",
    "ProjectPath",
    "__version__",
    "install_cargo_make",
    "scaffold_crate",
]
