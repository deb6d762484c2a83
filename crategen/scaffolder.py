"""Crate scaffolding.

Prepares the target directory, runs ``cargo init`` and lays out the files
the Makefile tasks rely on.  The steps of :func:`scaffold_crate` run
strictly in order and each one depends on the directory state left by the
previous one:

1. directory preparation -- outside test generation the directory must be
   absent or empty; test generation wipes and recreates it
2. ``cargo init --lib``
3. the internal ``.crategen/`` working directory
4. ``.gitignore`` naming that directory (the file is replaced, not merged)
5. the Petstore spec, in test generation only
6. ``Makefile.toml``

There is no rollback: a failure leaves whatever the earlier steps wrote.
Outside test generation the directory started empty; test generation wipes
it on the next run anyway.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from crategen.config import Config, ProjectPath
from crategen.errors import (
    CargoInitFailedError,
    CargoMakeInstallFailedError,
    FileOperationError,
    MissingCrateDirError,
    NonEmptyTargetDirError,
    ParameterError,
)
from crategen.generator_config import create_testing_spec_file
from crategen.makefile import MakefileSpec
from crategen.utils import console, format_output, print_error, print_success, run_command

# ---------------------------------------------------------------------------
# Directory preparation
# ---------------------------------------------------------------------------


def _dir_has_entries(path: Path) -> bool:
    return any(path.iterdir())


async def create_testing_folder(config: Config) -> Path:
    """Delete the crate directory if present, then create it empty."""
    dir_path = config.get_output_project_dir()
    try:
        if dir_path.is_dir():
            await asyncio.to_thread(shutil.rmtree, dir_path)
        await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(f"Could not reset {dir_path}: {exc}", dir_path) from exc
    return dir_path


async def create_crate_folder_and_check_empty(config: Config) -> Path:
    """Create the crate directory if needed and make sure it is empty.

    Raises:
        NonEmptyTargetDirError: If the directory already has any entry.
    """
    dir_path = config.get_output_project_dir()
    try:
        await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
        has_entries = await asyncio.to_thread(_dir_has_entries, dir_path)
    except OSError as exc:
        raise FileOperationError(f"Could not prepare {dir_path}: {exc}", dir_path) from exc
    if has_entries:
        raise NonEmptyTargetDirError(dir_path)
    return dir_path


# ---------------------------------------------------------------------------
# cargo
# ---------------------------------------------------------------------------


async def init_crate(config: Config) -> None:
    """Run ``cargo init --lib`` in the crate directory.

    Raises:
        MissingCrateDirError: If the directory does not exist.
        CargoInitFailedError: If ``cargo init`` exits non-zero.
        ProcessError: If ``cargo`` cannot be started.
    """
    dir_path = config.get_output_project_dir()
    if not dir_path.is_dir():
        raise MissingCrateDirError(dir_path)

    cmd = ["cargo", "init", "--lib", "--color", "always", str(dir_path)]
    returncode, stdout, stderr = await run_command(cmd)
    if returncode != 0:
        error = CargoInitFailedError(
            dir_path,
            command=" ".join(cmd),
            output=format_output(returncode, stdout, stderr),
        )
        print_error(str(error))
        raise error
    console.print(f"Initialized crate at `{dir_path}` with output {stdout or stderr}", markup=False)


async def install_cargo_make() -> None:
    """Force install ``cargo-make``.

    Raises:
        CargoMakeInstallFailedError: If ``cargo install`` exits non-zero.
    """
    cmd = ["cargo", "install", "--force", "cargo-make"]
    returncode, stdout, stderr = await run_command(cmd, timeout=1800)
    if returncode != 0:
        error = CargoMakeInstallFailedError(
            command=" ".join(cmd),
            output=format_output(returncode, stdout, stderr),
        )
        print_error(str(error))
        raise error
    print_success("Installed cargo make")


# ---------------------------------------------------------------------------
# Crate layout
# ---------------------------------------------------------------------------


async def setup_tree_in_crate(config: Config) -> None:
    """Create the internal working directory."""
    temp_dir_path = config.get_output_project_subpath(ProjectPath.TEMP_DIR)
    try:
        await asyncio.to_thread(temp_dir_path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(f"Could not create {temp_dir_path}: {exc}", temp_dir_path) from exc


async def setup_git_in_crate(config: Config) -> None:
    """Write ``.gitignore`` with the internal working directory as its only entry."""
    gitignore_path = config.get_output_project_subpath(ProjectPath.GITIGNORE_FILE)
    content = f"/{ProjectPath.TEMP_DIR.value}\n"
    try:
        await asyncio.to_thread(gitignore_path.write_text, content, "utf-8")
    except OSError as exc:
        raise FileOperationError(f"Could not write {gitignore_path}: {exc}", gitignore_path) from exc


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


async def scaffold_crate(config: Config) -> Path:
    """Run every scaffolding step for *config*, stopping at the first failure.

    The crate and spec file names are resolved before the first step, so a
    missing parameter fails without touching the file system.

    Returns:
        The crate directory.

    Raises:
        ParameterError: If the lib name or spec file name cannot be derived.
    """
    config.get_lib_name()
    config.try_get_spec_file_name()
    if config.is_test_generation and config.local_api_spec_filepath is None:
        raise ParameterError("Testing YAML spec path missing")
    if config.is_test_generation:
        dir_path = await create_testing_folder(config)
    else:
        dir_path = await create_crate_folder_and_check_empty(config)
    await init_crate(config)
    await setup_tree_in_crate(config)
    await setup_git_in_crate(config)
    if config.is_test_generation:
        await create_testing_spec_file(config)
    await MakefileSpec.from_config(config).write_to_makefile(config)
    return dir_path
