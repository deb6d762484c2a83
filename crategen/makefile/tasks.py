"""Constructors for the cargo-make task catalog.

Each ``make_*`` function returns a :class:`NamedTask`.  Dependencies are
listed by name and must refer to other tasks of the same catalog;
:class:`~crategen.makefile.spec.MakefileSpec` checks this when it is built.
Execution order is left entirely to cargo-make.
"""

from __future__ import annotations

import jinja2

from crategen.cargo import CargoConfigurator
from crategen.config import Config
from crategen.errors import SerializationError
from crategen.makefile.models import NamedTask, Task
from crategen.makefile.scripts import (
    CLI_CHECK_TEMPLATE,
    GENERATE_ALL_TEMPLATE,
    GENERATOR_CHECK_TEMPLATE,
    INSTALL_CLI_TEMPLATE,
    ScriptRenderer,
)

# Task names
FIX_GENERATED = "fix-generated"
SCAFFOLD = "scaffold"
GENERATE_ALL = "generate-all"
GENERATE = "generate"
DRY_RUN_SUFFIX = "-dry-run"
GENERATE_DRY_RUN = GENERATE + DRY_RUN_SUFFIX
CHECK_TOOL_INSTALLED = "check-tool-installed"
INSTALL_TOOL = "install-tool"
CLEAN_OUTPUT = "clean-output"
CREATE_OUTPUT = "create-output"
DOWNLOAD_SPEC = "download-spec"
DOWNLOAD_DEFAULT_SPEC = "download-default-spec"

# Options shared by the generate task and its dry-run variant
CODE_GENERATION_OPTS: tuple[str, ...] = (
    "generate",
    "--generator-name", "rust",
    "--output", "${OUTPUT_DIR}",
    "--input-spec", "${SPEC_FILE_PATH}",
    "--config", "${OPEN_API_GENERATOR_CONFIG_PATH}",
)

_CLI_SCRIPT_TOKEN = "${OPEN_API_GENERATOR_CLI_SCRIPT}"

_renderer = ScriptRenderer()


def make_fix_generated_task() -> NamedTask:
    """``cargo fix`` over the generated code."""
    return NamedTask(
        name=FIX_GENERATED,
        task=Task(
            description="Fix ${LIB_NAME} project generated code.",
            command="cargo",
            args=[
                "fix",
                "--broken-code",
                "--allow-dirty",
                "--all-targets",
                "--all-features",
                "--verbose",
                "--verbose",
            ],
        ),
    )


def make_scaffold_task() -> NamedTask:
    """Sequencing-only task that prepares the output directory."""
    return NamedTask(
        name=SCAFFOLD,
        task=Task(
            description="Setup ${LIB_NAME} project.",
            dependencies=[CREATE_OUTPUT, CLEAN_OUTPUT],
        ),
    )


def render_generate_all_script(configurator: CargoConfigurator) -> str:
    """Source of the Python program run by ``generate-all``.

    Raises:
        SerializationError: If the configurator cannot be encoded or the
            template cannot be filled.
    """
    context = {
        "this_crate_name": configurator.this_crate_name,
        "this_crate_ver": configurator.this_crate_ver,
        "configurator_yaml": configurator.to_yaml(),
    }
    try:
        return _renderer.render(GENERATE_ALL_TEMPLATE, context)
    except jinja2.TemplateError as exc:
        raise SerializationError(f"Could not render {GENERATE_ALL_TEMPLATE}: {exc}") from exc


def make_generate_all_task(config: Config) -> NamedTask:
    """Generate, fix, then re-run the Cargo.toml dependency update.

    The script runs under ``uv run --script``, which installs the
    ``crategen`` version pinned in its inline metadata.

    Raises:
        SerializationError: If the embedded program cannot be built.
        ParameterError: If *config* has no usable lib name.
    """
    configurator = CargoConfigurator.new(config)
    return NamedTask(
        name=GENERATE_ALL,
        task=Task(
            description="Generate ${LIB_NAME} code and try to get it up to par",
            dependencies=[GENERATE, FIX_GENERATED],
            script_runner="uv",
            script_runner_args=["run", "--script"],
            script_extension="py",
            script=render_generate_all_script(configurator),
        ),
    )


def make_generate_task(is_dry_run: bool = False) -> NamedTask:
    """Run OpenAPI Generator; skipped when its CLI is not on ``PATH``."""
    args = list(CODE_GENERATION_OPTS)
    name = GENERATE
    if is_dry_run:
        args.append("--dry-run")
        name += DRY_RUN_SUFFIX
    return NamedTask(
        name=name,
        task=Task(
            description="Generate ${LIB_NAME} code",
            condition_script=_renderer.render_lines(
                GENERATOR_CHECK_TEMPLATE,
                {"cli_script": _CLI_SCRIPT_TOKEN, "install_task": INSTALL_TOOL},
            ),
            command=_CLI_SCRIPT_TOKEN,
            args=args,
        ),
    )


def make_check_tool_installed_task() -> NamedTask:
    return NamedTask(
        name=CHECK_TOOL_INSTALLED,
        task=Task(
            description="Check that openapi cli generator tool is installed",
            script_runner="@shell",
            script=_renderer.render(CLI_CHECK_TEMPLATE, {"cli_script": _CLI_SCRIPT_TOKEN}),
        ),
    )


def make_install_tool_task() -> NamedTask:
    """Interactive download-and-enable of the OpenAPI Generator CLI."""
    return NamedTask(
        name=INSTALL_TOOL,
        task=Task(
            description="Install Open API generator CLI.",
            script_runner="@shell",
            script=_renderer.render(INSTALL_CLI_TEMPLATE, {"pager": "less"}),
        ),
    )


def make_clean_output_task() -> NamedTask:
    """Passes the glob to ``rm`` without a shell.

    cargo-make does not expand ``*`` in ``args``, so the task removes
    nothing.  With ``OUTPUT_DIR`` at the crate root an expanded glob would
    delete ``Makefile.toml``, ``Cargo.toml`` and the spec file.
    """
    return NamedTask(
        name=CLEAN_OUTPUT,
        task=Task(
            description="Clean ${LIB_NAME} output dir at ${OUTPUT_DIR}.",
            command="rm",
            args=["-rf", "${OUTPUT_DIR}/*"],
        ),
    )


def make_create_output_task() -> NamedTask:
    return NamedTask(
        name=CREATE_OUTPUT,
        task=Task(
            description="Create ${LIB_NAME} output dir at ${OUTPUT_DIR}.",
            command="mkdir",
            args=["-p", "${OUTPUT_DIR}"],
        ),
    )


def make_download_spec_task() -> NamedTask:
    """Download a spec from the URL passed on the cargo-make command line."""
    return NamedTask(
        name=DOWNLOAD_SPEC,
        task=Task(
            description="Downloads ${API_NAME} Open API specification from the given URL.",
            command="wget",
            args=["${@}", "-O", "${SPEC_FILE_PATH}"],
        ),
    )


def make_download_default_spec_task() -> NamedTask:
    return NamedTask(
        name=DOWNLOAD_DEFAULT_SPEC,
        task=Task(
            description="Downloads ${API_NAME} Open API specification from '${SPEC_FILE_URL}'.",
            command="wget",
            args=["${SPEC_FILE_URL}", "-O", "${SPEC_FILE_PATH}"],
        ),
    )


def build_catalog(config: Config) -> list[NamedTask]:
    """Every task for *config*.

    ``download-default-spec`` is only present when a spec URL was given.
    """
    named_tasks = [
        make_fix_generated_task(),
        make_scaffold_task(),
        make_generate_all_task(config),
        make_generate_task(),
        make_generate_task(is_dry_run=True),
        make_check_tool_installed_task(),
        make_install_tool_task(),
        make_clean_output_task(),
        make_create_output_task(),
        make_download_spec_task(),
    ]
    if config.api_spec_url:
        named_tasks.append(make_download_default_spec_task())
    return named_tasks
