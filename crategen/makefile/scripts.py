"""Jinja2 rendering of the scripts embedded in Makefile tasks.

Templates live in ``crategen/makefile/templates/``.  Shell templates keep
cargo-make's ``${NAME}`` tokens untouched; only ``{{ placeholder }}``
expressions are filled in here.  Rendering uses ``StrictUndefined`` so a
template never silently loses a placeholder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, meta

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

GENERATE_ALL_TEMPLATE = "generate_all.py.j2"
GENERATOR_CHECK_TEMPLATE = "generator_check.sh.j2"
CLI_CHECK_TEMPLATE = "cli_check.sh.j2"
INSTALL_CLI_TEMPLATE = "install_cli.sh.j2"


class ScriptRenderer:
    """Renders the task script templates with a context dictionary."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["pyrepr"] = repr

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render *template_name* with *context*.

        Raises:
            jinja2.UndefinedError: If the context lacks a placeholder.
        """
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_lines(self, template_name: str, context: dict[str, Any]) -> list[str]:
        """Render a template and split it into lines, as cargo-make script arrays expect."""
        return self.render(template_name, context).splitlines()

    def placeholders(self, template_name: str) -> set[str]:
        """Return the names a template expects in its context."""
        source, _, _ = self.env.loader.get_source(self.env, template_name)
        return meta.find_undeclared_variables(self.env.parse(source))

    def list_templates(self) -> list[str]:
        return sorted(p.name for p in self.template_dir.glob("*.j2"))
