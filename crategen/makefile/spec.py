"""The complete ``Makefile.toml`` document.

``MakefileSpec`` combines the ``[env]`` table with the task catalog and is
the only object written to the Makefile.  It is built once per invocation
and written once.
"""

from __future__ import annotations

from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from tomlkit.exceptions import TOMLKitError

from crategen.config import Config, ProjectPath
from crategen.errors import SerializationError
from crategen.makefile.models import MakefileEnv, NamedTask, Task
from crategen.makefile.tasks import build_catalog
from crategen.utils import write_file


class MakefileSpec(BaseModel):
    """``[env]`` plus ``[tasks.*]`` of the generated Makefile."""

    model_config = ConfigDict(frozen=True)

    env: MakefileEnv
    tasks: dict[str, Task]

    @model_validator(mode="after")
    def _dependencies_exist(self) -> "MakefileSpec":
        for name, task in self.tasks.items():
            missing = [dep for dep in task.dependencies or [] if dep not in self.tasks]
            if missing:
                raise ValueError(
                    f"task `{name}` depends on unknown task(s): {', '.join(missing)}"
                )
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_named_tasks(cls, env: MakefileEnv, named_tasks: list[NamedTask]) -> "MakefileSpec":
        """Key *named_tasks* by name.

        Raises:
            ValueError: If two tasks share a name or a dependency is dangling.
        """
        tasks: dict[str, Task] = {}
        for named in named_tasks:
            if named.name in tasks:
                raise ValueError(f"duplicate task name `{named.name}`")
            tasks[named.name] = named.task
        return cls(env=env, tasks=tasks)

    @classmethod
    def from_config(cls, config: Config) -> "MakefileSpec":
        """Build the env and the full task catalog for *config*.

        Raises:
            ParameterError: If a required name cannot be resolved.
            SerializationError: If the ``generate-all`` script cannot be built.
        """
        env = MakefileEnv.from_config(config)
        return cls.from_named_tasks(env, build_catalog(config))

    # ------------------------------------------------------------------
    # TOML
    # ------------------------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        return {
            "env": self.env.to_table(),
            "tasks": {name: task.to_table() for name, task in self.tasks.items()},
        }

    def to_toml(self) -> str:
        try:
            return tomlkit.dumps(self._build_toml_document())
        except (TOMLKitError, TypeError, ValueError) as exc:
            raise SerializationError(f"Could not encode Makefile: {exc}") from exc

    def _build_toml_document(self) -> tomlkit.TOMLDocument:
        doc = tomlkit.document()
        env_table = tomlkit.table()
        for key, value in self.env.to_table().items():
            env_table.add(key, value)
        doc.add("env", env_table)

        tasks_table = tomlkit.table(is_super_table=True)
        for name in sorted(self.tasks):
            task_table = tomlkit.table()
            for key, value in self.tasks[name].to_table().items():
                if key == "script":
                    value = tomlkit.string(value, multiline=True)
                task_table.add(key, value)
            tasks_table.add(name, task_table)
        doc.add("tasks", tasks_table)
        return doc

    @classmethod
    def from_toml(cls, text: str) -> "MakefileSpec":
        try:
            data = tomlkit.parse(text).unwrap()
            return cls.model_validate(data)
        except (TOMLKitError, ValidationError) as exc:
            raise SerializationError(f"Could not decode Makefile: {exc}") from exc

    async def write_to_makefile(self, config: Config) -> None:
        """Write ``Makefile.toml`` into the crate root, replacing any existing one.

        Raises:
            SerializationError: If the document cannot be encoded.
            FileOperationError: If the file cannot be written.
        """
        output_file_path = config.get_output_project_subpath(ProjectPath.MAKEFILE)
        await write_file(output_file_path, self.to_toml(), "Makefile")
