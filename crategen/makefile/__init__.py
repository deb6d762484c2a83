"""cargo-make Makefile generation.

Builds the ``Makefile.toml`` written into every scaffolded crate::

    from crategen.makefile import MakefileSpec

    spec = MakefileSpec.from_config(config)
    await spec.write_to_makefile(config)
"""

from crategen.makefile.models import MakefileEnv, NamedTask, Task
from crategen.makefile.scripts import ScriptRenderer
from crategen.makefile.spec import MakefileSpec

__all__ = [
    "MakefileEnv",
    "MakefileSpec",
    "NamedTask",
    "ScriptRenderer",
    "Task",
]
