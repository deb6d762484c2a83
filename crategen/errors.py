"""Exception hierarchy for crategen.

Every failure raised by the scaffolder, the Makefile builder or the YAML
writers derives from :class:`CrategenError`.  The subclasses do not overlap:
callers can tell a bad parameter from a failed ``cargo`` process from an
unexpected directory state without parsing messages.  The underlying cause
is always chained (``raise ... from exc``).
"""

from __future__ import annotations

from pathlib import Path


class CrategenError(Exception):
    """Base class for all crategen errors."""


class ParameterError(CrategenError):
    """A required value could not be derived from the CLI input."""


class SerializationError(CrategenError):
    """A document (TOML, YAML) could not be encoded or decoded."""


class FileOperationError(CrategenError):
    """A directory or file operation failed."""

    def __init__(self, message: str, path: str | Path = "") -> None:
        self.path = Path(path) if path else None
        super().__init__(message)


class ProcessError(CrategenError):
    """An external process could not be spawned or exited non-zero."""

    def __init__(self, message: str, command: str = "", output: str = "") -> None:
        self.command = command
        self.output = output
        super().__init__(message)


class CargoInitFailedError(ProcessError):
    """``cargo init`` reported a failure."""

    def __init__(self, crate_dir: Path, command: str = "", output: str = "") -> None:
        self.crate_dir = crate_dir
        super().__init__(
            f"Cargo init project at `{crate_dir}` failed with `{output}`",
            command=command,
            output=output,
        )


class CargoMakeInstallFailedError(ProcessError):
    """``cargo install cargo-make`` reported a failure."""

    def __init__(self, command: str = "", output: str = "") -> None:
        super().__init__(
            f"Installing `cargo-make` failed with `{output}`",
            command=command,
            output=output,
        )


class PreconditionError(CrategenError):
    """The target directory is not in the state scaffolding requires."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class NonEmptyTargetDirError(PreconditionError):
    """The crate directory already has content."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Cannot scaffold in a directory that can't be confirmed as empty {path}",
            path,
        )


class MissingCrateDirError(PreconditionError):
    """The crate directory vanished before ``cargo init`` ran."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Could not find crate dir at {path}", path)
