"""Shared utility functions for crategen.

Provides async command execution, async file writes with a one-line console
report, crate-name sanitising and Rich-based console output.
"""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from crategen.errors import FileOperationError, ProcessError

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 600,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously, buffering its output.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timed-out process
        reports ``-1``.

    Raises:
        ProcessError: If the program cannot be spawned at all.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    cmd_str = " ".join(cmd)
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except OSError as exc:
        raise ProcessError(f"Could not start `{cmd_str}`: {exc}", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {cmd_str}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


def format_output(returncode: int, stdout: str, stderr: str) -> str:
    """Render captured process output for error messages."""
    return f"exit status: {returncode}\nstdout:\n{stdout}\nstderr:\n{stderr}"


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


async def write_file(
    path: str | Path,
    content: str | bytes,
    description: str | None = None,
) -> Path:
    """Write *content* to *path*, replacing any existing file.

    The write runs in a worker thread.  When *description* is given a short
    confirmation line is printed.

    Raises:
        FileOperationError: If the file cannot be written.
    """
    file_path = Path(path)
    try:
        if isinstance(content, bytes):
            await asyncio.to_thread(file_path.write_bytes, content)
        else:
            await asyncio.to_thread(file_path.write_text, content, "utf-8")
    except OSError as exc:
        raise FileOperationError(f"Could not write {file_path}: {exc}", file_path) from exc
    if description:
        console.print(f"[green]Wrote[/green] {escape(description)} to [bold]{escape(str(file_path))}[/bold]")
    return file_path


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary API or site name to a valid crate name.

    Examples::

        sanitize_name("Pet Store") -> "pet-store"
        sanitize_name("  api.example.com  ") -> "api-example-com"
    """
    result = re.sub(r"[^a-zA-Z0-9_-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
