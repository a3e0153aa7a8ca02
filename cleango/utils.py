"""Shared utility functions for cleango.

Provides async command execution, file-system helpers with an explicit
overwrite policy, and Rich-based console reporting.  Paths are always passed
in explicitly; nothing here changes the process working directory.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from cleango.errors import AlreadyExistsError, FilesystemError

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams so the user sees the output live).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.

    Raises:
        FileNotFoundError: If the program does not exist.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def file_exists(path: str | Path) -> bool:
    """Return ``True`` if a file or directory exists at *path*."""
    return Path(path).exists()


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Pre-existing directories are left untouched.

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    dir_path = Path(path)
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(str(exc), f"create directory {dir_path}") from exc
    return dir_path


def write_file(path: str | Path, content: str, *, overwrite: bool = False) -> Path:
    """Write *content* to *path*, creating parent directories.

    Args:
        path: Destination file.
        content: Text to write (UTF-8).
        overwrite: Replace an existing file instead of failing.

    Raises:
        AlreadyExistsError: If the file exists and *overwrite* is ``False``.
        FilesystemError: If the file cannot be written.
    """
    file_path = Path(path)
    operation = f"write {file_path}"
    if file_path.exists() and not overwrite:
        raise AlreadyExistsError(str(file_path), operation)
    ensure_dir(file_path.parent)
    mode = "w" if overwrite else "x"
    try:
        with file_path.open(mode, encoding="utf-8", newline="\n") as fh:
            fh.write(content)
    except FileExistsError as exc:
        raise AlreadyExistsError(str(file_path), operation) from exc
    except OSError as exc:
        raise FilesystemError(str(exc), operation) from exc
    return file_path


async def write_file_async(
    path: str | Path, content: str, *, overwrite: bool = False
) -> Path:
    """Run :func:`write_file` in a worker thread."""
    return await asyncio.to_thread(write_file, path, content, overwrite=overwrite)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
