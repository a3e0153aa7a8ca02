"""Dependency installation for generated projects.

The project generator never shells out directly; it talks to a
``DependencyInstaller``.  ``GoModInstaller`` drives the real ``go`` tool and
streams its output to the terminal, ``NoopInstaller`` skips the step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from cleango.errors import ExternalToolError
from cleango.utils import run_command


@runtime_checkable
class DependencyInstaller(Protocol):
    """Package-manager operations the project generator relies on."""

    async def init(self, module_path: str, cwd: Path) -> None: ...

    async def get(self, dependency: str, cwd: Path) -> None: ...

    async def tidy(self, cwd: Path) -> None: ...


class GoModInstaller:
    """Runs ``go mod init``, ``go get`` and ``go mod tidy``.

    No timeout is applied by default: a hung ``go get`` blocks the run.
    """

    def __init__(self, go_binary: str = "go", timeout: float | None = None) -> None:
        self.go_binary = go_binary
        self.timeout = timeout

    async def init(self, module_path: str, cwd: Path) -> None:
        await self._run("mod", "init", module_path, cwd=cwd)

    async def get(self, dependency: str, cwd: Path) -> None:
        await self._run("get", dependency, cwd=cwd)

    async def tidy(self, cwd: Path) -> None:
        await self._run("mod", "tidy", cwd=cwd)

    async def _run(self, *args: str, cwd: Path) -> None:
        cmd = [self.go_binary, *args]
        cmd_str = " ".join(cmd)
        try:
            returncode, _, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.timeout, capture=False
            )
        except OSError as exc:
            raise ExternalToolError(
                f"cannot run {self.go_binary}: {exc}", command=cmd_str, operation=cmd_str
            ) from exc
        if returncode != 0:
            raise ExternalToolError(
                f"exited with code {returncode}{': ' + stderr if stderr else ''}",
                command=cmd_str,
                returncode=returncode,
                operation=cmd_str,
            )


class NoopInstaller:
    """Installer that does nothing (``--skip-deps``)."""

    async def init(self, module_path: str, cwd: Path) -> None:
        return None

    async def get(self, dependency: str, cwd: Path) -> None:
        return None

    async def tidy(self, cwd: Path) -> None:
        return None
