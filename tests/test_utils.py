"""Unit tests for utility functions (cleango.utils).

Tests cover:
- run_command (success, failure, timeout, cwd, env vars, capture=False)
- ensure_dir
- write_file / write_file_async and the overwrite policy
- Rich output helpers
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from cleango.errors import AlreadyExistsError, FilesystemError
from cleango.utils import (
    ensure_dir,
    file_exists,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    write_file,
    write_file_async,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(["echo", "hello"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    async def test_failed_command(self):
        returncode, _, _ = await run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert returncode == 3

    @pytest.mark.unit
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    async def test_command_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_command_with_env(self):
        _, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['CLEANGO_TEST'])"],
            env={"CLEANGO_TEST": "value"},
        )
        assert stdout == "value"

    @pytest.mark.unit
    async def test_returns_stderr(self):
        _, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('oops\\n')"]
        )
        assert stderr == "oops"

    @pytest.mark.unit
    async def test_no_capture(self):
        returncode, stdout, stderr = await run_command(["echo", "live"], capture=False)
        assert returncode == 0
        assert stdout == ""
        assert stderr == ""

    @pytest.mark.unit
    async def test_missing_program(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await run_command([str(tmp_path / "does-not-exist")])


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_dir(target) == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_existing_is_fine(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert file_exists(tmp_path)

    @pytest.mark.unit
    def test_file_in_the_way(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(FilesystemError, match="create directory"):
            ensure_dir(blocker / "child")


class TestWriteFile:
    @pytest.mark.unit
    def test_creates_parents(self, tmp_path: Path):
        path = write_file(tmp_path / "x" / "y.go", "package y\n")
        assert path.read_text(encoding="utf-8") == "package y\n"

    @pytest.mark.unit
    def test_refuses_to_overwrite(self, tmp_path: Path):
        path = tmp_path / "main.go"
        path.write_text("original", encoding="utf-8")
        with pytest.raises(AlreadyExistsError) as exc_info:
            write_file(path, "new")
        assert exc_info.value.path == str(path)
        assert path.read_text(encoding="utf-8") == "original"

    @pytest.mark.unit
    def test_overwrite(self, tmp_path: Path):
        path = tmp_path / "main.go"
        path.write_text("original", encoding="utf-8")
        write_file(path, "new", overwrite=True)
        assert path.read_text(encoding="utf-8") == "new"

    @pytest.mark.unit
    def test_unix_newlines(self, tmp_path: Path):
        path = write_file(tmp_path / "Makefile", "run:\n\tgo run .\n")
        assert path.read_bytes() == b"run:\n\tgo run .\n"

    @pytest.mark.unit
    def test_os_error_wrapped(self, tmp_path: Path):
        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with pytest.raises(FilesystemError, match="denied"):
                write_file(tmp_path / "locked.go", "x")

    @pytest.mark.unit
    async def test_async_variant(self, tmp_path: Path):
        path = await write_file_async(tmp_path / "a.go", "package a\n")
        assert path.is_file()
        with pytest.raises(AlreadyExistsError):
            await write_file_async(path, "again")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers(self):
        with patch("cleango.utils.console") as mock_console:
            print_success("done")
            print_error("bad")
            print_warning("careful")
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        assert printed == [
            "[bold green]done[/bold green]",
            "[bold red]bad[/bold red]",
            "[bold yellow]careful[/bold yellow]",
        ]

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("cleango.utils.console") as mock_console:
            print_summary_table({"Project": "orders-svc", "Framework": "chi"}, title="New")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "New"
        assert table.row_count == 2
