"""Shared pytest fixtures for the cleango test suite.

Provides reusable fixtures for:
- Project configurations for each database flavour
- A recording dependency installer that never runs ``go``
- Temporary Go project roots (directories holding a ``go.mod``)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cleango.errors import ExternalToolError
from cleango.scaffolder.models import Database, Framework, ProjectConfig


# ---------------------------------------------------------------------------
# Fake installer
# ---------------------------------------------------------------------------

class RecordingInstaller:
    """DependencyInstaller double that records every call.

    ``fail_on`` lists dependency ids whose ``get`` raises; ``fail_tidy`` and
    ``fail_init`` make those steps raise.  ``init`` writes a minimal go.mod so
    the generated directory behaves like a real project root.
    """

    def __init__(
        self,
        fail_on: tuple[str, ...] = (),
        fail_tidy: bool = False,
        fail_init: bool = False,
    ) -> None:
        self.fail_on = set(fail_on)
        self.fail_tidy = fail_tidy
        self.fail_init = fail_init
        self.calls: list[tuple[str, ...]] = []

    async def init(self, module_path: str, cwd: Path) -> None:
        self.calls.append(("init", module_path, str(cwd)))
        if self.fail_init:
            raise ExternalToolError("go not found", command="go mod init")
        (Path(cwd) / "go.mod").write_text(f"module {module_path}\n", encoding="utf-8")

    async def get(self, dependency: str, cwd: Path) -> None:
        self.calls.append(("get", dependency, str(cwd)))
        if dependency in self.fail_on:
            raise ExternalToolError("exited with code 1", command=f"go get {dependency}", returncode=1)

    async def tidy(self, cwd: Path) -> None:
        self.calls.append(("tidy", str(cwd)))
        if self.fail_tidy:
            raise ExternalToolError("exited with code 1", command="go mod tidy", returncode=1)

    @property
    def fetched(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "get"]


@pytest.fixture
def installer() -> RecordingInstaller:
    return RecordingInstaller()


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_config() -> ProjectConfig:
    """net/http, no database, no add-ons."""
    return ProjectConfig(name="plain-svc")


@pytest.fixture
def postgres_config() -> ProjectConfig:
    """The chi + postgres + redis service used in several scenarios."""
    return ProjectConfig(
        name="orders-svc",
        framework=Framework.CHI,
        database=Database.POSTGRES,
        use_cache=True,
        use_messaging=False,
    )


@pytest.fixture
def mongo_config() -> ProjectConfig:
    return ProjectConfig(
        name="catalog-svc",
        module_path="github.com/acme/catalog",
        framework=Framework.GIN,
        database=Database.MONGODB,
        use_messaging=True,
    )


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Temporary directory that looks like a generated project root."""
    root = tmp_path / "svc"
    root.mkdir()
    (root / "go.mod").write_text("module github.com/user/svc\n", encoding="utf-8")
    return root


@pytest.fixture
def make_installer():
    """Factory for ``RecordingInstaller`` instances with failure knobs."""
    return RecordingInstaller
