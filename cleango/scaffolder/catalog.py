"""The fixed catalog of templates known to the scaffolder.

Every table here is read-only and built at import time.  Template names are
paths relative to ``cleango/scaffolder/templates/``; output paths are relative
to the generated project root.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .conditions import ALWAYS, Condition, FieldEquals
from .models import ComponentKind, Database, Framework


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplateSpec:
    """A project-level file: which template, where it goes, and when."""

    template: str
    output: str
    when: Condition = ALWAYS


@dataclass(frozen=True)
class DatabaseTemplates:
    """Connection module and companion smoke test for one database."""

    module: str
    smoke_test: str | None = None


@dataclass(frozen=True)
class ComponentTemplate:
    """Template and destination rules for one component kind."""

    template: str
    directory: str
    suffix: str = ""
    test_template: str | None = None

    def filename(self, snake_name: str) -> str:
        return f"{snake_name}{self.suffix}.go"

    def test_filename(self, snake_name: str) -> str:
        return f"{snake_name}{self.suffix}_test.go"


# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

ENTRYPOINT_PATH = "cmd/api/main.go"
DATABASE_DIR = "infrastructure/adapters/database"
MANIFEST_FILE = "go.mod"

PROJECT_DIRECTORIES: tuple[str, ...] = (
    "cmd/api",
    "config",
    "domain/models",
    "domain/usecases",
    DATABASE_DIR,
    "infrastructure/adapters/logger",
    "infrastructure/entrypoints/http",
    "migrations",
)

PROJECT_FILES: tuple[TemplateSpec, ...] = (
    TemplateSpec("project/gitignore.j2", ".gitignore"),
    TemplateSpec("project/config.go.j2", "config/config.go"),
    TemplateSpec("project/logger.go.j2", "infrastructure/adapters/logger/logger.go"),
    TemplateSpec("project/env.example.j2", ".env.example"),
    TemplateSpec("project/README.md.j2", "README.md"),
    TemplateSpec(
        "project/Makefile.j2",
        "Makefile",
        when=FieldEquals("database", Database.POSTGRES),
    ),
)

MAIN_TEMPLATES: Mapping[Framework, str] = MappingProxyType({
    Framework.NETHTTP: "project/main_nethttp.go.j2",
    Framework.CHI: "project/main_chi.go.j2",
    Framework.GIN: "project/main_gin.go.j2",
    Framework.FIBER: "project/main_fiber.go.j2",
})

DATABASE_TEMPLATES: Mapping[Database, DatabaseTemplates] = MappingProxyType({
    Database.POSTGRES: DatabaseTemplates("database/postgres.go.j2", "database/postgres_test.go.j2"),
    Database.MYSQL: DatabaseTemplates("database/mysql.go.j2", "database/mysql_test.go.j2"),
    Database.MONGODB: DatabaseTemplates("database/mongodb.go.j2", "database/mongodb_test.go.j2"),
    Database.ORACLE: DatabaseTemplates("database/oracle.go.j2", "database/oracle_test.go.j2"),
})

COMPONENT_TEMPLATES: Mapping[ComponentKind, ComponentTemplate] = MappingProxyType({
    ComponentKind.USECASE: ComponentTemplate(
        "components/usecase.go.j2", "domain/usecases"
    ),
    ComponentKind.ADAPTER: ComponentTemplate(
        "components/adapter.go.j2",
        DATABASE_DIR,
        test_template="components/adapter_test.go.j2",
    ),
    ComponentKind.MODEL: ComponentTemplate(
        "components/model.go.j2", "domain/models"
    ),
    ComponentKind.HANDLER: ComponentTemplate(
        "components/handler.go.j2", "infrastructure/entrypoints/http", suffix="_handler"
    ),
})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def main_template(framework: Framework) -> str:
    """Entry-point template for *framework*."""
    return MAIN_TEMPLATES[Framework(framework)]


def database_templates(database: Database) -> DatabaseTemplates | None:
    """Connection templates for *database*, or ``None`` when nothing is emitted."""
    return DATABASE_TEMPLATES.get(Database(database))


def database_output(database: Database, smoke_test: bool = False) -> str:
    """Destination of the connection module (or its smoke test)."""
    name = Database(database).value
    suffix = "_test.go" if smoke_test else ".go"
    return f"{DATABASE_DIR}/{name}{suffix}"


def component_template(kind: ComponentKind) -> ComponentTemplate:
    """Template entry for a component *kind*."""
    return COMPONENT_TEMPLATES[ComponentKind(kind)]


def project_files(subject: object) -> list[TemplateSpec]:
    """Project-level entries whose condition holds for *subject*."""
    return [spec for spec in PROJECT_FILES if spec.when.evaluate(subject)]
