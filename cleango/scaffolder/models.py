"""Pydantic v2 models describing what the scaffolder is asked to build.

``ProjectConfig`` is resolved once per ``cleango new`` invocation and frozen;
``ComponentRequest`` once per ``cleango add`` invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .naming import to_snake_case


DEFAULT_MODULE_PREFIX = "github.com/user"
LOGGER_DEPENDENCY = "go.uber.org/zap"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """HTTP framework used by the generated entry point."""
    NETHTTP = "nethttp"
    CHI = "chi"
    GIN = "gin"
    FIBER = "fiber"


class Database(str, Enum):
    """Datastore backend wired into the generated project."""
    NONE = "none"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    ORACLE = "oracle"


class ComponentKind(str, Enum):
    """Kinds of source unit that ``cleango add`` can generate."""
    USECASE = "usecase"
    ADAPTER = "adapter"
    MODEL = "model"
    HANDLER = "handler"


FRAMEWORK_DEPENDENCIES: dict[Framework, str] = {
    Framework.CHI: "github.com/go-chi/chi/v5",
    Framework.GIN: "github.com/gin-gonic/gin",
    Framework.FIBER: "github.com/gofiber/fiber/v2",
}

DATABASE_DEPENDENCIES: dict[Database, str] = {
    Database.POSTGRES: "github.com/jackc/pgx/v5/stdlib",
    Database.MYSQL: "github.com/go-sql-driver/mysql",
    Database.MONGODB: "go.mongodb.org/mongo-driver/mongo",
    Database.ORACLE: "github.com/godror/godror",
}

DATABASE_ENV_VARS: dict[Database, tuple[str, ...]] = {
    Database.POSTGRES: ("DB_POSTGRES_URL",),
    Database.MYSQL: ("DB_MYSQL_DSN",),
    Database.MONGODB: ("DB_MONGO_URI", "DB_MONGO_DATABASE"),
    Database.ORACLE: ("DB_ORACLE_DSN",),
}

CACHE_DEPENDENCY = "github.com/redis/go-redis/v9"
MESSAGING_DEPENDENCY = "github.com/segmentio/kafka-go"


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------

class ProjectConfig(BaseModel):
    """Resolved choices describing the project to scaffold."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name (display, identifiers, directory)")
    module_path: str = Field(default="", description="Go module path")
    framework: Framework = Field(default=Framework.NETHTTP)
    database: Database = Field(default=Database.NONE)
    use_cache: bool = Field(default=False, description="Wire a Redis client")
    use_messaging: bool = Field(default=False, description="Wire a Kafka client")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        if not to_snake_case(value):
            raise ValueError(f"project name '{value}' does not contain any letters or digits")
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_module_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and not (data.get("module_path") or "").strip():
            name = str(data.get("name") or "").strip()
            data = {**data, "module_path": default_module_path(name)}
        return data

    def dependencies(self) -> list[str]:
        """Return the Go modules ``go get`` must fetch, in install order."""
        deps = [LOGGER_DEPENDENCY]
        if self.framework in FRAMEWORK_DEPENDENCIES:
            deps.append(FRAMEWORK_DEPENDENCIES[self.framework])
        if self.database in DATABASE_DEPENDENCIES:
            deps.append(DATABASE_DEPENDENCIES[self.database])
        if self.use_cache:
            deps.append(CACHE_DEPENDENCY)
        if self.use_messaging:
            deps.append(MESSAGING_DEPENDENCY)
        return deps

    def database_env_vars(self) -> list[str]:
        """Environment variables the user must fill in for the database."""
        return list(DATABASE_ENV_VARS.get(self.database, ()))


def default_module_path(name: str, prefix: str = DEFAULT_MODULE_PREFIX) -> str:
    """Conventional module path for a project called *name*."""
    return f"{prefix.rstrip('/')}/{name}"


# ---------------------------------------------------------------------------
# Component request
# ---------------------------------------------------------------------------

class ComponentRequest(BaseModel):
    """A single ``cleango add`` invocation."""

    model_config = ConfigDict(frozen=True)

    kind: ComponentKind
    raw_name: str
    with_tests: bool = Field(default=False, description="Adapters only: also emit a test file")

    @field_validator("raw_name")
    @classmethod
    def _raw_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("component name must not be empty")
        return value


# ---------------------------------------------------------------------------
# Generation results
# ---------------------------------------------------------------------------

@dataclass
class ProjectResult:
    """What a project generation run produced."""

    root: Path
    written: list[Path] = field(default_factory=list)
    failed_dependencies: list[str] = field(default_factory=list)
    initialized: bool = False
    tidied: bool = False


@dataclass
class GeneratedComponent:
    """Files written for one component."""

    kind: ComponentKind
    path: Path
    test_path: Path | None = None

    @property
    def paths(self) -> list[Path]:
        return [p for p in (self.path, self.test_path) if p is not None]
