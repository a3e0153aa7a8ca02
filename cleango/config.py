"""cleango tool settings.

Defaults for the ``new`` command, layered from a YAML settings file and
``CLEANGO_*`` environment variables.  Command-line flags always win over
anything configured here.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from cleango.scaffolder.models import DEFAULT_MODULE_PREFIX, Database, Framework

DEFAULT_SETTINGS_PATH = Path("~/.cleango.yaml")

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Defaults used when a choice is not given on the command line."""

    model_config = ConfigDict(extra="forbid")

    module_prefix: str = Field(
        default=DEFAULT_MODULE_PREFIX,
        description="Prefix of the default module path (<prefix>/<project name>)",
    )
    default_framework: Framework = Field(default=Framework.NETHTTP)
    default_database: Database = Field(default=Database.NONE)
    go_binary: str = Field(default="go", description="Go toolchain executable")
    install_dependencies: bool = Field(
        default=True, description="Run go mod init/get/tidy after generating files"
    )

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load settings from a YAML file.

        Args:
            path: The YAML file to read.  Unknown keys are rejected.

        Returns:
            A validated ``Settings`` instance.
        """
        raw = Path(path).expanduser().read_text(encoding="utf-8")
        data = yaml.safe_load(raw) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, base: "Settings | None" = None) -> "Settings":
        """Overlay ``CLEANGO_*`` environment variables on *base*.

        Recognised variables (all optional):
            CLEANGO_MODULE_PREFIX, CLEANGO_FRAMEWORK, CLEANGO_DATABASE,
            CLEANGO_GO_BINARY, CLEANGO_SKIP_DEPS.
        """
        overrides: dict[str, Any] = {}
        if os.environ.get("CLEANGO_MODULE_PREFIX"):
            overrides["module_prefix"] = os.environ["CLEANGO_MODULE_PREFIX"]
        if os.environ.get("CLEANGO_FRAMEWORK"):
            overrides["default_framework"] = os.environ["CLEANGO_FRAMEWORK"]
        if os.environ.get("CLEANGO_DATABASE"):
            overrides["default_database"] = os.environ["CLEANGO_DATABASE"]
        if os.environ.get("CLEANGO_GO_BINARY"):
            overrides["go_binary"] = os.environ["CLEANGO_GO_BINARY"]
        if os.environ.get("CLEANGO_SKIP_DEPS"):
            overrides["install_dependencies"] = (
                os.environ["CLEANGO_SKIP_DEPS"].strip().lower() not in _TRUTHY
            )

        data = (base or cls()).model_dump()
        data.update(overrides)
        return cls.model_validate(data)

    @classmethod
    def resolve(cls) -> "Settings":
        """Settings file (``CLEANGO_CONFIG`` or ``~/.cleango.yaml``) then environment."""
        path = Path(os.environ.get("CLEANGO_CONFIG", str(DEFAULT_SETTINGS_PATH))).expanduser()
        base = cls.load(path) if path.is_file() else cls()
        return cls.from_env(base)
