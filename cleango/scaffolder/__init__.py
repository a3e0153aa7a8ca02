"""cleango scaffolder -- generates Go projects with a clean architecture layout.

Quick usage::

    from cleango.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig(name="orders-svc", framework="chi", database="postgres")
    result = await ProjectGenerator(config).generate("/tmp/orders-svc")

    from cleango.scaffolder import add_component
    await add_component("handler", "Invoice", project_root="/tmp/orders-svc")
"""

from cleango.scaffolder.component import ComponentGenerator, add_component
from cleango.scaffolder.installer import DependencyInstaller, GoModInstaller, NoopInstaller
from cleango.scaffolder.models import (
    ComponentKind,
    ComponentRequest,
    Database,
    Framework,
    GeneratedComponent,
    ProjectConfig,
    ProjectResult,
)
from cleango.scaffolder.project import ProjectGenerator
from cleango.scaffolder.templates import TemplateRenderer

__all__ = [
    "ComponentGenerator",
    "ComponentKind",
    "ComponentRequest",
    "Database",
    "DependencyInstaller",
    "Framework",
    "GeneratedComponent",
    "GoModInstaller",
    "NoopInstaller",
    "ProjectConfig",
    "ProjectGenerator",
    "ProjectResult",
    "TemplateRenderer",
    "add_component",
]
