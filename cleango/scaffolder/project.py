"""Project scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a Go project laid out in clean
architecture layers: entry point, configuration, domain models and use
cases, database and logger adapters, HTTP entry points and migrations.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from cleango.errors import ExternalToolError
from cleango.utils import console, ensure_dir, file_exists, print_warning, write_file_async

from .catalog import (
    ENTRYPOINT_PATH,
    MANIFEST_FILE,
    PROJECT_DIRECTORIES,
    database_output,
    database_templates,
    main_template,
    project_files,
)
from .installer import DependencyInstaller, GoModInstaller
from .models import ProjectConfig, ProjectResult
from .naming import to_camel_case, to_pascal_case, to_snake_case
from .templates import TemplateRenderer


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, writes into a target directory:
    - the layered directory skeleton
    - .gitignore, config, logger, .env.example, README and ``cmd/api/main.go``
    - the database connection module and its smoke test (unless ``none``)
    - a Makefile for PostgreSQL projects

    and then asks the installer to initialise ``go.mod`` and fetch the
    dependencies.  Installer failures are warnings; template and file-system
    failures abort, leaving already-written files in place.
    """

    def __init__(
        self,
        config: ProjectConfig,
        *,
        renderer: TemplateRenderer | None = None,
        installer: DependencyInstaller | None = None,
        overwrite: bool = False,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.installer = installer or GoModInstaller()
        self.overwrite = overwrite

    # -- Public API --------------------------------------------------------

    async def generate(self, target_dir: str | Path) -> ProjectResult:
        """Generate the complete project structure inside *target_dir*.

        Returns:
            A ``ProjectResult`` listing written files and any dependencies
            that could not be fetched.
        """
        root = Path(target_dir)
        result = ProjectResult(root=root)
        context = self._build_context()

        # 1. Skeleton directories
        await self._create_directory_structure(root)

        # 2. Project-level files and the entry point
        for spec in project_files(self.config):
            result.written.append(
                await self._render_to_file(spec.template, root / spec.output, context)
            )
        result.written.append(
            await self._render_to_file(
                main_template(self.config.framework), root / ENTRYPOINT_PATH, context
            )
        )

        # 3. Database connection module
        result.written.extend(await self._render_database(root, context))

        # 4. Dependencies
        await self._install_dependencies(root, result)

        return result

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        cfg = self.config
        return {
            "project_name": cfg.name,
            "project_name_snake": to_snake_case(cfg.name),
            "Name": to_pascal_case(cfg.name),
            "LowerName": to_camel_case(cfg.name),
            "module_path": cfg.module_path,
            "framework": cfg.framework.value,
            "database": cfg.database.value,
            "use_cache": cfg.use_cache,
            "use_messaging": cfg.use_messaging,
            "database_env_vars": cfg.database_env_vars(),
            "dependencies": cfg.dependencies(),
        }

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the mandatory project directory tree."""
        await asyncio.to_thread(ensure_dir, root)
        for directory in PROJECT_DIRECTORIES:
            await asyncio.to_thread(ensure_dir, root / directory)

    # -- Rendering ---------------------------------------------------------

    async def _render_to_file(
        self, template_path: str, output_path: Path, context: dict[str, Any]
    ) -> Path:
        content = self.renderer.render(template_path, context)
        return await write_file_async(output_path, content, overwrite=self.overwrite)

    async def _render_database(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        """Render the connection module (and smoke test) for the database."""
        templates = database_templates(self.config.database)
        if templates is None:
            return []
        written = [
            await self._render_to_file(
                templates.module, root / database_output(self.config.database), ctx
            )
        ]
        if templates.smoke_test:
            written.append(
                await self._render_to_file(
                    templates.smoke_test,
                    root / database_output(self.config.database, smoke_test=True),
                    ctx,
                )
            )
        return written

    # -- Dependencies ------------------------------------------------------

    async def _install_dependencies(self, root: Path, result: ProjectResult) -> None:
        """Initialise the module, fetch dependencies and tidy; never raises."""
        if not file_exists(root / MANIFEST_FILE):
            try:
                await self.installer.init(self.config.module_path, root)
                result.initialized = True
            except ExternalToolError as exc:
                print_warning(f"Warning: could not initialise {MANIFEST_FILE}: {exc}")

        console.print("[cyan]Installing dependencies...[/cyan]")
        for dep in self.config.dependencies():
            console.print(f"   - {dep}")
            try:
                await self.installer.get(dep, root)
            except ExternalToolError as exc:
                result.failed_dependencies.append(dep)
                print_warning(f"Warning: could not install {dep}: {exc}")

        console.print("[cyan]Running go mod tidy...[/cyan]")
        try:
            await self.installer.tidy(root)
            result.tidied = True
        except ExternalToolError as exc:
            print_warning(f"Warning: go mod tidy failed: {exc}")
