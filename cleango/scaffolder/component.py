"""Single-component generation inside an existing project.

``cleango add <kind> <name>`` validates the working directory, renders one
template (two for adapters with tests) entirely in memory, and only then
writes the files.  Existing files are never overwritten.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from cleango.errors import AlreadyExistsError, NotAProjectRootError
from cleango.utils import ensure_dir, file_exists, write_file_async

from .catalog import MANIFEST_FILE, component_template
from .models import ComponentKind, ComponentRequest, GeneratedComponent
from .naming import to_camel_case, to_snake_case, validate_identifier
from .templates import TemplateRenderer


class ComponentGenerator:
    """Adds use cases, adapters, models and handlers to a generated project."""

    def __init__(
        self,
        project_root: str | Path | None = None,
        *,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_root = Path(project_root) if project_root is not None else Path.cwd()
        self.renderer = renderer or TemplateRenderer()

    async def generate(self, request: ComponentRequest) -> GeneratedComponent:
        """Validate, render and write the files for *request*.

        Raises:
            NotAProjectRootError: If ``go.mod`` is missing from the project root.
            ValidationError: If the name cannot form a Go identifier.
            AlreadyExistsError: If any destination file already exists.
            TemplateError: If the catalog template fails to render.
        """
        operation = f"add {request.kind.value}"
        root = self.project_root

        if not file_exists(root / MANIFEST_FILE):
            raise NotAProjectRootError(
                f"{MANIFEST_FILE} not found in {root}; run this from the project root",
                operation,
            )

        name = validate_identifier(request.raw_name, operation)
        entry = component_template(request.kind)
        directory = root / entry.directory
        await asyncio.to_thread(ensure_dir, directory)

        binding = {"Name": name, "LowerName": to_camel_case(request.raw_name)}
        snake = to_snake_case(request.raw_name)

        # Render everything before touching the disk.
        outputs: list[tuple[Path, str]] = [
            (directory / entry.filename(snake), self.renderer.render(entry.template, binding))
        ]
        wants_test = request.with_tests and request.kind is ComponentKind.ADAPTER
        if wants_test and entry.test_template:
            outputs.append(
                (
                    directory / entry.test_filename(snake),
                    self.renderer.render(entry.test_template, binding),
                )
            )

        for path, _ in outputs:
            if file_exists(path):
                raise AlreadyExistsError(str(path), operation)

        written = [await write_file_async(path, content) for path, content in outputs]
        return GeneratedComponent(
            kind=request.kind,
            path=written[0],
            test_path=written[1] if len(written) > 1 else None,
        )


async def add_component(
    kind: ComponentKind | str,
    raw_name: str,
    *,
    with_tests: bool = False,
    project_root: str | Path | None = None,
) -> GeneratedComponent:
    """Convenience wrapper around :class:`ComponentGenerator`."""
    request = ComponentRequest(kind=ComponentKind(kind), raw_name=raw_name, with_tests=with_tests)
    return await ComponentGenerator(project_root).generate(request)
