"""Command-line interface for cleango.

Usage::

    cleango new orders-svc --framework chi --database postgres --redis
    cleango new                      # fully interactive
    cleango add handler Invoice
    cleango add adapter UserRepository --with-tests
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

import pydantic
import yaml
from rich.prompt import Confirm, Prompt

from cleango import __version__
from cleango.config import Settings
from cleango.errors import OperationCancelled, ScaffoldError, ValidationError
from cleango.scaffolder.component import ComponentGenerator
from cleango.scaffolder.installer import DependencyInstaller, GoModInstaller, NoopInstaller
from cleango.scaffolder.models import (
    ComponentKind,
    ComponentRequest,
    Database,
    Framework,
    ProjectConfig,
    default_module_path,
)
from cleango.scaffolder.naming import to_snake_case
from cleango.scaffolder.project import ProjectGenerator
from cleango.utils import console, print_error, print_success, print_summary_table, print_warning

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130

_COMPONENT_HELP: dict[ComponentKind, str] = {
    ComponentKind.USECASE: "Create a use case in domain/usecases",
    ComponentKind.ADAPTER: "Create a repository adapter in infrastructure/adapters/database",
    ComponentKind.MODEL: "Create a domain model in domain/models",
    ComponentKind.HANDLER: "Create an HTTP handler in infrastructure/entrypoints/http",
}


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class Prompter:
    """Interactive questions, backed by Rich prompts.

    Ctrl-C or end-of-input during any prompt cancels the whole command.
    """

    def ask(self, label: str, default: str | None = None) -> str:
        try:
            if default is None:
                return Prompt.ask(label, console=console)
            return Prompt.ask(label, default=default, console=console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise OperationCancelled() from exc

    def choose(self, label: str, choices: list[str], default: str) -> str:
        try:
            return Prompt.ask(label, choices=choices, default=default, console=console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise OperationCancelled() from exc

    def confirm(self, label: str, default: bool = False) -> bool:
        try:
            return Confirm.ask(label, default=default, console=console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise OperationCancelled() from exc


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cleango",
        description="Scaffold Go projects following Clean Architecture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cleango new my-service\n"
            "  cleango new my-service -m github.com/user/my-service -f gin -d postgres --redis --kafka\n"
            "  cleango add usecase GetUser\n"
            "  cleango add adapter UserRepository --with-tests\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    new = commands.add_parser("new", help="Create a new Go project")
    new.add_argument("name", nargs="?", default=None, help="Project name")
    new.add_argument("--module", "-m", default=None, help="Go module path (e.g. github.com/user/project)")
    new.add_argument(
        "--framework", "-f",
        choices=[f.value for f in Framework],
        default=None,
        help="HTTP framework",
    )
    new.add_argument(
        "--database", "-d",
        choices=[d.value for d in Database],
        default=None,
        help="Database backend",
    )
    new.add_argument("--redis", action="store_true", default=None, help="Include Redis")
    new.add_argument("--kafka", action="store_true", default=None, help="Include Kafka")
    new.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; use defaults for anything not given",
    )
    new.add_argument("--force", action="store_true", help="Overwrite files that already exist")
    new.add_argument("--skip-deps", action="store_true", help="Do not run go mod init/get/tidy")
    new.add_argument(
        "--output", "-o",
        default=".",
        help="Directory in which the project folder is created (default: .)",
    )

    add = commands.add_parser("add", help="Add a component to the current project")
    kinds = add.add_subparsers(dest="kind", metavar="KIND")
    kinds.required = True
    for kind in ComponentKind:
        sub = kinds.add_parser(kind.value, help=_COMPONENT_HELP[kind])
        sub.add_argument("name", help="Component name (e.g. GetUser)")
        if kind is ComponentKind.ADAPTER:
            sub.add_argument(
                "--with-tests",
                action="store_true",
                help="Also generate a base test for the adapter",
            )

    return parser


# ---------------------------------------------------------------------------
# new
# ---------------------------------------------------------------------------


def collect_project_config(
    args: argparse.Namespace, settings: Settings, prompter: Prompter
) -> ProjectConfig:
    """Resolve every project choice from flags, prompts and settings."""
    interactive = not args.non_interactive

    name = args.name
    if not name:
        if not interactive:
            raise ValidationError("project name is required in non-interactive mode", "new")
        name = prompter.ask("Project name")
    if not name or not name.strip():
        raise ValidationError("project name must not be empty", "new")
    name = name.strip()
    if not to_snake_case(name):
        raise ValidationError(f"'{name}' does not contain any letters or digits", "new")

    module_path = args.module
    if not module_path:
        default = default_module_path(name, settings.module_prefix)
        module_path = prompter.ask("Go module", default=default) if interactive else default

    framework = args.framework
    if framework is None:
        default = settings.default_framework.value
        framework = (
            prompter.choose("HTTP framework", [f.value for f in Framework], default)
            if interactive
            else default
        )

    database = args.database
    if database is None:
        default = settings.default_database.value
        database = (
            prompter.choose("Database", [d.value for d in Database], default)
            if interactive
            else default
        )

    use_cache = args.redis
    if use_cache is None:
        use_cache = prompter.confirm("Add Redis?") if interactive else False

    use_messaging = args.kafka
    if use_messaging is None:
        use_messaging = prompter.confirm("Add Kafka?") if interactive else False

    try:
        return ProjectConfig(
            name=name,
            module_path=module_path,
            framework=framework,
            database=database,
            use_cache=use_cache,
            use_messaging=use_messaging,
        )
    except pydantic.ValidationError as exc:
        raise ValidationError(str(exc), "new") from exc


def _make_installer(args: argparse.Namespace, settings: Settings) -> DependencyInstaller:
    if args.skip_deps or not settings.install_dependencies:
        return NoopInstaller()
    return GoModInstaller(settings.go_binary)


async def run_new(
    args: argparse.Namespace,
    settings: Settings,
    prompter: Prompter,
    installer: DependencyInstaller | None = None,
) -> int:
    interactive = not args.non_interactive
    config = collect_project_config(args, settings, prompter)

    print_summary_table(
        {
            "Name": config.name,
            "Module": config.module_path,
            "Framework": config.framework.value,
            "Database": config.database.value,
            "Redis": str(config.use_cache),
            "Kafka": str(config.use_messaging),
        },
        title="Project summary",
    )

    if interactive and not prompter.confirm("Create project?", default=True):
        raise OperationCancelled()

    target_dir = Path(args.output) / config.name
    if target_dir.exists():
        if interactive:
            if not prompter.confirm(f"Folder '{config.name}' already exists. Use it?"):
                raise OperationCancelled()
        else:
            print_warning(f"Folder '{config.name}' already exists. Using existing folder.")

    console.print(f"\n[cyan]Generating project[/cyan] [bold]{config.name}[/bold]...")
    generator = ProjectGenerator(
        config,
        installer=installer or _make_installer(args, settings),
        overwrite=args.force,
    )
    result = await generator.generate(target_dir)

    print_success("\nProject created successfully!")
    if result.failed_dependencies:
        print_warning(
            "Some dependencies could not be installed: "
            + ", ".join(result.failed_dependencies)
        )
    console.print("\nNext steps:")
    console.print(f"  cd {target_dir}")
    console.print("  go mod tidy")
    console.print("  go run ./cmd/api")
    env_vars = config.database_env_vars()
    if env_vars:
        console.print(
            f"\n{config.database.value} connection code generated in "
            f"infrastructure/adapters/database/{config.database.value}.go"
        )
        console.print(
            "Fill in your connection settings in .env (see .env.example): "
            + ", ".join(env_vars)
        )
    console.print("\nTo add components:")
    for kind in ComponentKind:
        console.print(f"  cleango add {kind.value} <name>")
    return EXIT_OK


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


async def run_add(args: argparse.Namespace, project_root: Path | None = None) -> int:
    try:
        request = ComponentRequest(
            kind=ComponentKind(args.kind),
            raw_name=args.name,
            with_tests=getattr(args, "with_tests", False),
        )
    except pydantic.ValidationError as exc:
        raise ValidationError(str(exc), f"add {args.kind}") from exc

    console.print(f"[cyan]Generating {request.kind.value}[/cyan] [bold]{request.raw_name}[/bold]...")
    component = await ComponentGenerator(project_root).generate(request)
    print_success(f"{request.kind.value.capitalize()} '{request.raw_name}' created successfully!")
    for path in component.paths:
        try:
            shown = path.relative_to(Path.cwd())
        except ValueError:
            shown = path
        console.print(f"   File: {shown}")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run(argv: Sequence[str] | None = None, prompter: Prompter | None = None) -> int:
    """Parse *argv*, execute the command and return the process exit code."""
    args = build_parser().parse_args(argv)
    try:
        if args.command == "new":
            settings = Settings.resolve()
            return asyncio.run(run_new(args, settings, prompter or Prompter()))
        return asyncio.run(run_add(args))
    except (OperationCancelled, KeyboardInterrupt):
        print_warning("Operation cancelled")
        return EXIT_CANCELLED
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE


def main() -> None:
    """Console-script entry point for ``cleango``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
