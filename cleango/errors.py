"""Error taxonomy for the scaffolding engine.

Every error raised by the generators derives from :class:`ScaffoldError`, so
the command surface can report any failure with a single ``except`` clause and
exit non-zero.  Each error is annotated with the operation that failed; the
underlying cause is chained with ``raise ... from``.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every failure surfaced by cleango."""

    def __init__(self, message: str, operation: str = "") -> None:
        self.message = message
        self.operation = operation
        super().__init__(f"{operation}: {message}" if operation else message)


class ValidationError(ScaffoldError):
    """Raised when user input cannot be used (empty name, bad identifier, ...)."""


class NotAProjectRootError(ValidationError):
    """Raised when a component is added outside a generated project."""


class AlreadyExistsError(ScaffoldError):
    """Raised instead of silently overwriting an existing file."""

    def __init__(self, path: str, operation: str = "") -> None:
        self.path = path
        super().__init__(f"File already exists: {path}", operation)


class TemplateError(ScaffoldError):
    """Raised when a catalog template cannot be rendered.

    This always points at a defect in the packaged templates, never at user
    input.
    """

    def __init__(self, template: str, message: str, operation: str = "render") -> None:
        self.template = template
        super().__init__(f"template '{template}': {message}", operation)


class FilesystemError(ScaffoldError):
    """Raised when a directory or file cannot be created or written."""


class ExternalToolError(ScaffoldError):
    """Raised by a dependency installer when the package manager fails.

    The project generator downgrades these to warnings.
    """

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        operation: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message, operation)


class OperationCancelled(ScaffoldError):
    """Raised when the user cancels an interactive prompt."""

    def __init__(self, message: str = "Operation cancelled") -> None:
        super().__init__(message)
