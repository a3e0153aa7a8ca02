"""Condition expressions evaluated against a project configuration.

The catalog attaches a condition to every optional output file.  Conditions
are small immutable trees so they can be built, compared and tested without
rendering any template::

    when = AllOf(FieldEquals("database", "postgres"), Not(FlagSet("use_messaging")))
    when.evaluate(config)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cleango.errors import TemplateError


def _lookup(subject: Any, field: str) -> Any:
    """Read *field* from a mapping or an attribute-bearing object."""
    if isinstance(subject, Mapping):
        if field in subject:
            value = subject[field]
        else:
            raise TemplateError("<condition>", f"unknown field '{field}'", "evaluate")
    elif hasattr(subject, field):
        value = getattr(subject, field)
    else:
        raise TemplateError("<condition>", f"unknown field '{field}'", "evaluate")
    if isinstance(value, Enum):
        return value.value
    return value


class Condition:
    """Base class for condition nodes."""

    def evaluate(self, subject: Any) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Always(Condition):
    """Matches every configuration."""

    def evaluate(self, subject: Any) -> bool:
        return True


@dataclass(frozen=True)
class FieldEquals(Condition):
    """Matches when ``subject.<field> == value`` (enums compare by value)."""

    field: str
    value: Any

    def evaluate(self, subject: Any) -> bool:
        expected = self.value.value if isinstance(self.value, Enum) else self.value
        return _lookup(subject, self.field) == expected


@dataclass(frozen=True)
class FlagSet(Condition):
    """Matches when a boolean field is true."""

    field: str

    def evaluate(self, subject: Any) -> bool:
        return bool(_lookup(subject, self.field))


@dataclass(frozen=True)
class Not(Condition):
    condition: Condition

    def evaluate(self, subject: Any) -> bool:
        return not self.condition.evaluate(subject)


@dataclass(frozen=True, init=False)
class AllOf(Condition):
    """Matches when every child matches; an empty sequence always matches."""

    conditions: tuple[Condition, ...]

    def __init__(self, *conditions: Condition) -> None:
        object.__setattr__(self, "conditions", tuple(conditions))

    def evaluate(self, subject: Any) -> bool:
        return all(c.evaluate(subject) for c in self.conditions)


@dataclass(frozen=True, init=False)
class AnyOf(Condition):
    """Matches when at least one child matches."""

    conditions: tuple[Condition, ...]

    def __init__(self, *conditions: Condition) -> None:
        object.__setattr__(self, "conditions", tuple(conditions))

    def evaluate(self, subject: Any) -> bool:
        return any(c.evaluate(subject) for c in self.conditions)


ALWAYS = Always()
