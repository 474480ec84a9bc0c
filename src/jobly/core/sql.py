"""Helpers for building parameterized SQL.

Statements use positional ``$1..$n`` placeholders; values are always returned
separately for binding and never interpolated into statement text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from jobly.errors import EmptyUpdateError, InvalidPayloadError


def placeholder(index: int) -> str:
    return f"${index}"


@dataclass(frozen=True, slots=True)
class ColumnMapper:
    """Maps external field names to storage column names.

    Fields without an entry are stored under their external name.
    """

    columns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def column_for(self, field_name: str) -> str:
        return self.columns.get(field_name, field_name)


@dataclass(frozen=True, slots=True)
class AssignmentClause:
    assignments: tuple[str, ...]
    values: tuple[Any, ...]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.assignments)

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first parameter bound after the SET values."""
        return placeholder(len(self.values) + 1)


def build_partial_update(
    sparse_update: Mapping[str, Any],
    field_map: ColumnMapper | Mapping[str, str] | None = None,
) -> AssignmentClause:
    """Build the SET part of an UPDATE from the fields present in ``sparse_update``.

    >>> clause = build_partial_update({"name": "Acme", "numEmployees": 5}, {"numEmployees": "num_employees"})
    >>> clause.set_clause
    '"name"=$1, "num_employees"=$2'
    >>> clause.values
    ('Acme', 5)
    """
    if not sparse_update:
        raise EmptyUpdateError("No data")

    mapper = field_map if isinstance(field_map, ColumnMapper) else ColumnMapper(field_map or {})

    assignments: list[str] = []
    values: list[Any] = []
    for index, (key, value) in enumerate(sparse_update.items(), start=1):
        column = mapper.column_for(key)
        if '"' in column:
            raise InvalidPayloadError([f"invalid field name: {key}"])
        assignments.append(f'"{column}"={placeholder(index)}')
        values.append(value)

    return AssignmentClause(assignments=tuple(assignments), values=tuple(values))
