"""Declarative list filters for companies and jobs.

A ``FilterSpec`` declares which query keys a resource accepts. Raw query
mappings are checked with ``validate_filters`` and the resulting
``ValidatedFilter`` narrows a record list with ``apply_filters``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from jobly.errors import InvalidFilterError, NoMatchError

logger = logging.getLogger(__name__)

FilterKind = Literal["text", "integer", "boolean"]
FilterRelation = Literal["contains", "min", "max", "flag"]

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


@dataclass(frozen=True, slots=True)
class FilterField:
    key: str
    kind: FilterKind
    relation: FilterRelation
    target: str
    minimum: int | None = None


@dataclass(frozen=True, slots=True)
class FilterSpec:
    resource: str
    fields: tuple[FilterField, ...]

    def get(self, key: str) -> FilterField | None:
        for item in self.fields:
            if item.key == key:
                return item
        return None

    def with_relation(self, relation: FilterRelation) -> list[FilterField]:
        return [item for item in self.fields if item.relation == relation]

    def range_targets(self) -> list[str]:
        targets: list[str] = []
        for item in self.fields:
            if item.relation in ("min", "max") and item.target not in targets:
                targets.append(item.target)
        return targets

    def range_pairs(self) -> list[tuple[FilterField, FilterField]]:
        pairs = []
        for lower in self.with_relation("min"):
            for upper in self.with_relation("max"):
                if lower.target == upper.target:
                    pairs.append((lower, upper))
        return pairs


COMPANY_FILTERS = FilterSpec(
    resource="company",
    fields=(
        FilterField("name", "text", "contains", target="name"),
        FilterField("minEmployees", "integer", "min", target="numEmployees", minimum=0),
        FilterField("maxEmployees", "integer", "max", target="numEmployees", minimum=0),
    ),
)

JOB_FILTERS = FilterSpec(
    resource="job",
    fields=(
        FilterField("title", "text", "contains", target="title"),
        FilterField("minSalary", "integer", "min", target="salary", minimum=0),
        FilterField("hasEquity", "boolean", "flag", target="equity"),
    ),
)


@dataclass(frozen=True, slots=True)
class ValidatedFilter:
    spec: FilterSpec
    values: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        return self.values.get(key)

    def bounds(self, target: str) -> tuple[int | None, int | None]:
        """Return the (min, max) bounds set for ``target``; unset bounds are None."""
        lower = upper = None
        for item in self.spec.fields:
            if item.target != target or item.key not in self.values:
                continue
            if item.relation == "min":
                lower = self.values[item.key]
            elif item.relation == "max":
                upper = self.values[item.key]
        return lower, upper


def _coerce(item: FilterField, raw: Any) -> tuple[Any, str | None]:
    if item.kind == "text":
        if not isinstance(raw, str):
            return None, f"{item.key} must be a string"
        return raw, None

    if item.kind == "integer":
        if isinstance(raw, bool):
            return None, f"{item.key} must be an integer"
        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, str) and _INTEGER_PATTERN.match(raw.strip()):
            value = int(raw.strip())
        else:
            return None, f"{item.key} must be an integer"
        if item.minimum is not None and value < item.minimum:
            return None, f"{item.key} must be greater than or equal to {item.minimum}"
        return value, None

    if isinstance(raw, bool):
        return raw, None
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True, None
        if lowered in _FALSE_STRINGS:
            return False, None
    return None, f"{item.key} must be a boolean"


def validate_filters(filter_request: Mapping[str, Any] | None, spec: FilterSpec) -> ValidatedFilter:
    """Check ``filter_request`` against ``spec``.

    Unknown keys are dropped. Every violation is collected and raised together
    as ``InvalidFilterError``.
    """
    values: dict[str, Any] = {}
    errors: list[str] = []

    for key, raw in (filter_request or {}).items():
        item = spec.get(key)
        if item is None:
            continue
        value, error = _coerce(item, raw)
        if error:
            errors.append(error)
        else:
            values[key] = value

    for lower, upper in spec.range_pairs():
        if lower.key in values and upper.key in values and values[lower.key] > values[upper.key]:
            errors.append(f"{lower.key} cannot exceed {upper.key}")

    if errors:
        logger.debug("rejected %s filters: %s", spec.resource, errors)
        raise InvalidFilterError(errors)
    return ValidatedFilter(spec=spec, values=values)


def _as_number(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _within(value: Any, lower: float, upper: float) -> bool:
    number = _as_number(value)
    return number is not None and lower <= number <= upper


def apply_filters(
    records: Iterable[Mapping[str, Any]],
    validated: ValidatedFilter,
) -> list[Mapping[str, Any]]:
    """Narrow ``records`` by the text, range and flag filters in ``validated``.

    The text filter runs first and raises ``NoMatchError`` when nothing
    matches. Range and flag filters may leave an empty list.
    """
    matched: Sequence[Mapping[str, Any]] = list(records)
    spec = validated.spec

    for item in spec.with_relation("contains"):
        needle = validated.get(item.key)
        if not needle:
            continue
        lowered = needle.lower()
        matched = [record for record in matched if lowered in str(record.get(item.target) or "").lower()]
        if not matched:
            raise NoMatchError(item.target, needle)

    for target in spec.range_targets():
        lower, upper = validated.bounds(target)
        if lower is None and upper is None:
            continue
        low = lower if lower is not None else 0
        high = upper if upper is not None else math.inf
        matched = [record for record in matched if _within(record.get(target), low, high)]

    for item in spec.with_relation("flag"):
        if validated.get(item.key) is not True:
            continue
        matched = [record for record in matched if (_as_number(record.get(item.target)) or 0) > 0]

    return list(matched)
