"""Structural validation of create/update payloads against pydantic models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from jobly.errors import InvalidPayloadError


@dataclass(frozen=True, slots=True)
class PayloadValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def validate_payload(
    payload: Mapping[str, Any] | None,
    model: type[BaseModel],
    *,
    include_defaults: bool = False,
) -> PayloadValidation:
    """Validate ``payload`` against ``model``.

    ``data`` uses external (aliased) field names and keeps the caller's key
    order. Fields the caller left out are only included, after the sent ones,
    when ``include_defaults`` is set.
    """
    if not isinstance(payload, Mapping):
        return PayloadValidation(valid=False, errors=["payload must be an object"])
    try:
        parsed = model.model_validate(dict(payload))
    except ValidationError as exc:
        return PayloadValidation(valid=False, errors=[_format_error(item) for item in exc.errors()])

    dumped = parsed.model_dump(by_alias=True, exclude_unset=not include_defaults)
    data = {key: dumped[key] for key in payload if key in dumped}
    for key, value in dumped.items():
        data.setdefault(key, value)
    return PayloadValidation(valid=True, data=data)


def require_valid_payload(
    payload: Mapping[str, Any] | None,
    model: type[BaseModel],
    *,
    include_defaults: bool = False,
) -> dict[str, Any]:
    result = validate_payload(payload, model, include_defaults=include_defaults)
    if not result.valid:
        raise InvalidPayloadError(result.errors)
    return result.data
