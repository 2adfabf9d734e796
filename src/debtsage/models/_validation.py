"""Translate pydantic validation failures into engine errors."""

from __future__ import annotations

from pydantic import ValidationError

from ..errors import InvalidInput


def invalid_input_from(exc: ValidationError, *, entity: str) -> InvalidInput:
    """Return an ``InvalidInput`` describing the first failing field."""

    errors = exc.errors()
    if not errors:
        return InvalidInput(f"Invalid {entity} record")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "invalid value")
    label = f"{entity}.{location}" if location else entity
    return InvalidInput(f"{label}: {message}", field=location, value=first.get("input"))
