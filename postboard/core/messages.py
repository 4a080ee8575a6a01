"""Human-readable validation messages built from pydantic error dicts."""

from collections.abc import Iterable
from typing import Any

BODY_FIELD = "body"


def _attribute(field: str) -> str:
    return field.replace("_", " ")


def error_message(field: str, err: dict[str, Any]) -> str:
    """Render one pydantic error as a sentence about the field."""
    attr = _attribute(field)
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}

    if kind == "missing":
        return f"The {attr} field is required."
    if kind == "string_type":
        return f"The {attr} field must be a string."
    if kind == "string_too_long":
        return f"The {attr} field must not be greater than {ctx.get('max_length')} characters."
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"The {attr} field is required."
        return f"The {attr} field must be at least {ctx.get('min_length')} characters."
    if kind in ("enum", "literal_error"):
        return f"The selected {attr} is invalid."
    if kind == "value_error" and "email" in str(err.get("msg", "")):
        return f"The {attr} field must be a valid email address."
    if kind in ("int_type", "int_parsing", "int_from_float"):
        return f"The {attr} field must be an integer."
    if kind in ("bool_type", "bool_parsing"):
        return f"The {attr} field must be true or false."
    if kind == "json_invalid":
        return "The request body must be valid JSON."
    if kind in ("model_type", "dict_type", "model_attributes_type"):
        return "The request body must be a JSON object."
    return f"The {attr} field is invalid."


def unique_message(field: str) -> str:
    return f"The {_attribute(field)} has already been taken."


def format_errors(
    errors: Iterable[dict[str, Any]],
    skip_location: bool = False,
) -> dict[str, list[str]]:
    """
    Group pydantic errors by field name, preserving first-seen order.

    skip_location drops the leading "body"/"query" element FastAPI adds to loc.
    Errors without a field (e.g. the body is not an object) are keyed "body".
    """
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = tuple(err.get("loc") or ())
        if skip_location:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) if loc else BODY_FIELD
        message = error_message(field, err)
        messages = grouped.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return grouped
