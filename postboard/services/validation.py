"""
Request validation: pydantic field rules plus uniqueness rules against the store.

Every rule is evaluated before anything is reported, so a single 422 carries
all failing fields at once. Only declared fields that were present in the
payload make it into the returned dict.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session

from postboard.core.errors import ValidationFailed
from postboard.core.messages import format_errors, unique_message


@dataclass(frozen=True)
class Unique:
    """
    The value of field must not already exist in column.

    ignore_id excludes one row (the record being updated) from the check.
    """

    field: str
    column: InstrumentedAttribute
    ignore_id: int | None = None

    def is_taken(self, db: Session, value: Any) -> bool:
        model = self.column.class_
        query = db.query(model.id).filter(self.column == value)
        if self.ignore_id is not None:
            query = query.filter(model.id != self.ignore_id)
        return query.first() is not None


def validate_payload(
    payload: Any,
    schema: type[BaseModel],
    db: Session | None = None,
    unique: Sequence[Unique] = (),
) -> dict[str, Any]:
    """
    Validate payload against schema and unique rules.

    Returns the sanitized payload (declared fields that were sent, JSON-safe
    values). Raises ValidationFailed with every field error on failure.
    """
    errors: dict[str, list[str]] = {}
    data: dict[str, Any] = {}

    try:
        model = schema.model_validate(payload)
    except ValidationError as e:
        errors = format_errors(e.errors())
    else:
        data = model.model_dump(mode="json", exclude_unset=True)

    # Uniqueness is only meaningful for values that passed their field rules.
    if unique and db is not None and isinstance(payload, dict):
        for rule in unique:
            if rule.field in errors or rule.field not in payload:
                continue
            candidate = data.get(rule.field, payload.get(rule.field))
            if rule.is_taken(db, candidate):
                errors.setdefault(rule.field, []).append(unique_message(rule.field))

    if errors:
        raise ValidationFailed(errors)
    return data


def commit_unique(db: Session, field: str) -> None:
    """
    Commit, reporting a unique-index violation on field as a validation error.

    Covers the window between Unique.is_taken and the insert, where a
    concurrent request can claim the same value.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailed({field: [unique_message(field)]})
