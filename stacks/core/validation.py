"""
    Payload validation for Stacks.

    Each entity payload is checked against its pydantic schema and every
    failing field is reported at once, one message per field, before any
    store access happens.

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import Type, TypeVar
import pydantic
from stacks.core.exceptions import ValidationError
from stacks.schemas.book import BookIn
from stacks.schemas.member import MemberIn
from stacks.schemas.issuance import IssuanceIn

Schema = TypeVar("Schema", bound=pydantic.BaseModel)

FIELD_MESSAGES = {
    "title": "Title is required",
    "author": "Author is required",
    "genre": "Genre is required",
    "isbn": "ISBN is required",
    "total_copies": "Total copies must be a positive integer",
    "name": "Name is required",
    "email": "Invalid email",
    "phone": "Phone is required",
    "membership_type": "Invalid membership type",
    "address": "Address is required",
    "password": "Password is required",
    "member_id": "Member ID is required",
    "book_id": "Book ID is required",
    "due_date": "Invalid due date",
}

SCHEMAS = {
    "book": BookIn,
    "member": MemberIn,
    "issuance": IssuanceIn,
}


def field_error(field: str, msg: str = None, payload: dict = None) -> dict:
    """Builds one field-level error entry."""
    error = {"type": "field", "msg": msg or FIELD_MESSAGES.get(field, "Invalid value")}
    if payload and field in payload:
        error["value"] = payload[field]
    error.update({"path": field, "location": "body"})
    return error


def validate(schema: Type[Schema], payload) -> Schema:
    """Returns the normalized model for `payload` or raises a
    ValidationError listing every offending field.
    """
    if not isinstance(payload, dict):
        payload = {}
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        fields = []
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else None
            if field and field not in fields:
                fields.append(field)
        raise ValidationError([field_error(f, payload=payload) for f in fields]) from e


def validate_entity(kind: str, payload):
    return validate(SCHEMAS[kind], payload)
