import re
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from stacks.core.models import MAX_ID

DATE_PATTERN = re.compile(r"^(\d{4})[-/](\d{2})[-/](\d{2})$")


class IssuanceIn(BaseModel):
    member_id: int = Field(..., ge=1, le=MAX_ID)
    book_id: int = Field(..., ge=1, le=MAX_ID)
    due_date: date

    @field_validator("member_id", "book_id", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be an integer")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_calendar_date(cls, value):
        """Accepts YYYY-MM-DD (or YYYY/MM/DD) strings naming a real day."""
        if isinstance(value, date):
            return value
        match = isinstance(value, str) and DATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError("must be a YYYY-MM-DD date")
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)


class Issuance(BaseModel):
    issuance_id: int
    member_id: int
    book_id: int
    due_date: date
    returned_date: Optional[date] = None

    class Config:
        from_attributes = True
