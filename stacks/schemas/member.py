from pydantic import BaseModel, EmailStr, Field
from stacks.core.models import MembershipType


class MemberIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    membership_type: MembershipType
    address: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    class Config:
        coerce_numbers_to_str = True


class Member(BaseModel):
    """A member as returned by the API; the password is never exposed."""
    member_id: int
    name: str
    email: str
    phone: str
    membership_type: MembershipType
    address: str

    class Config:
        from_attributes = True
