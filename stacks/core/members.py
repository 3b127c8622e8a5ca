import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from stacks.core.models import Member
from stacks.core.utils import store_errors
from stacks.core.validation import field_error
from stacks.core.exceptions import MemberNotFoundError, ValidationError
from stacks.schemas.member import MemberIn

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already in use"


def list_members(session: Session) -> List[Member]:
    with store_errors(session, "list members"):
        return Member.get_many(session)


def get_member(session: Session, member_id: Optional[int]) -> Member:
    with store_errors(session, f"fetch member {member_id}"):
        member = Member.exists(session, member_id)
    if not member:
        raise MemberNotFoundError
    return member


def create_member(session: Session, fields: MemberIn) -> int:
    with store_errors(session, "add member"):
        member = Member(**fields.model_dump())
        session.add(member)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise ValidationError([field_error("email", EMAIL_TAKEN, {"email": fields.email})])
        return member.member_id


def update_member(session: Session, member_id: Optional[int], fields: MemberIn) -> None:
    with store_errors(session, f"update member {member_id}"):
        try:
            updated = session.query(Member).filter(Member.member_id == member_id) \
                .update(fields.model_dump(), synchronize_session=False)
        except IntegrityError:
            session.rollback()
            raise ValidationError([field_error("email", EMAIL_TAKEN, {"email": fields.email})])
        if not updated:
            session.rollback()
            raise MemberNotFoundError
        session.commit()
