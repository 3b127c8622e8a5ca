from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from stacks.core import members
from stacks.core.db import get_session
from stacks.core.utils import parse_id, parse_request_body
from stacks.core.validation import validate_entity
from stacks.schemas.member import Member

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=List[Member])
def get_members(session: Session = Depends(get_session)):
    return members.list_members(session)


@router.get("/{member_id}", response_model=Member)
def get_member(member_id: str, session: Session = Depends(get_session)):
    return members.get_member(session, parse_id(member_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_member(request: Request, session: Session = Depends(get_session)):
    member = validate_entity("member", await parse_request_body(request))
    member_id = members.create_member(session, member)
    return {"message": "Member added successfully", "memberId": member_id}


@router.put("/{member_id}")
async def update_member(member_id: str, request: Request, session: Session = Depends(get_session)):
    member = validate_entity("member", await parse_request_body(request))
    members.update_member(session, parse_id(member_id), member)
    return {"message": "Member updated successfully"}
