from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from stacks.core import inventory
from stacks.core.db import get_session
from stacks.core.utils import parse_id, parse_request_body
from stacks.core.validation import validate_entity
from stacks.schemas.issuance import Issuance

router = APIRouter(prefix="/issuances", tags=["issuances"])


@router.get("", response_model=List[Issuance])
def get_issuances(session: Session = Depends(get_session)):
    return inventory.list_issuances(session)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_issuance(request: Request, session: Session = Depends(get_session)):
    issuance = validate_entity("issuance", await parse_request_body(request))
    issuance_id = inventory.create_issuance(session, **issuance.model_dump())
    return {"message": "Issuance added successfully", "issuanceId": issuance_id}


# Closes the issuance only; the book's copy counter is returned separately
# through PATCH /books/{book_id}/return.
@router.patch("/{issuance_id}/return")
def return_issuance(issuance_id: str, session: Session = Depends(get_session)):
    inventory.complete_issuance(session, parse_id(issuance_id))
    return {"message": "Book returned successfully"}
