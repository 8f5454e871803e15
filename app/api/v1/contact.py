# app/api/v1/contact.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep
from ...schemas.contact import ContactCreate, ContactMessageOut
from ...services.submissions import submit_contact_message

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactMessageOut, status_code=201)
def create_contact_message(
    data: ContactCreate,
    db: Session = Depends(get_db_dep),
):
    return submit_contact_message(db, data)
