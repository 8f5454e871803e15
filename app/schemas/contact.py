# app/schemas/contact.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ContactCreate(BaseModel):
    name: str
    email: str
    subject: Optional[str] = None
    message: str


class ContactMessageOut(ContactCreate):
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
