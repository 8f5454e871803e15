# app/models/contact.py
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime

from ..db import Base


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    subject = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
