# app/schemas/auth.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

# bcrypt が扱えるのは先頭 72 バイトまで
MAX_PASSWORD_BYTES = 72


class CredentialsRequest(BaseModel):
    email: str
    password: str

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class MagicLinkRequest(BaseModel):
    email: str


class MagicLinkVerifyRequest(BaseModel):
    token: str


class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    account_id: str


class MeOut(BaseModel):
    account_id: str
    email: str
    profile_id: Optional[str] = None
    profile_status: Optional[str] = None
    is_admin: bool
