# app/schemas/profile.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

StatusLiteral = Literal["pending", "approved", "rejected"]


class ProfileBase(BaseModel):
    full_name: str
    email: str
    display_name: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    specialties: list[str] = []
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    location_country: Optional[str] = None
    willing_to_travel: bool = False
    linkedin_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None


class ProfileCreate(ProfileBase):
    """POST /api/profiles 用（申請フォーム）"""
    submission_notes: Optional[str] = None

    @field_validator("specialties", mode="before")
    @classmethod
    def parse_specialties(cls, v):
        # フォームからは "ASL Interpreter, Captioner" のようなカンマ区切りで来る
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [s.strip() for s in v if s and s.strip()]


class ProfileOut(ProfileBase):
    """レスポンス用"""
    id: str
    user_id: Optional[str] = None
    status: StatusLiteral
    public_visible: bool
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileAdminOut(ProfileOut):
    """管理画面用（メモ類も含む）"""
    submission_notes: Optional[str] = None
    admin_notes: Optional[str] = None


class RejectRequest(BaseModel):
    reason: Optional[str] = None


class VisibilityRequest(BaseModel):
    public_visible: bool


class ModerationStatsOut(BaseModel):
    pending: int
    approved: int
    rejected: int
