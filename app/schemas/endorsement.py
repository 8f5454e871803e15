# app/schemas/endorsement.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .profile import ProfileOut


class EndorsementOut(BaseModel):
    id: str
    endorser_id: str
    endorsed_id: str
    note: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EndorsementWithEndorserOut(EndorsementOut):
    """プロフィール詳細で表示する、推薦者プロフィール付きの推薦"""
    endorser: ProfileOut


class EndorsementToggleOut(BaseModel):
    endorser_id: str
    endorsed_id: str
    endorsed: bool  # トグル後に推薦している状態なら True
    endorsement: Optional[EndorsementOut] = None
    endorsement_count: int


class ProfileDetailOut(BaseModel):
    profile: ProfileOut
    endorsements: list[EndorsementWithEndorserOut]
    endorsement_count: int
    has_endorsed: bool = False
