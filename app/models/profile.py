# app/models/profile.py

from sqlalchemy import (
    Column,
    String,
    Boolean,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
)
from datetime import datetime

from ..db import Base

PROFILE_STATUSES = ("pending", "approved", "rejected")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True)
    # ログインアカウントとの紐付け（未ログインでの申請なら NULL）
    user_id = Column(String, ForeignKey("accounts.id"), nullable=True, index=True)

    full_name = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    website = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    specialties = Column(JSON, nullable=False, default=list)

    location_city = Column(String, nullable=True)
    location_state = Column(String, nullable=True)
    location_country = Column(String, nullable=True)
    willing_to_travel = Column(Boolean, nullable=False, default=False)

    linkedin_url = Column(String, nullable=True)
    instagram_url = Column(String, nullable=True)
    twitter_url = Column(String, nullable=True)

    submission_notes = Column(Text, nullable=True)
    admin_notes = Column(Text, nullable=True)

    # ★ 審査ステータス: pending / approved / rejected
    status = Column(String, nullable=False, default="pending", index=True)
    public_visible = Column(Boolean, nullable=False, default=False)

    # 最後に承認されたときの記録（却下しても消さない）
    approved_at = Column(DateTime, nullable=True)
    approved_by = Column(String, ForeignKey("profiles.id"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_profiles_status",
        ),
    )
