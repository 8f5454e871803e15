# app/services/submissions.py
import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from ..db import commit_or_raise
from ..errors import NotFoundError
from ..models.contact import ContactMessage
from ..models.profile import Profile
from ..schemas.contact import ContactCreate
from ..schemas.profile import ProfileCreate
from .identity import Identity
from .moderation import require_admin

logger = logging.getLogger(__name__)

_OPTIONAL_TEXT_FIELDS = (
    "display_name",
    "phone",
    "website",
    "bio",
    "avatar_url",
    "location_city",
    "location_state",
    "location_country",
    "linkedin_url",
    "instagram_url",
    "twitter_url",
    "submission_notes",
)


def submit_profile(
    db: Session,
    data: ProfileCreate,
    identity: Optional[Identity] = None,
) -> Profile:
    """
    申請フォームからのプロフィール登録。
    必ず status=pending / public_visible=False で作る。
    ログイン中なら user_id にアカウントを紐付ける。
    """
    optional = {
        name: (getattr(data, name) or None)  # 空文字は NULL
        for name in _OPTIONAL_TEXT_FIELDS
    }
    profile = Profile(
        id=str(uuid.uuid4()),
        user_id=identity.account_id if identity else None,
        full_name=data.full_name.strip(),
        email=data.email.strip(),
        specialties=list(data.specialties),
        willing_to_travel=data.willing_to_travel,
        status="pending",
        public_visible=False,
        **optional,
    )
    db.add(profile)
    commit_or_raise(db)
    db.refresh(profile)

    logger.info(f"Profile {profile.id} submitted (pending)")
    return profile


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


# -----------------------------
# お問い合わせフォーム
# -----------------------------
def submit_contact_message(db: Session, data: ContactCreate) -> ContactMessage:
    msg = ContactMessage(
        id=str(uuid.uuid4()),
        name=data.name.strip(),
        email=data.email.strip(),
        subject=data.subject or None,
        message=data.message,
    )
    db.add(msg)
    commit_or_raise(db)
    db.refresh(msg)
    logger.info(f"Contact message {msg.id} received")
    return msg


def list_contact_messages(db: Session, identity: Optional[Identity]) -> list[ContactMessage]:
    require_admin(identity)
    return db.query(ContactMessage).order_by(ContactMessage.created_at.desc()).all()
