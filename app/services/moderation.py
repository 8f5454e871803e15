# app/services/moderation.py
"""
プロフィール審査ワークフロー

状態遷移（3状態すべて相互に遷移可能・終端状態なし）:
  pending  -> approved  (approved_at / approved_by を記録)
  pending  -> rejected  (admin_notes に理由)
  approved -> rejected  (承認取り消し。approved_at / approved_by は残す)
  rejected -> approved  (再承認。approved_at / approved_by を上書き)

管理者操作はすべて require_admin() を入口で通す。
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..db import commit_or_raise
from ..errors import AuthenticationRequiredError, AuthorizationError, NotFoundError
from ..models.profile import Profile, PROFILE_STATUSES
from .identity import Identity

logger = logging.getLogger(__name__)

DEFAULT_REJECT_NOTE = "Rejected"

# 管理画面のタブごとの並び順
_STATUS_ORDERING = {
    "pending": Profile.created_at,
    "approved": Profile.approved_at,
    "rejected": Profile.updated_at,
}


def require_admin(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise AuthenticationRequiredError()
    if not identity.is_admin:
        logger.warning(f"Admin-only operation denied for account {identity.account_id}")
        raise AuthorizationError("Admin access required")
    return identity


def _get_profile_or_404(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


# -----------------------------
# 承認 / 却下
# -----------------------------
def approve(
    db: Session,
    identity: Optional[Identity],
    profile_id: str,
    now: Optional[datetime] = None,
) -> Profile:
    """
    承認。approved_by には操作した管理者自身のプロフィール ID を入れる
    （管理者がプロフィールを持っていなければ NULL）。
    public_visible は変更しない。
    """
    admin = require_admin(identity)
    profile = _get_profile_or_404(db, profile_id)

    previous = profile.status
    profile.status = "approved"
    profile.approved_at = now or datetime.utcnow()
    profile.approved_by = admin.profile_id
    commit_or_raise(db)
    db.refresh(profile)

    logger.info(
        f"Profile {profile.id} approved ({previous} -> approved) by account {admin.account_id}"
    )
    return profile


def reject(
    db: Session,
    identity: Optional[Identity],
    profile_id: str,
    reason: Optional[str] = None,
) -> Profile:
    """
    却下（承認済みの取り消しも同じ）。
    理由が空なら "Rejected"。approved_at / approved_by は「最後の承認記録」として残す。
    """
    admin = require_admin(identity)
    profile = _get_profile_or_404(db, profile_id)

    previous = profile.status
    profile.status = "rejected"
    profile.admin_notes = reason or DEFAULT_REJECT_NOTE
    commit_or_raise(db)
    db.refresh(profile)

    logger.info(
        f"Profile {profile.id} rejected ({previous} -> rejected) by account {admin.account_id}"
    )
    return profile


def set_public_visibility(
    db: Session,
    identity: Optional[Identity],
    profile_id: str,
    visible: bool,
) -> Profile:
    """
    公開ディレクトリへの掲載フラグ。
    ステータスの前提条件は課さない（未承認でも立てられる）。
    公開一覧側で status=approved を必ず併せて絞り込むので、未承認が表に出ることはない。
    """
    admin = require_admin(identity)
    profile = _get_profile_or_404(db, profile_id)

    profile.public_visible = visible
    commit_or_raise(db)
    db.refresh(profile)

    logger.info(
        f"Profile {profile.id} public_visible={visible} (status={profile.status}) "
        f"by account {admin.account_id}"
    )
    return profile


# -----------------------------
# 管理画面向けの参照
# -----------------------------
def list_by_status(
    db: Session,
    identity: Optional[Identity],
    status: str,
) -> list[Profile]:
    require_admin(identity)
    if status not in PROFILE_STATUSES:
        raise ValueError(f"unknown status: {status}")

    return (
        db.query(Profile)
        .filter(Profile.status == status)
        .order_by(_STATUS_ORDERING[status].desc())
        .all()
    )


def moderation_stats(db: Session, identity: Optional[Identity]) -> dict[str, int]:
    require_admin(identity)
    counts = {status: 0 for status in PROFILE_STATUSES}
    rows = db.query(Profile.status, func.count(Profile.id)).group_by(Profile.status).all()
    for status, n in rows:
        counts[status] = n
    return counts
