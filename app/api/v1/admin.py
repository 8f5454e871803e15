# app/api/v1/admin.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep, get_identity_dep
from ...schemas.contact import ContactMessageOut
from ...schemas.profile import (
    ModerationStatsOut,
    ProfileAdminOut,
    RejectRequest,
    StatusLiteral,
    VisibilityRequest,
)
from ...services import moderation
from ...services.identity import Identity
from ...services.submissions import list_contact_messages

router = APIRouter(prefix="/admin", tags=["admin"])


# -----------------------------
# 審査キュー
# -----------------------------
@router.get("/profiles", response_model=list[ProfileAdminOut])
def list_profiles(
    status: StatusLiteral = "pending",
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    return moderation.list_by_status(db, identity, status)


@router.get("/stats", response_model=ModerationStatsOut)
def get_stats(
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    return ModerationStatsOut(**moderation.moderation_stats(db, identity))


# -----------------------------
# 状態遷移
# -----------------------------
@router.post("/profiles/{profile_id}/approve", response_model=ProfileAdminOut)
def approve_profile(
    profile_id: str,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    return moderation.approve(db, identity, profile_id)


@router.post("/profiles/{profile_id}/reject", response_model=ProfileAdminOut)
def reject_profile(
    profile_id: str,
    body: RejectRequest | None = None,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    reason = body.reason if body is not None else None
    return moderation.reject(db, identity, profile_id, reason)


@router.post("/profiles/{profile_id}/visibility", response_model=ProfileAdminOut)
def set_visibility(
    profile_id: str,
    body: VisibilityRequest,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    return moderation.set_public_visibility(db, identity, profile_id, body.public_visible)


@router.get("/contact_messages", response_model=list[ContactMessageOut])
def contact_messages(
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    return list_contact_messages(db, identity)
