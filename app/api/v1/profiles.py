# app/api/v1/profiles.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep, get_identity_dep
from ...schemas.endorsement import (
    EndorsementOut,
    EndorsementToggleOut,
    EndorsementWithEndorserOut,
    ProfileDetailOut,
)
from ...schemas.profile import ProfileCreate, ProfileOut
from ...services.endorsements import list_endorsements, toggle_endorsement
from ...services.identity import Identity
from ...services.submissions import get_profile, submit_profile

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("", response_model=ProfileOut, status_code=201)
def create_profile(
    data: ProfileCreate,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    """プロフィール申請（常に pending で作成）"""
    return submit_profile(db, data, identity)


@router.get("/{profile_id}", response_model=ProfileDetailOut)
def get_profile_detail(
    profile_id: str,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    """プロフィール詳細 + 推薦一覧（推薦者プロフィール付き）"""
    profile = get_profile(db, profile_id)
    endorsements = list_endorsements(db, profile_id)

    # 推薦できるのは承認済みプロフィールを持つメンバーだけ
    has_endorsed = False
    if identity is not None and identity.profile_status == "approved":
        has_endorsed = any(e.endorser_id == identity.profile_id for e in endorsements)

    return ProfileDetailOut(
        profile=ProfileOut.model_validate(profile),
        endorsements=[EndorsementWithEndorserOut.model_validate(e) for e in endorsements],
        endorsement_count=len(endorsements),
        has_endorsed=has_endorsed,
    )


@router.post("/{profile_id}/endorse", response_model=EndorsementToggleOut)
def endorse_profile(
    profile_id: str,
    db: Session = Depends(get_db_dep),
    identity: Optional[Identity] = Depends(get_identity_dep),
):
    """推薦のトグル（推薦済みなら取り消し）"""
    result = toggle_endorsement(db, identity, profile_id)
    return EndorsementToggleOut(
        endorser_id=result.endorser_id,
        endorsed_id=result.endorsed_id,
        endorsed=result.endorsed,
        endorsement=(
            EndorsementOut.model_validate(result.endorsement)
            if result.endorsement is not None
            else None
        ),
        endorsement_count=result.endorsement_count,
    )
