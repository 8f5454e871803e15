# app/api/v1/auth.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_bearer_token, get_db_dep, require_identity_dep
from ...schemas.auth import (
    CredentialsRequest,
    MagicLinkRequest,
    MagicLinkVerifyRequest,
    MeOut,
    SessionOut,
)
from ...services import identity as identity_service
from ...services.identity import Identity

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_out(session) -> SessionOut:
    return SessionOut(
        access_token=session.token,
        expires_at=session.expires_at,
        account_id=session.account_id,
    )


@router.post("/sign_up", response_model=SessionOut, status_code=201)
def sign_up(data: CredentialsRequest, db: Session = Depends(get_db_dep)):
    session = identity_service.sign_up(db, data.email, data.password)
    return _session_out(session)


@router.post("/sign_in", response_model=SessionOut)
def sign_in(data: CredentialsRequest, db: Session = Depends(get_db_dep)):
    session = identity_service.sign_in_with_password(db, data.email, data.password)
    return _session_out(session)


@router.post("/magic_link", status_code=202)
def request_magic_link(data: MagicLinkRequest, db: Session = Depends(get_db_dep)):
    """
    マジックリンクの発行。トークンはレスポンスに含めない（メール送信側で扱う）。
    """
    identity_service.request_magic_link(db, data.email)
    return {"sent": True}


@router.post("/magic_link/verify", response_model=SessionOut)
def verify_magic_link(data: MagicLinkVerifyRequest, db: Session = Depends(get_db_dep)):
    session = identity_service.verify_magic_link(db, data.token)
    return _session_out(session)


@router.post("/sign_out", status_code=204)
def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db_dep),
):
    if token:
        identity_service.sign_out(db, token)
    return


@router.get("/me", response_model=MeOut)
def me(identity: Identity = Depends(require_identity_dep)):
    return MeOut(
        account_id=identity.account_id,
        email=identity.email,
        profile_id=identity.profile_id,
        profile_status=identity.profile_status,
        is_admin=identity.is_admin,
    )
