# app/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.db import SessionLocal
from app.errors import AuthenticationRequiredError
from app.services.identity import Identity, get_current_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_dep() -> Generator[Session, None, None]:
    """
    FastAPI の Depends で使う DB セッション依存関数。
    エンドポイント側では `db: Session = Depends(get_db_dep)` で利用。
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_identity_dep(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db_dep),
) -> Optional[Identity]:
    """
    リクエスト単位の Identity。未ログイン（またはトークン無効）なら None。
    """
    return get_current_user(db, token)


def require_identity_dep(
    identity: Optional[Identity] = Depends(get_identity_dep),
) -> Identity:
    if identity is None:
        raise AuthenticationRequiredError()
    return identity
