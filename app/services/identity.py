# app/services/identity.py
"""
ID プロバイダ（サインアップ / パスワード・マジックリンクでのサインイン / セッション）

- セッショントークンは Authorization: Bearer で受け取り、リクエストごとに Identity に解決する
- Identity はワークフロー関数へ明示的に渡す（グローバルなログイン状態は持たない）
"""
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from ..config import get_settings
from ..db import commit_or_raise
from ..errors import AuthorizationError, ConflictError, NotFoundError
from ..models.account import Account, AuthSession, MagicLink, AdminUser
from ..models.profile import Profile
from ..schemas.auth import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """リクエスト単位の認証済みユーザー情報"""
    account_id: str
    email: str
    profile_id: Optional[str] = None
    profile_status: Optional[str] = None
    is_admin: bool = False


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _verify_password(password: str, password_hash: str) -> bool:
    # 72 バイト超は bcrypt が ValueError を出す。登録時に弾いているので一致することはない
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def _create_session(db: Session, account: Account, now: datetime) -> AuthSession:
    ttl = timedelta(hours=get_settings().session_ttl_hours)
    session = AuthSession(
        id=str(uuid.uuid4()),
        account_id=account.id,
        token=secrets.token_urlsafe(32),
        expires_at=now + ttl,
    )
    account.last_sign_in_at = now
    db.add(session)
    commit_or_raise(db)
    db.refresh(session)
    return session


# -----------------------------
# サインアップ / サインイン
# -----------------------------
def sign_up(db: Session, email: str, password: str) -> AuthSession:
    email = _normalize_email(email)
    existing = db.query(Account).filter(Account.email == email).first()
    if existing:
        raise ConflictError("Account already exists")

    account = Account(
        id=str(uuid.uuid4()),
        email=email,
        password_hash=_hash_password(password),
    )
    db.add(account)
    # 同時サインアップは accounts.email の一意制約で弾かれる
    commit_or_raise(db, "Account already exists")
    db.refresh(account)

    logger.info(f"Signed up account {account.id}")
    return _create_session(db, account, datetime.utcnow())


def sign_in_with_password(db: Session, email: str, password: str) -> AuthSession:
    email = _normalize_email(email)
    account = db.query(Account).filter(Account.email == email).first()
    if not account or not account.password_hash:
        logger.warning("Sign-in failed: unknown account or no password set")
        raise AuthorizationError("Invalid email or password")

    if not _verify_password(password, account.password_hash):
        logger.warning(f"Sign-in failed: bad password for account {account.id}")
        raise AuthorizationError("Invalid email or password")

    logger.info(f"Account {account.id} signed in with password")
    return _create_session(db, account, datetime.utcnow())


def request_magic_link(db: Session, email: str, now: Optional[datetime] = None) -> str:
    """
    マジックリンク用のワンタイムトークンを発行して返す。
    メール送信は行わない（呼び出し側の責務）。アカウントが無ければ作る。
    """
    now = now or datetime.utcnow()
    email = _normalize_email(email)

    account = db.query(Account).filter(Account.email == email).first()
    if not account:
        account = Account(id=str(uuid.uuid4()), email=email, password_hash=None)
        db.add(account)
        db.flush()

    link = MagicLink(
        id=str(uuid.uuid4()),
        account_id=account.id,
        token=secrets.token_urlsafe(32),
        expires_at=now + timedelta(minutes=get_settings().magic_link_ttl_minutes),
    )
    db.add(link)
    commit_or_raise(db)

    logger.info(f"Issued magic link for account {account.id}")
    logger.debug(f"Magic link token for {email}: {link.token}")
    return link.token


def verify_magic_link(db: Session, token: str, now: Optional[datetime] = None) -> AuthSession:
    now = now or datetime.utcnow()
    link = db.query(MagicLink).filter(MagicLink.token == token).first()
    if not link or link.used_at is not None or link.expires_at < now:
        logger.warning("Magic link verification failed")
        raise AuthorizationError("Invalid or expired link")

    link.used_at = now
    account = db.get(Account, link.account_id)
    logger.info(f"Account {account.id} signed in with magic link")
    return _create_session(db, account, now)


def sign_out(db: Session, token: str) -> bool:
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return False
    account_id = session.account_id
    db.delete(session)
    commit_or_raise(db)
    logger.info(f"Account {account_id} signed out")
    return True


# -----------------------------
# セッション → Identity
# -----------------------------
def get_current_user(
    db: Session,
    token: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[Identity]:
    """
    トークンから Identity を組み立てる。無効・期限切れなら None。
    """
    if not token:
        return None

    now = now or datetime.utcnow()
    session = db.query(AuthSession).filter(AuthSession.token == token).first()
    if not session:
        return None
    if session.expires_at < now:
        db.delete(session)
        commit_or_raise(db)
        return None

    account = db.get(Account, session.account_id)
    if not account:
        return None

    # 1アカウント1プロフィール想定。複数あれば承認済みを優先、次に新しいもの
    profiles = (
        db.query(Profile)
        .filter(Profile.user_id == account.id)
        .order_by(Profile.created_at.desc())
        .all()
    )
    profile = next((p for p in profiles if p.status == "approved"), None)
    if profile is None and profiles:
        profile = profiles[0]

    is_admin = db.get(AdminUser, account.id) is not None

    return Identity(
        account_id=account.id,
        email=account.email,
        profile_id=profile.id if profile else None,
        profile_status=profile.status if profile else None,
        is_admin=is_admin,
    )


def grant_admin(db: Session, account_id: str) -> AdminUser:
    """管理者許可リストに追加（既にあればそのまま返す）"""
    if db.get(Account, account_id) is None:
        raise NotFoundError("Account not found")
    admin = db.get(AdminUser, account_id)
    if admin:
        return admin
    admin = AdminUser(account_id=account_id)
    db.add(admin)
    commit_or_raise(db)
    logger.info(f"Granted admin to account {account_id}")
    return admin
