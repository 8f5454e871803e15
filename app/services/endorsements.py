# app/services/endorsements.py
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ..db import commit_or_raise
from ..errors import AuthenticationRequiredError, AuthorizationError, NotFoundError
from ..models.endorsement import Endorsement
from ..models.profile import Profile
from .identity import Identity

logger = logging.getLogger(__name__)


@dataclass
class EndorsementToggleResult:
    endorser_id: str
    endorsed_id: str
    endorsed: bool
    endorsement: Optional[Endorsement]
    endorsement_count: int


def endorsement_count(db: Session, profile_id: str) -> int:
    return (
        db.query(func.count(Endorsement.id))
        .filter(Endorsement.endorsed_id == profile_id)
        .scalar()
    )


def list_endorsements(db: Session, profile_id: str) -> list[Endorsement]:
    """推薦者のプロフィール付きで、新しい順"""
    return (
        db.query(Endorsement)
        .options(joinedload(Endorsement.endorser))
        .filter(Endorsement.endorsed_id == profile_id)
        .order_by(Endorsement.created_at.desc())
        .all()
    )


def find_endorsement(db: Session, endorser_id: str, endorsed_id: str) -> Optional[Endorsement]:
    return (
        db.query(Endorsement)
        .filter(
            Endorsement.endorser_id == endorser_id,
            Endorsement.endorsed_id == endorsed_id,
        )
        .first()
    )


def create_endorsement(
    db: Session,
    endorser_id: str,
    endorsed_id: str,
    note: Optional[str] = None,
) -> Endorsement:
    """
    推薦の INSERT。
    同じ組み合わせの行が既にあれば uq_endorsement_pair 違反 → ConflictError
    （別タブからの同時トグルなど）
    """
    endorsement = Endorsement(
        id=str(uuid.uuid4()),
        endorser_id=endorser_id,
        endorsed_id=endorsed_id,
        note=note,
    )
    db.add(endorsement)
    commit_or_raise(db, "Endorsement already exists")
    db.refresh(endorsement)
    return endorsement


def toggle_endorsement(
    db: Session,
    identity: Optional[Identity],
    endorsed_id: str,
) -> EndorsementToggleResult:
    """
    推薦のトグル。既にあれば削除、無ければ作成。
    推薦者は identity のプロフィール（承認済みであること）。自分自身は推薦できない。
    新規の推薦は承認済みのプロフィールに対してだけ。
    """
    if identity is None:
        raise AuthenticationRequiredError()
    if identity.profile_id is None or identity.profile_status != "approved":
        logger.warning(f"Endorsement denied: account {identity.account_id} has no approved profile")
        raise AuthorizationError("An approved profile is required to endorse")

    endorser_id = identity.profile_id
    if endorser_id == endorsed_id:
        raise AuthorizationError("Cannot endorse your own profile")

    target = db.get(Profile, endorsed_id)
    if target is None:
        raise NotFoundError("Profile not found")

    existing = find_endorsement(db, endorser_id, endorsed_id)
    if existing is not None:
        # 取り消しは相手のステータスに関係なく行える
        db.delete(existing)
        commit_or_raise(db)
        logger.info(f"Profile {endorser_id} removed endorsement of {endorsed_id}")
        endorsement = None
    else:
        if target.status != "approved":
            logger.warning(f"Endorsement denied: profile {endorsed_id} is {target.status}")
            raise AuthorizationError("Only approved profiles can be endorsed")
        endorsement = create_endorsement(db, endorser_id, endorsed_id)
        logger.info(f"Profile {endorser_id} endorsed {endorsed_id}")

    return EndorsementToggleResult(
        endorser_id=endorser_id,
        endorsed_id=endorsed_id,
        endorsed=endorsement is not None,
        endorsement=endorsement,
        endorsement_count=endorsement_count(db, endorsed_id),
    )
