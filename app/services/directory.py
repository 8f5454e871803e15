# app/services/directory.py
"""
ディレクトリ（承認済みプロフィールの一覧）

- public : status=approved かつ public_visible=True（未ログインでも見える）
- members: status=approved のみ（ログイン必須）
各行に endorsement_count（推薦された数）を付ける。
"""
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..errors import AuthenticationRequiredError
from ..models.endorsement import Endorsement
from ..models.profile import Profile
from .identity import Identity

Visibility = Literal["public", "members"]


@dataclass
class DirectoryEntry:
    profile: Profile
    endorsement_count: int


def list_approved(
    db: Session,
    visibility: Visibility,
    identity: Optional[Identity] = None,
) -> list[DirectoryEntry]:
    if visibility == "members" and identity is None:
        raise AuthenticationRequiredError()

    counts = (
        db.query(
            Endorsement.endorsed_id.label("profile_id"),
            func.count(Endorsement.id).label("n"),
        )
        .group_by(Endorsement.endorsed_id)
        .subquery()
    )

    q = (
        db.query(Profile, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.profile_id == Profile.id)
        .filter(Profile.status == "approved")
    )
    if visibility == "public":
        q = q.filter(Profile.public_visible == True)  # noqa: E712

    q = q.order_by(Profile.full_name, Profile.id)
    return [DirectoryEntry(profile=p, endorsement_count=n) for p, n in q.all()]


def _matches_search(profile: Profile, term: str, include_email: bool) -> bool:
    haystacks = [profile.full_name or "", profile.bio or ""]
    haystacks.extend(profile.specialties or [])
    if include_email:
        haystacks.append(profile.email or "")
    return any(term in h.lower() for h in haystacks)


def filter_entries(
    entries: Iterable[DirectoryEntry],
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    include_email: bool = False,
) -> list[DirectoryEntry]:
    """
    フリーワード（大文字小文字を無視した部分一致）と専門分野タグの AND で絞り込む。
    メンバー向け一覧ではメールアドレスも検索対象にする。
    """
    term = (search or "").strip().lower()
    result = []
    for entry in entries:
        p = entry.profile
        if term and not _matches_search(p, term, include_email):
            continue
        if specialty and specialty not in (p.specialties or []):
            continue
        result.append(entry)
    return result


def all_specialties(entries: Iterable[DirectoryEntry]) -> list[str]:
    tags = set()
    for entry in entries:
        tags.update(entry.profile.specialties or [])
    return sorted(tags)
