# app/api/v1/directory.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep, require_identity_dep
from ...schemas.directory import DirectoryEntryOut, DirectoryOut
from ...schemas.profile import ProfileOut
from ...services.directory import (
    DirectoryEntry,
    all_specialties,
    filter_entries,
    list_approved,
)
from ...services.identity import Identity

router = APIRouter(tags=["directory"])


def _directory_out(
    entries: list[DirectoryEntry],
    search: Optional[str],
    specialty: Optional[str],
    include_email: bool,
) -> DirectoryOut:
    filtered = filter_entries(entries, search, specialty, include_email=include_email)
    items = [
        DirectoryEntryOut(
            **ProfileOut.model_validate(e.profile).model_dump(),
            endorsement_count=e.endorsement_count,
        )
        for e in filtered
    ]
    return DirectoryOut(
        items=items,
        total=len(entries),
        specialties=all_specialties(entries),
    )


@router.get("/directory", response_model=DirectoryOut)
def public_directory(
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    db: Session = Depends(get_db_dep),
):
    """公開ディレクトリ（承認済み かつ 公開フラグあり）"""
    entries = list_approved(db, "public")
    return _directory_out(entries, search, specialty, include_email=False)


@router.get("/members", response_model=DirectoryOut)
def members_directory(
    search: Optional[str] = None,
    specialty: Optional[str] = None,
    db: Session = Depends(get_db_dep),
    identity: Identity = Depends(require_identity_dep),
):
    """メンバー限定ディレクトリ（承認済み全員）"""
    entries = list_approved(db, "members", identity)
    return _directory_out(entries, search, specialty, include_email=True)
