# app/schemas/directory.py
from pydantic import BaseModel

from .profile import ProfileOut


class DirectoryEntryOut(ProfileOut):
    endorsement_count: int = 0


class DirectoryOut(BaseModel):
    items: list[DirectoryEntryOut]
    total: int            # 絞り込み前の件数
    specialties: list[str]  # 絞り込み用の専門分野一覧
