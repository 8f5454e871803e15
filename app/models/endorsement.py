from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db import Base


class Endorsement(Base):
    __tablename__ = "endorsements"

    id = Column(String, primary_key=True, index=True)

    # 推薦した側の Profile
    endorser_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)

    # 推薦された側の Profile
    endorsed_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)

    note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    endorser = relationship("Profile", foreign_keys=[endorser_id])

    # 同じ組み合わせ（endorser → endorsed）は 1 行だけ。
    # 二重トグルの競合はこの制約で弾く
    __table_args__ = (
        UniqueConstraint(
            "endorser_id", "endorsed_id",
            name="uq_endorsement_pair",
        ),
    )
