# app/models/account.py
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from ..db import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    # マジックリンクだけで作られたアカウントはパスワード無し
    password_hash = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_sign_in_at = Column(DateTime, nullable=True)

    sessions = relationship("AuthSession", back_populates="account", cascade="all, delete-orphan")


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False, index=True)
    token = Column(String, unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    account = relationship("Account", back_populates="sessions")


class MagicLink(Base):
    __tablename__ = "magic_links"

    id = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    token = Column(String, unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)  # 一度使ったら無効


class AdminUser(Base):
    """管理者の許可リスト。行があれば管理者"""
    __tablename__ = "admin_users"

    account_id = Column(String, ForeignKey("accounts.id"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
