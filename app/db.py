# app/db.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from .config import get_settings
from .errors import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

DATABASE_URL = get_settings().database_url

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # SQLite用

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def commit_or_raise(db: Session, conflict_detail: str = "Conflict") -> None:
    """
    commit して、ストア側のエラーをワークフロー例外に変換する。
    - 一意制約違反など → ConflictError
    - 接続断など       → StoreUnavailableError
    どちらも rollback 済みの状態で送出する（リトライはしない）。
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info(f"Integrity error on commit: {exc.orig}")
        raise ConflictError(conflict_detail) from exc
    except OperationalError as exc:
        db.rollback()
        logger.error(f"Store unavailable on commit: {exc.orig}")
        raise StoreUnavailableError() from exc
