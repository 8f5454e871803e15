# tests/conftest.py
import os

# アプリ本体より先に読み込ませる（app.db がこの URL で engine を作る）
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_directory.db")

import pytest
from sqlalchemy.orm import Session
from fastapi.testclient import TestClient

from app.db import Base, engine, SessionLocal
from app.main import app
from app import models  # noqa: F401


@pytest.fixture(scope="function")
def db() -> Session:
    """
    テストごとにクリーンな DB を用意するフィクスチャ。
    アプリ本体と同じ engine を使う。
    """
    # 既存テーブルを全部削除してから、再作成
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> TestClient:
    """
    通常の FastAPI app をそのまま使う TestClient。
    DI の上書きは行わない（db フィクスチャでテーブルを作り直した後に起動する）。
    """
    with TestClient(app) as c:
        yield c
