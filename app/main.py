import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from .config import get_settings
from .db import Base, engine
from .errors import DirectoryError, StoreUnavailableError
from .logging_config import setup_logging
from .api.v1 import api_router as api_v1_router
from . import models  # noqa: F401  テーブル定義を Base に登録

settings = get_settings()
setup_logging(settings.log_level, settings.log_sqlalchemy)
logger = logging.getLogger(__name__)

# モデルからテーブル作成（開発用）
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


@app.exception_handler(DirectoryError)
def handle_directory_error(request: Request, exc: DirectoryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(OperationalError)
def handle_store_error(request: Request, exc: OperationalError):
    # 読み込み中の接続断など、commit_or_raise を通らないストアエラー
    logger.error(f"Store error on {request.method} {request.url.path}: {exc.orig}")
    err = StoreUnavailableError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


app.include_router(api_v1_router, prefix="/api")


@app.get("/")
def read_root():
    return {"message": "Member Directory API is running"}
