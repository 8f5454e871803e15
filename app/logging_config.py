# app/logging_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", log_sqlalchemy: bool = False) -> None:
    """
    ルートロガーの初期化。main.py から一度だけ呼ぶ。
    uvicorn 側のハンドラと二重出力にならないよう、既存ハンドラは置き換える。
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # SQL ログは明示的に有効化したときだけ
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if log_sqlalchemy else logging.WARNING
    )
