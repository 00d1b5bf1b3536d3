import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from app.core.config import settings


def setup_logging() -> None:
    """
    Инициализация логгирования:
    - Вывод в stdout всегда.
    - Ротирующая запись в файл, если задан LOG_DIR.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

        # До 10 МБ, 5 файлов-архивов
        file_handler = RotatingFileHandler(
            filename=log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        handlers.append(file_handler)

    fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    for handler in handlers:
        handler.setFormatter(fmt)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )
