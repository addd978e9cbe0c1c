import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from myskool.config import settings

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

# the request middleware already logs one line per request
QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str | None = None, log_dir: str | None = None):
    """
    Console + rotating file (<LOG_DIR>/app.log, 5 x 5MB).

    Safe to call more than once: handlers are only attached to a bare root logger.
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_dir = Path(log_dir or settings.LOG_DIR)

    root = logging.getLogger()
    root.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
