from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path

REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")

LOGGER_NAME = "app"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.request_id = REQUEST_ID.get("-")
        return True


def _parse_level(level: str) -> int:
    lvl = (level or "INFO").upper()
    return logging.getLevelNamesMapping().get(lvl, logging.INFO)


def configure_logging(
    *,
    level: str = "INFO",
    log_dir: str | Path | None = "logs",
    log_file: str = "backend.log",
) -> logging.Logger:
    """
    Attach a console handler and, when log_dir is set, a rotating file handler
    to the "app" logger. Every module logs through logging.getLogger(__name__),
    so records from app.* propagate here.
    Idempotent: safe to call multiple times.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_configured", False):
        return logger

    logger.setLevel(_parse_level(level))
    logger.propagate = False

    fmt = "%(asctime)s %(levelname)-8s %(name)s request_id=%(request_id)s %(message)s"
    formatter = logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")
    request_filter = RequestIdFilter()

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(formatter)
    ch.addFilter(request_filter)
    logger.addHandler(ch)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            filename=str(Path(log_dir) / log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10,
            encoding="utf-8",
        )
        fh.setFormatter(formatter)
        fh.addFilter(request_filter)
        logger.addHandler(fh)

    logger._configured = True  # type: ignore[attr-defined]
    return logger


def set_request_id(request_id: str | None = None) -> str:
    rid = request_id or uuid.uuid4().hex[:12]
    REQUEST_ID.set(rid)
    return rid


def clear_request_id() -> None:
    REQUEST_ID.set("-")
