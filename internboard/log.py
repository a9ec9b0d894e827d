"""Centralized logging configuration, stdlib only."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_LOG_DIR = Path(os.environ.get("LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# chatty at INFO/DEBUG; one line per HTTP connection or file event
_QUIET_LOGGERS = ("urllib3", "streamlit.watcher")

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    return handler


def _file_logging_enabled() -> bool:
    return os.environ.get("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # root already configured by the host process (pytest, an embedding app)
    if root.handlers:
        return

    root.addHandler(_handler(logging.StreamHandler(sys.stdout), level))

    if not _file_logging_enabled():
        return

    log_file = _LOG_DIR / f"internboard_{datetime.now():%Y-%m-%d}.log"
    try:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        root.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG))
    except OSError as exc:
        root.warning("File logging disabled, cannot open %s: %s", log_file, exc)
