"""
Logging Utilities
Single place for the log line format and logger creation
"""
import logging
import os
from datetime import datetime
from typing import Optional


class PipeFormatter(logging.Formatter):
    """
    Emits one '|' separated line per record:
    <Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<Detail>
    """

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        line = (
            f"{dt.strftime('%Y-%m-%d')}|{dt.strftime('%H:%M:%S')}|{record.levelname}|"
            f"{record.filename}:{record.lineno}|{record.module}.{record.funcName}|"
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


_ROOT_NAME = "dough"


def init_logging(level: Optional[str] = None) -> None:
    """
    Attach the pipe formatter to the package root logger once

    Args:
        level: Log level name, defaults to DOUGH_LOG_LEVEL (INFO), or DEBUG when DOUGH_DEBUG is on
    """
    root = logging.getLogger(_ROOT_NAME)
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(PipeFormatter())
    root.addHandler(handler)
    if level is None:
        debug = os.getenv("DOUGH_DEBUG", "false").lower() in ("1", "true", "yes", "on")
        level = "DEBUG" if debug else os.getenv("DOUGH_LOG_LEVEL", "INFO")
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Return a child of the package root logger

    Usage:
        logger = get_logger(__name__)
        logger.warning("Water temperature is %.1f °C", temperature)
    """
    init_logging()
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
