"""Shared logging utilities for the lottery package.

Provides a central get_logger(name) factory that makes sure the console handler
(and an optional file handler) are configured once. Level and file path are
controlled via the LOTTERY_LOG_LEVEL and LOTTERY_LOG_FILE environment variables.
"""
import logging
import os
from pathlib import Path
from typing import Optional


_configured = False


def _ensure_configured() -> None:
    global _configured
    if _configured:
        return

    log_level = os.getenv("LOTTERY_LOG_LEVEL", "WARNING")
    log_file = os.getenv("LOTTERY_LOG_FILE", "")

    level = getattr(logging, log_level.upper(), logging.WARNING)

    root = logging.getLogger("lottery")
    root.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    # file logging only when LOTTERY_LOG_FILE is set
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    root.debug(f"Logging initialized with level {log_level}, file={log_file or '(console only)'}")
    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger for the given name.

    The first call configures the package logger from the environment;
    subsequent calls return regular loggers that inherit its handlers and level.
    """
    _ensure_configured()
    return logging.getLogger(name)
