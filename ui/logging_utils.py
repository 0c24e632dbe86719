"""Logging setup shared by the API and the scripts."""
from __future__ import annotations

import logging
import os
from pathlib import Path

_NOISY_LOGGERS = ("urllib3", "httpx", "sentence_transformers")


def setup_logging(level: str | None = None) -> None:
    """Send log records to the console and, unless disabled, to a file.

    ``VECTORKV_LOG_LEVEL`` sets the level when ``level`` is not given.
    ``VECTORKV_LOG_FILE`` names the log file; an empty value keeps console only.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.getenv("VECTORKV_LOG_LEVEL", "INFO")).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s")
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = os.getenv("VECTORKV_LOG_FILE", "vectorkv.log")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
