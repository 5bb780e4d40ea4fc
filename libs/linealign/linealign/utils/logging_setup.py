"""Logging initialization helpers."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from linealign.config import LoggingSettings, Settings

_PACKAGE_LOGGER = "linealign"
_SYNC_LOGGER = "linealign.sync"
_HTTP_LOGGERS = ("httpx", "httpcore")


def _level(name: str | None, default: int = logging.INFO) -> int:
    value = getattr(logging, str(name or "").strip().upper(), None)
    return value if isinstance(value, int) else default


def _file_handler(cfg: LoggingSettings, log_dir: str) -> RotatingFileHandler:
    file_path = Path(str(cfg.file))
    if not file_path.is_absolute():
        file_path = Path(log_dir) / file_path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        file_path,
        maxBytes=int(cfg.max_bytes),
        backupCount=int(cfg.backup_count),
        encoding="utf-8",
    )


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the `linealign` logger tree from Settings and return its root.

    Handlers go on the package logger only; loggers owned by the host editor
    are left alone. Calling this again is a no-op.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    if getattr(logger, "_linealign_configured", False):
        return logger

    cfg = settings.logging
    level = _level(cfg.level)
    formatter = logging.Formatter(fmt=str(cfg.format), datefmt=str(cfg.datefmt))

    handlers: list[logging.Handler] = []
    if cfg.console:
        handlers.append(logging.StreamHandler())
    if cfg.file:
        handlers.append(_file_handler(cfg, settings.log_dir))
    for handler in handlers:
        handler.setFormatter(formatter)

    logger.setLevel(level)
    logger.handlers = handlers
    logger.propagate = False

    if cfg.sync_level:
        logging.getLogger(_SYNC_LOGGER).setLevel(_level(cfg.sync_level, level))
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(_level(cfg.http_level, logging.WARNING))

    setattr(logger, "_linealign_configured", True)
    return logger
