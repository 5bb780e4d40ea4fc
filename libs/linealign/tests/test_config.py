from __future__ import annotations

import logging
from pathlib import Path

import pytest

from linealign.config import AnnotationServiceConfig, LoggingSettings, Settings, SyncConfig
from linealign.exceptions import ConfigurationError
from linealign.utils.logging_setup import setup_logging


def test_sync_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("SYNC_SETTLE_DELAY_MS", "120")
    monkeypatch.setenv("SYNC_SELECT_LINE", "true")
    cfg = SyncConfig()
    assert cfg.settle_delay_s == pytest.approx(0.12)
    assert cfg.select_line is True


def test_annotation_config_normalizes_provider(tmp_path) -> None:
    cfg = AnnotationServiceConfig(provider=" Local ", local_dir="annotations")
    assert cfg.provider == "local"
    assert Path(cfg.local_dir).is_absolute()

    with pytest.raises(ConfigurationError):
        AnnotationServiceConfig(provider="ftp")


def test_settings_resolve_paths_and_provider_config() -> None:
    settings = Settings(
        log_dir="logs",
        annotation_service=AnnotationServiceConfig(base_url="https://example.com/v1/"),
    )
    assert Path(settings.log_dir).is_absolute()
    assert Path(settings.log_dir).name == "logs"
    assert settings.annotation_config()["base_url"] == "https://example.com/v1"

    settings.annotation_service.base_url = " "
    with pytest.raises(ConfigurationError):
        settings.annotation_config()


def test_setup_logging_configures_package_logger_once(tmp_path) -> None:
    logger = logging.getLogger("linealign")
    saved = (logger.handlers[:], logger.level, logger.propagate)
    try:
        if hasattr(logger, "_linealign_configured"):
            delattr(logger, "_linealign_configured")
        settings = Settings(
            log_dir=str(tmp_path),
            logging=LoggingSettings(
                level="debug", console=False, file="linealign.log", sync_level="warning"
            ),
        )
        assert setup_logging(settings) is logger
        setup_logging(settings)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False
        assert logging.getLogger("linealign.sync").level == logging.WARNING

        logging.getLogger("linealign.workspace").info("hello")
        logger.handlers[0].flush()
        assert "hello" in (tmp_path / "linealign.log").read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers = saved[0]
        logger.setLevel(saved[1])
        logger.propagate = saved[2]
        logging.getLogger("linealign.sync").setLevel(logging.NOTSET)
        if hasattr(logger, "_linealign_configured"):
            delattr(logger, "_linealign_configured")
