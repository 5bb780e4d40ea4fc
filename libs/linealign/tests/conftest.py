from __future__ import annotations

import pytest

from linealign.config import AnnotationServiceConfig, Settings, SyncConfig
from linealign.views.memory import TextBufferView


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        log_dir=str(tmp_path / "logs"),
        sync=SyncConfig(settle_delay_ms=0),
        annotation_service=AnnotationServiceConfig(
            provider="local", local_dir=str(tmp_path / "annotations")
        ),
    )


@pytest.fixture()
def make_view():
    def _make(name: str, text: str = "", **kwargs) -> TextBufferView:
        kwargs.setdefault("line_height", 10.0)
        kwargs.setdefault("viewport_height", 50.0)
        return TextBufferView(name, text, **kwargs)

    return _make
