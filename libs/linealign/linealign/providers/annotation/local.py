"""Local filesystem annotation provider for development and offline use."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from linealign.error_codes import ErrorCode
from linealign.exceptions import ProviderError
from linealign.models.annotation import ExternalAlignmentAnnotation
from linealign.models.serializers import deserialize_external_annotation
from linealign.providers.annotation.base import AlignmentAnnotationProvider

logger = logging.getLogger(__name__)


class LocalAnnotationProvider(AlignmentAnnotationProvider):
    """Reads `<base_dir>/<text_id>.json`."""

    provider = "local"

    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)

    def _path(self, text_id: str) -> Path:
        safe_id = str(text_id).strip().replace("/", "_")
        return self.base_dir / f"{safe_id}.json"

    async def fetch_annotation(self, text_id: str) -> ExternalAlignmentAnnotation | None:
        path = self._path(text_id)
        if not path.is_file():
            logger.info("no annotation file for text_id=%s (%s)", text_id, path)
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ProviderError(
                self.provider,
                f"{path}: invalid JSON: {exc}",
                error_code=ErrorCode.ANNOTATION_INVALID,
            ) from exc
        return deserialize_external_annotation(payload)
