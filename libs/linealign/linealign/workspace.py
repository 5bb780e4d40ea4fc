"""Alignment workspace: the two editor views and everything shared between them."""

from __future__ import annotations

import logging

from linealign.alignment.annotations import reconstruct_segments
from linealign.alignment.mapping_generator import generate_mappings
from linealign.alignment.resolver import CorrespondenceResolver
from linealign.config import Settings
from linealign.error_codes import ErrorCode
from linealign.export.publisher import build_publish_document, validate_publish
from linealign.models.annotation import ExternalAlignmentAnnotation, PublishCheck, PublishDocument
from linealign.models.segment import AlignmentRecord, OriginalTextSnapshot, Side
from linealign.sync.synchronizer import ViewSynchronizer
from linealign.utils.content_validator import is_valid
from linealign.views.base import EditorView

logger = logging.getLogger(__name__)


class Workspace:
    """Owns the source/target views, the optional external annotation and the
    original-text snapshots, and wires the resolver and synchronizer to them.
    """

    def __init__(
        self,
        source_view: EditorView,
        target_view: EditorView,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self.source_view = source_view
        self.target_view = target_view
        self.resolver = CorrespondenceResolver(source_view, target_view)
        self.synchronizer = ViewSynchronizer(
            source_view,
            target_view,
            self.resolver,
            settle_delay_s=settings.sync.settle_delay_s,
            enabled=settings.sync.enabled,
            select_line=settings.sync.select_line,
        )
        self._originals: dict[Side, OriginalTextSnapshot] = {}
        self._scroll_sync_attached = False

    def view_for(self, side: Side) -> EditorView:
        return self.source_view if side is Side.SOURCE else self.target_view

    # -- alignment ---------------------------------------------------------

    def generate_mappings(self) -> list[AlignmentRecord]:
        return generate_mappings(self.source_view.text, self.target_view.text)

    def resolve(self, click_position: int, from_side: Side) -> int | None:
        return self.resolver.resolve(click_position, from_side)

    @property
    def external_annotation(self) -> ExternalAlignmentAnnotation | None:
        return self.resolver.external_annotation

    def set_external_annotation(self, annotation: ExternalAlignmentAnnotation | None) -> None:
        self.resolver.external_annotation = annotation

    def load_alignment(
        self,
        annotation: ExternalAlignmentAnnotation,
        source_content: str,
        target_content: str,
    ) -> None:
        """Initialize both views from a prior alignment of the raw contents."""
        source_lines, target_lines = reconstruct_segments(
            annotation, source_content, target_content
        )
        self._set_view_text(self.source_view, "\n".join(source_lines))
        self._set_view_text(self.target_view, "\n".join(target_lines))
        self.capture_originals()
        self.set_external_annotation(annotation)
        logger.info(
            "alignment loaded (source_lines=%s, target_lines=%s)",
            len(source_lines),
            len(target_lines),
        )

    @staticmethod
    def _set_view_text(view: EditorView, text: str) -> None:
        set_text = getattr(view, "set_text", None)
        if set_text is None:
            raise TypeError(f"view {view.name!r} does not support replacing its text")
        set_text(text)

    # -- originals / validation -------------------------------------------

    def set_original_source_text(self, text: str) -> None:
        self._originals[Side.SOURCE] = OriginalTextSnapshot(text)

    def set_original_target_text(self, text: str) -> None:
        self._originals[Side.TARGET] = OriginalTextSnapshot(text)

    def original(self, side: Side) -> OriginalTextSnapshot | None:
        return self._originals.get(side)

    def capture_originals(self) -> None:
        self.set_original_source_text(self.source_view.text)
        self.set_original_target_text(self.target_view.text)

    def is_content_valid(self) -> bool:
        for side in (Side.SOURCE, Side.TARGET):
            snapshot = self._originals.get(side)
            if snapshot is None:
                continue
            if not is_valid(snapshot.text, self.view_for(side).text):
                logger.info("content changed beyond line breaks (side=%s)", side.value)
                return False
        return True

    # -- synchronization ---------------------------------------------------

    @property
    def sync_enabled(self) -> bool:
        return self.synchronizer.enabled

    @sync_enabled.setter
    def sync_enabled(self, enabled: bool) -> None:
        self.synchronizer.enabled = bool(enabled)

    async def sync_to_clicked_line(self, click_position: int, from_side: Side) -> bool:
        return await self.synchronizer.sync_to_clicked_line(click_position, from_side)

    async def sync_scroll_to_line(self, from_side: Side, line_number: int) -> bool:
        return await self.synchronizer.sync_line_to_line(from_side, line_number)

    async def sync_line_selection(self, from_side: Side, line_number: int) -> bool:
        return await self.synchronizer.sync_line_selection(from_side, line_number)

    async def sync_text_selection(self, from_side: Side, start: int, end: int) -> bool:
        return await self.synchronizer.sync_text_selection(from_side, start, end)

    def attach_scroll_sync(self) -> None:
        """Mirror scrolling: each view's scroll requests a line sync of the other."""
        if self._scroll_sync_attached:
            return
        for side in (Side.SOURCE, Side.TARGET):
            self.view_for(side).add_scroll_listener(
                lambda line, side=side: self.synchronizer.request_line_sync(side, line)
            )
        self._scroll_sync_attached = True

    # -- publish -----------------------------------------------------------

    def build_publish(self) -> tuple[PublishCheck, PublishDocument | None]:
        if not self.is_content_valid():
            return PublishCheck(
                False, "Content was edited beyond line breaks", ErrorCode.PUBLISH_INVALID
            ), None
        records = self.generate_mappings()
        check = validate_publish(records, self.source_view.text, self.target_view.text)
        if not check.is_valid:
            return check, None
        return check, build_publish_document(records)
