"""Resolve a clicked position in one editor to the corresponding position in the other.

Resolution tries three tiers in order and the first hit wins:

1. the external alignment annotation, when one is loaded;
2. mappings generated from the current editor texts;
3. the same line number in the other document (clamped to its length).

Clicks and results are document offsets of the editor views. Record and
annotation spans are content offsets and are projected onto the current
document text before they are compared with a click.
"""

from __future__ import annotations

import logging
from enum import Enum

from linealign.alignment.mapping_generator import generate_mappings
from linealign.models.annotation import AnnotationEntry, ExternalAlignmentAnnotation
from linealign.models.segment import Side, Span
from linealign.utils.segmenter import OffsetMap
from linealign.views.base import EditorView

logger = logging.getLogger(__name__)


class ResolutionTier(str, Enum):
    EXTERNAL = "external"
    MAPPINGS = "mappings"
    LINE_NUMBERS = "line_numbers"


def _project(offsets: OffsetMap, span: Span) -> Span:
    start = offsets.to_document(span.start)
    if span.length == 0:
        return Span(start, start)
    end = offsets.to_document(span.end, at_end=True)
    return Span(start, max(start, end))


class CorrespondenceResolver:
    def __init__(
        self,
        source_view: EditorView,
        target_view: EditorView,
        external_annotation: ExternalAlignmentAnnotation | None = None,
    ) -> None:
        self.source_view = source_view
        self.target_view = target_view
        self.external_annotation = external_annotation

    def view_for(self, side: Side) -> EditorView:
        return self.source_view if side is Side.SOURCE else self.target_view

    def resolve(self, click_position: int, from_side: Side) -> int | None:
        """Return the document offset in the other view matching `click_position`.

        Returns None only when no tier applies (the other document has no lines).
        """
        tiers = (
            (ResolutionTier.EXTERNAL, self.from_external),
            (ResolutionTier.MAPPINGS, self.from_mappings),
            (ResolutionTier.LINE_NUMBERS, self.from_line_numbers),
        )
        for tier, fn in tiers:
            position = fn(click_position, from_side)
            if position is not None:
                logger.debug(
                    "resolved correspondence (from=%s, click=%s, tier=%s, position=%s)",
                    from_side.value,
                    click_position,
                    tier.value,
                    position,
                )
                return position
        logger.debug(
            "no correspondence (from=%s, click=%s)", from_side.value, click_position
        )
        return None

    def from_external(self, click_position: int, from_side: Side) -> int | None:
        annotation = self.external_annotation
        if annotation is None:
            return None

        from_offsets = OffsetMap(self.view_for(from_side).text)
        other_offsets = OffsetMap(self.view_for(from_side.other).text)
        entries = (
            annotation.alignment_annotation
            if from_side is Side.SOURCE
            else annotation.target_annotation
        )
        for entry in entries:
            if not _project(from_offsets, entry.span).contains(click_position):
                continue
            counterpart = self._counterpart(annotation, entry, from_side)
            if counterpart is None:
                return None
            return other_offsets.to_document(counterpart.span.start)
        return None

    @staticmethod
    def _counterpart(
        annotation: ExternalAlignmentAnnotation,
        entry: AnnotationEntry,
        from_side: Side,
    ) -> AnnotationEntry | None:
        if from_side is Side.TARGET:
            return annotation.source_linked_to(entry.index)
        for index in entry.alignment_index:
            found = annotation.target_by_index(index)
            if found is not None:
                return found
        return None

    def from_mappings(self, click_position: int, from_side: Side) -> int | None:
        from_text = self.view_for(from_side).text
        other_text = self.view_for(from_side.other).text
        if from_side is Side.SOURCE:
            records = generate_mappings(from_text, other_text)
        else:
            records = generate_mappings(other_text, from_text)

        from_offsets = OffsetMap(from_text)
        other_offsets = OffsetMap(other_text)
        for rec in records:
            span = rec.span_for(from_side)
            if span is None:
                continue
            doc_start = from_offsets.row_start(rec.row)
            if not Span(doc_start, doc_start + span.length).contains(click_position):
                continue
            if rec.span_for(from_side.other) is None:
                return None
            return other_offsets.row_start(rec.row)
        return None

    def from_line_numbers(self, click_position: int, from_side: Side) -> int | None:
        other = self.view_for(from_side.other)
        total = other.line_count
        if total < 1:
            return None
        line = self.view_for(from_side).line_at(click_position)
        return other.line_start(max(1, min(line, total)))
