"""Turn generated mappings into a publishable alignment."""

from __future__ import annotations

from collections.abc import Sequence

from linealign.error_codes import ErrorCode
from linealign.models.annotation import AnnotationEntry, PublishCheck, PublishDocument
from linealign.models.segment import AlignmentRecord, Side, Span


def build_publish_document(records: Sequence[AlignmentRecord]) -> PublishDocument:
    """Keep rows with text on both sides and re-index them 0..n-1 in order.

    Source spans go to `segmentation` and `alignment_annotation` (linked to the
    target entry with the same index); target spans go to `target_annotation`.
    """
    segmentation: list[Span] = []
    target_annotation: list[AnnotationEntry] = []
    alignment_annotation: list[AnnotationEntry] = []

    for rec in records:
        if not rec.is_aligned:
            continue
        i = len(segmentation)
        source = Span(rec.source.start, rec.source.end)
        segmentation.append(source)
        target_annotation.append(
            AnnotationEntry(span=Span(rec.target.start, rec.target.end), index=i)
        )
        alignment_annotation.append(AnnotationEntry(span=source, index=i, alignment_index=(i,)))

    return PublishDocument(
        segmentation=segmentation,
        target_annotation=target_annotation,
        alignment_annotation=alignment_annotation,
    )


def _invalid(message: str) -> PublishCheck:
    return PublishCheck(False, message, ErrorCode.PUBLISH_INVALID)


def validate_publish(
    records: Sequence[AlignmentRecord],
    source_text: str | None,
    target_text: str | None,
) -> PublishCheck:
    if not source_text or not source_text.strip():
        return _invalid("Source content is required")
    if not target_text or not target_text.strip():
        return _invalid("Target content is required")
    if not records:
        return _invalid("At least one mapping is required")
    if not any(r.is_aligned for r in records):
        return _invalid("At least one valid mapping is required")

    source_rows = sum(1 for r in records if r.has_text(Side.SOURCE))
    target_rows = sum(1 for r in records if r.has_text(Side.TARGET))
    if target_rows > source_rows:
        return _invalid(
            f"Target cannot have more segments than source. Target has {target_rows} "
            f"segments, but source only has {source_rows} segments.",
        )
    return PublishCheck(True)
