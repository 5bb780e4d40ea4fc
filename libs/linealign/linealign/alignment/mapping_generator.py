"""Positional line-by-line alignment of two texts.

Row `i` of the grid pairs line `i` of the source with line `i` of the target.
A side only gets a span for a non-empty line; empty lines keep their row in
the grid but carry no text. Spans are content offsets (newlines excluded), so
concatenating the spans of one side reproduces its non-empty lines in order.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from linealign.models.segment import (
    AlignmentRecord,
    MappingSummary,
    Segment,
    Side,
    Span,
    TargetSpan,
)
from linealign.utils.segmenter import segment


def _new_id() -> str:
    return str(uuid.uuid4())


def _at(segments: Sequence[Segment], i: int) -> Segment | None:
    return segments[i] if i < len(segments) else None


def generate_mappings(source_text: str, target_text: str) -> list[AlignmentRecord]:
    """Pair source and target lines by position.

    Always returns `max(lines(source), lines(target))` records, recomputed from
    scratch with fresh ids on every call.
    """
    src = segment(source_text)
    tgt = segment(target_text)
    n = max(len(src), len(tgt))

    records: list[AlignmentRecord] = []
    source_pos = 0
    target_pos = 0
    for i in range(n):
        s = _at(src, i)
        t = _at(tgt, i)
        s_text = s is not None and not s.is_empty
        t_text = t is not None and not t.is_empty
        rec_id = _new_id()

        source: Span | None = None
        target: TargetSpan | None = None
        if s_text or t_text:
            if s_text:
                source = Span(source_pos, source_pos + len(s.text))
            if t_text:
                linked = (rec_id,) if s_text else ()
                target = TargetSpan(target_pos, target_pos + len(t.text), linked_ids=linked)
        else:
            # Blank row: zero-width spans hold the row without consuming text.
            if s is not None:
                source = Span(source_pos, source_pos)
            if t is not None:
                target = TargetSpan(
                    target_pos, target_pos, linked_ids=(rec_id,) if s is not None else ()
                )

        records.append(AlignmentRecord(id=rec_id, row=i, source=source, target=target))
        if s_text:
            source_pos += len(s.text)
        if t_text:
            target_pos += len(t.text)
    return records


def summarize_mappings(records: Sequence[AlignmentRecord]) -> MappingSummary:
    aligned = sum(1 for r in records if r.is_aligned)
    source_only = sum(
        1 for r in records if r.has_text(Side.SOURCE) and not r.has_text(Side.TARGET)
    )
    target_only = sum(
        1 for r in records if r.has_text(Side.TARGET) and not r.has_text(Side.SOURCE)
    )
    return MappingSummary(
        total=len(records),
        aligned=aligned,
        source_only=source_only,
        target_only=target_only,
        blank=len(records) - aligned - source_only - target_only,
    )
