"""Helpers to turn span annotations into line-segmented editor texts and back."""

from __future__ import annotations

from collections.abc import Sequence

from linealign.models.annotation import ExternalAlignmentAnnotation
from linealign.models.segment import Span


def reconstruct_segments(
    annotation: ExternalAlignmentAnnotation,
    source_content: str,
    target_content: str,
) -> tuple[list[str], list[str]]:
    """Rebuild source/target lines from a prior alignment.

    Source lines come from `alignment_annotation`, target lines from
    `target_annotation`; each list is ordered by entry index.
    """
    source_entries = sorted(annotation.alignment_annotation, key=lambda e: e.index)
    target_entries = sorted(annotation.target_annotation, key=lambda e: e.index)
    source = [source_content[e.span.start : e.span.end] for e in source_entries]
    target = [target_content[e.span.start : e.span.end] for e in target_entries]
    return source, target


def apply_segmentation(text: str, spans: Sequence[Span]) -> str:
    """Insert a newline before each span so every span starts its own line.

    Text between spans is kept as-is. No newline is inserted before a first span
    that starts at offset 0.
    """
    if not text or not spans:
        return text

    out: list[str] = []
    last_end = 0
    for i, span in enumerate(sorted(spans, key=lambda s: s.start)):
        if span.start > last_end:
            out.append(text[last_end : span.start])
        if i > 0 or span.start > 0:
            out.append("\n")
        out.append(text[span.start : span.end])
        last_end = max(last_end, span.end)
    if last_end < len(text):
        out.append(text[last_end:])
    return "".join(out)


def generate_file_segmentation(text: str) -> list[Span]:
    """Spans (document offsets) of every non-blank line of `text`."""
    out: list[Span] = []
    pos = 0
    for line in text.split("\n"):
        if line.strip():
            out.append(Span(pos, pos + len(line)))
        pos += len(line) + 1
    return out
