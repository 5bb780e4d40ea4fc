"""Newline segmentation and document/content offset conversion.

Two coordinate systems are in play:
- document offsets: positions in the editor text, newline characters included;
- content offsets: positions in the text with every newline removed. Segment
  and alignment spans are expressed in content offsets.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from linealign.models.segment import Segment


def segment(text: str) -> list[Segment]:
    """Split `text` on "\\n" into segments, keeping empty lines.

    An empty text has no lines and yields an empty list.
    """
    if not text:
        return []
    out: list[Segment] = []
    pos = 0
    for i, line in enumerate(text.split("\n")):
        out.append(Segment(text=line, start=pos, end=pos + len(line), line=i))
        pos += len(line)
    return out


def line_count(text: str) -> int:
    return len(segment(text))


def to_content_offset(text: str, pos: int) -> int:
    """Convert a document offset into a content offset."""
    pos = max(0, min(int(pos), len(text)))
    return pos - text.count("\n", 0, pos)


@dataclass(frozen=True)
class _Line:
    content_start: int
    length: int
    doc_start: int


class OffsetMap:
    """Line table for one document, mapping content offsets back to document offsets."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._lines: list[_Line] = []
        doc = 0
        for seg in segment(text):
            self._lines.append(_Line(content_start=seg.start, length=len(seg.text), doc_start=doc))
            doc += len(seg.text) + 1
        self._non_empty = [ln for ln in self._lines if ln.length > 0]
        self._starts = [ln.content_start for ln in self._non_empty]

    @property
    def row_count(self) -> int:
        return len(self._lines)

    def row_start(self, row: int) -> int:
        """Document offset of the first character of `row` (0-based)."""
        if not self._lines:
            return 0
        row = max(0, min(int(row), len(self._lines) - 1))
        return self._lines[row].doc_start

    def to_document(self, offset: int, *, at_end: bool = False) -> int:
        """Convert a content offset into a document offset.

        Content offsets on a line boundary are ambiguous: the end of one line and
        the start of the next share the same value. By default the start of the
        next non-empty line wins; with `at_end=True` the end of the previous one does.
        """
        if not self._non_empty:
            return 0
        offset = max(0, int(offset))
        idx = bisect_right(self._starts, offset) - 1
        if at_end and idx >= 0 and offset == self._non_empty[idx].content_start and idx > 0:
            idx -= 1
        if idx < 0:
            return self._non_empty[0].doc_start
        line = self._non_empty[idx]
        delta = min(offset - line.content_start, line.length)
        return line.doc_start + delta
