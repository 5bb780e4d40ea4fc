"""Segment and alignment record models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Side(str, Enum):
    SOURCE = "source"
    TARGET = "target"

    @property
    def other(self) -> Side:
        return Side.TARGET if self is Side.SOURCE else Side.SOURCE


@dataclass(frozen=True)
class Segment:
    """One newline-delimited line of a text.

    `start`/`end` are content offsets: newline characters are not counted.
    """

    text: str
    start: int
    end: int
    line: int  # 0-based row

    @property
    def is_empty(self) -> bool:
        return self.text == ""


@dataclass(frozen=True)
class Span:
    """Half-open character interval `[start, end)`."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span: start={self.start}, end={self.end}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, pos: int) -> bool:
        """Inclusive on both ends, so a caret at the end of a line still matches it."""
        return self.start <= pos <= self.end


@dataclass(frozen=True)
class TargetSpan(Span):
    linked_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class AlignmentRecord:
    """One row of the alignment grid.

    `None` on a side means there is no corresponding segment at this row.
    """

    id: str
    row: int
    source: Span | None
    target: TargetSpan | None

    def __post_init__(self) -> None:
        if self.source is None and self.target is None:
            raise ValueError(f"alignment record {self.id} has no span on either side")

    def has_text(self, side: Side) -> bool:
        """True when `side` holds a real segment; zero-width blank-row spans do not count."""
        span = self.span_for(side)
        return span is not None and span.length > 0

    @property
    def is_aligned(self) -> bool:
        return self.has_text(Side.SOURCE) and self.has_text(Side.TARGET)

    def span_for(self, side: Side) -> Span | None:
        return self.source if side is Side.SOURCE else self.target


@dataclass(frozen=True)
class OriginalTextSnapshot:
    """Immutable baseline of an editor's text."""

    text: str
    captured_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True)
class MappingSummary:
    total: int
    aligned: int
    source_only: int
    target_only: int
    blank: int = 0
