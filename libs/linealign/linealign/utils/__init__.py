"""Utility helpers."""

from linealign.utils.content_validator import is_valid, strip_line_breaks
from linealign.utils.segmenter import OffsetMap, line_count, segment, to_content_offset

__all__ = [
    "OffsetMap",
    "is_valid",
    "line_count",
    "segment",
    "strip_line_breaks",
    "to_content_offset",
]
