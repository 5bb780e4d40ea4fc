from __future__ import annotations

from linealign.models.segment import Segment
from linealign.utils.segmenter import OffsetMap, line_count, segment, to_content_offset


def test_segment_keeps_empty_lines_with_content_offsets() -> None:
    assert segment("ab\n\ncd") == [
        Segment(text="ab", start=0, end=2, line=0),
        Segment(text="", start=2, end=2, line=1),
        Segment(text="cd", start=2, end=4, line=2),
    ]


def test_segment_trailing_newline_yields_trailing_empty_line() -> None:
    segs = segment("A\nB\n")
    assert [s.text for s in segs] == ["A", "B", ""]
    assert segs[-1].start == segs[-1].end == 2


def test_segment_empty_text_has_no_lines() -> None:
    assert segment("") == []
    assert line_count("") == 0
    assert line_count("\n") == 2


def test_segment_concatenation_reproduces_content() -> None:
    text = "one\n\ntwo\nthree\n"
    content = "".join(s.text for s in segment(text))
    assert content == text.replace("\n", "")
    for s in segment(text):
        assert content[s.start : s.end] == s.text


def test_to_content_offset_drops_preceding_newlines() -> None:
    text = "ab\n\ncd"
    assert to_content_offset(text, 0) == 0
    assert to_content_offset(text, 2) == 2
    assert to_content_offset(text, 4) == 2
    assert to_content_offset(text, 5) == 3
    assert to_content_offset(text, 99) == 4


def test_offset_map_projects_content_offsets_to_document() -> None:
    offsets = OffsetMap("ab\n\ncd")
    assert offsets.row_count == 3
    assert offsets.to_document(0) == 0
    assert offsets.to_document(1) == 1
    # Boundary between "ab" and "cd": start of "cd" by default, end of "ab" on request.
    assert offsets.to_document(2) == 4
    assert offsets.to_document(2, at_end=True) == 2
    assert offsets.to_document(4) == 6


def test_offset_map_row_start_is_clamped() -> None:
    offsets = OffsetMap("ab\n\ncd")
    assert [offsets.row_start(r) for r in range(3)] == [0, 3, 4]
    assert offsets.row_start(-1) == 0
    assert offsets.row_start(10) == 4
    assert OffsetMap("").row_start(3) == 0
    assert OffsetMap("\n\n").to_document(5) == 0
