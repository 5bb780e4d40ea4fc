from __future__ import annotations

import pytest

from linealign.alignment.mapping_generator import generate_mappings, summarize_mappings
from linealign.models.segment import Side, Span, TargetSpan
from linealign.utils.segmenter import line_count


def test_generate_mappings_pairs_lines_by_position() -> None:
    records = generate_mappings("A\nB\n", "X\n\nY")

    assert [r.row for r in records] == [0, 1, 2]
    first, second, third = records

    assert first.source == Span(0, 1)
    assert first.target == TargetSpan(0, 1, linked_ids=(first.id,))
    assert first.is_aligned

    assert second.source == Span(1, 2)
    assert second.target is None

    assert third.source is None
    assert third.target == TargetSpan(1, 2)
    assert third.target.linked_ids == ()


def test_generate_mappings_uses_unique_ids_per_call() -> None:
    a = generate_mappings("A\nB", "X\nY")
    b = generate_mappings("A\nB", "X\nY")
    assert len({r.id for r in a}) == 2
    assert {r.id for r in a}.isdisjoint({r.id for r in b})


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("A\nB\n", "X\n\nY"),
        ("one", "uno\ndos\ntres"),
        ("\n\n", "a"),
        ("", "x\ny"),
        ("a\n\n\nb", ""),
    ],
)
def test_generate_mappings_count_is_max_line_count(source: str, target: str) -> None:
    records = generate_mappings(source, target)
    assert len(records) == max(line_count(source), line_count(target))


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("Hello\n\nWorld\n", "Bonjour\nle\n\nMonde"),
        ("a\nbb\nccc", "x"),
    ],
)
def test_spans_cover_non_empty_lines_in_order(source: str, target: str) -> None:
    records = generate_mappings(source, target)
    src_content = source.replace("\n", "")
    tgt_content = target.replace("\n", "")

    src_lines = [src_content[r.source.start : r.source.end] for r in records if r.source and r.source.length]
    tgt_lines = [tgt_content[r.target.start : r.target.end] for r in records if r.target and r.target.length]

    assert src_lines == [line for line in source.split("\n") if line]
    assert tgt_lines == [line for line in target.split("\n") if line]


def test_generate_mappings_is_idempotent_apart_from_ids() -> None:
    def shape(records):
        return [(r.row, r.source, None if r.target is None else (r.target.start, r.target.end)) for r in records]

    assert shape(generate_mappings("a\n\nb", "x\ny")) == shape(generate_mappings("a\n\nb", "x\ny"))


def test_blank_rows_hold_their_place_with_zero_width_spans() -> None:
    records = generate_mappings("a\n\nb", "x\n\ny")
    blank = records[1]
    assert blank.source == Span(1, 1)
    assert blank.target is not None
    assert (blank.target.start, blank.target.end) == (1, 1)
    assert blank.target.linked_ids == (blank.id,)


def test_generate_mappings_empty_texts() -> None:
    assert generate_mappings("", "") == []


def test_summarize_mappings() -> None:
    summary = summarize_mappings(generate_mappings("A\nB\n", "X\n\nY"))
    assert summary.total == 3
    assert summary.aligned == 1
    assert summary.source_only == 1
    assert summary.target_only == 1


def test_blank_rows_are_not_aligned_segments() -> None:
    records = generate_mappings("a\n\nb", "x\n\ny")
    assert [r.is_aligned for r in records] == [True, False, True]
    assert not records[1].has_text(Side.SOURCE)

    summary = summarize_mappings(records)
    assert summary.total == 3
    assert summary.aligned == 2
    assert summary.source_only == 0
    assert summary.target_only == 0
    assert summary.blank == 1


def test_trailing_newlines_leave_a_blank_row() -> None:
    summary = summarize_mappings(generate_mappings("A\nB\n", "X\nY\n"))
    assert (summary.total, summary.aligned, summary.blank) == (3, 2, 1)
