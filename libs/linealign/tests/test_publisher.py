from __future__ import annotations

from linealign.alignment.mapping_generator import generate_mappings
from linealign.error_codes import ErrorCode
from linealign.export.publisher import build_publish_document, validate_publish
from linealign.models.segment import AlignmentRecord, Span, TargetSpan
from linealign.models.serializers import serialize_publish_document


def test_build_publish_document_keeps_aligned_rows_reindexed() -> None:
    records = generate_mappings("A\nB\nC", "X\n\nZ")
    doc = build_publish_document(records)

    assert doc.segmentation == [Span(0, 1), Span(2, 3)]
    assert [(e.span, e.index) for e in doc.target_annotation] == [(Span(0, 1), 0), (Span(1, 2), 1)]
    assert [(e.span, e.index, e.alignment_index) for e in doc.alignment_annotation] == [
        (Span(0, 1), 0, (0,)),
        (Span(2, 3), 1, (1,)),
    ]


def test_publish_document_serializes_plain_spans() -> None:
    doc = build_publish_document(generate_mappings("A", "X"))
    assert serialize_publish_document(doc) == {
        "segmentation": [{"span": {"start": 0, "end": 1}}],
        "target_annotation": [{"span": {"start": 0, "end": 1}, "index": 0}],
        "alignment_annotation": [
            {"span": {"start": 0, "end": 1}, "index": 0, "alignment_index": [0]}
        ],
    }


def test_validate_publish_requires_content() -> None:
    records = generate_mappings("A", "X")
    assert validate_publish(records, "", "X").error == "Source content is required"
    assert validate_publish(records, "A", "  \n").error == "Target content is required"


def test_validate_publish_requires_mappings() -> None:
    assert validate_publish([], "A", "X").error == "At least one mapping is required"

    one_sided = [AlignmentRecord(id="r0", row=0, source=Span(0, 1), target=None)]
    assert validate_publish(one_sided, "A", "X").error == "At least one valid mapping is required"


def test_validate_publish_rejects_more_target_segments() -> None:
    records = [
        AlignmentRecord(id="r0", row=0, source=Span(0, 1), target=TargetSpan(0, 1, linked_ids=("r0",))),
        AlignmentRecord(id="r1", row=1, source=None, target=TargetSpan(1, 2)),
    ]
    check = validate_publish(records, "A", "X\nY")
    assert not check.is_valid
    assert check.error_code == ErrorCode.PUBLISH_INVALID
    assert check.error == (
        "Target cannot have more segments than source. "
        "Target has 2 segments, but source only has 1 segments."
    )


def test_validate_publish_accepts_generated_mappings() -> None:
    check = validate_publish(generate_mappings("A\nB\n", "X\n\nY"), "A\nB\n", "X\n\nY")
    assert check.is_valid
    assert check.error is None


def test_blank_rows_are_not_published() -> None:
    source, target = "A\nB\n", "X\nY\n"
    records = generate_mappings(source, target)

    assert validate_publish(records, source, target).is_valid
    doc = build_publish_document(records)
    assert doc.segmentation == [Span(0, 1), Span(1, 2)]
    assert [e.span for e in doc.target_annotation] == [Span(0, 1), Span(1, 2)]
    assert [e.index for e in doc.alignment_annotation] == [0, 1]


def test_trailing_blank_target_lines_do_not_count_as_segments() -> None:
    records = generate_mappings("A", "X\n\n")

    check = validate_publish(records, "A", "X\n\n")
    assert check.is_valid, check.error
    assert build_publish_document(records).segmentation == [Span(0, 1)]
