"""Serialization helpers for records and annotations exchanged as JSON."""

from __future__ import annotations

from typing import Any

from linealign.exceptions import AnnotationFormatError
from linealign.models.annotation import AnnotationEntry, ExternalAlignmentAnnotation, PublishDocument
from linealign.models.segment import AlignmentRecord, Span, TargetSpan

SENTINEL = -1


def _span_dict(span: Span | None) -> dict[str, int]:
    if span is None:
        return {"start": SENTINEL, "end": SENTINEL}
    return {"start": int(span.start), "end": int(span.end)}


def serialize_records(records: list[AlignmentRecord]) -> list[dict[str, Any]]:
    """Serialize records using the `{-1, -1}` sentinel for missing sides."""
    out: list[dict[str, Any]] = []
    for rec in records:
        target = _span_dict(rec.target)
        target["alignment_index"] = list(rec.target.linked_ids) if rec.target else []
        source = _span_dict(rec.source)
        source["index"] = rec.id
        out.append({"id": rec.id, "row": int(rec.row), "source": source, "target": target})
    return out


def _parse_optional_span(item: Any) -> tuple[int, int] | None:
    if not isinstance(item, dict):
        return None
    start = int(item.get("start", SENTINEL))
    end = int(item.get("end", SENTINEL))
    if start == SENTINEL and end == SENTINEL:
        return None
    return start, end


def deserialize_records(items: list[dict[str, Any]]) -> list[AlignmentRecord]:
    out: list[AlignmentRecord] = []
    for i, item in enumerate(items):
        rec_id = str(item["id"])
        source = _parse_optional_span(item.get("source"))
        target = _parse_optional_span(item.get("target"))
        linked = (item.get("target") or {}).get("alignment_index") or []
        out.append(
            AlignmentRecord(
                id=rec_id,
                row=int(item.get("row", i)),
                source=Span(*source) if source else None,
                target=TargetSpan(*target, linked_ids=tuple(str(x) for x in linked))
                if target
                else None,
            )
        )
    return out


def _parse_index(raw: Any, *, where: str) -> int:
    if isinstance(raw, bool):
        raise AnnotationFormatError(f"{where}: index must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    raise AnnotationFormatError(f"{where}: index must be an integer, got {raw!r}")


def _parse_entry(item: Any, *, where: str, fallback_index: int) -> AnnotationEntry:
    if not isinstance(item, dict):
        raise AnnotationFormatError(f"{where}: expected an object, got {type(item).__name__}")
    span = item.get("span")
    if not isinstance(span, dict):
        raise AnnotationFormatError(f"{where}: missing span")
    try:
        parsed_span = Span(int(span["start"]), int(span["end"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise AnnotationFormatError(f"{where}: invalid span {span!r}") from exc

    raw_index = item.get("index")
    index = fallback_index if raw_index is None else _parse_index(raw_index, where=where)
    links = item.get("alignment_index") or []
    if not isinstance(links, list):
        raise AnnotationFormatError(f"{where}: alignment_index must be a list")
    alignment_index = tuple(_parse_index(x, where=f"{where}.alignment_index") for x in links)
    entry_id = item.get("id")
    return AnnotationEntry(
        span=parsed_span,
        index=index,
        alignment_index=alignment_index,
        id=str(entry_id) if entry_id is not None else None,
    )


def _parse_entries(items: Any, *, name: str) -> tuple[AnnotationEntry, ...]:
    if items is None:
        return ()
    if not isinstance(items, list):
        raise AnnotationFormatError(f"{name} must be a list")
    out: list[AnnotationEntry] = []
    for i, item in enumerate(items):
        # Null placeholders keep positions in some payloads; they carry no span.
        if item is None:
            continue
        out.append(_parse_entry(item, where=f"{name}[{i}]", fallback_index=i))
    return tuple(out)


def deserialize_external_annotation(payload: Any) -> ExternalAlignmentAnnotation:
    """Parse an alignment annotation.

    Accepts either the service envelope `{"id", "type", "data": {...}}` or the
    bare `{"alignment_annotation": [...], "target_annotation": [...]}` shape.
    """
    if not isinstance(payload, dict):
        raise AnnotationFormatError("annotation payload must be an object")
    data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    if "alignment_annotation" not in data and "target_annotation" not in data:
        raise AnnotationFormatError("annotation payload has no alignment_annotation/target_annotation")
    raw_id = payload.get("id")
    return ExternalAlignmentAnnotation(
        alignment_annotation=_parse_entries(data.get("alignment_annotation"), name="alignment_annotation"),
        target_annotation=_parse_entries(data.get("target_annotation"), name="target_annotation"),
        id=str(raw_id) if raw_id is not None else None,
        type=str(payload.get("type") or "alignment"),
    )


def _entry_dict(entry: AnnotationEntry, *, with_links: bool) -> dict[str, Any]:
    out: dict[str, Any] = {
        "span": {"start": int(entry.span.start), "end": int(entry.span.end)},
        "index": int(entry.index),
    }
    if entry.id is not None:
        out["id"] = entry.id
    if with_links:
        out["alignment_index"] = [int(x) for x in entry.alignment_index]
    return out


def serialize_external_annotation(annotation: ExternalAlignmentAnnotation) -> dict[str, Any]:
    data = {
        "alignment_annotation": [
            _entry_dict(e, with_links=True) for e in annotation.alignment_annotation
        ],
        "target_annotation": [_entry_dict(e, with_links=False) for e in annotation.target_annotation],
    }
    out: dict[str, Any] = {"type": annotation.type, "data": data}
    if annotation.id is not None:
        out["id"] = annotation.id
    return out


def serialize_publish_document(doc: PublishDocument) -> dict[str, Any]:
    return {
        "segmentation": [
            {"span": {"start": int(s.start), "end": int(s.end)}} for s in doc.segmentation
        ],
        "target_annotation": [_entry_dict(e, with_links=False) for e in doc.target_annotation],
        "alignment_annotation": [
            _entry_dict(e, with_links=True) for e in doc.alignment_annotation
        ],
    }
