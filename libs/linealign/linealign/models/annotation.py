"""External alignment annotation and publish models."""

from __future__ import annotations

from dataclasses import dataclass, field

from linealign.error_codes import ErrorCode
from linealign.models.segment import Span


@dataclass(frozen=True)
class AnnotationEntry:
    """A span in one text, optionally linked to entries of the other text by index."""

    span: Span
    index: int
    alignment_index: tuple[int, ...] = ()
    id: str | None = None


@dataclass(frozen=True)
class ExternalAlignmentAnnotation:
    """Alignment supplied by an inference service or a previous publish.

    `alignment_annotation` holds source-side spans whose `alignment_index`
    points at `target_annotation` entries (target-side spans) by `index`.
    """

    alignment_annotation: tuple[AnnotationEntry, ...] = ()
    target_annotation: tuple[AnnotationEntry, ...] = ()
    id: str | None = None
    type: str = "alignment"

    def target_by_index(self, index: int) -> AnnotationEntry | None:
        for entry in self.target_annotation:
            if entry.index == index:
                return entry
        return None

    def source_linked_to(self, target_index: int) -> AnnotationEntry | None:
        for entry in self.alignment_annotation:
            if target_index in entry.alignment_index:
                return entry
        return None


@dataclass(frozen=True)
class PublishDocument:
    """Fully-resolved alignment re-indexed with sequential integers."""

    segmentation: list[Span] = field(default_factory=list)
    target_annotation: list[AnnotationEntry] = field(default_factory=list)
    alignment_annotation: list[AnnotationEntry] = field(default_factory=list)

    def as_external_annotation(self) -> ExternalAlignmentAnnotation:
        return ExternalAlignmentAnnotation(
            alignment_annotation=tuple(self.alignment_annotation),
            target_annotation=tuple(self.target_annotation),
        )


@dataclass(frozen=True)
class PublishCheck:
    is_valid: bool
    error: str | None = None
    error_code: ErrorCode | None = None
