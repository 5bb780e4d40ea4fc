"""Core data models for linealign."""

from linealign.models.annotation import (
    AnnotationEntry,
    ExternalAlignmentAnnotation,
    PublishCheck,
    PublishDocument,
)
from linealign.models.segment import (
    AlignmentRecord,
    MappingSummary,
    OriginalTextSnapshot,
    Segment,
    Side,
    Span,
    TargetSpan,
)

__all__ = [
    "AlignmentRecord",
    "AnnotationEntry",
    "ExternalAlignmentAnnotation",
    "MappingSummary",
    "OriginalTextSnapshot",
    "PublishCheck",
    "PublishDocument",
    "Segment",
    "Side",
    "Span",
    "TargetSpan",
]
