"""linealign - line-based alignment of a source text and its translation."""

from linealign.alignment import CorrespondenceResolver, generate_mappings
from linealign.models import AlignmentRecord, ExternalAlignmentAnnotation, Side, Span
from linealign.sync import ViewSynchronizer
from linealign.utils import is_valid, segment
from linealign.workspace import Workspace

__version__ = "0.1.0"

__all__ = [
    "AlignmentRecord",
    "CorrespondenceResolver",
    "ExternalAlignmentAnnotation",
    "Side",
    "Span",
    "ViewSynchronizer",
    "Workspace",
    "generate_mappings",
    "is_valid",
    "segment",
]
