"""Line alignment core: mapping generation and correspondence resolution."""

from linealign.alignment.annotations import (
    apply_segmentation,
    generate_file_segmentation,
    reconstruct_segments,
)
from linealign.alignment.mapping_generator import generate_mappings, summarize_mappings
from linealign.alignment.resolver import CorrespondenceResolver, ResolutionTier

__all__ = [
    "CorrespondenceResolver",
    "ResolutionTier",
    "apply_segmentation",
    "generate_file_segmentation",
    "generate_mappings",
    "reconstruct_segments",
    "summarize_mappings",
]
