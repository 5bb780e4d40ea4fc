"""Alignment annotation providers."""

from linealign.providers.annotation.base import AlignmentAnnotationProvider

__all__ = ["AlignmentAnnotationProvider"]
