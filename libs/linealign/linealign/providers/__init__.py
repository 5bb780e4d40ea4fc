"""Provider abstractions for external services."""

from linealign.providers.registry import get_annotation_provider

__all__ = ["get_annotation_provider"]
