"""Publish/export of alignments."""

from linealign.export.publisher import build_publish_document, validate_publish

__all__ = ["build_publish_document", "validate_publish"]
