"""Canonical error codes surfaced to callers and logs."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VIEW_NOT_READY = "VIEW_NOT_READY"

    ANNOTATION_INVALID = "ANNOTATION_INVALID"
    ANNOTATION_FETCH_FAILED = "ANNOTATION_FETCH_FAILED"
    ANNOTATION_TIMEOUT = "ANNOTATION_TIMEOUT"

    PUBLISH_INVALID = "PUBLISH_INVALID"
