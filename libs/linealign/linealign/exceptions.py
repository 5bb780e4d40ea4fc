"""linealign exception hierarchy."""

from __future__ import annotations

from linealign.error_codes import ErrorCode


class LinealignError(Exception):
    """Base error for linealign."""


class ConfigurationError(LinealignError):
    """Raised when configuration or inputs are invalid."""


class ProviderError(LinealignError):
    """Raised when an external provider call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        error_code: ErrorCode | str | None = None,
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.error_code = error_code


class AnnotationFormatError(LinealignError):
    """Raised when an alignment annotation payload cannot be parsed."""

    error_code = ErrorCode.ANNOTATION_INVALID


class ViewNotReadyError(LinealignError):
    """Raised by an editor view that is not mounted or cannot report coordinates."""

    error_code = ErrorCode.VIEW_NOT_READY

    def __init__(self, view: str, message: str = "view is not mounted") -> None:
        super().__init__(f"{view}: {message}")
        self.view = view
        self.message = message
