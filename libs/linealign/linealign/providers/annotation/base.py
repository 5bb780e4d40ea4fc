"""Alignment annotation provider base class."""

from abc import ABC, abstractmethod

from linealign.models.annotation import ExternalAlignmentAnnotation


class AlignmentAnnotationProvider(ABC):
    """Abstract base class for alignment-inference services."""

    @abstractmethod
    async def fetch_annotation(self, text_id: str) -> ExternalAlignmentAnnotation | None:
        """Fetch the alignment annotation for a text.

        Args:
            text_id: Identifier of the text (or text pair) in the service.

        Returns:
            The parsed annotation, or None when the service has none for `text_id`.
        """
        ...

    async def close(self) -> None:  # pragma: no cover
        return None
