"""Editor view interface consumed by the resolver and the synchronizer."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal, Protocol, runtime_checkable

ScrollAnchor = Literal["start", "center"]
ScrollListener = Callable[[int], None]


@runtime_checkable
class EditorView(Protocol):
    """One side's editor.

    Offsets are document offsets (newlines included); line numbers are 1-based.
    Methods may raise `ViewNotReadyError` while the view is not mounted.
    """

    name: str

    @property
    def text(self) -> str: ...

    @property
    def line_count(self) -> int: ...

    def line_at(self, pos: int) -> int: ...

    def line_start(self, line: int) -> int: ...

    def line_end(self, line: int) -> int: ...

    def coords_at(self, pos: int) -> float | None:
        """Vertical offset of `pos` from the top of the viewport, in pixels."""
        ...

    def scroll_to(self, pos: int, anchor: ScrollAnchor = "start") -> None: ...

    def scroll_by(self, dy: float) -> None: ...

    def set_selection(self, anchor: int, head: int | None = None) -> None: ...

    def add_scroll_listener(self, listener: ScrollListener) -> None:
        """Register a callback receiving the top visible line after each scroll."""
        ...
