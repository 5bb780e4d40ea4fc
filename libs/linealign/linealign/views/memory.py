"""Headless editor view backed by a string.

Used by scripts and tests, and as the reference behaviour for real editor
adapters: every line is `line_height` pixels tall and the viewport shows
`viewport_height` pixels starting at `scroll_top`.
"""

from __future__ import annotations

import logging

from linealign.exceptions import ViewNotReadyError
from linealign.views.base import ScrollAnchor, ScrollListener

logger = logging.getLogger(__name__)


class TextBufferView:
    def __init__(
        self,
        name: str,
        text: str = "",
        *,
        line_height: float = 20.0,
        viewport_height: float = 400.0,
        mounted: bool = True,
    ) -> None:
        if line_height <= 0 or viewport_height <= 0:
            raise ValueError("line_height and viewport_height must be positive")
        self.name = name
        self.line_height = float(line_height)
        self.viewport_height = float(viewport_height)
        self.mounted = mounted
        self.scroll_top = 0.0
        self.selection: tuple[int, int] | None = None
        self._text = text
        self._line_starts = self._index(text)
        self._listeners: list[ScrollListener] = []

    @staticmethod
    def _index(text: str) -> list[int]:
        starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                starts.append(i + 1)
        return starts

    def _require_mounted(self) -> None:
        if not self.mounted:
            raise ViewNotReadyError(self.name)

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = self._index(text)
        self.selection = None
        self._set_scroll(self.scroll_top)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _clamp_pos(self, pos: int) -> int:
        return max(0, min(int(pos), len(self._text)))

    def _clamp_line(self, line: int) -> int:
        return max(1, min(int(line), self.line_count))

    def line_at(self, pos: int) -> int:
        return self._text.count("\n", 0, self._clamp_pos(pos)) + 1

    def line_start(self, line: int) -> int:
        return self._line_starts[self._clamp_line(line) - 1]

    def line_end(self, line: int) -> int:
        line = self._clamp_line(line)
        if line == self.line_count:
            return len(self._text)
        return self._line_starts[line] - 1

    @property
    def max_scroll(self) -> float:
        return max(0.0, self.line_count * self.line_height - self.viewport_height)

    @property
    def top_line(self) -> int:
        return self._clamp_line(int(self.scroll_top // self.line_height) + 1)

    def coords_at(self, pos: int) -> float | None:
        self._require_mounted()
        return (self.line_at(pos) - 1) * self.line_height - self.scroll_top

    def scroll_to(self, pos: int, anchor: ScrollAnchor = "start") -> None:
        self._require_mounted()
        top = (self.line_at(pos) - 1) * self.line_height
        if anchor == "center":
            top -= (self.viewport_height - self.line_height) / 2
        self._set_scroll(top)

    def scroll_by(self, dy: float) -> None:
        self._require_mounted()
        self._set_scroll(self.scroll_top + float(dy))

    def set_selection(self, anchor: int, head: int | None = None) -> None:
        self._require_mounted()
        a = self._clamp_pos(anchor)
        b = a if head is None else self._clamp_pos(head)
        self.selection = (min(a, b), max(a, b))

    def add_scroll_listener(self, listener: ScrollListener) -> None:
        self._listeners.append(listener)

    def _set_scroll(self, value: float) -> None:
        value = max(0.0, min(float(value), self.max_scroll))
        if value == self.scroll_top:
            return
        self.scroll_top = value
        top_line = self.top_line
        logger.debug("view scrolled (view=%s, scroll_top=%.1f, top_line=%s)", self.name, value, top_line)
        for listener in list(self._listeners):
            listener(top_line)
