"""Editor view abstractions."""

from linealign.views.base import EditorView, ScrollAnchor, ScrollListener
from linealign.views.memory import TextBufferView

__all__ = ["EditorView", "ScrollAnchor", "ScrollListener", "TextBufferView"]
