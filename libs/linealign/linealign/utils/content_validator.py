"""Check that an edited text only differs from its baseline by line breaks."""

from __future__ import annotations

_LINE_BREAKS = str.maketrans("", "", "\r\n")


def strip_line_breaks(text: str) -> str:
    return text.translate(_LINE_BREAKS)


def is_valid(original: str, current: str) -> bool:
    """True when `current` only adds or removes line breaks relative to `original`."""
    if original == current:
        return True
    return strip_line_breaks(original) == strip_line_breaks(current)
