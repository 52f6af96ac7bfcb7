"""Decorative symbol stripping for free-text fields.

Upstream senders prefix country and month labels with emoji.
They are removed before country matching and display.
"""

from __future__ import annotations

_DECORATIVE_RANGES = (
    (0x1F300, 0x1F9FF),
    (0x1F1E6, 0x1F1FF),
    (0x2600, 0x26FF),
    (0x2700, 0x27BF),
)
_JOINER_CODEPOINTS = frozenset({0xFE0F, 0x200D})


def strip_emojis(text: str) -> str:
    """Remove emoji and pictographic symbols from text.

    Args:
        text: Raw free-text value.

    Returns:
        Text without decorative symbols and surrounding whitespace.
    """
    kept = [char for char in text if not _is_decorative(ord(char))]
    return "".join(kept).strip()


def _is_decorative(codepoint: int) -> bool:
    """Return whether a codepoint belongs to a stripped symbol range."""
    if codepoint in _JOINER_CODEPOINTS:
        return True
    return any(start <= codepoint <= end for start, end in _DECORATIVE_RANGES)
