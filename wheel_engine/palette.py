"""Segment colours and winner label cleanup for outcome consumers."""

import re
from typing import List, Sequence

DEFAULT_PALETTE = ("#efb71d", "#24a643", "#4d7ceb", "#d82135")

# Light backgrounds that need dark text
_LIGHT_COLORS = {"#efb71d", "#24a643"}

_TICKET_SUFFIXES = (
    re.compile(r"\s*[-–—]\s*T\d+", re.IGNORECASE),  # "Name - T001"
    re.compile(r"\s*\(T\d+\)", re.IGNORECASE),  # "Name (T001)"
    re.compile(r"\s*T\d+\s*", re.IGNORECASE),  # "Name T001"
)


def segment_color(index: int, palette: Sequence[str] = DEFAULT_PALETTE) -> str:
    return palette[index % len(palette)]


def segment_colors(count: int, palette: Sequence[str] = DEFAULT_PALETTE) -> List[str]:
    """Colour for every segment, cycling through the palette."""
    return [segment_color(i, palette) for i in range(count)]


def text_color_for(background: str) -> str:
    """Black text on the light palette colours, white otherwise."""
    return "#000000" if background.lower() in _LIGHT_COLORS else "#FFFFFF"


def strip_ticket_suffix(label: str) -> str:
    """Remove an embedded ticket number such as "John Doe - T001"."""
    for pattern in _TICKET_SUFFIXES:
        label = pattern.sub("", label, count=1)
    return label.strip()
