"""Fixed color palette shared by the planner and the widget."""

import re
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class PaletteEntry:
    """A selectable category color.

    Attributes:
        id: Short identifier referenced by Category.color_id.
        main: Main fill color as a hex string.
        light: Highlight color as a hex string.
        dark: Border/shadow color as a hex string.
        glow: Glow color as a hex string.
    """

    id: str
    main: str
    light: str
    dark: str
    glow: str


PALETTE: List[PaletteEntry] = [
    PaletteEntry("red", "#E63946", "#FF6B6B", "#A1161E", "#E63946"),
    PaletteEntry("orange", "#F77F00", "#FFA500", "#D66E00", "#F77F00"),
    PaletteEntry("green", "#06A77D", "#00D9A3", "#045A52", "#06A77D"),
    PaletteEntry("blue", "#3A86FF", "#72B4FF", "#1E3A8A", "#3A86FF"),
    PaletteEntry("purple", "#8338EC", "#A867F3", "#4C1D95", "#8338EC"),
    PaletteEntry("deepOrange", "#FB5607", "#FF8C42", "#C41E3A", "#FB5607"),
    PaletteEntry("pink", "#FF006E", "#FF5C9A", "#AD004C", "#FF006E"),
    PaletteEntry("white", "#F1FAEE", "#FFFFFF", "#BDC4CB", "#F1FAEE"),
]


def find_color(color_id: str) -> PaletteEntry:
    """Look up a palette entry by id, falling back to the first entry."""
    for entry in PALETTE:
        if entry.id == color_id:
            return entry
    return PALETTE[0]


def color_for_index(index: int) -> PaletteEntry:
    """Pick a palette entry by cycling through the palette."""
    return PALETTE[index % len(PALETTE)]


def hex_to_rgba(value: str) -> Tuple[int, int, int, int]:
    """Parse a hex color string into an (r, g, b, a) tuple.

    Accepts 3-digit RGB, 6-digit RGB and 8-digit ARGB forms. Anything
    else (including unparseable digits) yields opaque black.
    """
    digits = re.sub(r"[^0-9A-Za-z]", "", value)
    try:
        number = int(digits, 16)
    except ValueError:
        return (0, 0, 0, 255)

    if len(digits) == 3:
        return (
            (number >> 8) * 17,
            (number >> 4 & 0xF) * 17,
            (number & 0xF) * 17,
            255,
        )
    if len(digits) == 6:
        return (number >> 16, number >> 8 & 0xFF, number & 0xFF, 255)
    if len(digits) == 8:
        return (number >> 16 & 0xFF, number >> 8 & 0xFF, number & 0xFF, number >> 24)
    return (0, 0, 0, 255)
