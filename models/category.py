"""Category model for weekly time allocation."""

import math
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from models.palette import PaletteEntry, find_color

TOTAL_HOURS = 168.0
BLOCK_HOURS = 1.0
UNNAMED_CATEGORY = "Unnamed"


def round_hours(hours: float) -> float:
    """Round hours to one decimal place, halves away from zero."""
    return float(Decimal(repr(hours)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def floor_hours(hours: float) -> float:
    """Round hours down to one decimal place."""
    return float(Decimal(repr(hours)).quantize(Decimal("0.1"), rounding=ROUND_FLOOR))


def sum_hours(hours: Iterable[float]) -> float:
    """Add hour values in decimal so one-decimal amounts don't drift."""
    return float(sum((Decimal(repr(h)) for h in hours), Decimal(0)))


def new_category_id() -> str:
    """Generate an opaque unique category id."""
    return str(uuid.uuid4()).upper()


@dataclass
class Category:
    """A named bucket of weekly hours with a display color.

    Attributes:
        name: Display name.
        hours: Hours per week allocated to this category (>= 0).
        color_id: Palette entry id; unknown ids render with the first entry.
        id: Unique identifier, generated when not given.
    """

    name: str
    hours: float
    color_id: str
    id: str = field(default_factory=new_category_id)

    @property
    def color(self) -> PaletteEntry:
        return find_color(self.color_id)

    @property
    def blocks_count(self) -> int:
        """Number of blocks shown: one per whole or partial hour."""
        if self.hours <= 0:
            return 0
        return int(math.ceil(self.hours / BLOCK_HOURS))

    @property
    def percentage(self) -> float:
        """Share of the weekly budget, in percent."""
        return self.hours / TOTAL_HOURS * 100


def default_categories() -> List[Category]:
    """Seed data used on first run or when the snapshot can't be read."""
    return [
        Category(name="Sleep", hours=56.0, color_id="red"),
        Category(name="Work", hours=40.0, color_id="orange"),
        Category(name="Free", hours=72.0, color_id="green"),
    ]
