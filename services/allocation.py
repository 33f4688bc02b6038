"""Allocation service: the category collection and the weekly hour budget."""

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from logger import get_logger
from models.category import (
    BLOCK_HOURS,
    TOTAL_HOURS,
    UNNAMED_CATEGORY,
    Category,
    floor_hours,
    round_hours,
    sum_hours,
)
from models.layout import Block
from models.palette import color_for_index
from services.grid_layout import expand_blocks

logger = get_logger()

UNALLOCATED_LABEL = "Unallocated"
UNALLOCATED_COLOR = "#666666"

Listener = Callable[[Tuple[Category, ...]], None]


@dataclass(frozen=True)
class CategoryStat:
    """One entry of the statistics bar."""

    label: str
    hours: float
    blocks: int
    percentage: float
    color: str


class AllocationService:
    """Owns the categories and keeps their hours within the weekly budget.

    Every mutation writes the collection through to storage and notifies
    subscribers with an immutable copy of the categories.

    Args:
        storage: Persistence gateway with load(), save(categories) and a
            snapshot_missing flag.
    """

    def __init__(self, storage):
        self.storage = storage
        self._categories: List[Category] = []
        self._listeners: List[Listener] = []
        self.reload()

    @property
    def categories(self) -> List[Category]:
        """Copies of the categories, in collection order."""
        return [replace(c) for c in self._categories]

    def snapshot(self) -> Tuple[Category, ...]:
        """Immutable copy of the categories, as sent to subscribers."""
        return tuple(replace(c) for c in self._categories)

    def find(self, category_id: str) -> Optional[Category]:
        """Get a copy of a category by id, or None."""
        category = self._get(category_id)
        return replace(category) if category else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with a tuple of category copies after each change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reload(self) -> None:
        """Replace the in-memory collection with the persisted one.

        On first run the seed categories are saved straight away, so their
        ids stay the same for later sessions and for the widget.
        """
        self._categories = self.storage.load()
        if self.storage.snapshot_missing:
            logger.info("No saved categories, saving the defaults")
            self.storage.save(self._categories)
        self._notify()

    # Category operations

    def add_category(self) -> Category:
        """Append a new empty category with a generated name and color."""
        count = len(self._categories)
        category = Category(
            name=f"Category {count + 1}",
            hours=0.0,
            color_id=color_for_index(count).id,
        )
        self._categories.append(category)
        logger.debug(f"Added category {category.id} ({category.name})")
        self._changed()
        return replace(category)

    def remove_category(self, category_id: str) -> bool:
        category = self._get(category_id)
        if category is None:
            return False
        self._categories.remove(category)
        logger.debug(f"Removed category {category_id}")
        self._changed()
        return True

    def rename_category(self, category_id: str, new_name: str) -> bool:
        """Rename a category; an empty name becomes the placeholder."""
        category = self._get(category_id)
        if category is None:
            return False
        new_name = new_name.strip()
        category.name = new_name if new_name else UNNAMED_CATEGORY
        self._changed()
        return True

    def set_category_color(self, category_id: str, color_id: str) -> bool:
        category = self._get(category_id)
        if category is None:
            return False
        category.color_id = color_id
        self._changed()
        return True

    def set_category_hours(self, category_id: str, requested_hours: float) -> bool:
        """Set a category's hours, clamped to what the budget leaves for it.

        Requests above the ceiling saturate at the ceiling and negative
        requests become zero; the result is rounded to one decimal.

        Returns:
            True if the category exists, False otherwise.
        """
        category = self._get(category_id)
        if category is None:
            return False
        max_available = max(0.0, self.max_available_hours(category_id))
        new_hours = round_hours(min(max(0.0, requested_hours), max_available))
        if new_hours > max_available:
            new_hours = floor_hours(max_available)
        category.hours = new_hours
        self._changed()
        return True

    def adjust_category_hours(self, category_id: str, steps: int) -> bool:
        """Move a category's hours by whole blocks (the slider step)."""
        category = self._get(category_id)
        if category is None:
            return False
        return self.set_category_hours(
            category_id, category.hours + steps * BLOCK_HOURS
        )

    def move_block(self, from_id: str, to_id: str) -> bool:
        """Transfer one block of hours from one category to another.

        Returns:
            True if a block moved. Moving onto the same category, from or to
            an unknown id, or from a category with less than one block is a
            no-op.
        """
        if from_id == to_id:
            return False
        source = self._get(from_id)
        target = self._get(to_id)
        if source is None or target is None or source.hours < BLOCK_HOURS:
            return False

        source.hours = round_hours(source.hours - BLOCK_HOURS)
        target.hours = round_hours(target.hours + BLOCK_HOURS)
        logger.debug(f"Moved one block from {from_id} to {to_id}")
        self._changed()
        return True

    # Statistics

    def total_used_hours(self) -> float:
        return sum_hours(c.hours for c in self._categories)

    def remaining_hours(self) -> float:
        return sum_hours([TOTAL_HOURS, *(-c.hours for c in self._categories)])

    def visible_categories(self) -> List[Category]:
        """Categories with hours, in collection order."""
        return [replace(c) for c in self._categories if c.hours > 0]

    def max_available_hours(self, category_id: str) -> float:
        """The most hours the given category may hold right now."""
        others = [c.hours for c in self._categories if c.id != category_id]
        return sum_hours([TOTAL_HOURS, *(-h for h in others)])

    def blocks(self) -> List[Block]:
        """Expand visible categories into one Block per hour, in order."""
        return expand_blocks(self._categories)

    def stats(self) -> List[CategoryStat]:
        """Per-category statistics plus the unallocated remainder.

        The unallocated row appears while hours remain or when there are
        no categories at all.
        """
        rows = [
            CategoryStat(
                label=c.name,
                hours=c.hours,
                blocks=c.blocks_count,
                percentage=c.percentage,
                color=c.color.main,
            )
            for c in self._categories
        ]
        remaining = self.remaining_hours()
        if remaining > 0 or not self._categories:
            rows.append(
                CategoryStat(
                    label=UNALLOCATED_LABEL,
                    hours=remaining,
                    blocks=0,
                    percentage=remaining / TOTAL_HOURS * 100,
                    color=UNALLOCATED_COLOR,
                )
            )
        return rows

    def _get(self, category_id: str) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def _changed(self) -> None:
        self.storage.save(self._categories)
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
