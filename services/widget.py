"""Home-screen widget side: refresh signal and snapshot reader."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from db.errors import StorageError
from logger import get_logger
from models.category import Category
from models.layout import Block, GridLayout
from services.grid_layout import calculate_layout, expand_blocks, get_layout_policy
from services.storage import CategoryStorage

logger = get_logger()

RELOAD_REQUEST_KEY = "widgetReloadRequestedAt"

# Height of one legend row and the spacing between legend and grid
LEGEND_ROW_HEIGHT = 14.0
SECTION_SPACING = 2.0

# Legend item geometry: swatch, swatch-to-label gap, approximate glyph
# width of the 7pt label font, and the spacing between wrapped items
LEGEND_SWATCH_SIZE = 7.0
LEGEND_LABEL_GAP = 2.0
LEGEND_CHAR_WIDTH = 4.0
LEGEND_ITEM_SPACING = 4.0


class WidgetCenter:
    """Tells the widget host that the shared snapshot changed.

    The request is recorded as a timestamp in the shared store, where the
    widget reader picks it up on its next refresh.

    Args:
        store: The shared key-value store.
        enabled: When False, refresh requests are ignored.
    """

    def __init__(self, store, enabled: bool = True):
        self.store = store
        self.enabled = enabled

    def reload_all_timelines(self) -> bool:
        """Request a widget refresh.

        Returns:
            True if the request was recorded.
        """
        if not self.enabled:
            return False
        requested_at = datetime.now().isoformat(timespec="seconds")
        try:
            self.store.set(RELOAD_REQUEST_KEY, requested_at)
        except StorageError as e:
            logger.warning(f"Could not request widget refresh: {e}")
            return False
        logger.debug(f"Widget refresh requested at {requested_at}")
        return True

    def last_reload_request(self) -> Optional[datetime]:
        """When a refresh was last requested, if ever."""
        try:
            value = self.store.get(RELOAD_REQUEST_KEY)
        except StorageError as e:
            logger.warning(f"Could not read widget refresh request: {e}")
            return None
        if value is None:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.warning(f"Ignoring malformed refresh timestamp: {value!r}")
            return None


@dataclass(frozen=True)
class LegendItem:
    """A legend row under the widget grid."""

    name: str
    hours: float
    share: float
    color_id: str

    @property
    def label(self) -> str:
        return f"{self.name} {int(self.hours)}h"

    @property
    def width(self) -> float:
        """Estimated drawn width of the swatch and label."""
        text_width = len(self.label) * LEGEND_CHAR_WIDTH
        return LEGEND_SWATCH_SIZE + LEGEND_LABEL_GAP + text_width


@dataclass
class WidgetEntry:
    """What the widget draws at one point in time."""

    date: datetime
    categories: List[Category] = field(default_factory=list)

    def blocks(self) -> List[Block]:
        return expand_blocks(self.categories)

    def legend(self) -> List[LegendItem]:
        """Visible categories, most hours first, with their share of the total."""
        total = max(sum(c.hours for c in self.categories), 1.0)
        visible = sorted(
            (c for c in self.categories if c.hours > 0),
            key=lambda c: c.hours,
            reverse=True,
        )
        return [
            LegendItem(
                name=c.name,
                hours=c.hours,
                share=c.hours / total * 100,
                color_id=c.color_id,
            )
            for c in visible
        ]

    def legend_rows(self, family: str, width: float) -> int:
        """How many rows the legend wraps into across the widget width.

        Items are packed left to right and start a new row when the next
        one would overflow.
        """
        items = self.legend()
        if not items:
            return 0
        available = max(0.0, width - get_layout_policy(family).padding)
        rows = 1
        x = 0.0
        for item in items:
            if x > 0 and x + item.width > available:
                rows += 1
                x = 0.0
            x += item.width + LEGEND_ITEM_SPACING
        return rows

    def layout(
        self, family: str, width: float, height: float, legend_rows: int = 0
    ) -> GridLayout:
        """Lay out this entry's blocks for a widget family.

        Args:
            family: Widget family name (small, medium, large).
            width: Widget width.
            height: Widget height.
            legend_rows: Number of legend rows drawn under the grid.
        """
        policy = get_layout_policy(family)
        reserved = 0.0
        if legend_rows > 0:
            reserved = legend_rows * LEGEND_ROW_HEIGHT + SECTION_SPACING
        return calculate_layout(
            len(self.blocks()), width, height, policy, reserved_height=reserved
        )


class WidgetTimelineProvider:
    """Reads the shared snapshot on the widget's own schedule.

    Uses its own storage gateway, so it sees whatever the planner last
    saved and falls back to the seed categories the same way.

    Args:
        store: The shared key-value store.
        storage_key: Key the snapshot lives under.
    """

    def __init__(self, store, storage_key: str):
        self.storage = CategoryStorage(store, storage_key)
        self.widget_center = WidgetCenter(store)

    def entry(self) -> WidgetEntry:
        """Build an entry from the current snapshot."""
        categories = self.storage.load()
        visible = sum(1 for c in categories if c.hours > 0)
        logger.debug(
            f"Widget loaded {len(categories)} categories, {visible} visible"
        )
        return WidgetEntry(date=datetime.now(), categories=categories)

    def last_error(self) -> Optional[StorageError]:
        return self.storage.last_error

    def last_reload_request(self) -> Optional[datetime]:
        return self.widget_center.last_reload_request()
