"""Category storage service: loads and saves the shared snapshot."""

from typing import List, Optional

from db.errors import StorageError
from db.snapshot import decode_categories, encode_categories
from logger import get_logger
from models.category import Category, default_categories

logger = get_logger()


class CategoryStorage:
    """Persistence gateway for the category snapshot.

    Failures never propagate: loading falls back to the seed categories
    and saving reports False. The most recent failure is kept in
    ``last_error`` for diagnostics and cleared by the next success.
    ``snapshot_missing`` tells whether the last load found no snapshot at
    all, as opposed to one that could not be read.

    Args:
        store: Key-value store (SharedStore or a test double).
        storage_key: Key the snapshot lives under.
        widget_center: Optional refresh target notified after each save.
    """

    def __init__(self, store, storage_key: str, widget_center=None):
        self.store = store
        self.storage_key = storage_key
        self.widget_center = widget_center
        self.last_error: Optional[StorageError] = None
        self.snapshot_missing = False

    def load(self) -> List[Category]:
        """Load the persisted categories.

        Returns:
            The stored categories in order, or the seed categories when
            nothing has been saved yet or the snapshot can't be read.
        """
        self.snapshot_missing = False
        try:
            data = self.store.get(self.storage_key)
            if data is None:
                logger.debug(f"No snapshot under '{self.storage_key}', using defaults")
                self.last_error = None
                self.snapshot_missing = True
                return default_categories()
            categories = decode_categories(data)
        except StorageError as e:
            logger.error(f"Failed to load categories: {e}")
            self.last_error = e
            return default_categories()

        self.last_error = None
        logger.debug(f"Loaded {len(categories)} categories")
        return categories

    def save(self, categories: List[Category]) -> bool:
        """Persist categories and ask the widget to refresh.

        Returns:
            True if the snapshot was written, False otherwise.
        """
        try:
            data = encode_categories(categories)
            self.store.set(self.storage_key, data)
        except StorageError as e:
            logger.error(f"Failed to save categories: {e}")
            self.last_error = e
            return False

        self.last_error = None
        logger.debug(f"Saved {len(categories)} categories ({len(data)} bytes)")

        if self.widget_center is not None:
            self.widget_center.reload_all_timelines()
        return True
