"""Base services container for dependency injection."""

from config import Config
from db.shared_store import SharedStore


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject an in-memory store for testing.

    Args:
        config: Application configuration object.
        store: Optional key-value store for testing. If provided, config's
               shared directory is ignored.
    """

    def __init__(self, config: Config, store=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            store: Optional key-value store for dependency injection (testing).
                   If None, creates SharedStore from config.
        """
        self.config = config
        self.store = store if store is not None else SharedStore(config)

        # Lazy import to avoid circular dependencies
        from services.allocation import AllocationService
        from services.storage import CategoryStorage
        from services.widget import WidgetCenter, WidgetTimelineProvider

        self.widget_center = WidgetCenter(
            self.store, enabled=config.widget_refresh_enabled
        )
        self.storage = CategoryStorage(
            self.store, config.storage_key, widget_center=self.widget_center
        )
        self.allocation = AllocationService(self.storage)
        self.widget = WidgetTimelineProvider(self.store, config.storage_key)
