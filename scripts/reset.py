#!/usr/bin/env python3
"""Reset script for Blockstime.

This script will:
1. Remove every key from the shared storage (categories and widget state)
2. Save the default categories so the widget has data to show
"""

import sys

from config import load_config
from db.errors import StorageError
from db.shared_store import SharedStore
from services.diagnostics import force_save_defaults
from services.storage import CategoryStorage
from services.widget import WidgetCenter


def reset():
    """Reset the application state."""
    print("Blockstime Reset Script")
    print("=" * 50)

    config = load_config()
    store = SharedStore(config)

    print(f"\nShared storage: {store.get_store_path()}")
    print(f"App group: {config.app_group_id}")

    response = input("\nThis will delete ALL categories. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    try:
        keys = store.keys()
        for key in keys:
            store.remove(key)
    except StorageError as e:
        print(f"✗ Failed to clear shared storage: {e}")
        sys.exit(1)
    print(f"✓ Removed {len(keys)} keys from shared storage")

    print("\nSaving default categories...")
    widget_center = WidgetCenter(store, enabled=config.widget_refresh_enabled)
    storage = CategoryStorage(store, config.storage_key, widget_center=widget_center)
    if not force_save_defaults(storage):
        print(f"✗ Failed to save defaults: {storage.last_error}")
        sys.exit(1)

    print("✓ Reset complete")


if __name__ == "__main__":
    reset()
