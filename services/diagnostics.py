"""Diagnostics for the storage region shared with the widget."""

from dataclasses import dataclass, field
from typing import List, Optional

from db.errors import StorageError
from db.snapshot import decode_categories
from logger import get_logger
from models.category import Category, default_categories

logger = get_logger()

MAX_LISTED_KEYS = 20


@dataclass
class DiagnosticReport:
    """Outcome of a shared storage check.

    Attributes:
        app_group_id: Shared region that was checked.
        storage_key: Key the snapshot is expected under.
        store_accessible: Whether the shared region could be read.
        keys: Keys present in the shared region.
        snapshot_bytes: Size of the stored snapshot, None if absent.
        categories: Decoded categories, empty if missing or undecodable.
        error: Description of the first problem found.
    """

    app_group_id: str
    storage_key: str
    store_accessible: bool = False
    keys: List[str] = field(default_factory=list)
    snapshot_bytes: Optional[int] = None
    categories: List[Category] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def healthy(self) -> bool:
        return (
            self.store_accessible
            and self.snapshot_bytes is not None
            and self.error is None
        )

    def lines(self) -> List[str]:
        """Human-readable report, one line per entry."""
        out = [
            "=== Widget data sharing diagnostics ===",
            f"App group: {self.app_group_id}",
            f"Storage key: {self.storage_key}",
        ]
        if not self.store_accessible:
            out.append(f"✗ Cannot access shared storage: {self.error}")
            return out

        out.append(f"✓ Shared storage accessible ({len(self.keys)} keys)")
        for key in self.keys[:MAX_LISTED_KEYS]:
            out.append(f"  - {key}")
        if len(self.keys) > MAX_LISTED_KEYS:
            out.append(f"  ... and {len(self.keys) - MAX_LISTED_KEYS} more")

        if self.snapshot_bytes is None:
            out.append(f"✗ No data under '{self.storage_key}' (try force-save)")
            return out

        out.append(f"✓ Found data ({self.snapshot_bytes} bytes)")
        if self.error:
            out.append(f"✗ Decoding failed: {self.error}")
            return out

        out.append(f"✓ Decoded {len(self.categories)} categories")
        for category in self.categories:
            out.append(
                f"  - {category.name}: {category.hours}h (color: {category.color_id})"
            )
        return out


def run_diagnostics(store, storage_key: str, app_group_id: str) -> DiagnosticReport:
    """Check that the snapshot is reachable and decodable.

    Args:
        store: The shared key-value store.
        storage_key: Key the snapshot lives under.
        app_group_id: Name of the shared region, for the report.

    Returns:
        DiagnosticReport describing what was found.
    """
    report = DiagnosticReport(app_group_id=app_group_id, storage_key=storage_key)

    try:
        report.keys = store.keys()
        data = store.get(storage_key)
    except StorageError as e:
        report.error = str(e)
        logger.warning(f"Shared storage check failed: {e}")
        return report

    report.store_accessible = True
    if data is None:
        return report

    report.snapshot_bytes = len(data.encode("utf-8"))
    try:
        report.categories = decode_categories(data)
    except StorageError as e:
        report.error = str(e)
        logger.warning(f"Snapshot check failed: {e}")

    return report


def force_save_defaults(storage) -> bool:
    """Overwrite the snapshot with the seed categories.

    Args:
        storage: CategoryStorage to write through.

    Returns:
        True if the seed data was saved.
    """
    logger.info("Force-saving default categories")
    return storage.save(default_categories())
