"""Shared pytest fixtures for all tests."""

import pytest

from config import Config
from models.category import Category
from services.allocation import AllocationService
from services.base import Services
from services.storage import CategoryStorage
from tests.helpers import STORAGE_KEY, MemoryStore, RecordingWidgetCenter


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "blockstime",
        shared_dir=tmp_path / "blockstime" / "shared",
        app_group_id="group.test.blockstime",
        storage_key=STORAGE_KEY,
        log_level="DEBUG",
        log_dir=tmp_path / "blockstime" / "logs",
        widget_refresh_enabled=True,
    )


@pytest.fixture
def memory_store():
    """Create an empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def widget_center():
    """Create a widget center double that records refresh requests."""
    return RecordingWidgetCenter()


@pytest.fixture
def storage(memory_store, widget_center):
    """Create a CategoryStorage backed by the in-memory store."""
    return CategoryStorage(memory_store, STORAGE_KEY, widget_center=widget_center)


@pytest.fixture
def allocation(storage):
    """Create an AllocationService starting from the default categories.

    Returns:
        AllocationService: Sleep 56h, Work 40h, Free 72h.
    """
    return AllocationService(storage)


@pytest.fixture
def empty_allocation(storage):
    """Create an AllocationService with no categories."""
    service = AllocationService(storage)
    for category in service.categories:
        service.remove_category(category.id)
    return service


@pytest.fixture
def sample_categories():
    """A fixed list of categories with known ids."""
    return [
        Category(id="A", name="Sleep", hours=56.0, color_id="red"),
        Category(id="B", name="Work", hours=40.5, color_id="orange"),
        Category(id="C", name="Empty", hours=0.0, color_id="blue"),
    ]


@pytest.fixture
def services(test_config, memory_store):
    """Create a Services container with an in-memory store.

    Args:
        test_config: Test configuration fixture.
        memory_store: In-memory store fixture.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, store=memory_store)
