import random

import pytest

from models.category import TOTAL_HOURS, UNNAMED_CATEGORY, round_hours
from services.allocation import UNALLOCATED_LABEL, AllocationService
from tests.helpers import STORAGE_KEY


def ids(service):
    return [c.id for c in service.categories]


def hours_of(service, category_id):
    return service.find(category_id).hours


class TestLoading:
    """Tests for the initial state of AllocationService."""

    def test_first_run_uses_defaults(self, allocation):
        """Test that an empty store yields the three default categories."""
        categories = allocation.categories

        assert [c.name for c in categories] == ["Sleep", "Work", "Free"]
        assert allocation.total_used_hours() == TOTAL_HOURS
        assert allocation.remaining_hours() == 0

    def test_first_run_saves_defaults(self, allocation, memory_store, storage):
        """Test that the seed categories are written on first run."""
        assert STORAGE_KEY in memory_store.values
        assert storage.load() == allocation.categories

    def test_seed_ids_stable_across_sessions(self, allocation, storage):
        """Test that a later session sees the same seed ids."""
        later = AllocationService(storage)

        assert ids(later) == ids(allocation)

    def test_corrupted_snapshot_not_overwritten(self, memory_store, storage):
        """Test that unreadable data is left for diagnostics, not replaced."""
        memory_store.values[STORAGE_KEY] = "[{broken"

        service = AllocationService(storage)

        assert [c.name for c in service.categories] == ["Sleep", "Work", "Free"]
        assert memory_store.values[STORAGE_KEY] == "[{broken"
        assert memory_store.writes == 0

    def test_loads_saved_categories(self, storage, sample_categories):
        """Test that previously saved categories are loaded in order."""
        storage.save(sample_categories)

        service = AllocationService(storage)

        assert service.categories == sample_categories

    def test_categories_are_copies(self, allocation):
        """Test that editing a returned category doesn't change the model."""
        category = allocation.categories[0]
        category.hours = 0.0

        assert allocation.categories[0].hours == 56.0


class TestAddRemoveRename:
    """Tests for category lifecycle operations."""

    def test_add_category(self, allocation):
        """Test the generated name, color and zero hours of a new category."""
        category = allocation.add_category()

        assert category.name == "Category 4"
        assert category.hours == 0.0
        assert category.color_id == "blue"
        assert ids(allocation)[-1] == category.id

    def test_add_category_cycles_palette(self, empty_allocation):
        """Test that the ninth category wraps back to the first color."""
        added = [empty_allocation.add_category() for _ in range(9)]

        assert added[0].color_id == "red"
        assert added[7].color_id == "white"
        assert added[8].color_id == "red"
        assert added[8].name == "Category 9"

    def test_add_category_ids_unique(self, allocation):
        """Test that added categories get distinct ids."""
        first = allocation.add_category()
        second = allocation.add_category()

        assert first.id != second.id

    def test_remove_category(self, allocation):
        """Test removing a category by id."""
        work = allocation.categories[1]

        assert allocation.remove_category(work.id) is True
        assert allocation.find(work.id) is None
        assert allocation.remaining_hours() == 40.0

    def test_remove_missing_is_noop(self, allocation, memory_store):
        """Test that removing an unknown id changes nothing."""
        before = allocation.categories
        writes = memory_store.writes

        assert allocation.remove_category("missing") is False
        assert allocation.categories == before
        assert memory_store.writes == writes

    def test_rename_category(self, allocation):
        """Test renaming."""
        sleep = allocation.categories[0]

        allocation.rename_category(sleep.id, "Rest")

        assert allocation.find(sleep.id).name == "Rest"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rename_empty_uses_placeholder(self, allocation, name):
        """Test that an empty name becomes the placeholder."""
        sleep = allocation.categories[0]

        allocation.rename_category(sleep.id, name)

        assert allocation.find(sleep.id).name == UNNAMED_CATEGORY

    def test_rename_missing_is_noop(self, allocation):
        """Test renaming an unknown id."""
        assert allocation.rename_category("missing", "X") is False

    def test_set_color_without_validation(self, allocation):
        """Test that any color id is stored as given."""
        sleep = allocation.categories[0]

        allocation.set_category_color(sleep.id, "chartreuse")

        updated = allocation.find(sleep.id)
        assert updated.color_id == "chartreuse"
        assert updated.color.id == "red"


class TestSetCategoryHours:
    """Tests for the budget-preserving hours update."""

    def test_within_budget(self, allocation):
        """Test setting hours that fit."""
        work = allocation.categories[1]

        allocation.set_category_hours(work.id, 30)

        assert hours_of(allocation, work.id) == 30.0
        assert allocation.remaining_hours() == 10.0

    def test_clamps_to_available(self, allocation):
        """Test that requests above the ceiling saturate."""
        sleep, work, free = allocation.categories
        allocation.set_category_hours(free.id, 60)

        allocation.set_category_hours(work.id, 500)

        assert hours_of(allocation, work.id) == 52.0
        assert allocation.remaining_hours() == 0

    def test_clamps_negative_to_zero(self, allocation):
        """Test that negative requests become zero."""
        work = allocation.categories[1]

        allocation.set_category_hours(work.id, -5)

        assert hours_of(allocation, work.id) == 0.0

    def test_rounds_to_one_decimal(self, allocation):
        """Test rounding of fractional requests."""
        free = allocation.categories[2]

        allocation.set_category_hours(free.id, 10.26)

        assert hours_of(allocation, free.id) == 10.3

    def test_full_week_leaves_nothing_for_new_category(self, allocation):
        """Test that a new category can't take hours from a full week."""
        new = allocation.add_category()

        allocation.set_category_hours(new.id, 10)

        assert hours_of(allocation, new.id) == 0.0
        assert allocation.max_available_hours(new.id) == 0.0
        assert allocation.remaining_hours() == 0

    def test_missing_id_is_noop(self, allocation):
        """Test setting hours of an unknown category."""
        assert allocation.set_category_hours("missing", 5) is False

    def test_ceiling_never_rounds_over_budget(self, storage, sample_categories):
        """Test that rounding can't push the total past the budget."""
        sample_categories[1].hours = 100.05
        storage.save(sample_categories)
        service = AllocationService(storage)
        service.set_category_hours("A", 0)

        service.set_category_hours("C", 200)

        assert service.find("C").hours == 67.9
        assert service.total_used_hours() <= TOTAL_HOURS

    def test_matches_clamp_then_round(self, allocation):
        """Test the result equals round(clamp(x, 0, 168 - others), 1)."""
        sleep, work, free = allocation.categories
        allocation.set_category_hours(free.id, 20.5)

        for requested in [-3.0, 0.0, 12.34, 71.96, 72.0, 99.9]:
            allocation.set_category_hours(work.id, requested)
            ceiling = TOTAL_HOURS - 56.0 - 20.5
            expected = round_hours(min(max(requested, 0.0), ceiling))
            assert hours_of(allocation, work.id) == expected

    def test_random_updates_stay_within_budget(self, allocation):
        """Test that no sequence of updates exceeds the budget or goes negative."""
        rng = random.Random(168)
        allocation.add_category()
        allocation.add_category()
        category_ids = ids(allocation)

        for _ in range(500):
            allocation.set_category_hours(
                rng.choice(category_ids), rng.uniform(-20, 200)
            )
            assert allocation.total_used_hours() <= TOTAL_HOURS
            assert all(c.hours >= 0 for c in allocation.categories)

    def test_adjust_by_steps(self, allocation):
        """Test whole-block steps."""
        sleep, work, free = allocation.categories

        allocation.adjust_category_hours(work.id, -3)
        assert hours_of(allocation, work.id) == 37.0

        allocation.adjust_category_hours(sleep.id, 5)
        assert hours_of(allocation, sleep.id) == 59.0

    def test_adjust_stops_at_zero(self, allocation):
        """Test stepping below zero saturates at zero."""
        work = allocation.categories[1]

        allocation.adjust_category_hours(work.id, -100)

        assert hours_of(allocation, work.id) == 0.0


class TestMoveBlock:
    """Tests for moving a single block between categories."""

    def test_moves_one_hour(self, allocation):
        """Test the transfer of exactly one block."""
        sleep, work, free = allocation.categories

        assert allocation.move_block(free.id, work.id) is True

        assert hours_of(allocation, free.id) == 71.0
        assert hours_of(allocation, work.id) == 41.0
        assert allocation.total_used_hours() == TOTAL_HOURS

    def test_fractional_hours(self, storage, sample_categories):
        """Test that results are rounded to one decimal."""
        storage.save(sample_categories)
        service = AllocationService(storage)

        service.move_block("B", "C")

        assert service.find("B").hours == 39.5
        assert service.find("C").hours == 1.0

    def test_same_category_is_noop(self, allocation):
        """Test moving onto the same category."""
        sleep = allocation.categories[0]

        assert allocation.move_block(sleep.id, sleep.id) is False
        assert hours_of(allocation, sleep.id) == 56.0

    def test_source_below_one_hour_is_noop(self, allocation):
        """Test that a source with less than one block can't give one."""
        sleep = allocation.categories[0]
        new = allocation.add_category()
        allocation.set_category_hours(sleep.id, 55.5)
        allocation.set_category_hours(new.id, 0.5)

        assert allocation.move_block(new.id, sleep.id) is False
        assert hours_of(allocation, new.id) == 0.5

    def test_unknown_ids_are_noop(self, allocation):
        """Test moving from or to a missing category."""
        sleep = allocation.categories[0]

        assert allocation.move_block("missing", sleep.id) is False
        assert allocation.move_block(sleep.id, "missing") is False
        assert hours_of(allocation, sleep.id) == 56.0


class TestStatistics:
    """Tests for derived statistics."""

    def test_visible_categories(self, storage, sample_categories):
        """Test that zero-hour categories are hidden, order kept."""
        storage.save(sample_categories)
        service = AllocationService(storage)

        assert [c.id for c in service.visible_categories()] == ["A", "B"]

    def test_max_available_hours(self, allocation):
        """Test the ceiling is the budget minus the other categories."""
        sleep, work, free = allocation.categories

        assert allocation.max_available_hours(work.id) == 40.0
        assert allocation.max_available_hours("missing") == 0.0

    def test_blocks(self, storage, sample_categories):
        """Test expansion into one block per hour."""
        storage.save(sample_categories)
        service = AllocationService(storage)

        blocks = service.blocks()

        assert len(blocks) == 56 + 41
        assert blocks[0].category_id == "A"
        assert blocks[55].number == 56
        assert blocks[56].category_id == "B"
        assert blocks[-1].number == 41

    def test_stats_full_week(self, allocation):
        """Test that a full week has no unallocated row."""
        rows = allocation.stats()

        assert [r.label for r in rows] == ["Sleep", "Work", "Free"]
        assert rows[0].blocks == 56
        assert rows[0].percentage == pytest.approx(56 / 168 * 100)
        assert rows[0].color == "#E63946"

    def test_stats_with_remaining(self, allocation):
        """Test the unallocated row."""
        work = allocation.categories[1]
        allocation.set_category_hours(work.id, 19)

        rows = allocation.stats()

        assert rows[-1].label == UNALLOCATED_LABEL
        assert rows[-1].hours == 21.0
        assert rows[-1].percentage == pytest.approx(12.5)

    def test_stats_empty(self, empty_allocation):
        """Test that an empty collection shows the whole week unallocated."""
        rows = empty_allocation.stats()

        assert len(rows) == 1
        assert rows[0].label == UNALLOCATED_LABEL
        assert rows[0].hours == TOTAL_HOURS


class TestPersistenceAndEvents:
    """Tests for write-through and change notification."""

    def test_mutations_write_through(self, allocation, storage):
        """Test that each change is saved and reloadable."""
        work = allocation.categories[1]
        allocation.set_category_hours(work.id, 12)
        allocation.rename_category(work.id, "Job")

        reloaded = AllocationService(storage)

        assert reloaded.categories == allocation.categories

    def test_save_requests_widget_refresh(self, allocation, widget_center):
        """Test that a successful save asks the widget to refresh."""
        before = widget_center.reloads

        allocation.add_category()

        assert widget_center.reloads == before + 1

    def test_failed_save_does_not_raise(self, allocation, memory_store, storage):
        """Test that storage failures are recorded, not raised."""
        memory_store.unavailable = True
        work = allocation.categories[1]

        allocation.set_category_hours(work.id, 10)

        assert hours_of(allocation, work.id) == 10.0
        assert storage.last_error is not None

    def test_snapshot_is_immutable_copy(self, allocation):
        """Test that the snapshot is a tuple detached from the model."""
        snapshot = allocation.snapshot()
        snapshot[0].hours = 0.0

        assert isinstance(snapshot, tuple)
        assert [c.name for c in snapshot] == ["Sleep", "Work", "Free"]
        assert allocation.categories[0].hours == 56.0

    def test_subscribers_receive_snapshots(self, allocation):
        """Test change events carry an immutable copy of the categories."""
        received = []
        allocation.subscribe(received.append)
        work = allocation.categories[1]

        allocation.set_category_hours(work.id, 20)

        assert len(received) == 1
        assert isinstance(received[0], tuple)
        assert received[0][1].hours == 20.0

    def test_unsubscribe(self, allocation):
        """Test that unsubscribed listeners stop receiving events."""
        received = []
        unsubscribe = allocation.subscribe(received.append)
        unsubscribe()
        unsubscribe()

        allocation.add_category()

        assert received == []

    def test_noop_does_not_notify(self, allocation):
        """Test that no-op operations emit nothing."""
        received = []
        allocation.subscribe(received.append)
        sleep = allocation.categories[0]

        allocation.move_block(sleep.id, sleep.id)
        allocation.remove_category("missing")

        assert received == []

    def test_reload_notifies(self, allocation, storage, sample_categories):
        """Test that reload picks up external changes and notifies."""
        received = []
        allocation.subscribe(received.append)
        storage.save(sample_categories)

        allocation.reload()

        assert list(received[-1]) == sample_categories
