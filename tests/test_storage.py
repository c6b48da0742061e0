"""
Tests for the storage backends and the backend registry.
"""

import pytest

from datalayer.errors import InvalidInputError, RecordNotFoundError
from datalayer.storage import (
    MemoryStorage,
    ReadOnlyStorage,
    Record,
    SlotStorage,
    StorageType,
    available_backends,
    get_storage,
)


class TestRemoval:
    """Tests for remove() semantics on every full backend."""

    def test_remove_takes_exactly_one_record(self, full_storage):
        """remove(2) should drop Goku and keep the others in order."""
        assert full_storage.remove(2) == "Goku"
        assert full_storage.list() == ["Jane", "John", "Vegeta"]

    def test_second_remove_is_not_found(self, full_storage):
        """Removing the same id twice must fail the second time."""
        full_storage.remove(2)
        with pytest.raises(RecordNotFoundError) as exc:
            full_storage.remove(2)
        assert exc.value.record_id == 2
        assert full_storage.count() == 3

    @pytest.mark.parametrize("record_id", [4, 5, 99, 10_000])
    def test_missing_id_leaves_state_unchanged(self, full_storage, record_id):
        """Unknown ids signal not-found and keep the record count."""
        before = full_storage.list()
        with pytest.raises(RecordNotFoundError):
            full_storage.remove(record_id)
        assert full_storage.list() == before

    def test_ids_are_not_renumbered(self, full_storage):
        """Ids stay attached to their records after a removal."""
        full_storage.remove(1)
        assert full_storage.get(3) == "Vegeta"
        assert [r.id for r in full_storage.entries()] == [0, 2, 3]

    @pytest.mark.parametrize("record_id", [-1, "2", 2.0, None, True])
    def test_invalid_id_rejected(self, full_storage, record_id):
        """Ids must be non-negative integers."""
        with pytest.raises(InvalidInputError) as exc:
            full_storage.remove(record_id)
        assert exc.value.parameter == "record_id"
        assert full_storage.count() == 4


class TestReadAndWrite:
    """Tests for list/get/add/count."""

    def test_list_is_a_copy(self, full_storage):
        """Mutating the returned list must not touch backend state."""
        values = full_storage.list()
        values.clear()
        assert full_storage.count() == 4

    def test_add_assigns_next_id(self, full_storage):
        assert full_storage.add("Bulma") == 4
        assert full_storage.list()[-1] == "Bulma"

    def test_removed_ids_not_reused(self, full_storage):
        """A new record never takes the id of a removed one."""
        full_storage.remove(3)
        assert full_storage.add("Bulma") == 4
        with pytest.raises(RecordNotFoundError):
            full_storage.get(3)

    @pytest.mark.parametrize("value", ["", "   ", None, 42])
    def test_add_rejects_bad_values(self, full_storage, value):
        with pytest.raises(InvalidInputError):
            full_storage.add(value)
        assert full_storage.count() == 4

    def test_get_missing(self, full_storage):
        with pytest.raises(RecordNotFoundError):
            full_storage.get(7)

    def test_entries_are_records(self, full_storage):
        assert full_storage.entries()[0] == Record(id=0, value="Jane")

    def test_empty_backend(self):
        storage = MemoryStorage()
        assert storage.list() == []
        assert storage.count() == 0


class TestRecordEquality:
    """Records compare by field, backends by identity."""

    def test_records_equal_by_fields(self):
        assert Record(id=1, value="John") == Record(id=1, value="John")
        assert Record(id=1, value="John") != Record(id=2, value="John")

    def test_backends_equal_by_identity(self, seed_names):
        assert MemoryStorage(initial=seed_names) != MemoryStorage(initial=seed_names)


class TestReadOnlyStorage:
    """Tests for the read-only snapshot backend."""

    def test_reads(self, readonly_storage):
        assert readonly_storage.list() == ["Jane", "John", "Goku", "Vegeta"]
        assert readonly_storage.get(2) == "Goku"
        assert readonly_storage.count() == 4

    def test_has_no_mutators(self, readonly_storage):
        """Read-only means no stub remove/add at all."""
        assert not hasattr(readonly_storage, "remove")
        assert not hasattr(readonly_storage, "add")

    def test_from_reader_snapshots_ids(self, memory_storage):
        memory_storage.remove(0)
        snapshot = ReadOnlyStorage.from_reader(memory_storage)
        memory_storage.remove(1)
        assert snapshot.list() == ["John", "Goku", "Vegeta"]
        assert snapshot.get(1) == "John"
        with pytest.raises(RecordNotFoundError):
            snapshot.get(0)


class TestRegistry:
    """Tests for register_backend/get_storage."""

    def test_all_types_registered(self):
        backends = available_backends()
        assert backends[StorageType.MEMORY] is MemoryStorage
        assert backends[StorageType.SLOT] is SlotStorage
        assert backends[StorageType.READONLY] is ReadOnlyStorage

    def test_get_storage_by_string(self, seed_names):
        storage = get_storage("slot", initial=seed_names)
        assert isinstance(storage, SlotStorage)
        assert storage.list() == seed_names

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown storage type"):
            get_storage("redis")

    def test_describe(self, readonly_storage):
        info = readonly_storage.describe()
        assert info["storage_type"] == "readonly"
        assert info["contracts"] == ["RecordReader"]
        assert info["count"] == 4
