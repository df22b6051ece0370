# tests/services/test_mapping_table.py
import pytest

from egrid.domain.entities.references import ComponentMapping
from egrid.errors import PersistenceError
from egrid.io.stores import MemoryMappingStore
from egrid.services.mapping_table import MappingTable


class _FailingStore(MemoryMappingStore):
    def __init__(self, *, fail_load=False, fail_save=False):
        super().__init__()
        self.fail_load, self.fail_save = fail_load, fail_save

    def load(self):
        if self.fail_load:
            raise PersistenceError("broken.json", "parse")
        return super().load()

    def save(self, mappings):
        if self.fail_save:
            raise PersistenceError("readonly.json", "write")
        super().save(mappings)


class _RecordingHooks:
    def __init__(self):
        self.calls = []

    def mapping_changed(self, **kw):
        self.calls.append(("mapping_changed", kw))

    def persistence_warning(self, **kw):
        self.calls.append(("persistence_warning", kw))


@pytest.fixture
def table() -> MappingTable:
    return MappingTable(MemoryMappingStore())


def test_add_strips_marker_and_prefix_matches(table):
    table.add("X20:41*", 2, 1, "terminal", default_to_bottom=False)
    assert table.has("X20:41")
    assert table.has("X20:")  # any mapped terminal makes the group known
    assert table.resolve("X20:41").is_bottom_side is False
    table.add("X20:", 0, 1, "block X20", default_to_bottom=True)
    assert table.has("X20:")
    assert table.has("X20:7")  # group fallback
    assert table.resolve("X20:7").coord == (0, 1)
    assert table.resolve("X20:7").is_bottom_side is True
    # exact key wins over the group
    assert table.resolve("X20:41").coord == (2, 1)


def test_group_prefix_fallback_reports_default_side(table):
    table.add("X20:", 4, 0, default_to_bottom=False)
    m = table.resolve("X20:41")
    assert m is not None and m.is_bottom_side is False
    assert table.resolve("X20:41*").is_bottom_side is True


def test_marker_overrides_default_side(table):
    table.add("F1", 0, 0, default_to_bottom=False)
    assert table.resolve("F1*").is_bottom_side is True
    assert table.resolve("F1").is_bottom_side is False

    table.add("F2", 0, 1, default_to_bottom=True)
    assert table.resolve("F2").is_bottom_side is True
    assert table.resolve("F2*").is_bottom_side is True


def test_prefix_only_tried_for_block_references(table):
    table.add("K3", 2, 1)
    assert table.resolve("K31") is None
    assert table.resolve("K") is None
    assert table.resolve("Q9") is None
    assert not table.has("X1:2")


def test_resolve_returns_a_copy(table):
    table.add("F1", 0, 0)
    m = table.resolve("F1*")
    assert m.is_bottom_side
    assert table.all()[0].is_bottom_side is False
    assert table.all()[0] == ComponentMapping("F1", 0, 0)


def test_add_overwrites_and_writes_through():
    store = MemoryMappingStore()
    table = MappingTable(store)
    table.add("F1", 0, 0, "first")
    table.add("F1*", 2, 1, "second")
    assert len(table) == 1
    assert table.resolve("F1").description == "second"
    assert store.saves == 2
    assert store.saved["F1"].coord == (2, 1)


def test_remove_is_write_through_and_noop_when_absent():
    store = MemoryMappingStore()
    table = MappingTable(store)
    table.add("K3", 2, 1)
    assert table.remove("K3*") is True
    assert "K3" not in table
    assert store.saved == {}
    saves = store.saves
    assert table.remove("K3") is False
    assert store.saves == saves


def test_malformed_store_falls_back_to_empty():
    hooks = _RecordingHooks()
    table = MappingTable(_FailingStore(fail_load=True), hooks=hooks)
    assert len(table) == 0
    assert isinstance(table.load_error, PersistenceError)
    assert hooks.calls[0][0] == "persistence_warning"


def test_save_failure_is_reported_and_table_stays_usable():
    hooks = _RecordingHooks()
    table = MappingTable(_FailingStore(fail_save=True), hooks=hooks)
    with pytest.raises(PersistenceError):
        table.add("F1", 0, 0)
    # in-memory table remains authoritative
    assert table.resolve("F1").coord == (0, 0)
    assert hooks.calls[-1][0] == "persistence_warning"
    assert hooks.calls[-1][1]["action"] == "add"
