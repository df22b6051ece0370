# tests/app/test_survey.py
from egrid.app.controllers.survey import find_unmapped, guess_description
from egrid.io.stores import MemoryMappingStore
from egrid.io.tables import MemoryTable
from egrid.services.mapping_table import MappingTable


def test_find_unmapped_sorted_and_respects_groups():
    mappings = MappingTable(MemoryMappingStore())
    mappings.add("F1", 0, 0)
    mappings.add("X2:", 0, 1)
    table = MemoryTable(
        [
            (None, "F1*", "X2:41"),
            (None, "K3 / X2:7", "X5:1"),
            (450.0, "A1:1", "F2"),
            (None, "", "lowercase k4"),
        ]
    )
    assert find_unmapped(table, mappings) == ["A1:1", "F2", "K3", "X5:1"]


def test_guess_description():
    assert guess_description("F12") == "Fuse"
    assert guess_description("X2:41") == "Terminal block"
    assert guess_description("K3") == "Contactor/relay"
    assert guess_description("A1:1") == "Surge protector"
    assert guess_description("S7") == "Signal"
    assert guess_description("Q1") == ""
