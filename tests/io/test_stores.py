# tests/io/test_stores.py
import json

import pytest

from egrid.domain.entities.references import StandardMeasurement
from egrid.errors import PersistenceError
from egrid.io.stores import (
    JsonMappingStore,
    JsonMeasurementStore,
    mapping_file_for,
)
from egrid.services.mapping_table import MappingTable


def test_mapping_file_is_derived_from_document(tmp_path):
    assert mapping_file_for("C:/jobs/Cabinet 12.xlsx", tmp_path) == (
        tmp_path / "Cabinet 12_ComponentMapping.json"
    )
    assert mapping_file_for("wiring.xls").name == "wiring_ComponentMapping.json"


def test_round_trip_reproduces_table(tmp_path):
    path = tmp_path / "doc_ComponentMapping.json"
    table = MappingTable(JsonMappingStore(path))
    table.add("F1", 0, 0, "Fuse F1")
    table.add("X20:*", 2, 3, "Terminal block", default_to_bottom=True)
    table.add("K3", 6, 3)

    reloaded = MappingTable(JsonMappingStore(path))
    assert {m.reference: m for m in reloaded.all()} == {m.reference: m for m in table.all()}
    assert reloaded.load_error is None


def test_record_shape_on_disk(tmp_path):
    path = tmp_path / "doc_ComponentMapping.json"
    MappingTable(JsonMappingStore(path)).add("X2:", 4, 1, "Rekkeklemme", default_to_bottom=True)
    data = json.loads(path.read_text())
    assert data == {
        "X2:": {
            "key": "X2:",
            "row": 4,
            "col": 1,
            "defaultToBottom": True,
            "description": "Rekkeklemme",
        }
    }


def test_missing_file_loads_empty(tmp_path):
    assert JsonMappingStore(tmp_path / "nope.json").load() == {}
    assert JsonMeasurementStore(tmp_path / "nope.json").load() == []


@pytest.mark.parametrize("content", ["{not json", '{"F1": {"row": "x"}}', "[1, 2]"])
def test_malformed_file_raises_persistence_error(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(PersistenceError):
        JsonMappingStore(path).load()
    table = MappingTable(JsonMappingStore(path))
    assert len(table) == 0 and table.load_error is not None


def test_unwritable_location_raises_persistence_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    store = JsonMappingStore(blocker / "sub" / "map.json")
    table = MappingTable(store)
    with pytest.raises(PersistenceError):
        table.add("F1", 0, 0)
    assert table.has("F1")


def test_measurement_round_trip(tmp_path):
    path = tmp_path / "StandardMeasurements.json"
    rules = [
        StandardMeasurement("A1:1", "X1:", 1000.0),
        StandardMeasurement("PE", "", 350.0, enabled=False),
    ]
    JsonMeasurementStore(path).save(rules)
    assert JsonMeasurementStore(path).load() == rules
    assert json.loads(path.read_text())[0] == {
        "originText": "A1:1",
        "destinationText": "X1:",
        "distance": 1000.0,
        "enabled": True,
    }
