# tests/app/test_measuring.py
import pytest

from egrid.app.controllers.measuring import MeasuringHandler
from egrid.app.protocols import RESULT_COL
from egrid.config.models import GridModel
from egrid.domain.entities.grid import Cell, SpecialPointKind
from egrid.domain.mechanics.mechanics_factory import build_mechanics
from egrid.io.tables import MemoryTable


@pytest.fixture
def handler() -> MeasuringHandler:
    return MeasuringHandler(build_mechanics(GridModel(sections=1, rows=3, cols=2)))


def test_door_to_motor_adds_both_offsets(handler):
    grid = handler.mechanics.grid
    door = grid.special_point(SpecialPointKind.DOOR, 0)
    motor = grid.special_point(SpecialPointKind.MOTOR, 0)
    m = handler.measure(door, motor)
    # 100 + 50 + 100, no terminal offset, then door 1000 + motor 500
    assert m.base_mm == 250
    assert m.distance_mm == 1750
    assert [c.coord for c in m.path] == [(0, 0), (1, 0), (2, 0), (2, 1)]


def test_cell_end_gets_terminal_offset(handler):
    door = handler.mechanics.grid.special_point(SpecialPointKind.DOOR, 0)
    m = handler.measure(door, Cell(2, 1))
    assert m.distance_mm == 100 + 50 + 100 + 200 + 1000


def test_picks_alternate_without_lock(handler):
    assert handler.pick(Cell(0, 0)) is None
    m = handler.pick(Cell(0, 1))
    assert m.distance_mm == 300
    # third pick starts a new selection
    assert handler.pick(Cell(2, 1)) is None
    assert handler.start == Cell(2, 1) and handler.end is None


def test_locked_point_measures_every_pick(handler):
    motor = handler.mechanics.grid.special_point(SpecialPointKind.MOTOR, 0)
    assert handler.lock(motor) is True
    a = handler.pick(Cell(2, 0))
    b = handler.pick(Cell(0, 1))
    assert a.distance_mm == 100 + 200 + 500
    assert b.distance_mm == 100 + 100 + 50 + 100 + 200 + 500
    assert handler.lock(motor) is False
    assert handler.locked is None and handler.start is None


def test_record_skips_measured_rows_and_delete_last(handler):
    table = MemoryTable([(None, "F1", "K3"), (10.0, "F2", "K3"), (None, "F3", "K3")])
    assert handler.pending_text(table) == "F1 - K3"
    assert handler.record(450.0, table) == 2
    assert handler.pending_text(table) == "F3 - K3"
    assert handler.record(300.0, table) == 4
    assert table.column(RESULT_COL) == [450.0, 10.0, 300.0]

    assert handler.delete_last(table) == 300.0
    assert table.read(4, RESULT_COL) is None
    assert handler.row == 4
    assert handler.pending_text(table) == "F3 - K3"


def test_delete_last_without_measurement_resets_cursor(handler):
    table = MemoryTable([(None, "F1", "K3")])
    assert handler.delete_last(table) is None
    assert handler.row == 2


def test_failed_measure_resets_selection():
    h = MeasuringHandler(build_mechanics(GridModel(sections=1, rows=4, cols=3)))
    motor = h.mechanics.grid.special_point(SpecialPointKind.MOTOR, 0)  # (3, 2) is not a cell
    h.pick(Cell(0, 0))
    assert h.pick(motor) is None
    assert h.start is None and h.end is None


def test_delete_last_leaves_text_results_alone(handler):
    table = MemoryTable([("n/a", "F1", "K3")])
    handler.row = 3
    assert handler.delete_last(table) is None
    assert table.read(2, RESULT_COL) == "n/a"
    assert handler.row == 3


def test_record_stops_at_max_row():
    h = MeasuringHandler(build_mechanics(GridModel(sections=1, rows=3, cols=2)), max_row=4)
    table = MemoryTable([(1.0, "F1", "K3"), (2.0, "F2", "K3"), (3.0, "F3", "K3")])
    assert h.record(450.0, table) is None
    assert table.read(5, RESULT_COL) is None
    assert table.column(RESULT_COL) == [1.0, 2.0, 3.0]
