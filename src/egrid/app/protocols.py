from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from egrid.domain.entities.grid import Cell
from egrid.domain.entities.references import ComponentMapping, StandardMeasurement

# Column layout of the measurement sheet; row 1 is a header.
RESULT_COL, ORIGIN_COL, DESTINATION_COL = 1, 2, 3


# ------------- Mechanics --------------------
@runtime_checkable
class Router(Protocol):
    """
    Responsibilities:
      • Find the cheapest cell path between two grid locations.
      • Convert a path into a physical length (millimetres).
    """

    def route(self, a, b) -> list[Cell] | None: ...
    def distance_mm(self, path, ends_in_special: bool = False) -> float: ...


# ------------- Persistence --------------------
@runtime_checkable
class MappingStore(Protocol):
    """
    Flat keyed table of component mappings for one document.
    ``load`` returns an empty mapping when nothing was saved yet and raises
    PersistenceError when the saved table cannot be read.
    """

    def load(self) -> dict[str, ComponentMapping]: ...
    def save(self, mappings: Mapping[str, ComponentMapping]) -> None: ...


@runtime_checkable
class MeasurementStore(Protocol):
    def load(self) -> list[StandardMeasurement]: ...
    def save(self, rules: Iterable[StandardMeasurement]) -> None: ...


# ------------- Tabular source --------------------
@runtime_checkable
class TabularSource(Protocol):
    """
    The measurement sheet: result in column 1, origin and destination
    reference text in columns 2 and 3. Rows and columns are 1-based.
    """

    def last_row(self) -> int | None:
        """Last used row, or None if the source cannot tell."""

    def read(self, row: int, col: int) -> object | None: ...
    def write(self, row: int, col: int, value: object) -> None: ...
    def clear(self, row: int, col: int) -> None: ...


def cell_text(table: TabularSource, row: int, col: int) -> str:
    value = table.read(row, col)
    return "" if value is None else str(value)


def is_blank(value: object | None) -> bool:
    return value is None or str(value) == ""
