# egrid/domain/entities/grid.py
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from egrid.errors import GridConfigError

Coord = tuple[int, int]  # (row, col) in global grid coordinates

# up, down, left, right
_STEPS: tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True, order=True)
class Cell:
    row: int
    col: int

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


class SpecialPointKind(Enum):
    DOOR = "door"
    MOTOR = "motor"


@dataclass(frozen=True)
class SpecialPoint:
    """Door or motor terminal of one section, identified without any UI state."""

    section_index: int
    kind: SpecialPointKind
    coord: Coord

    @property
    def label(self) -> str:
        return f"{self.kind.value.capitalize()} {self.section_index + 1}"


class Grid:
    """
    Sparse cabinet grid made of identical sections laid side by side.

    Even rows of a section are fully populated; odd rows only hold the
    section's first column. Coordinates are global: local column ``c`` of
    section ``s`` lives at ``s * cols + c``.
    """

    def __init__(self, sections: int, rows: int, cols: int, cells: dict[Coord, Cell]):
        self.sections, self.rows, self.cols = sections, rows, cols
        self._cells = cells
        self._special: dict[tuple[SpecialPointKind, int], SpecialPoint] = {}
        for s in range(sections):
            first_col = s * cols
            self._special[(SpecialPointKind.DOOR, s)] = SpecialPoint(
                s, SpecialPointKind.DOOR, (0, first_col)
            )
            self._special[(SpecialPointKind.MOTOR, s)] = SpecialPoint(
                s, SpecialPointKind.MOTOR, (rows - 1, first_col + cols - 1)
            )

    @classmethod
    def build(cls, sections: int, rows: int, cols: int) -> "Grid":
        for name, value in (("sections", sections), ("rows", rows), ("cols", cols)):
            if value <= 0:
                raise GridConfigError(f"{name} must be > 0, got {value}")

        cells: dict[Coord, Cell] = {}
        for s in range(sections):
            for row in range(rows):
                local_cols = range(cols) if row % 2 == 0 else range(1)
                for c in local_cols:
                    cell = Cell(row, s * cols + c)
                    cells[cell.coord] = cell
        return cls(sections, rows, cols, cells)

    # ---------------- cells ----------------

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    def __contains__(self, coord: Coord) -> bool:
        return coord in self._cells

    def cell_at(self, row: int, col: int) -> Cell | None:
        return self._cells.get((row, col))

    def has_horizontal_neighbor(self, row: int, col: int) -> bool:
        return (row, col - 1) in self._cells or (row, col + 1) in self._cells

    def neighbors(self, cell: Cell) -> list[Cell]:
        out = []
        for dr, dc in _STEPS:
            n = self._cells.get((cell.row + dr, cell.col + dc))
            if n is not None:
                out.append(n)
        return out

    # ------------- special points -------------

    def special_point(self, kind: SpecialPointKind, section_index: int) -> SpecialPoint:
        try:
            return self._special[(kind, section_index)]
        except KeyError:
            raise ValueError(f"No {kind.value} in section {section_index}") from None

    @property
    def doors(self) -> list[SpecialPoint]:
        return [self._special[(SpecialPointKind.DOOR, s)] for s in range(self.sections)]

    @property
    def motors(self) -> list[SpecialPoint]:
        return [self._special[(SpecialPointKind.MOTOR, s)] for s in range(self.sections)]

    @property
    def special_points(self) -> list[SpecialPoint]:
        return self.doors + self.motors
