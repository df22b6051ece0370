from dataclasses import dataclass

from egrid.domain.entities.grid import Cell, Grid, SpecialPoint, SpecialPointKind


@dataclass(frozen=True)
class CellWeights:
    """Distance constants in millimetres; defaults reproduce the cabinet rules."""

    wide: float = 100.0
    narrow: float = 50.0
    initial_move: float = 100.0
    terminal: float = 200.0
    door: float = 1000.0
    motor: float = 500.0

    def cell_weight(self, grid: Grid, cell: Cell) -> float:
        # wide rows cost more per step than column-only rows
        return self.wide if grid.has_horizontal_neighbor(cell.row, cell.col) else self.narrow

    def special_offset(self, point: SpecialPoint | None) -> float:
        if point is None:
            return 0.0
        return self.door if point.kind is SpecialPointKind.DOOR else self.motor


DEFAULT_WEIGHTS = CellWeights()
