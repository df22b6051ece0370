# egrid/domain/mechanics/mechanics_core.py
from dataclasses import dataclass

from egrid.domain.entities.grid import Cell, Coord, Grid, SpecialPoint
from egrid.domain.mechanics.mechanics_routers import GridRouter
from egrid.domain.mechanics.mechanics_weights import CellWeights

Endpoint = Cell | SpecialPoint | Coord


@dataclass(frozen=True)
class Measurement:
    path: list[Cell]
    base_mm: float  # path length without special-point offsets
    distance_mm: float


@dataclass
class Mechanics:
    grid: Grid
    router: GridRouter
    weights: CellWeights

    def coord_of(self, p: Endpoint) -> Coord:
        if isinstance(p, (Cell, SpecialPoint)):
            return p.coord
        return tuple(p)

    def route(self, a: Endpoint, b: Endpoint) -> list[Cell] | None:
        return self.router.route(self.coord_of(a), self.coord_of(b))

    def measure(self, a: Endpoint, b: Endpoint) -> Measurement | None:
        """Shortest path plus the fixed door/motor offset of each special endpoint."""
        path = self.route(a, b)
        if path is None:
            return None
        ends_in_special = isinstance(b, SpecialPoint)
        base = self.router.distance_mm(path, ends_in_special)
        extra = sum(
            self.weights.special_offset(p) for p in (a, b) if isinstance(p, SpecialPoint)
        )
        return Measurement(path=path, base_mm=base, distance_mm=base + extra)
