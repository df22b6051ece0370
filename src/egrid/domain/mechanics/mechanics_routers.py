import heapq
import math
from collections.abc import Sequence

from egrid.app.protocols import Router
from egrid.domain.entities.grid import Cell, Coord, Grid
from egrid.domain.mechanics.mechanics_weights import DEFAULT_WEIGHTS, CellWeights


def shortest_path(
    start: Cell | Coord,
    end: Cell | Coord,
    grid: Grid,
    weights: CellWeights = DEFAULT_WEIGHTS,
) -> list[Cell] | None:
    """
    Dijkstra over the grid's 4-neighbourhood.

    Stepping onto a cell costs ``weights.cell_weight`` of that cell. Frontier
    entries are ordered by (cost, discovery sequence), so equal-cost entries
    pop in the order they were found. Returns None if either endpoint is not a
    grid cell or no path exists.
    """
    src, dst = _as_cell(start, grid), _as_cell(end, grid)
    if src is None or dst is None:
        return None

    dist: dict[Cell, float] = {src: 0.0}
    prev: dict[Cell, Cell] = {}
    seq = 0
    q: list[tuple[float, int, Cell]] = [(0.0, seq, src)]
    while q:
        d, _, u = heapq.heappop(q)
        if u == dst:
            break
        if d > dist.get(u, math.inf):
            continue  # stale
        for v in grid.neighbors(u):
            alt = d + weights.cell_weight(grid, v)
            if alt < dist.get(v, math.inf):
                dist[v] = alt
                prev[v] = u
                seq += 1
                heapq.heappush(q, (alt, seq, v))

    if dst not in dist:
        return None
    path = [dst]
    while path[-1] != src:
        path.append(prev[path[-1]])
    path.reverse()
    return path


def path_distance(
    path: Sequence[Cell],
    ends_in_special: bool,
    grid: Grid,
    weights: CellWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Physical length of a path in millimetres.

    ``initial_move`` + weight of every interior cell + ``terminal`` unless the
    path ends in a special point (those carry their own offset). A single-cell
    path is just the initial move.
    """
    if not path:
        return 0.0
    distance = weights.initial_move
    if len(path) == 1:
        return distance
    for cell in path[1:-1]:
        distance += weights.cell_weight(grid, cell)
    if not ends_in_special:
        distance += weights.terminal
    return distance


def _as_cell(p: Cell | Coord, grid: Grid) -> Cell | None:
    if isinstance(p, Cell):
        return p if p.coord in grid else None
    return grid.cell_at(*p)


class GridRouter(Router):
    def __init__(self, grid: Grid, weights: CellWeights = DEFAULT_WEIGHTS):
        self.grid, self.weights = grid, weights

    def route(self, a, b) -> list[Cell] | None:
        return shortest_path(a, b, self.grid, self.weights)

    def distance_mm(self, path, ends_in_special: bool = False) -> float:
        return path_distance(path, ends_in_special, self.grid, self.weights)
