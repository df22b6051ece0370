# egrid/io/tables.py
from collections.abc import Iterable, Sequence


class MemoryTable:
    """
    TabularSource over plain Python data. Row 1 is the header; ``rows`` are
    (result, origin, destination) tuples starting at row 2.
    """

    def __init__(
        self,
        rows: Iterable[Sequence[object]] = (),
        header: Sequence[object] = ("Length", "From", "To"),
        report_extent: bool = True,
    ):
        self._cells: dict[tuple[int, int], object] = {}
        self.report_extent = report_extent
        for col, value in enumerate(header, start=1):
            self._cells[(1, col)] = value
        for row, values in enumerate(rows, start=2):
            for col, value in enumerate(values, start=1):
                if value is not None:
                    self._cells[(row, col)] = value

    def last_row(self) -> int | None:
        if not self.report_extent:
            return None
        return max((r for r, _ in self._cells), default=1)

    def read(self, row: int, col: int) -> object | None:
        return self._cells.get((row, col))

    def write(self, row: int, col: int, value: object) -> None:
        if row < 2:
            raise ValueError(f"row {row} is the header")
        self._cells[(row, col)] = value

    def clear(self, row: int, col: int) -> None:
        self._cells.pop((row, col), None)

    def column(self, col: int) -> list[object | None]:
        last = max((r for r, _ in self._cells), default=1)
        return [self._cells.get((r, col)) for r in range(2, last + 1)]
