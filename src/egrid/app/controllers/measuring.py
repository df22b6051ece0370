# egrid/app/controllers/measuring.py
from egrid.app.protocols import (
    DESTINATION_COL,
    ORIGIN_COL,
    RESULT_COL,
    TabularSource,
    cell_text,
    is_blank,
)
from egrid.domain.entities.grid import SpecialPoint
from egrid.domain.mechanics.mechanics_core import Endpoint, Measurement, Mechanics


class MeasuringHandler:
    """
    Point-and-measure state for one session.

    A door or motor can be locked as point A; while locked, every pick is
    measured from it. Without a lock, picks alternate start / end. Measured
    lengths go into the next row of the sheet that has no result yet.
    """

    def __init__(self, mechanics: Mechanics, first_row: int = 2, max_row: int = 1000):
        self.mechanics = mechanics
        self.first_row, self.max_row = first_row, max_row
        self.locked: SpecialPoint | None = None
        self.start: Endpoint | None = None
        self.end: Endpoint | None = None
        self.row = first_row

    def lock(self, point: SpecialPoint) -> bool:
        """Lock ``point`` as A, or release it if it is already locked. Returns the new state."""
        if self.locked == point:
            self.unlock()
            return False
        self.locked = point
        self.start, self.end = point, None
        return True

    def unlock(self) -> None:
        self.locked = None
        self.start = self.end = None

    def reset_selection(self) -> None:
        self.start, self.end = self.locked, None

    def pick(self, endpoint: Endpoint) -> Measurement | None:
        if self.locked is None:
            if self.start is not None and self.end is not None:
                self.reset_selection()
            if self.start is None:
                self.start = endpoint
                return None
        else:
            self.start = self.locked
        self.end = endpoint
        m = self.mechanics.measure(self.start, self.end)
        if m is None:
            self.reset_selection()
        return m

    def measure(self, start: Endpoint, end: Endpoint) -> Measurement | None:
        return self.mechanics.measure(start, end)

    # ------------------- sheet cursor -------------------------

    def _skip_measured(self, table: TabularSource) -> None:
        while self.row <= self.max_row and not is_blank(table.read(self.row, RESULT_COL)):
            self.row += 1

    def record(self, distance: float, table: TabularSource) -> int | None:
        """Write into the next empty result cell; None once the cursor passes ``max_row``."""
        self._skip_measured(table)
        if self.row > self.max_row:
            return None
        row = self.row
        table.write(row, RESULT_COL, distance)
        self.row += 1
        return row

    def delete_last(self, table: TabularSource) -> float | None:
        """Clear the most recent result and step back to its row."""
        last = self.row - 1
        if last < self.first_row or is_blank(table.read(last, RESULT_COL)):
            self.row = self.first_row
            return None
        try:
            value = float(table.read(last, RESULT_COL))
        except (TypeError, ValueError):
            # not a length; leave the sheet as it is
            return None
        table.clear(last, RESULT_COL)
        self.row = last
        return value

    def pending_text(self, table: TabularSource) -> str:
        """``"origin - destination"`` of the next row still waiting for a length."""
        while self.row <= self.max_row:
            if is_blank(table.read(self.row, RESULT_COL)):
                origin = cell_text(table, self.row, ORIGIN_COL)
                destination = cell_text(table, self.row, DESTINATION_COL)
                if origin or destination:
                    return f"{origin} - {destination}".strip()
            self.row += 1
        return ""
