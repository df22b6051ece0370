# egrid/app/controllers/standard.py
from collections.abc import Iterable

from egrid.app.controllers.batch import scan_rows
from egrid.app.hooks import NoopHooks, SessionHooks
from egrid.app.protocols import (
    DESTINATION_COL,
    ORIGIN_COL,
    RESULT_COL,
    MeasurementStore,
    TabularSource,
    cell_text,
    is_blank,
)
from egrid.domain.entities.references import StandardMeasurement
from egrid.errors import PersistenceError


class StandardMeasurements:
    """
    Fixed lengths for recurring connections, e.g. every ``A1:1`` -> ``X1:``
    wire is 1000 mm. A rule matches a row when both of its texts occur
    (case-insensitively) in the origin and destination cells; an empty text
    matches anything.
    """

    def __init__(
        self,
        store: MeasurementStore,
        hooks: SessionHooks | None = None,
        first_row: int = 2,
        default_last_row: int = 100,
    ):
        self.store = store
        self.hooks = hooks or NoopHooks()
        self.first_row, self.default_last_row = first_row, default_last_row
        self.load_error: PersistenceError | None = None
        try:
            self.rules: list[StandardMeasurement] = store.load()
        except PersistenceError as exc:
            self.load_error = exc
            self.rules = []
            self.hooks.persistence_warning(action="load_measurements", exc=exc)

    def add(
        self, origin_text: str, destination_text: str, distance: float
    ) -> StandardMeasurement:
        if not origin_text.strip() or not destination_text.strip():
            raise ValueError("both origin and destination text are required")
        rule = StandardMeasurement(origin_text.strip(), destination_text.strip(), float(distance))
        self.rules.append(rule)
        self._persist("add_measurement")
        return rule

    def remove(self, rule: StandardMeasurement) -> None:
        self.rules.remove(rule)
        self._persist("remove_measurement")

    def set_enabled(self, rule: StandardMeasurement, enabled: bool) -> None:
        rule.enabled = enabled
        self._persist("toggle_measurement")

    def _persist(self, action: str) -> None:
        try:
            self.store.save(self.rules)
        except PersistenceError as exc:
            self.hooks.persistence_warning(action=action, exc=exc)
            raise

    # ------------------- applying -------------------------

    def apply(self, table: TabularSource) -> int:
        """Write the first enabled matching rule into each unmeasured row."""
        return self._apply([r for r in self.rules if r.enabled], table)

    def apply_one(self, rule: StandardMeasurement, table: TabularSource) -> int:
        if not rule.enabled:
            return 0
        return self._apply([rule], table)

    def _apply(self, rules: Iterable[StandardMeasurement], table: TabularSource) -> int:
        rules = list(rules)
        if not rules:
            return 0
        applied = 0
        rows = scan_rows(table, self.first_row, self.default_last_row)
        self.hooks.batch_start(job="standard", first_row=rows.start, last_row=rows.stop - 1)
        for row in rows:
            try:
                if not is_blank(table.read(row, RESULT_COL)):
                    continue
                origin = cell_text(table, row, ORIGIN_COL)
                destination = cell_text(table, row, DESTINATION_COL)
                rule = next((r for r in rules if r.matches(origin, destination)), None)
                if rule is None:
                    continue
                table.write(row, RESULT_COL, rule.distance)
                applied += 1
                self.hooks.row_done(row=row, distance=rule.distance, rule=rule.origin_text)
            except Exception as exc:
                self.hooks.row_error(row=row, exc=exc)
        self.hooks.batch_end(job="standard", applied=applied)
        return applied
