# egrid/app/controllers/batch.py
from collections.abc import Callable
from dataclasses import dataclass

from egrid.app.controllers.connections import ConnectionResolver
from egrid.app.hooks import NoopHooks, SessionHooks
from egrid.app.protocols import (
    DESTINATION_COL,
    ORIGIN_COL,
    RESULT_COL,
    TabularSource,
    cell_text,
    is_blank,
)


def scan_rows(table: TabularSource, first_row: int = 2, default_last_row: int = 100) -> range:
    last = table.last_row()
    return range(first_row, (default_last_row if last is None else last) + 1)


@dataclass
class BatchReport:
    processed: int = 0
    unresolved: int = 0
    failed: int = 0
    cancelled: bool = False


class BatchProcessor:
    """Fill the result column for every unmeasured row whose references resolve."""

    def __init__(
        self,
        resolver: ConnectionResolver,
        hooks: SessionHooks | None = None,
        first_row: int = 2,
        default_last_row: int = 100,
    ):
        self.resolver = resolver
        self.hooks = hooks or NoopHooks()
        self.first_row, self.default_last_row = first_row, default_last_row

    def process_all(
        self, table: TabularSource, should_continue: Callable[[], bool] | None = None
    ) -> BatchReport:
        report = BatchReport()
        rows = scan_rows(table, self.first_row, self.default_last_row)
        self.hooks.batch_start(job="connections", first_row=rows.start, last_row=rows.stop - 1)

        for row in rows:
            if should_continue is not None and not should_continue():
                report.cancelled = True
                break
            try:
                if not is_blank(table.read(row, RESULT_COL)):
                    continue
                origin = cell_text(table, row, ORIGIN_COL)
                destination = cell_text(table, row, DESTINATION_COL)
                if not origin.strip() and not destination.strip():
                    continue

                distance = self.resolver.compute_distance(origin, destination)
                if distance is None:
                    report.unresolved += 1
                    self.hooks.row_skipped(
                        row=row, reason="unresolvable", origin=origin, destination=destination
                    )
                    continue
                table.write(row, RESULT_COL, distance)
                report.processed += 1
                self.hooks.row_done(row=row, distance=distance)
            except Exception as exc:
                # one bad row never stops the batch
                report.failed += 1
                self.hooks.row_error(row=row, exc=exc)

        self.hooks.batch_end(
            job="connections",
            processed=report.processed,
            unresolved=report.unresolved,
            failed=report.failed,
            cancelled=report.cancelled,
        )
        return report
