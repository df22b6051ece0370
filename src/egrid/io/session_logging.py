# egrid/io/session_logging.py
import json
import logging
import sys

from egrid.app.hooks import NoopHooks


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; hook fields ride in ``record.extra``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            **getattr(record, "extra", {}),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # paths and enums are not JSON types
        return json.dumps(payload, default=str)


def _default_json_logger(name: str = "egrid", level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    if any(isinstance(h.formatter, JsonLineFormatter) for h in logger.handlers):
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLineFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


class SessionLogging(NoopHooks):
    """
    Structured logs for one document session: batch progress, per-row
    outcomes, mapping edits and persistence trouble.
    """

    def __init__(
        self,
        document: str = "",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.document, self.debug = document, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"document": self.document}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------- batch -----------------------------

    def batch_start(self, *, job: str, first_row: int, last_row: int):
        self._emit("INFO", "batch_start", job=job, first_row=first_row, last_row=last_row)

    def batch_end(self, *, job: str, **counts):
        self._emit("INFO", "batch_end", job=job, **counts)

    def row_done(self, *, row: int, distance: float, **kw):
        if self.debug:
            self._emit("DEBUG", "row_done", row=row, distance=distance, **kw)

    def row_skipped(self, *, row: int, reason: str, **kw):
        if self.debug:
            self._emit("DEBUG", "row_skipped", row=row, reason=reason, **kw)

    def row_error(self, *, row: int, exc: BaseException, **kw):
        self._emit("ERROR", "row_error", row=row, error=str(exc), error_type=type(exc).__name__, **kw)

    # --------------- mapping table ---------------------

    def mapping_changed(self, *, action: str, key: str, **kw):
        self._emit("INFO", "mapping_changed", action=action, key=key, **kw)

    def persistence_warning(self, *, action: str, exc: BaseException, **kw):
        self._emit("WARNING", "persistence_warning", action=action, error=str(exc), **kw)
