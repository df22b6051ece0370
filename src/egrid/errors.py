# egrid/errors.py


class EgridError(Exception):
    """Base class for errors raised by egrid."""


class GridConfigError(EgridError, ValueError):
    pass


class PersistenceError(EgridError, OSError):
    """A store could not read or write; in-memory state is still valid."""

    def __init__(self, path, action: str, cause: BaseException | None = None):
        self.path, self.action, self.cause = path, action, cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"could not {action} {path}{detail}")
