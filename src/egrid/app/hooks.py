# egrid/app/hooks.py
from typing import Protocol


class SessionHooks(Protocol):
    def batch_start(self, *, job: str, first_row: int, last_row: int): ...
    def batch_end(self, *, job: str, **counts): ...
    def row_done(self, *, row: int, distance: float, **kw): ...
    def row_skipped(self, *, row: int, reason: str, **kw): ...
    def row_error(self, *, row: int, exc: BaseException, **kw): ...
    def mapping_changed(self, *, action: str, key: str, **kw): ...
    def persistence_warning(self, *, action: str, exc: BaseException, **kw): ...


class NoopHooks:
    def batch_start(self, **_):
        pass

    def batch_end(self, **_):
        pass

    def row_done(self, **_):
        pass

    def row_skipped(self, **_):
        pass

    def row_error(self, **_):
        pass

    def mapping_changed(self, **_):
        pass

    def persistence_warning(self, **_):
        pass
