# egrid/services/mapping_table.py
from dataclasses import replace

from egrid.app.hooks import NoopHooks, SessionHooks
from egrid.app.protocols import MappingStore
from egrid.domain.entities.references import ComponentMapping, group_prefix, strip_marker
from egrid.errors import PersistenceError


class MappingTable:
    """
    Component references -> grid positions for one spreadsheet.

    Keys are canonical references without the trailing side marker: bare
    designators (``F1``, ``K3``) or terminal-block groups ending in the block
    separator (``X20:``). Every mutation is written through to the store
    before returning.
    """

    def __init__(self, store: MappingStore, hooks: SessionHooks | None = None):
        self.store = store
        self.hooks = hooks or NoopHooks()
        self.load_error: PersistenceError | None = None
        try:
            self._mappings = dict(store.load())
        except PersistenceError as exc:
            # unreadable table: start empty, keep the session usable
            self.load_error = exc
            self._mappings = {}
            self.hooks.persistence_warning(action="load", exc=exc)

    def __len__(self) -> int:
        return len(self._mappings)

    def __contains__(self, reference: str) -> bool:
        return self.has(reference)

    def _lookup(self, key: str) -> ComponentMapping | None:
        m = self._mappings.get(key)
        if m is not None:
            return m
        prefix = group_prefix(key)
        if prefix is None:
            return None
        if prefix != key:
            return self._mappings.get(prefix)
        # a bare group ("X20:") is known if any of its terminals is mapped
        return next((v for k, v in self._mappings.items() if k.startswith(prefix)), None)

    def has(self, reference: str) -> bool:
        key, _ = strip_marker(reference)
        return self._lookup(key) is not None

    def resolve(self, reference: str) -> ComponentMapping | None:
        """
        Exact key first, then the ``X20:`` group for ``X20:41``. The returned
        copy reports the bottom side if the reference carried the marker or
        the mapping defaults to the bottom.
        """
        key, marked = strip_marker(reference)
        m = self._lookup(key)
        if m is None:
            return None
        return replace(m, is_bottom_side=marked or m.default_to_bottom)

    def all(self) -> list[ComponentMapping]:
        return list(self._mappings.values())

    # ------------------- mutations -------------------------

    def add(
        self,
        reference: str,
        row: int,
        col: int,
        description: str = "",
        default_to_bottom: bool = False,
    ) -> ComponentMapping:
        key, _ = strip_marker(reference)
        m = ComponentMapping(
            reference=key,
            row=row,
            col=col,
            description=description,
            default_to_bottom=default_to_bottom,
        )
        self._mappings[key] = m
        self.hooks.mapping_changed(action="add", key=key, row=row, col=col)
        self._persist("add")
        return m

    def remove(self, reference: str) -> bool:
        key, _ = strip_marker(reference)
        if self._mappings.pop(key, None) is None:
            return False
        self.hooks.mapping_changed(action="remove", key=key)
        self._persist("remove")
        return True

    def _persist(self, action: str) -> None:
        try:
            self.store.save(self._mappings)
        except PersistenceError as exc:
            self.hooks.persistence_warning(action=action, exc=exc)
            raise
