# runtime/registries.py
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from egrid.app.protocols import MappingStore, MeasurementStore
from egrid.config.models import StoreJsonModel, StoreMemoryModel, StoreUnion
from egrid.io.stores import (
    JsonMappingStore,
    JsonMeasurementStore,
    MemoryMappingStore,
    MemoryMeasurementStore,
    mapping_file_for,
)


@dataclass
class Stores:
    mappings: MappingStore
    measurements: MeasurementStore


StoreFactory = Callable[[StoreUnion, dict], Stores]

_store_registry: dict[str, StoreFactory] = {}


def register_store(kind: str):
    def deco(fn: StoreFactory):
        _store_registry[kind] = fn
        return fn

    return deco


def make_stores(cfg: StoreUnion, *, deps: dict) -> Stores:
    """
    deps can include:
      - 'document': str  # spreadsheet path the mapping table belongs to
    """
    try:
        factory = _store_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown store kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_store("json")
def _make_json(cfg: StoreJsonModel, deps):
    document = deps.get("document")
    if not document:
        raise ValueError("json store needs the document the mappings belong to")
    return Stores(
        mappings=JsonMappingStore(mapping_file_for(document, cfg.directory)),
        measurements=JsonMeasurementStore(Path(cfg.directory) / cfg.measurements_file),
    )


@register_store("memory")
def _make_memory(cfg: StoreMemoryModel, deps):
    return Stores(mappings=MemoryMappingStore(), measurements=MemoryMeasurementStore())
