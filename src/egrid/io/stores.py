# egrid/io/stores.py
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from egrid.domain.entities.references import ComponentMapping, StandardMeasurement
from egrid.errors import PersistenceError

MAPPING_SUFFIX = "_ComponentMapping.json"


def mapping_file_for(document: str | Path, directory: str | Path = ".") -> Path:
    """One mapping table per spreadsheet: ``wiring.xlsx`` -> ``wiring_ComponentMapping.json``."""
    return Path(directory) / f"{Path(document).stem}{MAPPING_SUFFIX}"


# ----------------- on-disk records ---------------------


class MappingRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    key: str
    row: int
    col: int
    default_to_bottom: bool = Field(default=False, alias="defaultToBottom")
    description: str = ""

    @classmethod
    def from_mapping(cls, m: ComponentMapping) -> "MappingRecord":
        return cls(
            key=m.reference,
            row=m.row,
            col=m.col,
            default_to_bottom=m.default_to_bottom,
            description=m.description,
        )

    def to_mapping(self, key: str) -> ComponentMapping:
        return ComponentMapping(
            reference=key,
            row=self.row,
            col=self.col,
            description=self.description,
            default_to_bottom=self.default_to_bottom,
        )


class MeasurementRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    origin_text: str = Field(default="", alias="originText")
    destination_text: str = Field(default="", alias="destinationText")
    distance: float
    enabled: bool = True


_MAPPING_TABLE = TypeAdapter(dict[str, MappingRecord])
_MEASUREMENT_LIST = TypeAdapter(list[MeasurementRecord])


def _read(path: Path) -> bytes | None:
    if not path.exists():
        return None
    try:
        return path.read_bytes()
    except OSError as exc:
        raise PersistenceError(path, "read", exc) from exc


def _write(path: Path, data: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise PersistenceError(path, "write", exc) from exc


# ----------------- mapping stores ---------------------


class JsonMappingStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, ComponentMapping]:
        raw = _read(self.path)
        if raw is None:
            return {}
        try:
            records = _MAPPING_TABLE.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(self.path, "parse", exc) from exc
        return {key: rec.to_mapping(key) for key, rec in records.items()}

    def save(self, mappings: Mapping[str, ComponentMapping]) -> None:
        records = {key: MappingRecord.from_mapping(m) for key, m in mappings.items()}
        _write(self.path, _MAPPING_TABLE.dump_json(records, by_alias=True, indent=2))


class MemoryMappingStore:
    def __init__(self, initial: Mapping[str, ComponentMapping] | None = None):
        self.saved: dict[str, ComponentMapping] = dict(initial or {})
        self.saves = 0

    def load(self) -> dict[str, ComponentMapping]:
        return dict(self.saved)

    def save(self, mappings: Mapping[str, ComponentMapping]) -> None:
        self.saved = dict(mappings)
        self.saves += 1


# ----------------- standard measurement stores ---------------------


class JsonMeasurementStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[StandardMeasurement]:
        raw = _read(self.path)
        if raw is None:
            return []
        try:
            records = _MEASUREMENT_LIST.validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(self.path, "parse", exc) from exc
        return [StandardMeasurement(**rec.model_dump()) for rec in records]

    def save(self, rules: Iterable[StandardMeasurement]) -> None:
        records = [
            MeasurementRecord(
                origin_text=r.origin_text,
                destination_text=r.destination_text,
                distance=r.distance,
                enabled=r.enabled,
            )
            for r in rules
        ]
        _write(self.path, _MEASUREMENT_LIST.dump_json(records, by_alias=True, indent=2))


class MemoryMeasurementStore:
    def __init__(self, initial: Iterable[StandardMeasurement] = ()):
        self.saved: list[StandardMeasurement] = list(initial)

    def load(self) -> list[StandardMeasurement]:
        return list(self.saved)

    def save(self, rules: Iterable[StandardMeasurement]) -> None:
        self.saved = list(rules)
