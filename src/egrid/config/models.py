import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class GridModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sections: int = Field(default=5, ge=1, le=10)
    rows: int = Field(default=7, ge=1, le=20)
    cols: int = Field(default=4, ge=1, le=10)


# ----------------- DISTANCES (millimetres) ---------------------


class WeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    wide: float = 100.0  # step onto a cell with a horizontal neighbour
    narrow: float = 50.0  # step onto a cell in a column-only row
    initial_move: float = 100.0
    terminal: float = 200.0  # added unless the path ends in a special point
    door: float = 1000.0
    motor: float = 500.0

    @field_validator("wide", "narrow", "initial_move", "terminal", "door", "motor")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class LeadLengthModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    front: float
    back: float


class OffsetsModel(BaseModel):
    """Fixed internal lead length per component family, keyed by leading letter."""

    model_config = ConfigDict(extra="forbid")
    classes: dict[str, LeadLengthModel] = Field(
        default_factory=lambda: {
            "F": LeadLengthModel(front=30.0, back=50.0),  # fuse
            "X": LeadLengthModel(front=20.0, back=40.0),  # terminal block
            "K": LeadLengthModel(front=60.0, back=60.0),  # contactor / relay
            "A": LeadLengthModel(front=45.0, back=45.0),  # surge protector
        }
    )
    default: float = 25.0

    @field_validator("classes")
    @classmethod
    def _upper_keys(cls, v: dict[str, LeadLengthModel]) -> dict[str, LeadLengthModel]:
        for k in v:
            if len(k) != 1 or not k.isalpha():
                raise ValueError(f"offset class must be a single letter, got {k!r}")
        return {k.upper(): lead for k, lead in v.items()}


class ScanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    first_row: int = Field(default=2, ge=2)  # row 1 is the header
    default_last_row: int = 100  # used when the source cannot report its extent
    max_row: int = 1000  # cursor limit for manual recording


# ----------------- STORES ---------------------


class StoreJsonModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["json"] = "json"
    directory: str = "."
    measurements_file: str = "StandardMeasurements.json"

    @field_validator("directory")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class StoreMemoryModel(BaseModel):
    """Test stub; nothing survives the process."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


StoreUnion = Annotated[StoreJsonModel | StoreMemoryModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class SessionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    grid: GridModel = Field(default_factory=GridModel)
    weights: WeightsModel = Field(default_factory=WeightsModel)
    offsets: OffsetsModel = Field(default_factory=OffsetsModel)
    scan: ScanModel = Field(default_factory=ScanModel)
    store: StoreUnion = Field(default_factory=StoreJsonModel)
    log: LogModel = LogModel()
