# egrid/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from egrid.app.controllers.batch import BatchProcessor
from egrid.app.controllers.connections import ConnectionResolver
from egrid.app.controllers.measuring import MeasuringHandler
from egrid.app.controllers.standard import StandardMeasurements
from egrid.app.hooks import NoopHooks, SessionHooks
from egrid.config.models import GridModel, OffsetsModel, SessionModel
from egrid.domain.mechanics.mechanics_core import Mechanics
from egrid.domain.mechanics.mechanics_factory import build_mechanics
from egrid.io.session_logging import SessionLogging
from egrid.runtime.registries import make_stores
from egrid.services.mapping_table import MappingTable


@dataclass
class Session:
    """Everything that belongs to one open spreadsheet; sessions share nothing."""

    config: SessionModel
    document: str
    hooks: SessionHooks
    mechanics: Mechanics
    mappings: MappingTable
    resolver: ConnectionResolver
    batch: BatchProcessor
    standard: StandardMeasurements
    measuring: MeasuringHandler

    def rebuild(self, grid: GridModel | Mapping) -> Mechanics:
        """Replace the grid; resets the locked point and the sheet cursor."""
        grid = grid if isinstance(grid, GridModel) else GridModel.model_validate(grid)
        mechanics = build_mechanics(grid, self.config.weights)
        self.config = self.config.model_copy(update={"grid": grid})
        self.mechanics = mechanics
        self.resolver.mechanics = mechanics
        self.measuring = _make_measuring(self.config, mechanics)
        return mechanics


def _lead_lengths(cfg: OffsetsModel) -> dict[str, tuple[float, float]]:
    return {k: (lead.front, lead.back) for k, lead in cfg.classes.items()}


def _make_measuring(model: SessionModel, mechanics: Mechanics) -> MeasuringHandler:
    return MeasuringHandler(mechanics, first_row=model.scan.first_row, max_row=model.scan.max_row)


def build(
    cfg: SessionModel | Mapping | None = None,
    *,
    document: str = "",
    use_logging: bool = True,
) -> Session:
    # 0) Validate config
    if cfg is None:
        model = SessionModel()
    else:
        model = cfg if isinstance(cfg, SessionModel) else SessionModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SessionLogging(document=document, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Grid & pathfinding
    mechanics = build_mechanics(model.grid, model.weights)

    # 3) Persistence
    stores = make_stores(model.store, deps={"document": document})
    mappings = MappingTable(stores.mappings, hooks=hooks)

    # 4) Controllers (inject deps explicitly)
    resolver = ConnectionResolver(
        mappings,
        mechanics,
        lead_lengths=_lead_lengths(model.offsets),
        default_lead=model.offsets.default,
    )
    batch = BatchProcessor(
        resolver,
        hooks=hooks,
        first_row=model.scan.first_row,
        default_last_row=model.scan.default_last_row,
    )
    standard = StandardMeasurements(
        stores.measurements,
        hooks=hooks,
        first_row=model.scan.first_row,
        default_last_row=model.scan.default_last_row,
    )

    return Session(
        config=model,
        document=document,
        hooks=hooks,
        mechanics=mechanics,
        mappings=mappings,
        resolver=resolver,
        batch=batch,
        standard=standard,
        measuring=_make_measuring(model, mechanics),
    )
