# egrid/domain/mechanics/mechanics_factory.py

from egrid.config.models import GridModel, WeightsModel
from egrid.domain.entities.grid import Grid
from egrid.domain.mechanics.mechanics_core import Mechanics
from egrid.domain.mechanics.mechanics_routers import GridRouter
from egrid.domain.mechanics.mechanics_weights import CellWeights


def make_weights(cfg: WeightsModel) -> CellWeights:
    return CellWeights(**cfg.model_dump())


def build_mechanics(cfg: GridModel, weights: WeightsModel | None = None) -> Mechanics:
    w = make_weights(weights or WeightsModel())
    grid = Grid.build(cfg.sections, cfg.rows, cfg.cols)
    return Mechanics(grid=grid, router=GridRouter(grid, w), weights=w)
