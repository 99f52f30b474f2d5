import numpy as np
import structlog
from typing import Any, Dict, Optional
from . import initgen
from .grid import Cell, Grid
from .kernels import step_population
from .registry import build_registry, default_registry
from .rng import RandomSource, make_rng
from .terrain import TERRAINS

logger = structlog.get_logger()


class Simulation:
    """
    Owns one grid and the random source that drives it.
    Renderers read cells through cell_at() or the read-only views and
    call advance() exactly once per logical tick.
    """

    def __init__(self, grid: Grid, rng: RandomSource, registry: Dict[str, Any]):
        self._grid = grid
        self.rng = rng
        self.registry = registry
        self.tick = 0
        self.last_events: Dict[str, int] = {}

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def size(self) -> int:
        return self._grid.size

    def cell_at(self, index: int) -> Cell:
        return self._grid.cell_at(index)

    def coord_of(self, index: int):
        return self._grid.coord_of(index)

    def index_of(self, x: int, y: int) -> int:
        return self._grid.index_of(x, y)

    @property
    def terrain(self) -> np.ndarray:
        """Terrain values as a read-only (height, width) view."""
        view = self._grid.terrain_2d().view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> np.ndarray:
        """Population counts as a read-only (height, width) view."""
        view = self._grid.population_2d().view()
        view.flags.writeable = False
        return view

    def advance(self) -> None:
        self.last_events = step_population(self._grid, self.registry, self.rng)
        self.tick += 1

    def biome_regions(self) -> Dict[str, Dict[str, int]]:
        return initgen.biome_regions(self._grid)

    def get_state(self) -> Dict[str, Any]:
        pop = self._grid.population
        terrain = self._grid.terrain
        per_terrain = {}
        for t in TERRAINS:
            mask = terrain == int(t)
            per_terrain[t.name.lower()] = {
                "cells": int(mask.sum()),
                "population": int(pop[mask].sum()),
                "populated_cells": int((pop[mask] > 0).sum()),
            }
        return {
            "tick": self.tick,
            "population": int(pop.sum()),
            "populated_cells": int((pop > 0).sum()),
            "terrain": per_terrain,
        }


def new_simulation(
    width: int,
    height: int,
    smoothing_passes: int = 30,
    rng: Optional[RandomSource] = None,
    registry: Optional[Dict[str, Any]] = None,
) -> Simulation:
    if rng is None:
        rng = make_rng()
    if registry is None:
        registry = default_registry()
    grid = initgen.generate(width, height, smoothing_passes, rng)
    initgen.seed_population(grid, rng, registry)
    return Simulation(grid, rng, registry)


def simulation_from_scenario(cfg: Dict[str, Any]) -> Simulation:
    world = cfg["world"]
    seed = cfg.get("randomness", {}).get("seed")
    logger.info("Building simulation from scenario", seed=seed, scenario_hash=cfg.get("_scenario_hash"))
    return new_simulation(
        int(world["width"]),
        int(world["height"]),
        int(cfg.get("generation", {}).get("smoothing_passes", 30)),
        rng=make_rng(seed),
        registry=build_registry(cfg),
    )
