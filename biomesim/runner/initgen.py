import numpy as np
import structlog
from scipy.ndimage import label
from typing import Any, Dict, Tuple
from .grid import Grid
from .kernels import full_neighbor_counts
from .rng import RandomSource
from .terrain import N_TERRAINS, TERRAINS, Terrain
logger = structlog.get_logger()
W, R, L = Terrain.WATER, Terrain.RESOURCE, Terrain.LAND
CANDIDATES: Tuple[Tuple[Terrain, ...], ...] = (
    (W, R, L),
    (W, R),
    (W, L),
    (W,),
    (L, R),
    (R,),
    (L,),
)
_CANDIDATE_SIZES = np.array([len(c) for c in CANDIDATES], dtype=np.int64)
_CANDIDATE_TABLE = np.array([[int(t) for t in c] + [0] * (N_TERRAINS - len(c)) for c in CANDIDATES], dtype=np.uint8)
def majority_case(land: int, resource: int, water: int) -> int:
    if water == land == resource:
        return 0
    if water > land and water == resource:
        return 1
    if water > resource and water == land:
        return 2
    if water > land and water > resource:
        return 3
    if resource == land:
        return 4
    if resource > land:
        return 5
    return 6
def majority_candidates(land: int, resource: int, water: int) -> Tuple[Terrain, ...]:
    return CANDIDATES[majority_case(land, resource, water)]
def majority_cases(counts: np.ndarray) -> np.ndarray:
    land = counts[..., int(L)]
    res = counts[..., int(R)]
    water = counts[..., int(W)]
    conds = [
        (water == land) & (land == res),
        (water > land) & (water == res),
        (water > res) & (water == land),
        (water > land) & (water > res),
        res == land,
        res > land,
    ]
    return np.select(conds, [0, 1, 2, 3, 4, 5], default=6)
def smooth_pass(grid: Grid, rng: RandomSource) -> Grid:
    cases = majority_cases(full_neighbor_counts(grid))
    sizes = _CANDIDATE_SIZES[cases]
    draw = np.asarray(rng.random(grid.size), dtype=np.float64)
    pick = np.minimum((draw * sizes).astype(np.int64), sizes - 1)
    grid.terrain[:] = _CANDIDATE_TABLE[cases, pick]
    return grid
def random_terrain(width: int, height: int, rng: RandomSource) -> Grid:
    values = np.asarray(rng.integers(0, N_TERRAINS, size=width * height))
    return Grid(width, height, values.astype(np.uint8))
def generate(width: int, height: int, passes: int, rng: RandomSource) -> Grid:
    logger.info("Generating terrain", width=width, height=height, passes=passes)
    grid = random_terrain(width, height, rng)
    for _ in range(passes):
        smooth_pass(grid, rng)
    logger.info("Terrain generated", regions=region_totals(biome_regions(grid)))
    return grid
def biome_regions(grid: Grid) -> Dict[str, Dict[str, int]]:
    """Cell and 8-connected region counts per terrain."""
    t2d = grid.terrain_2d()
    structure = np.ones((3, 3), dtype=np.int32)
    out = {}
    for t in TERRAINS:
        mask = t2d == int(t)
        _, n = label(mask, structure=structure)
        out[t.name.lower()] = {"cells": int(mask.sum()), "regions": int(n)}
    return out
def region_totals(regions: Dict[str, Dict[str, int]]) -> Dict[str, int]:
    return {name: v["regions"] for name, v in regions.items()}
def seed_population(grid: Grid, rng: RandomSource, registry: Dict[str, Any]) -> int:
    t = grid.terrain.astype(np.intp)
    roll = np.asarray(rng.random(grid.size), dtype=np.float64)
    hit = (roll < registry["seed_probability"][t]) & (t != int(Terrain.WATER))
    idx = np.flatnonzero(hit)
    if idx.size:
        amounts = np.asarray(rng.integers(0, registry["seed_max"][t[idx]]), dtype=np.int64)
        grid.population[idx] = amounts
    total = int(grid.population.sum())
    logger.info("Population seeded", populated_cells=int(idx.size), population=total)
    return total
