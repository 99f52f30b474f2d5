import numpy as np
from numba import njit
from typing import Any, Dict
from .grid import Grid
from .rng import RandomSource
from .terrain import N_TERRAINS, Terrain
@njit(cache=True)
def neighbor_counts(terrain, n_terrains):
    h, w = terrain.shape
    out = np.zeros((h, w, n_terrains), dtype=np.int32)
    for y in range(h):
        y0 = max(y - 1, 0)
        y1 = min(y + 1, h - 1)
        for x in range(w):
            x0 = max(x - 1, 0)
            x1 = min(x + 1, w - 1)
            for ny in range(y0, y1 + 1):
                for nx in range(x0, x1 + 1):
                    if ny == y and nx == x:
                        continue
                    out[y, x, terrain[ny, nx]] += 1
    return out
def full_neighbor_counts(grid: Grid) -> np.ndarray:
    return neighbor_counts(grid.terrain_2d(), N_TERRAINS).reshape(grid.size, N_TERRAINS)
def step_population(grid: Grid, registry: Dict[str, Any], rng: RandomSource) -> Dict[str, int]:
    """Advance every populated cell by one tick, in index order.

    Migration writes into the neighbor immediately, so a neighbor visited
    later in the same tick already holds the migrants.
    """
    pop = grid.population
    terrain = grid.terrain
    growth = registry["growth"]
    shrink = registry["shrink"]
    migration = registry["migration"]
    frac = registry["fraction"]
    threshold = registry["extinguish_threshold"]
    water = int(Terrain.WATER)
    events = {"grown": 0, "migrated": 0, "shrunk": 0, "extinct": 0}
    for i in range(grid.size):
        p = int(pop[i])
        if p <= 0:
            continue
        t = int(terrain[i])
        if rng.random() < growth[t]:
            p += int(p * frac)
            events["grown"] += 1
        if rng.random() < migration:
            nbrs = grid.cross_neighbor_indices(i)
            if nbrs:
                j = nbrs[int(rng.integers(0, len(nbrs)))]
                if terrain[j] != water:
                    moved = min(int(p * frac), p)
                    p -= moved
                    pop[j] += moved
                    events["migrated"] += moved
        if rng.random() < shrink[t]:
            removed = int(p * frac) if p > threshold else p
            p -= min(removed, p)
            events["shrunk"] += 1
            if p == 0:
                events["extinct"] += 1
        pop[i] = p
    return events
