import copy
import numpy as np
from typing import Any, Dict, List
from .terrain import TERRAINS, Terrain
DEFAULT_SEEDING = {
    "resource": {"probability": 0.005, "max_population": 10000},
    "land": {"probability": 0.001, "max_population": 1000},
}
DEFAULT_DYNAMICS = {
    "growth": {"resource": 0.009, "land": 0.003},
    "migration": {"probability": 0.005},
    "shrink": {"resource": 0.008, "land": 0.004},
    "fraction": 0.01,
    "extinguish_threshold": 10,
}
def _per_terrain(table: Dict[str, Any], key: str = None, default: float = 0.0) -> List[float]:
    out = []
    for t in TERRAINS:
        entry = table.get(t.name.lower())
        if entry is None or t == Terrain.WATER:
            out.append(default)
        elif key is None:
            out.append(float(entry))
        else:
            out.append(float(entry.get(key, default)))
    return out
def build_registry(cfg: Dict[str, Any]) -> Dict[str, Any]:
    seeding = cfg.get("seeding", DEFAULT_SEEDING)
    dyn = cfg.get("dynamics", DEFAULT_DYNAMICS)
    names: List[str] = [t.name.lower() for t in TERRAINS]
    indices: Dict[str, int] = {n: int(t) for n, t in zip(names, TERRAINS)}
    seed_probability = np.array(_per_terrain(seeding, "probability"), dtype=np.float64)
    seed_max = np.array(_per_terrain(seeding, "max_population", default=1.0), dtype=np.int64)
    return {
        "names": names,
        "indices": indices,
        "seed_probability": seed_probability,
        "seed_max": seed_max,
        "growth": _per_terrain(dyn.get("growth", {})),
        "shrink": _per_terrain(dyn.get("shrink", {})),
        "migration": float(dyn.get("migration", {}).get("probability", 0.0)),
        "fraction": float(dyn.get("fraction", DEFAULT_DYNAMICS["fraction"])),
        "extinguish_threshold": int(dyn.get("extinguish_threshold", DEFAULT_DYNAMICS["extinguish_threshold"])),
    }
def default_registry() -> Dict[str, Any]:
    return build_registry({"seeding": copy.deepcopy(DEFAULT_SEEDING), "dynamics": copy.deepcopy(DEFAULT_DYNAMICS)})
