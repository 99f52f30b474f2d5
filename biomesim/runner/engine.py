import os, json, time, copy, hashlib, yaml, structlog, pandas as pd
from typing import Any, Dict
from jsonschema import validate
from blake3 import blake3
from .registry import DEFAULT_SEEDING, DEFAULT_DYNAMICS
from .simulation import Simulation, simulation_from_scenario
from ..schemas.schema import get_schema
logger = structlog.get_logger()
def load_scenario(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    validate(cfg, get_schema())
    cfg = apply_defaults(cfg)
    scenario_hash = stable_hash(cfg)
    cfg["_scenario_hash"] = scenario_hash
    return cfg
def apply_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    w = cfg["world"]
    w.setdefault("type", "grid")
    gen = cfg.get("generation", {})
    gen.setdefault("smoothing_passes", 30)
    cfg["generation"] = gen
    rnd = cfg.get("randomness", {})
    rnd.setdefault("seed", None)
    cfg["randomness"] = rnd
    seeding = cfg.get("seeding", {})
    for k, v in DEFAULT_SEEDING.items():
        seeding.setdefault(k, copy.deepcopy(v))
    cfg["seeding"] = seeding
    dyn = cfg.get("dynamics", {})
    for k, v in DEFAULT_DYNAMICS.items():
        if isinstance(v, dict):
            table = dyn.get(k, {})
            for tk, tv in v.items():
                table.setdefault(tk, tv)
            dyn[k] = table
        else:
            dyn.setdefault(k, v)
    cfg["dynamics"] = dyn
    out = cfg.get("outputs", {})
    out.setdefault("metrics_cadence", 1)
    cfg["outputs"] = out
    return cfg
def stable_hash(obj: Any) -> str:
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    return hashlib.blake2b(s.encode("utf-8"), digest_size=16).hexdigest()
def write_checksums(run_dir: str, files: list[str]):
    os.makedirs(os.path.join(run_dir, "checksums"), exist_ok=True)
    for fp in files:
        with open(fp, "rb") as f:
            h = blake3()
            while True:
                b = f.read(1048576)
                if not b:
                    break
                h.update(b)
        out = os.path.join(run_dir, "checksums", os.path.basename(fp) + ".blake3")
        with open(out, "w") as o:
            o.write(h.hexdigest())
def population_rows(sim: Simulation) -> list[tuple]:
    state = sim.get_state()
    return [(state["tick"], name, v["population"], v["populated_cells"], v["cells"]) for name, v in state["terrain"].items()]
def run_headless(cfg: Dict[str, Any], ticks: int, out_dir: str, label: str | None = None) -> str:
    t0 = time.time()
    os.makedirs(out_dir, exist_ok=True)
    sim = simulation_from_scenario(cfg)
    run_label = label or time.strftime("%Y%m%d-%H%M%S")
    run_dir = os.path.join(out_dir, f"run-{run_label}")
    os.makedirs(run_dir, exist_ok=True)
    os.makedirs(os.path.join(run_dir, "metrics"), exist_ok=True)
    os.makedirs(os.path.join(run_dir, "streams"), exist_ok=True)
    logger.info("Headless run started", run_dir=run_dir, ticks=ticks)
    regions = sim.biome_regions()
    manifest = {
        "schema_version": "1.0",
        "scenario_hash": cfg.get("_scenario_hash"),
        "seed": cfg["randomness"]["seed"],
        "created": int(time.time()),
        "ticks": int(ticks),
        "world": cfg["world"],
        "label": run_label,
        "biomes": regions,
    }
    with open(os.path.join(run_dir, "manifest.json"), "w") as f:
        json.dump(manifest, f, separators=(",", ":"), sort_keys=True)
    with open(os.path.join(run_dir, "scenario.json"), "w") as f:
        json.dump(cfg, f, separators=(",", ":"), sort_keys=True)
    cadence = int(cfg["outputs"]["metrics_cadence"])
    events_path = os.path.join(run_dir, "streams", "events.ndjson")
    pop_rows = population_rows(sim)
    with open(events_path, "w") as s:
        s.write(json.dumps({"tick": 0, "population": int(sim.population.sum())}) + "\n")
        for _ in range(ticks):
            sim.advance()
            if sim.tick % cadence == 0 or sim.tick == ticks:
                pop_rows.extend(population_rows(sim))
                s.write(json.dumps({"tick": sim.tick, "population": int(sim.population.sum()), "events": sim.last_events}) + "\n")
    dfp = pd.DataFrame(pop_rows, columns=["tick", "terrain", "population", "populated_cells", "cells"])
    dfp.to_parquet(os.path.join(run_dir, "metrics", "population.parquet"), index=False)
    dfb = pd.DataFrame([(name, v["cells"], v["regions"]) for name, v in regions.items()], columns=["terrain", "cells", "regions"])
    dfb.to_parquet(os.path.join(run_dir, "metrics", "biomes.parquet"), index=False)
    files = [
        os.path.join(run_dir, "manifest.json"),
        os.path.join(run_dir, "scenario.json"),
        os.path.join(run_dir, "metrics", "population.parquet"),
        os.path.join(run_dir, "metrics", "biomes.parquet"),
        events_path,
    ]
    write_checksums(run_dir, files)
    dt = time.time() - t0
    manifest["runtime_s"] = dt
    manifest["final_population"] = int(sim.population.sum())
    with open(os.path.join(run_dir, "manifest.json"), "w") as f:
        json.dump(manifest, f, separators=(",", ":"), sort_keys=True)
    logger.info("Headless run finished", run_dir=run_dir, runtime_s=round(dt, 3), population=manifest["final_population"])
    return run_dir
