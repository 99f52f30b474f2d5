import pytest
import os
import json
import tempfile
import pandas as pd
from biomesim.runner.engine import load_scenario, run_headless

@pytest.fixture
def test_run(scenario_path):
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg = load_scenario(scenario_path)
        run_dir = run_headless(cfg, ticks=20, out_dir=tmpdir, label="artifacts")
        yield run_dir

def test_manifest_exists(test_run):
    manifest_path = os.path.join(test_run, "manifest.json")
    assert os.path.exists(manifest_path), "manifest.json must exist"
    with open(manifest_path, "r") as f:
        manifest = json.load(f)
    assert manifest["label"] == "artifacts"
    assert manifest["ticks"] == 20
    assert "runtime_s" in manifest
    assert manifest["final_population"] >= 0
    assert set(manifest["biomes"]) == {"land", "resource", "water"}

def test_scenario_saved(test_run):
    with open(os.path.join(test_run, "scenario.json"), "r") as f:
        cfg = json.load(f)
    assert "_scenario_hash" in cfg
    assert cfg["world"]["width"] == 100
    assert cfg["generation"]["smoothing_passes"] == 30
    assert cfg["randomness"]["seed"] == 1337

def test_population_metrics(test_run):
    df = pd.read_parquet(os.path.join(test_run, "metrics", "population.parquet"))
    for col in ["tick", "terrain", "population", "populated_cells", "cells"]:
        assert col in df.columns
    assert sorted(df["tick"].unique()) == list(range(21)), "Every tick must have metrics"
    assert (df["population"] >= 0).all()
    assert (df[df["terrain"] == "water"]["population"] == 0).all()
    per_tick = df.groupby("tick")["cells"].sum()
    assert (per_tick == 100 * 100).all()

def test_biome_metrics(test_run):
    df = pd.read_parquet(os.path.join(test_run, "metrics", "biomes.parquet"))
    assert sorted(df["terrain"]) == ["land", "resource", "water"]
    assert df["cells"].sum() == 100 * 100
    assert (df["regions"] >= 0).all()

def test_events_log(test_run):
    with open(os.path.join(test_run, "streams", "events.ndjson"), "r") as f:
        lines = [json.loads(line) for line in f]
    assert len(lines) == 21
    assert lines[0]["tick"] == 0
    assert lines[-1]["tick"] == 20
    assert set(lines[-1]["events"]) == {"grown", "migrated", "shrunk", "extinct"}

def test_checksums(test_run):
    from blake3 import blake3
    checksums_dir = os.path.join(test_run, "checksums")
    files = os.listdir(checksums_dir)
    assert "population.parquet.blake3" in files
    for f in files:
        assert f.endswith(".blake3"), "Checksum files must have .blake3 extension"
    with open(os.path.join(test_run, "scenario.json"), "rb") as f:
        computed = blake3(f.read()).hexdigest()
    with open(os.path.join(checksums_dir, "scenario.json.blake3"), "r") as f:
        assert f.read().strip() == computed

def test_metrics_cadence(scenario_path):
    cfg = load_scenario(scenario_path)
    cfg["outputs"]["metrics_cadence"] = 4
    with tempfile.TemporaryDirectory() as tmpdir:
        run_dir = run_headless(cfg, ticks=10, out_dir=tmpdir, label="cadence")
        df = pd.read_parquet(os.path.join(run_dir, "metrics", "population.parquet"))
    assert sorted(df["tick"].unique()) == [0, 4, 8, 10]
