import pytest
import numpy as np
from biomesim.runner.simulation import Simulation, new_simulation, simulation_from_scenario
from biomesim.runner.engine import load_scenario
from biomesim.runner.grid import Cell, Grid
from biomesim.runner.registry import default_registry
from biomesim.runner.terrain import Terrain

@pytest.fixture
def sim():
    return new_simulation(40, 30, 30, rng=np.random.default_rng(7))

def test_dimensions(sim):
    assert sim.width == 40
    assert sim.height == 30
    assert sim.size == 1200
    assert sim.terrain.shape == (30, 40)
    assert sim.population.shape == (30, 40)

def test_cell_at(sim):
    for i in (0, 599, 1199):
        cell = sim.cell_at(i)
        assert isinstance(cell, Cell)
        assert cell.terrain in (Terrain.LAND, Terrain.RESOURCE, Terrain.WATER)
        assert cell.population >= 0
        x, y = sim.coord_of(i)
        assert cell.terrain == sim.terrain[y, x]
        assert cell.population == sim.population[y, x]

def test_cell_at_out_of_range(sim):
    with pytest.raises(ValueError):
        sim.cell_at(1200)
    with pytest.raises(ValueError):
        sim.cell_at(-1)
    with pytest.raises(ValueError):
        sim.index_of(40, 0)

def test_views_are_read_only(sim):
    with pytest.raises(ValueError):
        sim.population[0, 0] = 5
    with pytest.raises(ValueError):
        sim.terrain[0, 0] = 1

def test_advance_counts_ticks(sim):
    assert sim.tick == 0
    assert sim.advance() is None
    sim.advance()
    assert sim.tick == 2

def test_terrain_fixed_after_generation(sim):
    before = sim.terrain.copy()
    for _ in range(50):
        sim.advance()
    assert np.array_equal(before, sim.terrain)

def test_same_seed_same_history():
    a = new_simulation(30, 30, 30, rng=np.random.default_rng(99))
    b = new_simulation(30, 30, 30, rng=np.random.default_rng(99))
    for _ in range(100):
        a.advance()
        b.advance()
    assert np.array_equal(a.population, b.population)
    assert a.get_state() == b.get_state()

def test_get_state_totals(sim):
    state = sim.get_state()
    assert state["tick"] == 0
    assert state["population"] == int(sim.population.sum())
    assert sum(v["population"] for v in state["terrain"].values()) == state["population"]
    assert sum(v["cells"] for v in state["terrain"].values()) == 1200
    assert state["terrain"]["water"]["population"] == 0

def test_three_by_three_growth(scripted):
    grid = Grid.filled(3, 3, Terrain.LAND)
    grid.population[4] = 200
    s = Simulation(grid, scripted(values=[0.0, 0.5, 0.5]), default_registry())
    s.advance()
    assert s.cell_at(4).population == 202
    assert s.last_events["grown"] == 1

def test_default_rng_is_constructed():
    s = new_simulation(5, 5, 2)
    assert isinstance(s.rng, np.random.Generator)

def test_from_scenario(scenario_path):
    cfg = load_scenario(scenario_path)
    s1 = simulation_from_scenario(cfg)
    s2 = simulation_from_scenario(cfg)
    assert s1.width == cfg["world"]["width"]
    assert s1.height == cfg["world"]["height"]
    assert np.array_equal(s1.terrain, s2.terrain)
    assert np.array_equal(s1.population, s2.population)
    assert s1.population.sum() > 0

def test_biome_regions(sim):
    regions = sim.biome_regions()
    assert set(regions) == {"land", "resource", "water"}
    assert sum(v["cells"] for v in regions.values()) == sim.size
