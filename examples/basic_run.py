from biomesim.runner.simulation import new_simulation
from biomesim.runner.terrain import Terrain

if __name__ == "__main__":
    sim = new_simulation(100, 100, smoothing_passes=30)
    state = sim.get_state()
    print(f"Seeded {state['population']} units over {state['populated_cells']} cells")
    for i in range(1000):
        sim.advance()
        if (i + 1) % 100 == 0:
            state = sim.get_state()
            res = state["terrain"][Terrain.RESOURCE.name.lower()]["population"]
            land = state["terrain"][Terrain.LAND.name.lower()]["population"]
            print(f"Tick {sim.tick}: total={state['population']} resource={res} land={land}")
    cell = sim.cell_at(sim.index_of(50, 50))
    print(f"Cell (50, 50): {cell.terrain.name} with {cell.population} units")
