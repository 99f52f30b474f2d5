import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
import pandas as pd
from typing import Tuple
from .terrain import Terrain
TERRAIN_COLORS = np.array([
    (0.2, 0.4, 0.0),
    (0.5, 0.25, 0.0),
    (0.3, 0.7, 1.0),
], dtype=np.float32)
POPULATION_COLOR = np.array((1.0, 0.1, 0.1), dtype=np.float32)
def population_weight(population, max_population: int):
    top = np.log1p(max(int(max_population), 1))
    return np.clip(np.log1p(np.asarray(population, dtype=np.float64)) / top, 0.0, 1.0)
def cell_color(terrain: Terrain, population: int, max_population: int = 10000) -> Tuple[float, float, float]:
    base = TERRAIN_COLORS[int(terrain)]
    t = float(population_weight(population, max_population))
    rgb = (1.0 - t) * base + t * POPULATION_COLOR
    return float(rgb[0]), float(rgb[1]), float(rgb[2])
def frame_rgb(terrain: np.ndarray, population: np.ndarray, max_population: int = 10000) -> np.ndarray:
    base = TERRAIN_COLORS[terrain.astype(np.intp)]
    t = population_weight(population, max_population)[..., None].astype(np.float32)
    return (1.0 - t) * base + t * POPULATION_COLOR
def plot_frame(sim, title: str = None, save_path: str = None, max_population: int = 10000):
    plt.figure(figsize=(10, 8))
    plt.imshow(frame_rgb(sim.terrain, sim.population, max_population), origin='upper', interpolation='nearest')
    plt.title(title or f"Tick {sim.tick}")
    plt.xlabel("X")
    plt.ylabel("Y")
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.show()
def plot_population_timeseries(run_dir: str, save_path: str = None):
    df = pd.read_parquet(os.path.join(run_dir, "metrics", "population.parquet"))
    fig, axes = plt.subplots(1, 2, figsize=(15, 5))
    for terrain in df["terrain"].unique():
        rows = df[df["terrain"] == terrain]
        axes[0].plot(rows["tick"], rows["population"], label=terrain)
        axes[1].plot(rows["tick"], rows["populated_cells"], label=terrain)
    axes[0].set_title("Population by Terrain")
    axes[0].set_xlabel("Tick")
    axes[0].set_ylabel("Population")
    axes[1].set_title("Populated Cells by Terrain")
    axes[1].set_xlabel("Tick")
    axes[1].set_ylabel("Cells")
    for ax in axes:
        ax.legend()
        ax.grid(True, alpha=0.3)
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.show()
def animate_simulation(sim, frames: int = 200, output_path: str = None, max_population: int = 10000):
    fig, ax = plt.subplots(figsize=(10, 8))
    im = ax.imshow(frame_rgb(sim.terrain, sim.population, max_population), origin='upper', interpolation='nearest')
    title = ax.set_title(f"Tick {sim.tick}")
    def animate(frame):
        sim.advance()
        im.set_array(frame_rgb(sim.terrain, sim.population, max_population))
        title.set_text(f"Tick {sim.tick}")
        return im, title
    anim = FuncAnimation(fig, animate, frames=frames, interval=50, blit=False, repeat=False)
    if output_path:
        anim.save(output_path, writer='pillow', fps=20)
    plt.show()
    return anim
