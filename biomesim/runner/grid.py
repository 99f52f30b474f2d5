import numpy as np
from dataclasses import dataclass
from typing import List, Tuple
from .terrain import Terrain
Coord = Tuple[int, int]
CROSS_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))
DIAGONAL_OFFSETS = ((-1, -1), (1, -1), (-1, 1), (1, 1))
def coord_of(index: int, width: int, height: int) -> Coord:
    if not 0 <= index < width * height:
        raise ValueError(f"Index {index} outside grid of {width}x{height}")
    return index % width, index // width
def index_of(x: int, y: int, width: int, height: int) -> int:
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Coordinate ({x}, {y}) outside grid of {width}x{height}")
    return y * width + x
def _clipped(x: int, y: int, width: int, height: int, offsets) -> List[Coord]:
    out = []
    for dx, dy in offsets:
        nx = x + dx
        ny = y + dy
        if 0 <= nx < width and 0 <= ny < height:
            out.append((nx, ny))
    return out
def cross_neighbors(x: int, y: int, width: int, height: int) -> List[Coord]:
    return _clipped(x, y, width, height, CROSS_OFFSETS)
def full_neighbors(x: int, y: int, width: int, height: int) -> List[Coord]:
    return _clipped(x, y, width, height, CROSS_OFFSETS + DIAGONAL_OFFSETS)
@dataclass(frozen=True)
class Cell:
    terrain: Terrain
    population: int
class Grid:
    def __init__(self, width: int, height: int, terrain: np.ndarray = None):
        self.width = width
        self.height = height
        self.size = width * height
        if terrain is None:
            terrain = np.zeros(self.size, dtype=np.uint8)
        self.terrain = np.asarray(terrain, dtype=np.uint8).reshape(self.size).copy()
        self.population = np.zeros(self.size, dtype=np.int64)
        self._cross = [None] * self.size
    @classmethod
    def filled(cls, width: int, height: int, terrain: Terrain) -> "Grid":
        return cls(width, height, np.full(width * height, int(terrain), dtype=np.uint8))
    def coord_of(self, index: int) -> Coord:
        return coord_of(index, self.width, self.height)
    def index_of(self, x: int, y: int) -> int:
        return index_of(x, y, self.width, self.height)
    def cross_neighbors(self, x: int, y: int) -> List[Coord]:
        return cross_neighbors(x, y, self.width, self.height)
    def full_neighbors(self, x: int, y: int) -> List[Coord]:
        return full_neighbors(x, y, self.width, self.height)
    def cross_neighbor_indices(self, index: int) -> List[int]:
        nbrs = self._cross[index]
        if nbrs is None:
            x, y = self.coord_of(index)
            nbrs = [ny * self.width + nx for nx, ny in self.cross_neighbors(x, y)]
            self._cross[index] = nbrs
        return nbrs
    def cell_at(self, index: int) -> Cell:
        if not 0 <= index < self.size:
            raise ValueError(f"Index {index} outside grid of {self.width}x{self.height}")
        return Cell(terrain=Terrain(int(self.terrain[index])), population=int(self.population[index]))
    def terrain_2d(self) -> np.ndarray:
        return self.terrain.reshape(self.height, self.width)
    def population_2d(self) -> np.ndarray:
        return self.population.reshape(self.height, self.width)
    @property
    def shape(self):
        return (self.height, self.width)
