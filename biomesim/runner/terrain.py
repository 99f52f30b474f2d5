from enum import IntEnum
class Terrain(IntEnum):
    LAND = 0
    GRASS = 0
    RESOURCE = 1
    WATER = 2
TERRAINS = (Terrain.LAND, Terrain.RESOURCE, Terrain.WATER)
N_TERRAINS = len(TERRAINS)
