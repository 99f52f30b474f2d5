import numpy as np
from typing import Any, Optional, Protocol
class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` the simulation draws from.

    One instance is built per simulation and threaded through generation,
    smoothing, seeding and every tick. Tests substitute scripted objects.
    """
    def random(self, size: Any = None) -> Any: ...
    def integers(self, low: Any, high: Any = None, size: Any = None) -> Any: ...
def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)
