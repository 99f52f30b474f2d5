import numpy as np
import pytest
class ScriptedRandom:
    """Replays fixed draws; falls back to ``default`` once a script runs out."""
    def __init__(self, values=(), picks=(), default=0.5):
        self.values = list(values)
        self.picks = list(picks)
        self.default = default
        self.random_calls = 0
        self.integer_calls = 0
    def _next_value(self):
        self.random_calls += 1
        return self.values.pop(0) if self.values else self.default
    def random(self, size=None):
        if size is None:
            return self._next_value()
        n = int(np.prod(size))
        return np.array([self._next_value() for _ in range(n)], dtype=np.float64).reshape(size)
    def integers(self, low, high=None, size=None):
        self.integer_calls += 1
        if high is None:
            low, high = 0, low
        if np.ndim(high) > 0:
            return np.asarray(high, dtype=np.int64) - 1
        if size is not None:
            fill = self.picks.pop(0) if self.picks else low
            return np.full(size, fill, dtype=np.int64)
        return self.picks.pop(0) if self.picks else low
@pytest.fixture
def scripted():
    return ScriptedRandom
@pytest.fixture
def scenario_path():
    return "biomesim/scenarios/default.yaml"
