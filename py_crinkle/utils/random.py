"""
Gaussian noise sources.

The generator never touches a global random state: every fold is handed a
source object and draws all of its displacement noise from it. Swapping in
a constant or fixed-sequence source makes the whole surface deterministic.
"""

import numpy as np
from itertools import cycle
from typing import Iterable, Optional


class GaussianSource:
    """Supplier of standard-normal samples (mean 0, variance 1)."""

    def gaussian(self) -> float:
        raise NotImplementedError

    def gaussians(self, count: int) -> np.ndarray:
        """Draw ``count`` samples, in the order repeated gaussian() calls would."""
        return np.fromiter(
            (self.gaussian() for _ in range(count)), dtype=np.float64, count=count
        )


class NormalGaussianSource(GaussianSource):
    """NumPy-backed standard-normal source."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def gaussian(self) -> float:
        return float(self._rng.standard_normal())

    def gaussians(self, count: int) -> np.ndarray:
        return self._rng.standard_normal(count)


class ConstantGaussianSource(GaussianSource):
    """Always returns the same value. With 0.0 every update is pure averaging."""

    def __init__(self, value: float = 0.0):
        self.value = float(value)

    def gaussian(self) -> float:
        return self.value

    def gaussians(self, count: int) -> np.ndarray:
        return np.full(count, self.value, dtype=np.float64)


class SequenceGaussianSource(GaussianSource):
    """Cycles through a fixed list of values."""

    def __init__(self, values: Iterable[float]):
        self.values = [float(v) for v in values]
        if not self.values:
            raise ValueError("SequenceGaussianSource needs at least one value")
        self._cycle = cycle(self.values)
        self.call_count = 0

    def gaussian(self) -> float:
        self.call_count += 1
        return next(self._cycle)


def make_gaussian_source(seed: Optional[int] = None) -> GaussianSource:
    """
    Create the default noise source.

    Args:
        seed: Seed for reproducible surfaces, or None for fresh entropy

    Returns:
        NormalGaussianSource instance
    """
    return NormalGaussianSource(seed)
