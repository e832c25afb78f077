"""
Strip storage for the fractal surface generator.

A strip is one row of height samples at a given resolution level. A strip
at level ``L`` always holds ``2**L + 1`` samples; index 0 and the last index
are the boundary samples.
"""

import numpy as np
from typing import Optional

from .exceptions import StripReleasedError


def strip_size(level: int) -> int:
    """Number of samples held by a strip at ``level``."""
    return (1 << level) + 1


class Strip:
    """Fixed-size buffer of height samples at one resolution level."""

    __slots__ = ("level", "_data")

    def __init__(self, level: int, data: Optional[np.ndarray] = None):
        if level < 0:
            raise ValueError(f"Strip level must be >= 0, got {level}")
        size = strip_size(level)
        if data is None:
            data = np.empty(size, dtype=np.float64)
        elif data.shape != (size,):
            raise ValueError(
                f"Strip at level {level} needs {size} samples, got {data.shape}"
            )
        self.level = level
        self._data = data

    @property
    def data(self) -> np.ndarray:
        if self._data is None:
            raise StripReleasedError(f"Strip at level {self.level} was released")
        return self._data

    @property
    def size(self) -> int:
        return strip_size(self.level)

    @property
    def released(self) -> bool:
        return self._data is None

    def release(self) -> None:
        self._data = None

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        return self.data[index]

    def __repr__(self) -> str:
        if self._data is None:
            return f"Strip(level={self.level}, released)"
        return f"Strip(level={self.level}, data={self._data!r})"


def create_strip(level: int) -> Strip:
    """Allocate an uninitialised strip. MemoryError propagates to the caller."""
    return Strip(level)


def release_strip(strip: Strip) -> None:
    """Drop a strip's storage. Releasing twice is a no-op."""
    strip.release()


def fill_strip(level: int, value: float) -> Strip:
    """Allocate a strip with every sample set to ``value``."""
    return Strip(level, np.full(strip_size(level), value, dtype=np.float64))


def double_strip(strip: Strip) -> Strip:
    """
    Spread a strip onto the next finer level.

    The samples of ``strip`` land on the even indices of the result in order;
    odd indices are zero placeholders until ``side_update`` fills them.
    The input strip is left untouched.
    """
    source = strip.data
    doubled = np.zeros(strip_size(strip.level + 1), dtype=np.float64)
    doubled[0::2] = source
    return Strip(strip.level + 1, doubled)
