"""
Displacement kernels for the recursive strip generator.

Each kernel mixes local averages with scaled Gaussian noise. ``scale`` and
``midscale`` carry the fractal dimension: they grow with the physical size
of the update cell at the strip's level.

Noise is drawn in one block per call, but in the same order a sequential
left-to-right pass over the strip would consume it, so a given source
sequence always produces the same surface.
"""

import numpy as np
import structlog

from .exceptions import StripLevelMismatchError
from .strip import Strip
from ..utils.random import GaussianSource

logger = structlog.get_logger()


def side_update(strip: Strip, scale: float, source: GaussianSource) -> None:
    """
    Fill the odd placeholders of a freshly doubled strip.

    Each odd sample becomes the mean of its two even neighbours plus
    ``scale``-weighted noise.
    """
    if strip.level < 1:
        logger.error("side_update on level-0 strip")
        raise StripLevelMismatchError("side_update", strip.level)

    d = strip.data
    count = 1 << (strip.level - 1)
    d[1::2] = scale * source.gaussians(count) + (d[0:-1:2] + d[2::2]) / 2.0


def mid_update(
    left: Strip,
    result: Strip,
    right: Strip,
    scale: float,
    midscale: float,
    source: GaussianSource,
) -> None:
    """
    Compute ``result`` from the strips on either side of it.

    ``left`` is one level coarser than ``result`` and ``right``. Even samples
    are the midpoint of the matching left/right pair, odd samples the mean of
    the four surrounding samples (diagonal cells, hence ``midscale``).

    Raises:
        StripLevelMismatchError: if the levels do not line up
    """
    if left.level != result.level - 1 or result.level != right.level:
        logger.error(
            "mid_update level mismatch",
            left=left.level,
            result=result.level,
            right=right.level,
        )
        raise StripLevelMismatchError("mid_update", left.level, result.level, right.level)

    l = left.data
    r = right.data
    n = result.data
    count = 1 << left.level

    # interleaved: even, odd, even, ..., final even
    noise = source.gaussians(2 * count + 1)
    n[0::2] = scale * noise[0::2] + (l + r[0::2]) / 2.0
    n[1::2] = midscale * noise[1::2] + (l[:-1] + l[1:] + r[0:-1:2] + r[2::2]) / 4.0


def recalc(
    left: Strip,
    regen: Strip,
    right: Strip,
    scale: float,
    source: GaussianSource,
) -> None:
    """
    Re-derive the even samples of ``regen`` from their finished neighbours.

    Removes the creases between update squares. Boundary samples average
    three neighbours, interior ones four. This shifts the effective fractal
    dimension slightly.

    Raises:
        StripLevelMismatchError: if the three strips are not the same level
    """
    if left.level != regen.level or regen.level != right.level:
        logger.error(
            "recalc level mismatch",
            left=left.level,
            regen=regen.level,
            right=right.level,
        )
        raise StripLevelMismatchError("recalc", left.level, regen.level, right.level)
    if regen.level < 1:
        logger.error("recalc on level-0 strips")
        raise StripLevelMismatchError("recalc", left.level, regen.level, right.level)

    g = regen.data
    odd = g[1::2]
    evens = (1 << (regen.level - 1)) + 1

    neighbours = np.zeros(evens, dtype=np.float64)
    neighbours[:-1] += odd
    neighbours[1:] += odd
    divisor = np.full(evens, 4.0)
    divisor[0] = divisor[-1] = 3.0

    noise = source.gaussians(evens)
    g[0::2] = scale * noise + (left.data[0::2] + neighbours + right.data[0::2]) / divisor
