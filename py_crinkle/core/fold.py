"""
Recursive fold engine for streaming fractal surfaces.

A fold is a stack of resolution levels, finest first in the caller's eyes
but stored coarsest first (``levels[0]`` is level 0). Each call to
``next_strip`` returns one new strip of the finest level. A level only asks
the next coarser level for data on every other call, so the recursive work
per strip stays bounded no matter how many strips are produced.

The surface always starts as a perturbation of a flat strip at ``start``;
long length-scale deformations take a number of calls to build up because
changes only reach the coarse levels gradually.
"""

import math
import structlog
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional

from .exceptions import FoldReleasedError, InvalidFoldStateError
from .kernels import mid_update, recalc, side_update
from .strip import Strip, create_strip, double_strip, fill_strip, release_strip
from ..utils.random import GaussianSource, make_gaussian_source

if TYPE_CHECKING:
    from ..config.config import Settings

logger = structlog.get_logger()

ROOT2 = math.sqrt(2.0)


class FoldState(Enum):
    """Which half of the update cycle a level is in."""

    START = 0
    STORE = 1


def displacement_scales(length: float, fractal_dim: float):
    """Return ``(scale, midscale)`` for an update cell of side ``length``."""
    exponent = 2.0 * fractal_dim
    return length ** exponent, (length * ROOT2) ** exponent


@dataclass
class FoldLevel:
    """Parameters and strip slots for one recursion level."""

    level: int
    smooth: bool
    mean: float
    length: float
    scale: float
    midscale: float
    state: FoldState = FoldState.START
    old: Optional[Strip] = None
    new: Optional[Strip] = None
    working: Optional[Strip] = None
    regen: Optional[Strip] = None
    calls: int = 0  # next_strip invocations served by this level

    def slots(self) -> List[Optional[Strip]]:
        return [self.new, self.working, self.regen, self.old]

    def release(self) -> None:
        for strip in self.slots():
            if strip is not None:
                release_strip(strip)
        self.new = self.working = self.regen = self.old = None


@dataclass
class Fold:
    """
    A complete recursion stack for one surface.

    Attributes:
        levels: Per-level state, indexed by level (0 is the coarsest)
        source: Gaussian noise source shared by every level of this fold
        fractal_dim: Fractal dimension the scales were computed from
    """

    levels: List[FoldLevel]
    source: GaussianSource
    fractal_dim: float
    released: bool = field(default=False)

    @property
    def level(self) -> int:
        """Level of the strips this fold hands out."""
        return len(self.levels) - 1

    @property
    def strip_size(self) -> int:
        return (1 << self.level) + 1

    def next(self, level: int) -> Optional[FoldLevel]:
        """The next coarser level below ``level``, or None at level 0."""
        return self.levels[level - 1] if level > 0 else None

    def __enter__(self) -> "Fold":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        free_fold(self)


def make_fold(
    levels: int,
    smooth: bool,
    length: float,
    start: float,
    mean: float,
    fractal_dim: float,
    source: Optional[GaussianSource] = None,
) -> Fold:
    """
    Build the recursion stack for a new surface.

    Args:
        levels: Finest level; strips will hold ``2**levels + 1`` samples
        smooth: Enable the crease-removal pass
        length: Side of the update square at the finest level (not the
            width of the surface); doubles with each coarser level
        start: Height of the flat surface the strips start from
        mean: Mean height of the base-level samples
        fractal_dim: Fractal dimension controlling roughness
        source: Gaussian noise source; a fresh unseeded one if omitted

    Returns:
        Fold ready for ``next_strip``
    """
    if levels < 0:
        raise ValueError(f"levels must be >= 0, got {levels}")
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")
    if source is None:
        source = make_gaussian_source()

    stack: List[FoldLevel] = []
    level_length = length
    for level in range(levels, -1, -1):
        scale, midscale = displacement_scales(level_length, fractal_dim)
        node = FoldLevel(
            level=level,
            smooth=bool(smooth),
            mean=mean,
            length=level_length,
            scale=scale,
            midscale=midscale,
        )
        if level > 0:
            node.regen = fill_strip(level, start)
            node.old = fill_strip(level, start)
        stack.append(node)
        level_length *= 2.0
    stack.reverse()

    logger.info(
        "Fold chain constructed",
        levels=levels,
        smooth=bool(smooth),
        length=length,
        fractal_dim=fractal_dim,
        strip_size=(1 << levels) + 1,
    )
    return Fold(levels=stack, source=source, fractal_dim=fractal_dim)


def make_fold_from_settings(
    settings: "Settings", source: Optional[GaussianSource] = None
) -> Fold:
    """Build a fold from surface settings, seeding the source from ``settings.seed``."""
    if source is None:
        source = make_gaussian_source(settings.seed)
    return make_fold(
        levels=settings.levels,
        smooth=settings.smooth,
        length=settings.length,
        start=settings.start,
        mean=settings.mean,
        fractal_dim=settings.fractal_dim,
        source=source,
    )


def free_fold(fold: Fold) -> None:
    """Release every strip the fold still owns. The fold is unusable afterwards."""
    if fold.released:
        return
    for node in fold.levels:
        node.release()
    fold.levels = []
    fold.released = True
    logger.debug("Fold released")


def next_strip(fold: Fold) -> Strip:
    """
    Generate the next strip of the finest level.

    The returned strip belongs to the caller; the fold keeps no reference.

    Raises:
        FoldReleasedError: if ``free_fold`` was already called
        InvalidFoldStateError: if a level's state is corrupt
    """
    if fold.released:
        raise FoldReleasedError("next_strip called on a released fold")
    return _next_strip(fold, fold.level)


def _next_strip(fold: Fold, level: int) -> Strip:
    node = fold.levels[level]
    node.calls += 1
    source = fold.source

    if level == 0:
        result = create_strip(0)
        result.data[:] = node.mean + node.scale * source.gaussians(2)
        return result

    if node.state is FoldState.START:
        # new/working empty, regen has only its even samples, old is complete
        node.new = _next_strip(fold, fold.next(level).level)
        side_update(node.regen, node.scale, source)
        node.working = create_strip(level)
        mid_update(node.new, node.working, node.regen, node.scale, node.midscale, source)
        if node.smooth:
            recalc(node.working, node.regen, node.old, node.scale, source)
        result, node.old = node.old, None
        node.state = FoldState.STORE
        return result

    if node.state is FoldState.STORE:
        result = node.regen
        node.old = node.working
        node.working = None
        node.regen = double_strip(node.new)
        release_strip(node.new)
        node.new = None
        node.state = FoldState.START
        return result

    logger.error("Invalid fold state", level=level, state=repr(node.state))
    raise InvalidFoldStateError(f"next_strip: invalid state {node.state!r} at level {level}")


def iter_strips(fold: Fold, count: Optional[int] = None) -> Iterator[Strip]:
    """Yield successive strips; forever when ``count`` is None."""
    produced = 0
    while count is None or produced < count:
        yield next_strip(fold)
        produced += 1


def set_fractal_dim(fold: Fold, fractal_dim: float) -> None:
    """
    Change the roughness of a running surface.

    Every level's scales are recomputed. Coarse levels are consulted less
    often, so long length-scale structure adapts over the following calls.
    """
    if fold.released:
        raise FoldReleasedError("set_fractal_dim called on a released fold")
    for node in fold.levels:
        node.scale, node.midscale = displacement_scales(node.length, fractal_dim)
    fold.fractal_dim = fractal_dim
    logger.info("Fractal dimension changed", fractal_dim=fractal_dim, levels=fold.level)
