"""
Core fractal strip generation.
"""

from .strip import Strip, create_strip, release_strip, fill_strip, double_strip
from .kernels import side_update, mid_update, recalc
from .fold import (
    Fold, FoldLevel, FoldState, make_fold, make_fold_from_settings, free_fold,
    next_strip, iter_strips, set_fractal_dim,
)
from .exceptions import (
    CrinkleError, StripLevelMismatchError, InvalidFoldStateError,
    FoldReleasedError, StripReleasedError,
)

__all__ = ['Strip', 'create_strip', 'release_strip', 'fill_strip', 'double_strip',
           'side_update', 'mid_update', 'recalc',
           'Fold', 'FoldLevel', 'FoldState', 'make_fold', 'make_fold_from_settings',
           'free_fold', 'next_strip', 'iter_strips', 'set_fractal_dim',
           'CrinkleError', 'StripLevelMismatchError', 'InvalidFoldStateError',
           'FoldReleasedError', 'StripReleasedError']
