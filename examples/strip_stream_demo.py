#!/usr/bin/env python3
"""
Demo script streaming strips off a fractal surface.
"""

import numpy as np
from py_crinkle.config import settings
from py_crinkle.core import make_fold_from_settings, iter_strips, release_strip, set_fractal_dim
from py_crinkle.utils.log_config import configure_logging


def main():
    """Stream strips and report their statistics."""
    configure_logging(settings.log_level, "console")

    print("Py-Crinkle Strip Stream Demo")
    print("=" * 40)
    print(f"Levels: {settings.levels} ({(1 << settings.levels) + 1} samples per strip)")
    print(f"Fractal dimension: {settings.fractal_dim}, smoothing: {settings.smooth}")

    with make_fold_from_settings(settings) as fold:
        for i, strip in enumerate(iter_strips(fold, 16)):
            heights = strip.data
            bar = '#' * int(min(np.ptp(heights), 40))
            print(f"  strip {i:3d}: mean {np.mean(heights):8.3f}  "
                  f"range {np.min(heights):8.3f}..{np.max(heights):8.3f}  {bar}")
            release_strip(strip)

        print("\nRoughening surface...")
        set_fractal_dim(fold, min(settings.fractal_dim + 0.2, 1.0))
        for i, strip in enumerate(iter_strips(fold, 8), start=16):
            heights = strip.data
            print(f"  strip {i:3d}: std {np.std(heights):8.3f}")
            release_strip(strip)

        calls = ", ".join(f"L{node.level}={node.calls}" for node in reversed(fold.levels))
        print(f"\nCalls per level: {calls}")


if __name__ == "__main__":
    main()
