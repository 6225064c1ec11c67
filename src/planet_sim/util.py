# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All vectors are 2D numpy arrays of shape (2,) in float64; point sequences
(position snapshots) are arrays of shape (n, 2).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for positions and velocities while keeping
    consistent numeric precision inside the kernel.
    """
    return np.array(x, dtype=np.float64)


def zeros2() -> np.ndarray:
    """A fresh zero 2D vector."""
    return np.zeros(2, dtype=np.float64)


def random_color(rng: np.random.Generator) -> int:
    """
    Draw a random 24-bit colour packed as 0xRRGGBB.

    Each channel is sampled uniformly from 0..255 using the supplied
    generator, so seeded simulations produce reproducible colours.
    """
    r, g, b = (int(c) for c in rng.integers(0, 256, size=3))
    return (r << 16) | (g << 8) | b
