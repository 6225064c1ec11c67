# MIT License (see LICENSE)
"""
Physical constants and simulation defaults.

The kernel is unit-agnostic apart from the gravitational constant; the
defaults below reproduce the behaviour of the original browser demo
(a millisecond timestep, trails sampled every fourth tick).
"""
from __future__ import annotations

# Newtonian gravitational constant, G = 6.67408 × 10⁻¹¹ m³·kg⁻¹·s⁻²
# (CODATA 2014 value).
G: float = 6.67408e-11

# Fixed integration timestep.
DEFAULT_DT: float = 0.001

# Body defaults applied by Simulation.add() when a value is omitted.
DEFAULT_MASS: float = 1.0
DEFAULT_RADIUS: float = 100.0

# Trail history: one sample every TRAIL_TICK_INTERVAL ticks, at most
# TRAIL_CAPACITY samples per body.
TRAIL_TICK_INTERVAL: int = 4
TRAIL_CAPACITY: int = 2500

# Names accepted by Simulation for the two strategy axes.
DEFAULT_MODEL: str = "gravity"
DEFAULT_INTEGRATOR: str = "euler"
