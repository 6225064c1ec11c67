# MIT License (see LICENSE)
"""
Core type definitions for the planetary simulation.

Defines the fundamental data structures:
- Body: the mutable simulation entity (kinematic state + trail history).
- BodySnapshot: an immutable, read-only copy handed to renderers and tools.

The equations of motion are plain point-mass Newtonian mechanics in 2D:
    dx/dt = v,    dv/dt = a(x)
where a(x) is supplied by an acceleration model (see core/forces.py).
"""
from __future__ import annotations
from collections import deque
from itertools import islice
from dataclasses import dataclass, field

import numpy as np

from .constants import DEFAULT_MASS, DEFAULT_RADIUS, TRAIL_CAPACITY
from .util import f64, zeros2


TrailPoint = tuple[float, float]


@dataclass
class Body:
    """
    A point/sphere body with kinematic state and a bounded trail.

    Attributes:
        position: Position [x, y].
        velocity: Velocity [vx, vy].
        acceleration: Cached acceleration from the previous evaluation. Only
            velocity Verlet reads it; other integrators leave it zeroed.
        mass: Mass. Bodies with mass ≤ 0 are allowed but exert no gravity.
        radius: Display radius; the kernel never reads it.
        color: Display colour packed as 0xRRGGBB.
        name: Optional display label.
        is_static: Static bodies are never integrated (fixed force sources).
        trail: Past positions, most recent first, bounded by trail.maxlen.
        trail_tick_counter: Ticks since the last trail sample.

    Note:
        Vectors are converted to float64 numpy arrays on init. Integrators
        replace the arrays rather than mutating them in place, so arrays
        handed out in a snapshot are never changed behind a caller's back.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    mass: float = DEFAULT_MASS
    radius: float = DEFAULT_RADIUS
    color: int = 0xFFFFFF
    name: str | None = None
    is_static: bool = False

    # Runtime state (not user-specified)
    acceleration: np.ndarray = field(default_factory=zeros2)
    trail: deque[TrailPoint] = field(default_factory=lambda: deque(maxlen=TRAIL_CAPACITY))
    trail_tick_counter: int = 0

    def __post_init__(self) -> None:
        """Convert vectors to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)
        self.mass = float(self.mass)
        self.radius = float(self.radius)

    def record_trail(self, interval: int) -> bool:
        """
        Advance the trail counter by one tick.

        Every `interval` ticks the counter wraps to zero and the current
        position is pushed to the front of the trail; the deque drops the
        oldest sample once it is full.

        Returns:
            True if a sample was recorded on this tick.
        """
        self.trail_tick_counter += 1
        if self.trail_tick_counter < interval:
            return False
        self.trail_tick_counter = 0
        self.trail.appendleft((float(self.position[0]), float(self.position[1])))
        return True

    def resize_trail(self, capacity: int) -> None:
        """Rebuild the trail with a new capacity, keeping the newest samples."""
        self.trail = deque(islice(self.trail, capacity), maxlen=capacity)

    def snapshot(self, index: int) -> BodySnapshot:
        """Take an immutable copy of this body's state."""
        return BodySnapshot(
            index=index,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            acceleration=self.acceleration.copy(),
            mass=self.mass,
            radius=self.radius,
            color=self.color,
            name=self.name,
            is_static=self.is_static,
            trail=tuple(self.trail),
        )


@dataclass(frozen=True)
class BodySnapshot:
    """
    Read-only view of a body at one instant.

    This is the only form in which body state leaves the simulation:
    renderers draw from it, diagnostics (core/invariants.py) sum over it.

    Attributes:
        index: Slot index of the body in its simulation.
        trail: Past positions, most recent first.
        (remaining fields mirror Body)
    """
    index: int
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    mass: float
    radius: float
    color: int
    name: str | None
    is_static: bool
    trail: tuple[TrailPoint, ...]
