# MIT License (see LICENSE)
"""
The simulation world and its step loop.

The Simulation class owns every body and acts as the simulation controller.
It manages:
- The body slots (tombstoned on removal, indices never reused).
- The active acceleration model and integrator, swappable at runtime.
- The fixed timestep and the trail-history configuration.
- The step loop:
    1. Re-prime the integrator's acceleration cache if it went stale.
    2. Integrate all live bodies once.
    3. Advance trail bookkeeping for every live body (static ones too).

Structure:
    - Host creates a Simulation (no global state; any number can coexist).
    - Host adds bodies via add(), which returns a stable index.
    - Host calls step() once per tick and reads snapshots for drawing.
"""
from __future__ import annotations
import logging
import math
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Callable, ContextManager

import numpy as np

from .constants import (
    DEFAULT_DT,
    DEFAULT_INTEGRATOR,
    DEFAULT_MASS,
    DEFAULT_MODEL,
    DEFAULT_RADIUS,
    TRAIL_CAPACITY,
    TRAIL_TICK_INTERVAL,
)
from .core.forces import AccelerationModel, make_model
from .core.integrators import Integrator, make_integrator
from .core.invariants import all_finite
from .errors import InvalidIndexError
from .profiler import Profiler
from .types import Body, BodySnapshot
from .util import f64, random_color

logger = logging.getLogger(__name__)

RemovalListener = Callable[[int, BodySnapshot], None]


@dataclass
class Simulation:
    """
    Planetary simulation world.

    Attributes:
        dt: Fixed timestep (default: 0.001).
        model: Acceleration model, instance or name ("gravity", "restoring").
        integrator: Integration scheme, instance or name ("euler", "verlet").
        trail_tick_interval: Ticks between trail samples (default: 4).
        trail_capacity: Maximum trail samples kept per body (default: 2500).
        prime_on_change: Re-evaluate the cached accelerations before the next
            step whenever bodies, model or integrator change. Disable to keep
            stale caches (one-step discontinuity under Verlet).
        check_finite: Log a warning the first time any body leaves finite
            state (NaN/Inf from extreme masses or timesteps).
        seed: Seed for the generator behind default body colours.
        profiler: Optional Profiler instance for timing statistics.

    Note:
        len(sim) counts live bodies, but a Simulation is always truthy, so
        `if sim:` never silently skips an empty world.
    """
    dt: float = DEFAULT_DT
    model: AccelerationModel | str = DEFAULT_MODEL
    integrator: Integrator | str = DEFAULT_INTEGRATOR
    trail_tick_interval: int = TRAIL_TICK_INTERVAL
    trail_capacity: int = TRAIL_CAPACITY
    prime_on_change: bool = True
    check_finite: bool = True
    seed: int | None = None
    profiler: Profiler | None = None

    # Internal state
    time: float = field(default=0.0, init=False)
    ticks: int = field(default=0, init=False)
    _slots: list[Body | None] = field(default_factory=list, init=False, repr=False)
    _removal_listeners: list[RemovalListener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration and resolve named strategies."""
        self.dt = _check_dt(self.dt)
        self.trail_tick_interval, self.trail_capacity = _check_trail_config(
            self.trail_tick_interval, self.trail_capacity
        )
        self.model = make_model(self.model)
        self.integrator = make_integrator(self.integrator)
        self._rng = np.random.default_rng(self.seed)
        self._stale = True
        self._finite = True

    # ------------------------------------------------------------------
    # Body lifecycle
    # ------------------------------------------------------------------

    def add(
        self,
        x: float,
        y: float,
        vx: float | None = 0.0,
        vy: float | None = 0.0,
        mass: float | None = None,
        radius: float | None = None,
        color: int | None = None,
        name: str | None = None,
        is_static: bool = False,
    ) -> int:
        """
        Add a body to the simulation.

        Omitted (or None) velocity components are 0. Omitted mass, radius
        and colour take the defaults (1, 100, random colour from the
        simulation's generator).

        Returns:
            The body's index, stable for the body's whole lifetime.
        """
        body = Body(
            position=(x, y),
            velocity=(vx or 0.0, vy or 0.0),
            mass=DEFAULT_MASS if mass is None else mass,
            radius=DEFAULT_RADIUS if radius is None else radius,
            color=random_color(self._rng) if color is None else int(color),
            name=name,
            is_static=bool(is_static),
        )
        body.resize_trail(self.trail_capacity)
        index = len(self._slots)
        self._slots.append(body)
        self._stale = True
        logger.debug("Added body %d (%s) at (%g, %g), mass=%g%s",
                     index, name, x, y, body.mass, ", static" if is_static else "")
        return index

    def remove(self, index: int) -> BodySnapshot:
        """
        Remove the body at `index`.

        The slot becomes a tombstone: other bodies keep their indices, and
        any later access to `index` raises InvalidIndexError. Registered
        removal listeners are called with (index, final snapshot) so they
        can release presentation resources.

        Returns:
            Snapshot of the body as it was when removed.

        Raises:
            InvalidIndexError: If `index` is out of range or already removed.
        """
        body = self._get(index)
        self._slots[index] = None
        self._stale = True
        snap = body.snapshot(index)
        logger.debug("Removed body %d (%s)", index, body.name)
        for listener in list(self._removal_listeners):
            listener(index, snap)
        return snap

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Register a callback invoked as listener(index, snapshot) on removal."""
        self._removal_listeners.append(listener)

    def remove_removal_listener(self, listener: RemovalListener) -> None:
        """Unregister a previously added removal callback."""
        if listener in self._removal_listeners:
            self._removal_listeners.remove(listener)

    # ------------------------------------------------------------------
    # Strategy / configuration
    # ------------------------------------------------------------------

    def set_model(self, model: AccelerationModel | str) -> None:
        """Swap the acceleration model; takes effect on the next step."""
        self.model = make_model(model)
        self._stale = True
        logger.info("Acceleration model set to %r", self.model)

    def set_integrator(self, integrator: Integrator | str) -> None:
        """Swap the integrator; takes effect on the next step."""
        self.integrator = make_integrator(integrator)
        self._stale = True
        logger.info("Integrator set to %r", self.integrator)

    def set_trail_config(self, interval: int | None = None, capacity: int | None = None) -> None:
        """
        Change the trail cadence and/or capacity.

        Existing trails keep their newest samples, truncated to the new
        capacity. Tick counters are left as they are.
        """
        interval = self.trail_tick_interval if interval is None else interval
        capacity = self.trail_capacity if capacity is None else capacity
        interval, capacity = _check_trail_config(interval, capacity)
        self.trail_tick_interval = interval
        if capacity != self.trail_capacity:
            self.trail_capacity = capacity
            for body in self._live():
                body.resize_trail(capacity)

    def reset_trails(self) -> None:
        """Clear the trail history of every body."""
        for body in self._live():
            body.trail.clear()

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> None:
        """
        Advance the simulation by one tick of dt.

        Runs the integrator exactly once over all live bodies, then the
        trail bookkeeping for each of them.
        """
        bodies = self._live()

        with self._section("integrate"):
            if self._stale:
                if self.prime_on_change:
                    self.integrator.prime(bodies, self.model)
                self._stale = False
            self.integrator.step(bodies, self.model, self.dt)

        with self._section("trails"):
            for body in bodies:
                body.record_trail(self.trail_tick_interval)

        self.time += self.dt
        self.ticks += 1

        if self.check_finite and self._finite and not all_finite(bodies):
            self._finite = False
            logger.warning(
                "Non-finite body state after tick %d (t=%g); "
                "mass/timestep combination is numerically unstable",
                self.ticks, self.time,
            )

    def run(self, steps: int) -> None:
        """Call step() `steps` times."""
        for _ in range(steps):
            self.step()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of live bodies. See __bool__: an empty simulation is truthy."""
        return sum(1 for b in self._slots if b is not None)

    def __bool__(self) -> bool:
        return True

    @property
    def count(self) -> int:
        """Number of live bodies."""
        return len(self)

    def indices(self) -> list[int]:
        """Indices of all live bodies, ascending."""
        return [i for i, b in enumerate(self._slots) if b is not None]

    def snapshot(self, index: int) -> BodySnapshot:
        """
        Read-only copy of one body.

        Raises:
            InvalidIndexError: If `index` is out of range or removed.
        """
        return self._get(index).snapshot(index)

    def snapshots(self) -> list[BodySnapshot]:
        """Read-only copies of all live bodies, in index order."""
        return [b.snapshot(i) for i, b in enumerate(self._slots) if b is not None]

    def position(self, index: int) -> np.ndarray:
        """
        Current position of one body (a copy), e.g. for a following camera.

        Raises:
            InvalidIndexError: If `index` is out of range or removed.
        """
        return f64(self._get(index).position)

    def is_finite(self) -> bool:
        """True if every live body has finite position and velocity."""
        return all_finite(self._live())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _live(self) -> list[Body]:
        return [b for b in self._slots if b is not None]

    def _get(self, index: int) -> Body:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise InvalidIndexError(index, "index must be an integer")
        if index < 0 or index >= len(self._slots):
            raise InvalidIndexError(index, "out of range")
        body = self._slots[index]
        if body is None:
            raise InvalidIndexError(index, "body was removed")
        return body

    def _section(self, name: str) -> ContextManager[None]:
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)


def _check_dt(dt: float) -> float:
    dt = float(dt)
    if not math.isfinite(dt) or dt <= 0.0:
        raise ValueError(f"dt must be a positive finite number, got {dt}")
    return dt


def _check_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer >= 1, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be an integer >= 1, got {value}")
    return int(value)


def _check_trail_config(interval: int, capacity: int) -> tuple[int, int]:
    """Validate both trail settings before either is applied."""
    return (
        _check_count("trail_tick_interval", interval),
        _check_count("trail_capacity", capacity),
    )
