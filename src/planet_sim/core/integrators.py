# MIT License (see LICENSE)
"""
Numerical integrators advancing bodies by one fixed timestep.

All integrators solve the point-mass equations of motion
    dx/dt = v,         dv/dt = a(x)
with a(x) supplied by an AccelerationModel (see core/forces.py).

Each step runs in two phases so the result never depends on the order in
which bodies are visited:
    1. every movable body's position is advanced;
    2. one snapshot of all positions is taken, every acceleration is
       evaluated from it, and only then are velocities written.
Because all accelerations of a pass come from the same configuration,
pairwise forces stay antisymmetric and total momentum is conserved to
rounding error.

Static bodies are skipped entirely: their position, velocity and cached
acceleration are never written.

Available integrators:
- ExplicitEuler: semi-implicit (symplectic) Euler, first order.
- VelocityVerlet: second order, symplectic, uses the cached acceleration.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
    Velocity Verlet: https://en.wikipedia.org/wiki/Verlet_integration#Velocity_Verlet
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from ..types import Body
from .forces import AccelerationModel


def _snapshot(bodies: Sequence[Body]) -> tuple[np.ndarray, np.ndarray]:
    """Copy current positions (n, 2) and masses (n,) out of the bodies."""
    positions = np.array([b.position for b in bodies], dtype=np.float64).reshape(-1, 2)
    masses = np.array([b.mass for b in bodies], dtype=np.float64)
    return positions, masses


def _movable(bodies: Sequence[Body]) -> list[int]:
    return [i for i, b in enumerate(bodies) if not b.is_static]


class Integrator(ABC):
    """Base class for fixed-step integration schemes."""

    name: str = ""

    @abstractmethod
    def step(self, bodies: Sequence[Body], model: AccelerationModel, dt: float) -> None:
        """
        Advance all non-static bodies by dt (bodies modified in-place).

        Args:
            bodies: Live bodies; row order defines the model's indices.
            model: Force law queried for accelerations.
            dt: Timestep.
        """
        ...

    @abstractmethod
    def prime(self, bodies: Sequence[Body], model: AccelerationModel) -> None:
        """
        Reset the cached acceleration of every non-static body.

        Called by the simulation whenever the cache may be stale (new
        integrator, new model, bodies added or removed).
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ExplicitEuler(Integrator):
    """
    Semi-implicit Euler.

    For every non-static body, in this order:
        x ← x + v·dt              (pre-step velocity)
        a ← a(x)                  (evaluated at the updated positions)
        v ← v + a·dt

    Updating the position before the velocity is what makes the scheme
    symplectic; the reverse order (plain forward Euler) gains energy on
    every orbit.

    The cached acceleration is never read.
    """

    name = "euler"

    def step(self, bodies: Sequence[Body], model: AccelerationModel, dt: float) -> None:
        movable = _movable(bodies)
        if not movable:
            return

        for i in movable:
            b = bodies[i]
            b.position = b.position + b.velocity * dt

        positions, masses = _snapshot(bodies)
        for i in movable:
            b = bodies[i]
            b.velocity = b.velocity + model.acceleration(i, positions, masses) * dt

    def prime(self, bodies: Sequence[Body], model: AccelerationModel) -> None:
        for i in _movable(bodies):
            bodies[i].acceleration = np.zeros(2, dtype=np.float64)


class VelocityVerlet(Integrator):
    """
    Velocity Verlet.

    For every non-static body, with a₀ the cached acceleration:
        x ← x + v·dt + ½·a₀·dt²
        a₁ ← a(x)                 (evaluated at the updated positions)
        v ← v + ½·(a₀ + a₁)·dt
        a₀ ← a₁

    One model evaluation per body per step, amortized through the cache.
    The cache must hold a(x) for the current positions before the first
    step; prime() evaluates it. A body whose cache is stale (zero on
    creation, or left over from another model) takes one step with the
    wrong a₀, an O(dt) one-off error.
    """

    name = "verlet"

    def step(self, bodies: Sequence[Body], model: AccelerationModel, dt: float) -> None:
        movable = _movable(bodies)
        if not movable:
            return

        half_dt2 = 0.5 * dt * dt
        half_dt = 0.5 * dt

        for i in movable:
            b = bodies[i]
            b.position = b.position + b.velocity * dt + b.acceleration * half_dt2

        positions, masses = _snapshot(bodies)
        for i in movable:
            b = bodies[i]
            a_new = model.acceleration(i, positions, masses)
            b.velocity = b.velocity + (b.acceleration + a_new) * half_dt
            b.acceleration = a_new

    def prime(self, bodies: Sequence[Body], model: AccelerationModel) -> None:
        movable = _movable(bodies)
        if not movable:
            return
        positions, masses = _snapshot(bodies)
        for i in movable:
            bodies[i].acceleration = model.acceleration(i, positions, masses)


INTEGRATORS: dict[str, type[Integrator]] = {
    ExplicitEuler.name: ExplicitEuler,
    VelocityVerlet.name: VelocityVerlet,
}


def make_integrator(integrator: Integrator | str) -> Integrator:
    """
    Resolve an integrator instance from an instance or a registered name.

    Raises:
        ValueError: If `integrator` is a string naming no known scheme.
        TypeError: If `integrator` is neither a string nor an Integrator.
    """
    if isinstance(integrator, Integrator):
        return integrator
    if isinstance(integrator, str):
        try:
            return INTEGRATORS[integrator]()
        except KeyError:
            raise ValueError(
                f"Unknown integrator: {integrator!r} (expected one of {sorted(INTEGRATORS)})"
            ) from None
    raise TypeError(f"Expected an Integrator or name, got {type(integrator).__name__}")
