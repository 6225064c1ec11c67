# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and debugging stability issues.
In a closed system, total momentum (under gravity) and total energy (under
either model) should remain constant within integration error.

Every function accepts any iterable of objects exposing `position`,
`velocity` and `mass`: BodySnapshots from Simulation.snapshots(), or Body
instances inside the kernel.
"""
from __future__ import annotations
from typing import Iterable, Protocol

import numpy as np

from ..constants import G


class _PointMass(Protocol):
    position: np.ndarray
    velocity: np.ndarray
    mass: float


def kinetic_energy(bodies: Iterable[_PointMass]) -> float:
    """
    Total kinetic energy T = Σ ½·m·v².

    Bodies with mass ≤ 0 are ignored.
    """
    ke = 0.0
    for b in bodies:
        if b.mass <= 0:
            continue
        ke += 0.5 * b.mass * float(np.dot(b.velocity, b.velocity))
    return ke


def linear_momentum(bodies: Iterable[_PointMass]) -> np.ndarray:
    """
    Total linear momentum P = Σ m·v.

    Returns:
        Momentum vector [Px, Py].
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        if b.mass <= 0:
            continue
        p += b.mass * b.velocity
    return p


def gravitational_potential_energy(bodies: Iterable[_PointMass], g: float = G) -> float:
    """
    Pairwise gravitational potential U = -Σ_{i<j} G·mᵢ·mⱼ / rᵢⱼ.

    Coincident pairs and pairs involving a mass ≤ 0 are skipped, matching
    the force law in PairwiseGravity.
    """
    items = [b for b in bodies if b.mass > 0]
    u = 0.0
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            r = float(np.hypot(*(items[i].position - items[j].position)))
            if r == 0.0:
                continue
            u -= g * items[i].mass * items[j].mass / r
    return u


def harmonic_potential_energy(bodies: Iterable[_PointMass]) -> float:
    """
    Potential of the unit restoring force, U = Σ ½·|x|².

    RestoringForce ignores mass (a = -x for every body), so the conserved
    quantity per body is ½v² + ½x²; this returns the Σ ½x² part and pairs
    with specific_kinetic_energy().
    """
    return sum(0.5 * float(np.dot(b.position, b.position)) for b in bodies)


def specific_kinetic_energy(bodies: Iterable[_PointMass]) -> float:
    """Kinetic energy per unit mass, Σ ½·v²."""
    return sum(0.5 * float(np.dot(b.velocity, b.velocity)) for b in bodies)


def all_finite(bodies: Iterable[_PointMass]) -> bool:
    """True if no position or velocity component is NaN or infinite."""
    return all(
        np.all(np.isfinite(b.position)) and np.all(np.isfinite(b.velocity))
        for b in bodies
    )
