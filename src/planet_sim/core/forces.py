# MIT License (see LICENSE)
"""
Acceleration models (force laws) for the simulation.

An acceleration model maps a consistent snapshot of the system to the
instantaneous acceleration of one body:

    a_i = model.acceleration(i, positions, masses)

where `positions` is an (n, 2) float64 array and `masses` an (n,) array,
both indexed like the body list handed to the integrator. Models are pure:
they never mutate their inputs and keep no per-step state, so the same
snapshot always yields the same result regardless of evaluation order.

Available models:
- RestoringForce: harmonic (Hooke-like) pull towards the origin, a = -x.
- PairwiseGravity: direct-summation Newtonian gravity, O(N) per body.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np

from ..constants import G


class AccelerationModel(ABC):
    """Base class for force laws evaluated per body."""

    name: str = ""

    @abstractmethod
    def acceleration(self, index: int, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """
        Acceleration acting on body `index`.

        Args:
            index: Row of the target body in `positions`/`masses`.
            positions: Snapshot of all positions, shape (n, 2).
            masses: Masses of all bodies, shape (n,).

        Returns:
            Acceleration vector [ax, ay] as a new float64 array.
        """
        ...

    def accelerations(self, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Evaluate every body against the same snapshot, shape (n, 2)."""
        out = np.zeros_like(positions, dtype=np.float64)
        for i in range(len(positions)):
            out[i] = self.acceleration(i, positions, masses)
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RestoringForce(AccelerationModel):
    """
    Unit harmonic restoring force towards the origin.

    Implements a = -x (spring constant and mass both 1, ω = 1), so a body
    released at rest from (1, 0) oscillates with period 2π. Mass and the
    other bodies are ignored.
    """

    name = "restoring"

    def acceleration(self, index: int, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        return -np.array(positions[index], dtype=np.float64)


class PairwiseGravity(AccelerationModel):
    """
    Newtonian gravity by direct pairwise summation.

    For body i:
        a_i = Σ_{j≠i} -G * m_j * (x_i - x_j) / |x_i - x_j|³

    Singularity guard: a pair whose cubed distance is exactly zero
    (coincident bodies) contributes nothing. No softening is applied, so
    close encounters are resolved exactly up to that point; very small
    separations combined with large masses or timesteps can still blow up
    numerically.

    Sources with mass ≤ 0 exert no attraction.

    Complexity: O(N) per body, O(N²) for a full pass.
    """

    name = "gravity"

    def __init__(self, g: float = G) -> None:
        self.g = float(g)

    def acceleration(self, index: int, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        delta = positions[index] - positions
        dist3 = np.hypot(delta[:, 0], delta[:, 1]) ** 3

        # Self-pair and coincident pairs both have dist3 == 0
        active = (dist3 != 0.0) & (masses > 0.0)
        active[index] = False
        if not np.any(active):
            return np.zeros(2, dtype=np.float64)

        k = -self.g * masses[active] / dist3[active]
        return (delta[active] * k[:, None]).sum(axis=0)

    def __repr__(self) -> str:
        return f"PairwiseGravity(g={self.g!r})"


MODELS: dict[str, type[AccelerationModel]] = {
    RestoringForce.name: RestoringForce,
    PairwiseGravity.name: PairwiseGravity,
}


def make_model(model: AccelerationModel | str) -> AccelerationModel:
    """
    Resolve a model instance from an instance or a registered name.

    Raises:
        ValueError: If `model` is a string naming no known model.
        TypeError: If `model` is neither a string nor an AccelerationModel.
    """
    if isinstance(model, AccelerationModel):
        return model
    if isinstance(model, str):
        try:
            return MODELS[model]()
        except KeyError:
            raise ValueError(
                f"Unknown acceleration model: {model!r} (expected one of {sorted(MODELS)})"
            ) from None
    raise TypeError(f"Expected an AccelerationModel or name, got {type(model).__name__}")
