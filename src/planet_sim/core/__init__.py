# MIT License (see LICENSE)
"""
Core simulation components.

This subpackage provides:
    - Acceleration models: harmonic restoring force, pairwise gravity.
    - Integrators: semi-implicit Euler, velocity Verlet.
    - Invariants: momentum/energy diagnostics.

Typical usage:
    from planet_sim.core import PairwiseGravity, VelocityVerlet

    model = PairwiseGravity()
    integrator = VelocityVerlet()
    integrator.prime(bodies, model)
    integrator.step(bodies, model, dt=1e-3)
"""
from .forces import (
    AccelerationModel,
    RestoringForce,
    PairwiseGravity,
    make_model,
)
from .integrators import (
    Integrator,
    ExplicitEuler,
    VelocityVerlet,
    make_integrator,
)
from .invariants import (
    kinetic_energy,
    linear_momentum,
    gravitational_potential_energy,
    harmonic_potential_energy,
    specific_kinetic_energy,
    all_finite,
)

__all__ = [
    # Models
    "AccelerationModel",
    "RestoringForce",
    "PairwiseGravity",
    "make_model",
    # Integrators
    "Integrator",
    "ExplicitEuler",
    "VelocityVerlet",
    "make_integrator",
    # Diagnostics
    "kinetic_energy",
    "linear_momentum",
    "gravitational_potential_energy",
    "harmonic_potential_energy",
    "specific_kinetic_energy",
    "all_finite",
]
