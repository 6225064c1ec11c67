# MIT License (see LICENSE)
"""
planet_sim - A 2D point-mass planetary simulation kernel.

This package moves a set of bodies under a pluggable force law, advanced
by a pluggable fixed-step integrator, and keeps a bounded, decimated trail
of each body's recent positions for rendering.

Main entry points:
    - Simulation: The world owning bodies, model, integrator and trails.
    - BodySnapshot: Read-only body state handed to renderers.
    - RestoringForce, PairwiseGravity: Acceleration models.
    - ExplicitEuler, VelocityVerlet: Integrators.
    - InvalidIndexError: Raised for removed or out-of-range body indices.

Submodules:
    - core: Acceleration models, integrators and invariant diagnostics.
    - profiler: Optional per-phase timing.

Example:
    from planet_sim import Simulation

    sim = Simulation(dt=1e-3, model="gravity", integrator="verlet")
    sun = sim.add(0, 0, mass=1e12, is_static=True, name="Sun")
    planet = sim.add(10, 0, vy=2.58, name="Planet")
    sim.run(1000)
    print(sim.snapshot(planet).position)
"""
from .simulation import Simulation
from .types import Body, BodySnapshot
from .errors import SimulationError, InvalidIndexError
from .core.forces import AccelerationModel, RestoringForce, PairwiseGravity
from .core.integrators import Integrator, ExplicitEuler, VelocityVerlet

__all__ = [
    # Core simulation
    "Simulation",
    "Body",
    "BodySnapshot",
    # Acceleration models
    "AccelerationModel",
    "RestoringForce",
    "PairwiseGravity",
    # Integrators
    "Integrator",
    "ExplicitEuler",
    "VelocityVerlet",
    # Errors
    "SimulationError",
    "InvalidIndexError",
]
