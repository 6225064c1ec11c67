# MIT License (see LICENSE)
import math

import numpy as np
import pytest

from planet_sim.core.forces import PairwiseGravity, RestoringForce
from planet_sim.core.integrators import (
    ExplicitEuler,
    VelocityVerlet,
    make_integrator,
)
from planet_sim.simulation import Simulation
from planet_sim.types import Body


def test_euler_updates_position_before_velocity():
    """
    Semi-implicit Euler with a = -x, dt = 0.1, x0 = (1, 0), v0 = (0, 1):
      x1 = x0 + v0 dt        = (1, 0.1)
      v1 = v0 + a(x1) dt     = (-0.1, 0.99)
    """
    body = Body(position=(1.0, 0.0), velocity=(0.0, 1.0))
    ExplicitEuler().step([body], RestoringForce(), 0.1)

    assert np.allclose(body.position, [1.0, 0.1], rtol=0, atol=1e-15)
    assert np.allclose(body.velocity, [-0.1, 0.99], rtol=0, atol=1e-15)


def test_verlet_single_step_primed():
    """
    Verlet with a = -x, dt = 0.1, x0 = (1, 0) at rest, a0 = -x0:
      x1 = 1 - ½ dt²              = 0.995
      v1 = ½ (a0 + a(x1)) dt      = ½ (-1 - 0.995) 0.1 = -0.09975
    """
    body = Body(position=(1.0, 0.0))
    model = RestoringForce()
    verlet = VelocityVerlet()
    verlet.prime([body], model)
    verlet.step([body], model, 0.1)

    assert body.position[0] == pytest.approx(0.995, abs=1e-15)
    assert body.velocity[0] == pytest.approx(-0.09975, abs=1e-15)
    assert body.acceleration[0] == pytest.approx(-0.995, abs=1e-15)


def test_verlet_unprimed_cache_is_one_step_off():
    """A zero cache on the first step: x1 = 1, v1 = ½ (0 - 1) dt = -0.05."""
    body = Body(position=(1.0, 0.0))
    VelocityVerlet().step([body], RestoringForce(), 0.1)

    assert body.position[0] == 1.0
    assert body.velocity[0] == pytest.approx(-0.05, abs=1e-15)


def test_euler_prime_zeroes_cache():
    body = Body(position=(1.0, 0.0), acceleration=(3.0, 4.0))
    ExplicitEuler().prime([body], RestoringForce())
    assert np.array_equal(body.acceleration, [0.0, 0.0])


@pytest.mark.parametrize("integrator", [ExplicitEuler(), VelocityVerlet()])
def test_static_bodies_untouched(integrator):
    """Static bodies keep position/velocity/acceleration bit-for-bit."""
    anchor = Body(position=(0.25, -0.5), velocity=(1.0, 2.0), mass=1e12, is_static=True)
    planet = Body(position=(10.0, 0.0), velocity=(0.0, 2.5), mass=1.0)
    bodies = [anchor, planet]
    model = PairwiseGravity()

    pos0, vel0, acc0 = anchor.position.copy(), anchor.velocity.copy(), anchor.acceleration.copy()
    integrator.prime(bodies, model)
    for _ in range(500):
        integrator.step(bodies, model, 1e-3)

    assert np.array_equal(anchor.position, pos0)
    assert np.array_equal(anchor.velocity, vel0)
    assert np.array_equal(anchor.acceleration, acc0)
    assert not np.array_equal(planet.position, [10.0, 0.0])


def test_harmonic_period_verlet_converges():
    """
    Unit oscillator released from (1, 0) at rest returns to (1, 0) after
    T = 2π. Verlet's phase error is O(dt²): 4x the steps => ~16x smaller.
    """
    errors = []
    for n in (500, 2000):
        sim = Simulation(dt=2 * math.pi / n, model="restoring", integrator="verlet")
        i = sim.add(1.0, 0.0)
        sim.run(n)
        err = float(np.linalg.norm(sim.position(i) - np.array([1.0, 0.0])))
        print("N", n, "t", sim.time, "err", err)
        errors.append(err)

    assert sim.time == pytest.approx(2 * math.pi, rel=1e-9)
    assert errors[0] < 1e-3
    assert errors[1] < errors[0] / 4
    assert errors[1] < 1e-4


def test_harmonic_euler_stays_bounded():
    """Semi-implicit Euler is symplectic: amplitude stays near 1 over many periods."""
    sim = Simulation(dt=0.01, model="restoring", integrator="euler")
    i = sim.add(1.0, 0.0)
    for _ in range(10):
        sim.run(628)
        r = float(np.linalg.norm(sim.position(i)))
        assert 0.95 < r < 1.05


@pytest.mark.parametrize("name", ["euler", "verlet"])
def test_result_independent_of_body_order(name):
    """Positions after a step do not depend on the order bodies are visited."""
    init = [
        ((0.0, 0.0), (0.0, -0.1), 3e10),
        ((2.0, 0.0), (0.0, 0.9), 1e10),
        ((-1.0, 1.5), (0.4, 0.0), 2e10),
    ]
    forward = [Body(position=p, velocity=v, mass=m) for p, v, m in init]
    backward = [Body(position=p, velocity=v, mass=m) for p, v, m in reversed(init)]

    model = PairwiseGravity()
    integrator = make_integrator(name)
    for bodies in (forward, backward):
        integrator.prime(bodies, model)
        for _ in range(200):
            integrator.step(bodies, model, 1e-3)

    for a, b in zip(forward, reversed(backward)):
        assert np.allclose(a.position, b.position, rtol=1e-12, atol=1e-12)
        assert np.allclose(a.velocity, b.velocity, rtol=1e-12, atol=1e-12)


def test_empty_and_all_static_steps_are_noops():
    model = PairwiseGravity()
    for integrator in (ExplicitEuler(), VelocityVerlet()):
        integrator.step([], model, 0.1)
        integrator.prime([], model)
        b = Body(position=(1.0, 1.0), is_static=True)
        integrator.step([b], model, 0.1)
        assert np.array_equal(b.position, [1.0, 1.0])


def test_make_integrator_by_name():
    assert isinstance(make_integrator("euler"), ExplicitEuler)
    assert isinstance(make_integrator("verlet"), VelocityVerlet)
    with pytest.raises(ValueError):
        make_integrator("rk4")
    with pytest.raises(TypeError):
        make_integrator(None)
