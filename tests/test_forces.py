# MIT License (see LICENSE)
import numpy as np
import pytest

from planet_sim.constants import G
from planet_sim.core.forces import (
    PairwiseGravity,
    RestoringForce,
    make_model,
)


def test_restoring_force_is_minus_position():
    """a = -x, independent of mass and of the other bodies."""
    model = RestoringForce()
    positions = np.array([[1.5, -2.0], [100.0, 100.0]])
    masses = np.array([7.0, 1e30])

    a = model.acceleration(0, positions, masses)
    assert np.array_equal(a, [-1.5, 2.0])

    # Input snapshot untouched
    assert np.array_equal(positions[0], [1.5, -2.0])


def test_gravity_two_bodies_analytic():
    """
    a_0 = G * m_1 / r² towards body 1.
    With m = 1e10, r = 2: |a| = G * 1e10 / 4.
    """
    model = PairwiseGravity()
    positions = np.array([[0.0, 0.0], [2.0, 0.0]])
    masses = np.array([1e10, 3e10])

    a0 = model.acceleration(0, positions, masses)
    a1 = model.acceleration(1, positions, masses)

    assert a0[0] == pytest.approx(G * 3e10 / 4.0, rel=1e-12)
    assert a0[1] == 0.0
    assert a1[0] == pytest.approx(-G * 1e10 / 4.0, rel=1e-12)

    # Newton's third law: m0 a0 + m1 a1 = 0
    assert masses[0] * a0[0] == pytest.approx(-masses[1] * a1[0], rel=1e-12)


def test_gravity_inverse_square():
    """Doubling the separation quarters the acceleration."""
    model = PairwiseGravity(g=1.0)
    near = model.acceleration(0, np.array([[0.0, 0.0], [0.0, 1.0]]), np.array([1.0, 1.0]))
    far = model.acceleration(0, np.array([[0.0, 0.0], [0.0, 2.0]]), np.array([1.0, 1.0]))
    assert near[1] == pytest.approx(1.0)
    assert far[1] == pytest.approx(0.25)


def test_gravity_coincident_bodies_contribute_nothing():
    """Exactly coincident pairs are skipped instead of producing Inf/NaN."""
    model = PairwiseGravity(g=1.0)
    positions = np.array([[1.0, 1.0], [1.0, 1.0]])
    masses = np.array([5.0, 5.0])

    a = model.acceleration(0, positions, masses)
    assert np.all(np.isfinite(a))
    assert np.array_equal(a, [0.0, 0.0])


def test_gravity_coincident_pair_ignores_only_that_pair():
    model = PairwiseGravity(g=1.0)
    positions = np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 0.0]])
    masses = np.array([1.0, 1.0, 2.0])

    a = model.acceleration(0, positions, masses)
    assert a[0] == pytest.approx(2.0)
    assert a[1] == 0.0


def test_gravity_nonpositive_mass_exerts_nothing():
    model = PairwiseGravity(g=1.0)
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [-1.0, 0.0]])
    masses = np.array([1.0, 0.0, -4.0])

    assert np.array_equal(model.acceleration(0, positions, masses), [0.0, 0.0])
    # A massless body is still attracted by the others
    assert model.acceleration(1, positions, masses)[0] < 0.0


def test_gravity_single_body_is_free():
    model = PairwiseGravity()
    a = model.acceleration(0, np.array([[3.0, 4.0]]), np.array([1e20]))
    assert np.array_equal(a, [0.0, 0.0])


def test_accelerations_matches_per_body():
    model = PairwiseGravity(g=1.0)
    rng = np.random.default_rng(7)
    positions = rng.normal(size=(5, 2))
    masses = rng.uniform(0.5, 2.0, size=5)

    batch = model.accelerations(positions, masses)
    assert batch.shape == (5, 2)
    for i in range(5):
        assert np.array_equal(batch[i], model.acceleration(i, positions, masses))


def test_make_model_by_name():
    assert isinstance(make_model("gravity"), PairwiseGravity)
    assert isinstance(make_model("restoring"), RestoringForce)

    custom = PairwiseGravity(g=2.0)
    assert make_model(custom) is custom

    with pytest.raises(ValueError):
        make_model("hooke-ish")
    with pytest.raises(TypeError):
        make_model(42)
