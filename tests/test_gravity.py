import numpy as np
import pytest

from orrery.physics.body import CelestialBody
from orrery.physics.forces import PairwiseGravity
from orrery.physics.solver import VerletSolver
from orrery.physics.utils import total_momentum


def _free(bid, position, velocity=(0.0, 0.0, 0.0), mass=1.0):
    return CelestialBody(id=bid, mass=mass, position=position, velocity=velocity)


def test_pairwise_accelerations():
    gravity = PairwiseGravity(G=1.0, softening=0.5)
    positions = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    acc = gravity.accelerations(positions, np.array([1.0, 3.0]), np.array([True, True]))
    np.testing.assert_allclose(acc, [[0.75, 0.0, 0.0], [-0.25, 0.0, 0.0]])


def test_locked_rows_are_zero_but_still_attract():
    gravity = PairwiseGravity(G=0.5)
    positions = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]])
    acc = gravity.accelerations(positions, np.array([1000.0, 1.0]), np.array([False, True]))
    np.testing.assert_allclose(acc, [[0.0, 0.0, 0.0], [-5.0, 0.0, 0.0]])


def test_softening_cuts_off_close_pairs():
    gravity = PairwiseGravity(G=1.0, softening=0.5)
    positions = np.array([[0.0, 0.0, 0.0], [0.4, 0.0, 0.0], [0.0, 0.0, 0.0]])
    acc = gravity.accelerations(positions, np.ones(3), np.ones(3, dtype=bool))
    np.testing.assert_array_equal(acc, np.zeros((3, 3)))


def test_lone_free_body_moves_in_straight_line():
    body = _free("rock", (10.0, 0.0, 0.0), (0.0, 0.0, 1.0), mass=0.5)
    VerletSolver(PairwiseGravity(G=0.5)).step([body], 0.1)
    np.testing.assert_array_equal(body.position, [10.0, 0.0, 0.1])
    np.testing.assert_array_equal(body.velocity, [0.0, 0.0, 1.0])


def test_empty_collection():
    assert VerletSolver().step([], 0.1) == []


def test_free_body_falls_toward_locked_star():
    star = CelestialBody(id="sun", mass=1000.0, is_locked=True)
    rock = _free("rock", (10.0, 0.0, 0.0))
    VerletSolver(PairwiseGravity(G=0.5)).step([star, rock], 0.1)

    x1 = 10.0 - 0.5 * 5.0 * 0.01
    a2 = 0.5 * 1000.0 / x1 ** 2
    assert rock.position[0] == pytest.approx(x1)
    assert rock.velocity[0] == pytest.approx(-0.5 * (5.0 + a2) * 0.1)
    np.testing.assert_array_equal(star.position, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(star.velocity, [0.0, 0.0, 0.0])


def test_momentum_conserved_for_free_bodies():
    bodies = [
        _free("a", (0.0, 0.0, 0.0), (0.0, 0.1, 0.0), mass=5.0),
        _free("b", (4.0, 0.0, 0.0), (0.0, -0.3, 0.2), mass=1.0),
        _free("c", (0.0, 3.0, 1.0), (0.2, 0.0, 0.0), mass=2.0),
    ]
    before = total_momentum(bodies)
    solver = VerletSolver(PairwiseGravity(G=0.5))
    for _ in range(10):
        solver.step(bodies, 0.01)
    np.testing.assert_allclose(total_momentum(bodies), before, atol=1e-10)


def test_result_independent_of_free_body_order():
    def make():
        return [
            CelestialBody(id="sun", mass=1000.0, is_locked=True),
            _free("a", (12.0, 0.0, 0.0), (0.0, 0.0, 2.0)),
            _free("b", (-8.0, 1.0, 0.0), (0.0, 0.0, -2.5), mass=3.0),
        ]

    forward = make()
    backward = make()[::-1]
    solver = VerletSolver(PairwiseGravity(G=0.5))
    solver.step(forward, 0.1)
    solver.step(backward, 0.1)
    by_id = {b.id: b for b in backward}
    for b in forward:
        np.testing.assert_allclose(b.position, by_id[b.id].position, rtol=1e-12)
        np.testing.assert_allclose(b.velocity, by_id[b.id].velocity, rtol=1e-12)
