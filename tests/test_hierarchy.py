import logging

import pytest

from orrery.physics.body import CelestialBody
from orrery.physics.orbit import OrbitalElements
from orrery.simulation.hierarchy import (
    OrbitHierarchyError,
    parent_first_order,
    resolution_order,
    validate_bodies,
)

EL = OrbitalElements(semi_major_axis=5.0, eccentricity=0.1)


def _locked(bid, parent=None, elements=EL, mass=1.0):
    return CelestialBody(id=bid, mass=mass, is_locked=True, orbital_elements=elements, parent_id=parent)


def _ids(bodies, order):
    return [bodies[i].id for i in order]


def test_parent_first_keeps_sorted_collections_as_is():
    bodies = [_locked("star", elements=None), _locked("planet", "star"), _locked("moon", "planet")]
    assert parent_first_order(bodies) == [0, 1, 2]


def test_parents_move_ahead_of_children():
    bodies = [_locked("moon", "planet"), _locked("rock"), _locked("planet", "star"), _locked("star", elements=None)]
    order = _ids(bodies, parent_first_order(bodies))
    assert order.index("star") < order.index("planet") < order.index("moon")
    assert sorted(order) == sorted(b.id for b in bodies)


def test_dangling_parent_is_treated_as_root():
    bodies = [_locked("orphan", "missing"), _locked("child", "orphan")]
    assert _ids(bodies, parent_first_order(bodies)) == ["orphan", "child"]


def test_cycle_strict_raises(caplog):
    bodies = [_locked("a", "b"), _locked("b", "a")]
    with pytest.raises(OrbitHierarchyError) as err:
        parent_first_order(bodies)
    assert any(r.levelno == logging.WARNING for r in caplog.records)
    assert set(err.value.cycle) == {"a", "b"}


def test_self_parent_is_a_cycle():
    with pytest.raises(OrbitHierarchyError):
        parent_first_order([_locked("a", "a")])


def test_cycle_members_resolved_last_in_collection_order():
    bodies = [_locked("a", "b"), _locked("star", elements=None), _locked("b", "a"), _locked("c", "a"), _locked("p", "star")]
    assert _ids(bodies, resolution_order(bodies)) == ["star", "p", "a", "b", "c"]


def test_validate_accepts_a_good_system():
    validate_bodies([_locked("star", elements=None, mass=1000.0), _locked("planet", "star")])


@pytest.mark.parametrize("bodies, message", [
    ([_locked("x"), _locked("x")], "duplicate id"),
    ([_locked("x", mass=0.0)], "mass"),
    ([_locked("x", elements=OrbitalElements(semi_major_axis=-1.0))], "semi_major_axis"),
    ([_locked("x", elements=OrbitalElements(semi_major_axis=1.0, eccentricity=1.0))], "eccentricity"),
    ([_locked("x", "nobody")], "unknown parent_id"),
])
def test_validate_reports_problems(bodies, message):
    with pytest.raises(ValueError, match=message):
        validate_bodies(bodies)


def test_validate_rejects_cycles():
    with pytest.raises(OrbitHierarchyError):
        validate_bodies([_locked("a", "b"), _locked("b", "a")])
