# orrery/simulation/stepper.py
"""
Per-frame update of a body collection.

    bodies' = step_simulation(bodies, time, dt, paused)

Free bodies are advanced by velocity Verlet under pairwise gravity; locked bodies
with orbital elements are placed by closed-form Kepler propagation around their
parent. The input list is never modified.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from orrery.config import settings
from orrery.physics.body import CelestialBody
from orrery.physics.forces import PairwiseGravity
from orrery.physics.orbit import orbital_offset
from orrery.physics.solver import VerletSolver
from orrery.simulation.hierarchy import resolution_order

log = logging.getLogger(__name__)

_ORIGIN = np.zeros(3, dtype=float)


def place_locked_bodies(bodies: List[CelestialBody], time: float, G: Optional[float] = None) -> List[CelestialBody]:
    """
    Keplerian pass, in place: every locked body with elements is moved to
    parent position + orbital offset. Parents are resolved before their children so
    moons follow the parent's position for this step, not the previous one.
    Velocity of locked bodies is left as is.
    """
    by_id = {}
    for b in bodies:
        by_id.setdefault(b.id, b)

    for i in resolution_order(bodies):
        body = bodies[i]
        if not body.is_keplerian:
            continue

        parent = by_id.get(body.parent_id) if body.parent_id is not None else None
        if parent is None or parent is body:
            if body.parent_id is not None:
                log.debug("%s: parent '%s' not found, orbiting the origin", body.id, body.parent_id)
            parent_mass = settings.DEFAULT_CENTRAL_MASS
            parent_pos = _ORIGIN
        else:
            parent_mass = parent.mass
            parent_pos = parent.position

        offset = orbital_offset(body.orbital_elements, time, parent_mass, G)
        body.position = parent_pos + offset
    return bodies


def step_simulation(bodies: Sequence[CelestialBody], time: float, dt: Optional[float] = None,
                    paused: bool = False, G: Optional[float] = None) -> Sequence[CelestialBody]:
    """
    Advance the collection by one frame.

    time is the cumulative simulation time used by the Keplerian pass; dt is the
    fixed integration step for free bodies. When paused the input is returned
    unchanged. Never raises on degenerate physics: bad masses or elements show up
    as NaN in the returned positions.
    """
    if paused:
        return bodies

    dt = settings.DT if dt is None else float(dt)
    G = settings.G if G is None else float(G)

    nxt = [b.copy() for b in bodies]

    solver = VerletSolver(PairwiseGravity(G=G))
    solver.step(nxt, dt)

    place_locked_bodies(nxt, time, G)
    return nxt
