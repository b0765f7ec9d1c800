# orrery/models/asteroids.py
"""
Spawn and removal actions. Both return a new collection; the engine only ever sees
whole-collection replacements between steps.
"""
import math

import numpy as np

from orrery.config import settings
from orrery.physics.body import BodyType, CelestialBody
from orrery.physics.orbit import OrbitalElements


def _rng(rng):
    if rng is None:
        return np.random.default_rng(settings.DEFAULT_RANDOM_SEED)
    return rng


def _next_index(bodies, prefix):
    taken = {b.id for b in bodies}
    i = len(bodies)
    while f"{prefix}-{i}" in taken:
        i += 1
    return i


def spawn_asteroid(bodies, rng=None):
    """
    Add one free asteroid near the spawn point with a small random drift velocity.
    It is pulled by every planet and the star from the next step on.
    """
    rng = _rng(rng)
    i = _next_index(bodies, "asteroid")

    cx, cy, cz = settings.SPAWN_CENTER
    spread = settings.SPAWN_SPREAD
    vel_spread = settings.SPAWN_VEL_SPREAD

    # stays in the ground plane (render Y is vertical)
    position = np.array([
        cx + (rng.random() - 0.5) * spread,
        cy,
        cz + (rng.random() - 0.5) * spread,
    ], dtype=float)
    velocity = np.array([
        (rng.random() - 0.5) * vel_spread,
        0.0,
        (rng.random() - 0.5) * vel_spread,
    ], dtype=float)

    asteroid = CelestialBody(
        id=f"asteroid-{i}",
        name=f"Asteroid {i}",
        mass=settings.SPAWN_MIN_MASS + float(rng.random()),
        radius=settings.ASTEROID_RADIUS,
        position=position,
        velocity=velocity,
        is_locked=False,
        body_type=BodyType.ASTEROID,
        color="#888888",
        description="A newly discovered asteroid drifting through space.",
    )
    return list(bodies) + [asteroid]


def asteroid_belt(n, parent_id=None, inner=None, outer=None, rng=None):
    """
    n locked asteroids on mildly eccentric, slightly inclined orbits.
    Without parent_id they orbit the origin with the default central mass.
    """
    rng = _rng(rng)
    inner = settings.BELT_INNER_RADIUS if inner is None else float(inner)
    outer = settings.BELT_OUTER_RADIUS if outer is None else float(outer)

    belt = []
    for k in range(int(n)):
        elements = OrbitalElements(
            semi_major_axis=float(rng.uniform(inner, outer)),
            eccentricity=float(rng.uniform(0.0, settings.BELT_MAX_ECCENTRICITY)),
            inclination=float(rng.uniform(0.0, settings.BELT_MAX_INCLINATION)),
            ascending_node=float(rng.uniform(0.0, 2.0 * math.pi)),
            periapsis=float(rng.uniform(0.0, 2.0 * math.pi)),
            mean_anomaly_epoch=float(rng.uniform(0.0, 2.0 * math.pi)),
        )
        belt.append(CelestialBody(
            id=f"belt-{k}",
            name=f"Belt Asteroid {k}",
            mass=float(rng.uniform(0.01, 0.05)),
            radius=0.15,
            is_locked=True,
            orbital_elements=elements,
            parent_id=parent_id,
            body_type=BodyType.ASTEROID,
            color="#777777",
        ))
    return belt


def remove_body(bodies, body_id):
    """
    Collection without `body_id`. Bodies that orbited it keep their dangling
    parent_id and fall back to orbiting the origin.
    """
    return [b for b in bodies if b.id != body_id]
