# orrery/physics/utils.py
import numpy as np

from orrery.config import settings


def total_momentum(bodies, free_only=True):
    """
    Sum of mass * velocity. Locked bodies carry no meaningful velocity, so they are
    skipped unless free_only is False.
    """
    total = np.zeros(3, dtype=float)
    for b in bodies:
        if free_only and b.is_locked:
            continue
        total += b.mass * b.velocity
    return total


def kinetic_energy(bodies, free_only=True):
    return float(sum(0.5 * b.mass * np.dot(b.velocity, b.velocity)
                     for b in bodies if not (free_only and b.is_locked)))


def potential_energy(bodies, G=None, softening=None):
    """
    Pairwise potential over all bodies, skipping pairs inside the softening distance
    (the same pairs the integrator ignores). Used as a numerical stability diagnostic.
    """
    G = settings.G if G is None else float(G)
    softening = settings.SOFTENING_DISTANCE if softening is None else float(softening)
    total = 0.0
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            d = float(np.linalg.norm(bodies[j].position - bodies[i].position))
            if d < softening:
                continue
            total -= G * bodies[i].mass * bodies[j].mass / d
    return total


def find_non_finite(bodies):
    """Ids of bodies whose position or velocity contains NaN/inf."""
    return [b.id for b in bodies
            if not (np.all(np.isfinite(b.position)) and np.all(np.isfinite(b.velocity)))]


def bounding_radius(bodies):
    """Largest distance from the origin over finite body positions (0.0 if none)."""
    radii = [float(np.linalg.norm(b.position)) for b in bodies if np.all(np.isfinite(b.position))]
    return max(radii) if radii else 0.0


def find_runaways(bodies, radius=None):
    """Ids of bodies farther than `radius` from the origin."""
    radius = settings.RUNAWAY_RADIUS if radius is None else float(radius)
    return [b.id for b in bodies
            if np.all(np.isfinite(b.position)) and float(np.linalg.norm(b.position)) > radius]
