# orrery/physics/orbit.py
"""
Closed-form Keplerian propagation for locked bodies.

Positions are produced in render space: X/Z span the ground plane and Y is
vertical. Orbital elements are expressed in the astronomy convention (reference
plane X/Y, pole Z), so every result goes through the same rotation + axis remap.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import numpy as np

from orrery.config import settings
from orrery.physics.kepler import solve_kepler

TWO_PI = 2.0 * np.pi

# astro (x, y, z) -> render (x, z, -y)
_ASTRO_TO_RENDER = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0],
    [0.0, -1.0, 0.0],
], dtype=float)


@dataclass(frozen=True)
class OrbitalElements:
    """
    Immutable Kepler orbit descriptor. Angles in radians.
    Bounds (a > 0, 0 <= e < 1) are enforced by callers, not here.
    """
    semi_major_axis: float
    eccentricity: float = 0.0
    inclination: float = 0.0
    ascending_node: float = 0.0
    periapsis: float = 0.0
    mean_anomaly_epoch: float = 0.0

    def mean_motion(self, parent_mass: float, G: Optional[float] = None) -> float:
        G = settings.G if G is None else float(G)
        with np.errstate(all="ignore"):
            return float(np.sqrt(np.float64(G * parent_mass) / np.float64(self.semi_major_axis) ** 3))

    def period(self, parent_mass: float, G: Optional[float] = None) -> float:
        n = self.mean_motion(parent_mass, G)
        with np.errstate(all="ignore"):
            return float(np.float64(TWO_PI) / np.float64(n))


def _rot_z(angle: float) -> np.ndarray:
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=float)


def _rot_x(angle: float) -> np.ndarray:
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=float)


def orientation_matrix(elements: OrbitalElements) -> np.ndarray:
    """
    Perifocal -> render-space rotation.
    3-1-3 sequence applied to the perifocal vector: periapsis about the orbit normal,
    then inclination about the reference line, then ascending node about the
    reference-plane normal, followed by the astronomy -> render axis remap.
    """
    rot = _rot_z(elements.ascending_node) @ _rot_x(elements.inclination) @ _rot_z(elements.periapsis)
    return _ASTRO_TO_RENDER @ rot


def perifocal_to_render(elements: OrbitalElements, eccentric_anomaly) -> np.ndarray:
    """
    Position on the orbit for one eccentric anomaly (scalar -> (3,)) or many
    (array of shape (N,) -> (N, 3)), relative to the focus, in render space.
    """
    a = float(elements.semi_major_axis)
    e = float(elements.eccentricity)
    E = np.asarray(eccentric_anomaly, dtype=float)

    with np.errstate(all="ignore"):
        # true anomaly and radius
        nu = 2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(E / 2.0), np.sqrt(1.0 - e) * np.cos(E / 2.0))
        r = a * (1.0 - e * np.cos(E))

        perifocal = np.stack([r * np.cos(nu), r * np.sin(nu), np.zeros_like(r)], axis=-1)
        return perifocal @ orientation_matrix(elements).T


def orbital_offset(elements: OrbitalElements, t: float, parent_mass: float,
                   G: Optional[float] = None) -> np.ndarray:
    """
    Offset of a locked body from its parent at simulation time t.

    The caller adds the parent's current absolute position; this function never
    resolves parents. Degenerate input (a <= 0, parent_mass <= 0) gives NaN.
    """
    n = elements.mean_motion(parent_mass, G)
    with np.errstate(all="ignore"):
        M = elements.mean_anomaly_epoch + n * float(t)
    E = solve_kepler(M, elements.eccentricity)
    return perifocal_to_render(elements, E)


def orbit_path(elements: OrbitalElements, segments: Optional[int] = None) -> np.ndarray:
    """
    Closed polyline of the full orbit ellipse, shape (segments + 1, 3).

    Samples are taken at uniform mean-anomaly steps M_i = 2*pi*i/segments, so the
    last point closes back onto the first. The shape is relative to the focus;
    translating it to the parent's position is left to the caller.
    """
    segments = settings.ORBIT_PATH_SEGMENTS if segments is None else int(segments)
    mean_anomalies = TWO_PI * np.arange(segments + 1) / segments
    E = np.array([solve_kepler(M, elements.eccentricity) for M in mean_anomalies], dtype=float)
    return perifocal_to_render(elements, E)


@lru_cache(maxsize=settings.ORBIT_PATH_CACHE_SIZE)
def cached_orbit_path(elements: OrbitalElements, segments: Optional[int] = None) -> np.ndarray:
    """
    Memoized orbit_path keyed by the elements value, least recently used paths
    evicted first. The returned array is shared, so it is read-only.
    """
    path = orbit_path(elements, segments)
    path.setflags(write=False)
    return path
