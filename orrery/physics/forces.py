# orrery/physics/forces.py
from typing import Optional

import numpy as np

from orrery.config import settings


class ForceModel:
    """
    Base force model. Works on snapshot arrays rather than body objects:
    positions (N, 3), masses (N,), active (N,) bool mask of bodies to accelerate.
    Returns an (N, 3) array; rows of inactive bodies are zero.
    """
    def accelerations(self, positions: np.ndarray, masses: np.ndarray, active: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class PairwiseGravity(ForceModel):
    """
    Newtonian attraction from every other body, locked or free.

    Pairs closer than the softening distance contribute nothing (a cut-off, not a
    minimum-distance clamp).
    """
    def __init__(self, G: Optional[float] = None, softening: Optional[float] = None):
        self.G = settings.G if G is None else float(G)
        self.softening = settings.SOFTENING_DISTANCE if softening is None else float(softening)

    def accelerations(self, positions: np.ndarray, masses: np.ndarray, active: np.ndarray) -> np.ndarray:
        positions = np.asarray(positions, dtype=float)
        masses = np.asarray(masses, dtype=float)
        active = np.asarray(active, dtype=bool)

        n = len(positions)
        acc = np.zeros((n, 3), dtype=float)
        if n == 0 or not active.any():
            return acc

        src = positions[active]
        # diff[k, j] = p_j - p_k for every active body k
        diff = positions[None, :, :] - src[:, None, :]
        dist = np.sqrt(np.einsum("kjc,kjc->kj", diff, diff))

        keep = dist >= self.softening
        # a body never attracts itself, even with zero softening
        keep[np.arange(len(src)), np.flatnonzero(active)] = False

        inv_d3 = np.zeros_like(dist)
        np.divide(1.0, dist ** 3, out=inv_d3, where=keep)
        diff = np.where(keep[..., None], diff, 0.0)

        acc[active] = self.G * np.einsum("kj,j,kjc->kc", inv_d3, masses, diff)
        return acc
