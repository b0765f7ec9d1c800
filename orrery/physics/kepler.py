# orrery/physics/kepler.py
from typing import Optional

import numpy as np

from orrery.config import settings


def solve_kepler(mean_anomaly: float, eccentricity: float,
                 max_iter: Optional[int] = None, tol: Optional[float] = None) -> float:
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E.

    Newton-Raphson starting from E0 = M. Stops after max_iter iterations or as soon
    as a Newton step is smaller than tol. There is no further convergence check:
    for e close to 1 the returned value may be under-converged, and it is returned
    anyway. Non-finite input propagates as NaN instead of raising.
    """
    max_iter = settings.KEPLER_MAX_ITER if max_iter is None else int(max_iter)
    tol = settings.KEPLER_TOL if tol is None else float(tol)

    M = float(mean_anomaly)
    e = float(eccentricity)
    E = M
    with np.errstate(all="ignore"):
        for _ in range(max_iter):
            denom = 1.0 - e * np.cos(E)
            if denom == 0.0:
                # e == 1 at E == 0: the derivative vanishes, keep the last iterate
                break
            delta = (E - e * np.sin(E) - M) / denom
            E = float(E - delta)
            if abs(delta) < tol:
                break
    return E


def kepler_residual(eccentric_anomaly: float, mean_anomaly: float, eccentricity: float) -> float:
    """Residual E - e*sin(E) - M of Kepler's equation."""
    E = float(eccentric_anomaly)
    return float(E - float(eccentricity) * np.sin(E) - float(mean_anomaly))
