# orrery/physics/solver.py
import numpy as np

from orrery.physics.forces import PairwiseGravity


class VerletSolver:
    """
    Two-phase velocity-Verlet integrator for the free subset of a body collection.

    Locked bodies act as fixed gravity sources for the whole step and are never
    written. Accelerations are always evaluated from a snapshot array, so the result
    does not depend on the order of free bodies.
    """
    def __init__(self, force_model=None):
        self.force = force_model if force_model is not None else PairwiseGravity()

    def step(self, bodies, dt):
        """
        Advance every free body in `bodies` by dt, in place.
        """
        if not bodies:
            return bodies

        dt = float(dt)
        masses = np.array([b.mass for b in bodies], dtype=float)
        free = np.array([not b.is_locked for b in bodies], dtype=bool)
        pos = np.array([b.position for b in bodies], dtype=float)
        vel = np.array([b.velocity for b in bodies], dtype=float)

        # phase 1: drift + half kick
        a1 = self.force.accelerations(pos.copy(), masses, free)
        pos[free] = pos[free] + vel[free] * dt + 0.5 * a1[free] * dt * dt
        vel[free] = vel[free] + 0.5 * a1[free] * dt

        # phase 2: half kick from the drifted positions
        a2 = self.force.accelerations(pos.copy(), masses, free)
        vel[free] = vel[free] + 0.5 * a2[free] * dt

        for i in np.flatnonzero(free):
            bodies[i].position = pos[i].copy()
            bodies[i].velocity = vel[i].copy()
        return bodies
