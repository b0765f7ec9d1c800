import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from orrery.config import settings
from orrery.physics.body import CelestialBody
from orrery.physics.orbit import cached_orbit_path
from orrery.physics.utils import find_non_finite, find_runaways, kinetic_energy, potential_energy
from orrery.simulation.stepper import step_simulation

log = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """
    Recorded run: times[k] is the simulation time of frame k (frame 0 is the input),
    trajectories[id] has shape (frames, 3). Bodies that are not present for the whole
    run are recorded from the frame they appear in.
    """
    times: np.ndarray
    trajectories: Dict[str, np.ndarray]
    bodies: List[CelestialBody]
    energy: np.ndarray
    orbit_paths: Dict[str, np.ndarray] = field(default_factory=dict)
    non_finite: List[str] = field(default_factory=list)
    runaways: List[str] = field(default_factory=list)

    def summary(self) -> Dict:
        final = {b.id: b for b in self.bodies}
        return {
            "frames": int(len(self.times)),
            "end_time": float(self.times[-1]) if len(self.times) else 0.0,
            "bodies": [final[bid].to_dict() for bid in self.trajectories if bid in final],
            "non_finite": list(self.non_finite),
            "runaways": list(self.runaways),
        }


def frame_time(frame: int, frame_rate: Optional[float] = None, time_scale: Optional[float] = None) -> float:
    """Simulation time of a frame: real seconds elapsed times the time-dilation factor."""
    frame_rate = settings.FRAME_RATE if frame_rate is None else float(frame_rate)
    return settings.real_to_sim_time(frame / frame_rate, time_scale)


def run_simulation(
    bodies: List[CelestialBody],
    steps: int,
    dt: Optional[float] = None,
    time_scale: Optional[float] = None,
    frame_rate: Optional[float] = None,
    start_frame: int = 0,
):
    """
    Drive step_simulation frame by frame, the way a render loop would, and record
    positions for plotting. Degenerate output is not an error; NaN or runaway bodies
    are only reported.
    """
    steps = int(steps)
    dt = settings.DT if dt is None else float(dt)

    times = [frame_time(start_frame, frame_rate, time_scale)]
    energy = [kinetic_energy(bodies) + potential_energy(bodies)]
    history: Dict[str, List[np.ndarray]] = {b.id: [b.position.copy()] for b in bodies}

    current = bodies
    for k in range(1, steps + 1):
        t = frame_time(start_frame + k, frame_rate, time_scale)
        current = step_simulation(current, t, dt=dt)
        times.append(t)
        energy.append(kinetic_energy(current) + potential_energy(current))
        for b in current:
            history.setdefault(b.id, []).append(b.position.copy())

        if k % 100 == 0:
            log.debug("frame %d/%d t=%.3f", k, steps, t)

    orbit_paths = {b.id: cached_orbit_path(b.orbital_elements) for b in current if b.is_keplerian}

    non_finite = find_non_finite(current)
    runaways = find_runaways(current)
    if non_finite:
        log.warning("Non-finite state after %d steps: %s", steps, ", ".join(non_finite))
    if runaways:
        log.warning("Bodies beyond %.0f units: %s", settings.RUNAWAY_RADIUS, ", ".join(runaways))

    return SimulationResult(
        times=np.array(times, dtype=float),
        trajectories={bid: np.array(pts, dtype=float) for bid, pts in history.items()},
        bodies=list(current),
        energy=np.array(energy, dtype=float),
        orbit_paths=orbit_paths,
        non_finite=non_finite,
        runaways=runaways,
    )
