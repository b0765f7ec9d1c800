"""
Project settings (constants + small helpers).
Units: relative simulation units (length, mass and time are tuned for visual pacing,
not SI).
"""
from __future__ import annotations

import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
DEFAULT_RANDOM_SEED: Optional[int] = None
VALIDATE_ON_IMPORT = False

# Gravity
G = 0.5  # calibrated for visual pacing, not physically accurate
SOFTENING_DISTANCE = 0.5  # pairs closer than this contribute no acceleration

# Fallback parent for locked bodies without a resolvable parent
DEFAULT_CENTRAL_MASS = 1000.0

# Kepler solver
KEPLER_MAX_ITER = 10
KEPLER_TOL = 1e-6

# Orbit visualization
ORBIT_PATH_SEGMENTS = 128
ORBIT_PATH_CACHE_SIZE = 256

# Simulation
DT = 0.1
STEPS = 600
TIME_SCALE = 0.2  # simulation time per real second (time dilation)
FRAME_RATE = 60.0  # frames per real second assumed by the batch runner

STEPS_MIN = 1
STEPS_MAX = 100_000

# Asteroid spawning (matches the interactive "spawn" action)
MAX_ASTEROIDS = 200
SPAWN_CENTER = (20.0, 0.0, 0.0)
SPAWN_SPREAD = 10.0
SPAWN_VEL_SPREAD = 1.0
SPAWN_MIN_MASS = 0.5
ASTEROID_RADIUS = 0.5

# Asteroid belt generation
BELT_INNER_RADIUS = 30.0
BELT_OUTER_RADIUS = 36.0
BELT_MAX_ECCENTRICITY = 0.2
BELT_MAX_INCLINATION = 0.1  # rad

# Diagnostics
RUNAWAY_RADIUS = 1_000.0


def clamp_steps(val: Optional[int]) -> int:
    out = int(STEPS if val is None else val)
    return max(int(STEPS_MIN), min(int(STEPS_MAX), out))


def real_to_sim_time(seconds: float, time_scale: Optional[float] = None) -> float:
    scale = TIME_SCALE if time_scale is None else float(time_scale)
    return float(seconds) * scale


def validate_settings() -> None:
    if DT <= 0:
        raise ValueError("DT must be > 0")
    if STEPS <= 0:
        raise ValueError("STEPS must be > 0")
    if G <= 0:
        raise ValueError("G must be > 0")
    if SOFTENING_DISTANCE < 0:
        raise ValueError("SOFTENING_DISTANCE must be >= 0")
    if DEFAULT_CENTRAL_MASS <= 0:
        raise ValueError("DEFAULT_CENTRAL_MASS must be > 0")
    if KEPLER_MAX_ITER <= 0:
        raise ValueError("KEPLER_MAX_ITER must be > 0")
    if KEPLER_TOL <= 0:
        raise ValueError("KEPLER_TOL must be > 0")
    if ORBIT_PATH_CACHE_SIZE <= 0:
        raise ValueError("ORBIT_PATH_CACHE_SIZE must be > 0")
    if ORBIT_PATH_SEGMENTS <= 0:
        raise ValueError("ORBIT_PATH_SEGMENTS must be > 0")
    if TIME_SCALE <= 0:
        raise ValueError("TIME_SCALE must be > 0")
    if FRAME_RATE <= 0:
        raise ValueError("FRAME_RATE must be > 0")
    if STEPS_MAX < STEPS_MIN:
        raise ValueError("STEPS_MAX must be >= STEPS_MIN")

    if SPAWN_MIN_MASS <= 0:
        raise ValueError("SPAWN_MIN_MASS must be > 0")
    if BELT_INNER_RADIUS <= 0:
        raise ValueError("BELT_INNER_RADIUS must be > 0")
    if BELT_OUTER_RADIUS < BELT_INNER_RADIUS:
        raise ValueError("BELT_OUTER_RADIUS must be >= BELT_INNER_RADIUS")
    if not 0 <= BELT_MAX_ECCENTRICITY < 1:
        raise ValueError("BELT_MAX_ECCENTRICITY must be in [0, 1)")


if VALIDATE_ON_IMPORT:
    validate_settings()
