# orrery/cli.py
import numpy as np
from orrery.models.solar_system import solar_system, SUN_ID
from orrery.models.asteroids import spawn_asteroid, asteroid_belt
from orrery.config import settings

# bring in useful defaults from settings for CLI defaults
from orrery.config.settings import (
    MAX_ASTEROIDS,
    STEPS,
    TIME_SCALE,
    clamp_steps,
)


def _read(prompt):
    """input() that maps a closed stdin (EOF) to None."""
    try:
        return input(prompt)
    except EOFError:
        return None


def get_float(prompt, default=None, positive=False):
    """
    Float prompt for physical tunables. Blank input or EOF gives the default;
    with positive=True zero and negative answers are asked again.
    """
    while True:
        user = _read(prompt)
        if user is None or (user.strip() == "" and default is not None):
            return float(default) if default is not None else None
        try:
            val = float(user)
        except ValueError:
            print("❌ Please enter a valid number.")
            continue
        if positive and not val > 0:
            print("❌ Value must be greater than zero.")
            continue
        return val


def get_int(prompt, default=None, min_val=None, max_val=None):
    """Integer prompt for counts (frames, asteroids), bounded to [min_val, max_val]."""
    while True:
        user = _read(prompt)
        if user is None or (user.strip() == "" and default is not None):
            return int(default) if default is not None else None
        try:
            val = int(user)
        except ValueError:
            print("❌ Please enter a whole number.")
            continue
        if (min_val is not None and val < min_val) or (max_val is not None and val > max_val):
            print("❌ Value out of range.")
            continue
        return val


def get_yes_no(prompt, default=False):
    user = _read(prompt)
    if user is None or user.strip() == "":
        return default
    return user.strip().lower().startswith("y")


def create_system():
    print("\n🪐 System Configuration")

    include_moon = get_yes_no("Include Earth's Moon? (Y/n): ", default=True)
    bodies = solar_system(include_moon=include_moon)

    belt = get_int(
        f"Asteroid belt size (0–{MAX_ASTEROIDS}) [default 0]: ",
        default=0,
        min_val=0,
        max_val=MAX_ASTEROIDS
    )

    seed = settings.DEFAULT_RANDOM_SEED
    rng = np.random.default_rng(seed)

    if belt:
        bodies = bodies + asteroid_belt(belt, parent_id=SUN_ID, rng=rng)
        print(f"✔ Added a belt of {belt} locked asteroids")

    n_free = get_int(
        f"Free asteroids to spawn (0–{MAX_ASTEROIDS}) [default 3]: ",
        default=3,
        min_val=0,
        max_val=MAX_ASTEROIDS
    )
    for _ in range(n_free):
        bodies = spawn_asteroid(bodies, rng=rng)
        a = bodies[-1]
        print(f"✔ {a.name} spawned at pos ~[{a.position[0]:.1f}, {a.position[1]:.1f}, {a.position[2]:.1f}]")

    return bodies


def ask_run_length():
    steps_raw = get_int(f"\nFrames to simulate [default {STEPS}]: ", default=STEPS, min_val=1)
    steps = clamp_steps(steps_raw)
    time_scale = get_float(f"Time dilation (sim time per real second) [default {TIME_SCALE}]: ",
                           default=TIME_SCALE, positive=True)
    return steps, float(time_scale)


def ask_gravity():
    return get_float(f"Gravitational constant G [default {settings.G}]: ",
                     default=settings.G, positive=True)


def run_cli():
    print("======================================")
    print("        HYBRID ORRERY (CLI)           ")
    print("======================================")

    bodies = create_system()
    steps, time_scale = ask_run_length()
    G = ask_gravity()
    animate = get_yes_no("Show animation when done? (y/N): ", default=False)

    # Assign into settings so the runner and stepper read the runtime values
    setattr(settings, "TIME_SCALE", float(time_scale))
    setattr(settings, "G", float(G))

    print("\n✅ CLI input complete.")
    print(f"→ Bodies: {len(bodies)}")
    print(f"→ Frames: {steps}, time dilation {time_scale}, G {G}")

    return bodies, steps, time_scale, animate
