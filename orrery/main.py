# orrery/main.py
import os
import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from orrery.cli import run_cli
from orrery.simulation.hierarchy import validate_bodies
from orrery.simulation.runner import run_simulation
from orrery.visualization.plots import plot_orbits, plot_energy
from orrery.visualization.animation import animate_simulation
from orrery.config import settings
from orrery.config.settings import DT, validate_settings

# --- Setup logger ------------------------------------------------------------
log = logging.getLogger("main")


def save_json(obj: Any, name_prefix: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(getattr(settings, "OUTPUT_DIR", "output"))
    out_dir.mkdir(parents=True, exist_ok=True)
    filename = out_dir / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(obj, f, indent=2, default=lambda o: repr(o))
    return str(filename)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(message)s",
        datefmt="%H:%M:%S"
    )
    os.makedirs(getattr(settings, "OUTPUT_DIR", "output"), exist_ok=True)

    try:
        validate_settings()

        # 1) Get inputs from CLI (CLI sets settings.TIME_SCALE)
        bodies, steps, time_scale, animate = run_cli()

        # 2) The engine does not validate; do it once before the run
        validate_bodies(bodies)
        log.info("Starting simulation: %d bodies, %d frames, dt=%.3f, time_scale=%.3f",
                 len(bodies), steps, DT, time_scale)

        result = run_simulation(bodies, steps, dt=DT, time_scale=time_scale)
        log.info("Simulation finished at t=%.3f", result.times[-1])

        # 3) Save summary
        out = {
            "meta": {
                "dt": DT,
                "steps": steps,
                "time_scale": time_scale,
                "G": settings.G,
                "timestamp_utc": datetime.now(timezone.utc).isoformat()
            },
            "result": result.summary()
        }
        out_file = save_json(out, "simulation_results")
        log.info("Saved simulation results: %s", out_file)

        # 4) Produce quick plots
        try:
            plot_orbits(result)
            plot_energy(result)
            log.info("Plots generated.")
        except Exception as e:
            log.warning("Plotting failed: %s", e)

        # 5) Animate (best-effort)
        if animate:
            try:
                animate_simulation(result)
            except Exception as e:
                log.warning("Animation failed or running headless: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
