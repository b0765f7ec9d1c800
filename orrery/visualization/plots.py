import os
import matplotlib.pyplot as plt
from orrery.config.settings import OUTPUT_DIR


def plot_orbits(result, filename="orbits.png"):
    """
    Top-down (X/Z ground plane) view of recorded trajectories with each locked
    body's static orbit path drawn around its parent's final position.
    """
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    final = {b.id: b for b in result.bodies}

    plt.figure(figsize=(8, 8))

    for bid, path in result.orbit_paths.items():
        body = final[bid]
        parent = final.get(body.parent_id) if body.parent_id is not None else None
        origin = parent.position if parent is not None else (0.0, 0.0, 0.0)
        plt.plot(path[:, 0] + origin[0], path[:, 2] + origin[2], color="gray", alpha=0.3, linewidth=0.8)

    for bid, traj in result.trajectories.items():
        body = final.get(bid)
        color = body.color if body is not None else "black"
        plt.plot(traj[:, 0], traj[:, 2], color=color, linewidth=1.0)
        plt.plot(traj[-1, 0], traj[-1, 2], "o", color=color, markersize=4)
        if body is not None and not body.is_locked:
            plt.annotate(body.name, (traj[-1, 0], traj[-1, 2]), fontsize=7)

    plt.xlabel("X")
    plt.ylabel("Z")
    plt.title("Orbits (ground plane)")
    plt.gca().set_aspect("equal")

    save_path = os.path.join(OUTPUT_DIR, filename)
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_energy(result, filename="energy.png"):
    """
    Plot the energy diagnostic over time. Locked bodies move on rails, so this is
    only expected to be flat for systems of free bodies.
    """
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    plt.figure(figsize=(10, 5))
    plt.plot(result.times, result.energy)
    plt.xlabel("Simulation Time")
    plt.ylabel("Kinetic + Potential Energy")
    plt.title("Energy Diagnostic")

    save_path = os.path.join(OUTPUT_DIR, filename)
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path
