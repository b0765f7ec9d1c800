# orrery/visualization/animation.py
import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from orrery.config.settings import OUTPUT_DIR


def animate_simulation(result, interval=30, trail=40, save_as=None):
    """
    Animate recorded bodies in the ground plane (X/Z) with short trails.
    Free bodies are drawn larger so spawned asteroids stand out.
    """
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    final = {b.id: b for b in result.bodies}
    ids = list(result.trajectories.keys())
    n_frames = len(result.times)

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_title("Hybrid Orrery")

    # Collect bounds
    finite = [traj[np.all(np.isfinite(traj), axis=1)] for traj in result.trajectories.values()]
    finite = [f for f in finite if len(f)]
    if finite:
        pts = np.vstack(finite)
        margin = 2.0
        ax.set_xlim(pts[:, 0].min() - margin, pts[:, 0].max() + margin)
        ax.set_ylim(pts[:, 2].min() - margin, pts[:, 2].max() + margin)
    ax.set_aspect("equal")
    ax.set_facecolor("black")

    markers = []
    trails = []
    for bid in ids:
        body = final.get(bid)
        color = body.color if body is not None else "white"
        size = 6 if body is not None and not body.is_locked else 4
        markers.append(ax.plot([], [], "o", color=color, markersize=size)[0])
        trails.append(ax.plot([], [], "-", color=color, alpha=0.5, linewidth=0.8)[0])

    time_text = ax.text(0.02, 0.97, "", transform=ax.transAxes, color="white", fontsize=8, va="top")

    def update(frame):
        artists = []
        for k, bid in enumerate(ids):
            traj = result.trajectories[bid]
            # bodies spawned mid-run have shorter histories aligned to the end
            offset = n_frames - len(traj)
            idx = frame - offset
            if idx < 0:
                markers[k].set_data([], [])
                trails[k].set_data([], [])
            else:
                lo = max(0, idx - trail)
                markers[k].set_data([traj[idx, 0]], [traj[idx, 2]])
                trails[k].set_data(traj[lo:idx + 1, 0], traj[lo:idx + 1, 2])
            artists.extend([markers[k], trails[k]])
        time_text.set_text(f"t = {result.times[frame]:.2f}")
        artists.append(time_text)
        return artists

    anim = FuncAnimation(
        fig,
        update,
        frames=n_frames,
        interval=interval,
        blit=True
    )

    if save_as:
        save_path = os.path.join(OUTPUT_DIR, save_as)
        anim.save(save_path)
        plt.close(fig)
        print(f"[OK] Saved: {save_path}")
        return save_path

    plt.show()
    return anim
