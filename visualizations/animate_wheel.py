#!/usr/bin/env python3
"""Render a simulated wheel spin to a looping GIF.

The renderer only reads segment labels, segment colours and the rotation
sample of each frame; it never takes part in choosing the winner. The
indicator sits at 3 o'clock, segment 0 starts at 12 o'clock and the
wheel turns clockwise, matching the engine's geometry.

Usage:
    python visualizations/animate_wheel.py --n-entities 12 --target T5
    python visualizations/animate_wheel.py --config configs/fast_demo.yaml --out spin.gif
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.patches import Circle, Polygon, Wedge

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wheel_config import WheelEngineConfig, load_config  # noqa: E402
from wheel_engine.palette import segment_colors, text_color_for  # noqa: E402
from wheel_engine.simulation import SpinRecord, make_entities, run_spin  # noqa: E402

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUT_PATH = Path(__file__).resolve().parent / "outputs" / "wheel_spin.gif"

# ---------------------------------------------------------------------------
# Animation parameters
# ---------------------------------------------------------------------------
FPS = 25
DPI = 80
FIGSIZE = (5, 5)
HOLD_FRAMES = 15  # frames repeated on the final position
MAX_LABELS = 60  # segment text is skipped on denser wheels

# Colours
BG_COLOR = "#0f0f1a"
POINTER_COLOR = "#e2e8f0"
HUB_COLOR = "#ffffff"


def draw_wheel(ax, labels: Sequence[str], colors: Sequence[str], rotation: float, title: Optional[str] = None):
    """Draw the wheel at ``rotation`` degrees (clockwise, cumulative)."""
    ax.clear()
    ax.set_xlim(-1.3, 1.3)
    ax.set_ylim(-1.3, 1.3)
    ax.set_aspect("equal")
    ax.set_facecolor(BG_COLOR)
    ax.axis("off")

    n = len(labels)
    width = 360.0 / n
    show_text = n <= MAX_LABELS

    for i in range(n):
        # Wheel-local clockwise angles mapped to matplotlib's CCW convention
        start_cw = i * width - 90.0 + rotation
        end_cw = start_cw + width
        ax.add_patch(
            Wedge((0, 0), 1.0, -end_cw, -start_cw, facecolor=colors[i], edgecolor="white", linewidth=0.8)
        )

        if show_text:
            mid = np.deg2rad(-(start_cw + width / 2))
            ax.text(
                0.62 * np.cos(mid),
                0.62 * np.sin(mid),
                labels[i],
                rotation=np.rad2deg(mid),
                rotation_mode="anchor",
                ha="center",
                va="center",
                fontsize=max(5, 11 - n // 8),
                color=text_color_for(colors[i]),
            )

    ax.add_patch(Circle((0, 0), 0.08, facecolor=HUB_COLOR, edgecolor="black", linewidth=1.5, zorder=5))
    ax.add_patch(
        Polygon(
            [[1.18, 0.07], [1.18, -0.07], [0.95, 0.0]],
            closed=True,
            facecolor=POINTER_COLOR,
            edgecolor="black",
            linewidth=1.2,
            zorder=6,
        )
    )

    if title:
        ax.text(0, 1.22, title, color=POINTER_COLOR, ha="center", va="center", fontsize=11, fontweight="bold")


def sample_frames(record: SpinRecord, fps: int = FPS) -> np.ndarray:
    """Resample a spin's rotations onto the GIF frame clock."""
    frame_times = np.arange(0.0, record.times[-1], 1000.0 / fps)
    rotations = np.interp(frame_times, record.times, record.rotations)
    final = np.full(HOLD_FRAMES, record.rotations[-1])
    return np.concatenate([rotations, final])


def render_spin(
    record: SpinRecord,
    labels: Sequence[str],
    colors: Sequence[str],
    save_path: Path = OUT_PATH,
    fps: int = FPS,
) -> Path:
    """Render ``record`` to a GIF at ``save_path``."""
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    rotations = sample_frames(record, fps)
    winner = record.outcome.display_label

    fig, ax = plt.subplots(figsize=FIGSIZE, facecolor=BG_COLOR)
    fig.subplots_adjust(left=0.02, right=0.98, top=0.98, bottom=0.02)

    def animate(frame_idx):
        settled = frame_idx >= len(rotations) - HOLD_FRAMES
        draw_wheel(ax, labels, colors, rotations[frame_idx], title=winner if settled else None)

    anim = FuncAnimation(fig, animate, frames=len(rotations), interval=1000 // fps)
    anim.save(str(save_path), writer=PillowWriter(fps=fps), dpi=DPI)
    plt.close(fig)
    return save_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render one wheel spin to GIF")
    parser.add_argument("--config", type=str, help="Path to config YAML")
    parser.add_argument("--n-entities", type=int, default=12, help="Size of generated T1..Tn list")
    parser.add_argument("--target", type=str, help="Identifier to land on")
    parser.add_argument("--seed", type=int, help="Planner random seed")
    parser.add_argument("--out", type=str, default=str(OUT_PATH), help="Output GIF path")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else WheelEngineConfig.for_fast_demo()
    entities = make_entities(args.n_entities)
    controller = config.create_controller(entities, seed=args.seed)
    if args.target:
        controller.replace_queue([args.target])

    record = run_spin(controller, frame_interval_ms=1000.0 / FPS)
    labels = [e.label for e in entities]
    colors = segment_colors(len(entities), config.display.palette)

    out = render_spin(record, labels, colors, args.out)
    print(f"Winner: {record.outcome.winning_identifier} -> {out}")
    return out


if __name__ == "__main__":
    main()
