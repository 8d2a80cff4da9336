#!/usr/bin/env python3
"""
Headless Wheel Spin Simulation

Runs a sequence of spins against a configuration and entity list, exactly
as a display loop would drive the engine, and reports where each spin
landed. Useful for checking that queued targets are hit and that natural
and targeted spins look alike (turn counts, durations).

Usage:
    # 10 spins on the generated T1..T8 wheel
    python simulate_spins.py --config configs/reference.yaml

    # Queue two targets on a 500-entry wheel and plot the trajectories
    python simulate_spins.py --n-entities 500 --targets T17 T499 \\
        --n-spins 4 --save-plot spins.png

    # Entity list from YAML (list of {identifier, label})
    python simulate_spins.py --entities entries.yaml --targets T3
"""

import argparse
import logging
from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt
import yaml

from wheel_config import WheelEngineConfig, load_config
from wheel_engine import Entity
from wheel_engine.simulation import SpinRecord, make_entities, print_summary, run_session

logger = logging.getLogger(__name__)


def load_entities(path: str) -> List[Entity]:
    """
    Load an ordered entity list from YAML.

    Accepts either a top-level list or a mapping with an ``entries`` list.
    Each item is a mapping with ``identifier`` (or ``ticketNumber``) and
    ``label``.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("entries", [])
    return [Entity.from_dict(item) for item in data]


def plot_trajectories(records: List[SpinRecord], save_path: Optional[str] = None):
    """Plot rotation and angular speed against time for each spin"""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    for r in records:
        label = f"#{r.spin_number} {r.target or 'natural'}"
        if r.plan.profile:
            label += f" [{r.plan.profile}]"
        t_s = r.times / 1000.0
        travelled = r.rotations - r.rotations[0]
        axes[0].plot(t_s, travelled, linewidth=1.5, label=label)

        if len(t_s) > 1:
            speed = np.diff(travelled) / np.diff(t_s)
            axes[1].plot(t_s[1:], speed, linewidth=1.2, label=label)

    axes[0].set_xlabel("Time (s)")
    axes[0].set_ylabel("Rotation travelled (°)")
    axes[0].set_title("Spin Trajectories")
    axes[0].grid(True, alpha=0.3)
    axes[0].legend(fontsize=8)

    axes[1].set_xlabel("Time (s)")
    axes[1].set_ylabel("Angular speed (°/s)")
    axes[1].set_title("Angular Speed")
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Saved: {save_path}")
        plt.close(fig)
    else:
        plt.show()


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Simulate natural and targeted wheel spins headlessly"
    )
    parser.add_argument("--config", type=str, help="Path to config YAML")
    parser.add_argument("--entities", type=str, help="Entity list YAML")
    parser.add_argument("--n-entities", type=int, help="Size of generated T1..Tn list")
    parser.add_argument("--n-spins", type=int, help="Number of spins")
    parser.add_argument(
        "--targets", nargs="*", default=[], help="Fixed target identifiers (max 3)"
    )
    parser.add_argument("--seed", type=int, help="Planner random seed")
    parser.add_argument("--save-plot", type=str, help="Save trajectory plot")
    parser.add_argument(
        "--log-level", type=str, help="Override logging level (DEBUG, INFO, ...)"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else WheelEngineConfig.for_reference()
    if args.log_level:
        config.logging.level = args.log_level
    config.logging.apply()

    issues = config.validate()
    for issue in issues:
        logger.warning(issue)
    if any(issue.startswith("CRITICAL") for issue in issues):
        raise SystemExit(1)

    if args.entities:
        entities = load_entities(args.entities)
    else:
        entities = make_entities(args.n_entities or config.simulation.n_entities)

    if not entities:
        print("No entities to spin")
        raise SystemExit(1)

    n_spins = args.n_spins or config.simulation.n_spins
    controller = config.create_controller(entities, seed=args.seed)
    if args.targets:
        controller.replace_queue(args.targets)

    def announce(outcome):
        label = outcome.display_label if config.display.strip_ticket_suffix else outcome.winning_label
        logger.info("Winner: %s (%s)", label, outcome.winning_identifier)

    controller.subscribe(announce)

    print(f"Wheel: {len(entities)} entities, queue={controller.queue.snapshot()}")
    records = run_session(controller, n_spins, config.simulation.frame_interval_ms)
    print_summary(records)

    if args.save_plot:
        plot_trajectories(records, args.save_plot)

    return records


if __name__ == "__main__":
    main()
