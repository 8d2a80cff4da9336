"""
Headless Spin Simulation

Drives an AnimationController at a fixed frame interval, the way a
display loop would, and records each spin's trajectory. Used by the
simulate_spins.py CLI, the wheel animation renderer and the tests.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .angle_index import Entity
from .animation import AnimationController, SpinPhase
from .planner import SpinPlan
from .resolver import SpinOutcome

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL_MS = 1000.0 / 60.0


@dataclass
class SpinRecord:
    """Trajectory and result of one simulated spin."""

    spin_number: int
    plan: SpinPlan
    outcome: SpinOutcome
    times: np.ndarray = field(default_factory=lambda: np.zeros(0))
    rotations: np.ndarray = field(default_factory=lambda: np.zeros(0))

    @property
    def target(self) -> Optional[str]:
        return self.plan.intent.identifier if self.plan.is_targeted else None

    @property
    def hit_target(self) -> Optional[bool]:
        """Whether a targeted spin landed on its target (None for natural)."""
        if self.target is None:
            return None
        return self.outcome.winning_identifier == self.target

    @property
    def total_rotation(self) -> float:
        return float(self.rotations[-1] - self.rotations[0]) if len(self.rotations) else 0.0


def make_entities(n: int, prefix: str = "T") -> List[Entity]:
    """Entities T1..Tn labelled "Entry i"."""
    return [Entity(f"{prefix}{i}", f"Entry {i}") for i in range(1, n + 1)]


def run_spin(
    controller: AnimationController,
    frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
    acknowledge: bool = True,
) -> SpinRecord:
    """
    Run one spin to completion.

    Any outcome still on display is acknowledged first.

    Args:
        controller: Controller to drive
        frame_interval_ms: Simulated time between frames
        acknowledge: Acknowledge the new outcome after it settles

    Returns:
        SpinRecord with per-frame times (ms) and rotations (deg)
    """
    if controller.phase is SpinPhase.SETTLED:
        controller.acknowledge_outcome()

    plan = controller.request_spin()
    if plan is None:
        raise RuntimeError(f"Controller did not start a spin (phase={controller.phase.value})")

    times = [0.0]
    rotations = [controller.current_rotation]
    t = 0.0
    while controller.phase is SpinPhase.RUNNING:
        t += frame_interval_ms
        times.append(t)
        rotations.append(controller.tick(frame_interval_ms))

    record = SpinRecord(
        spin_number=controller.spin_count,
        plan=plan,
        outcome=controller.last_outcome,
        times=np.array(times),
        rotations=np.array(rotations),
    )
    if acknowledge:
        controller.acknowledge_outcome()
    return record


def run_session(
    controller: AnimationController,
    n_spins: int,
    frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
    idle_ms: float = 0.0,
) -> List[SpinRecord]:
    """Run ``n_spins`` consecutive spins, idling ``idle_ms`` between them."""
    records = []
    for i in range(n_spins):
        records.append(run_spin(controller, frame_interval_ms))
        if idle_ms > 0:
            controller.tick(idle_ms)
        if (i + 1) % 10 == 0:
            logger.info("Completed %d/%d spins", i + 1, n_spins)
    return records


def summarize(records: List[SpinRecord]) -> Dict[str, float]:
    """Aggregate statistics over a list of spin records."""
    targeted = [r for r in records if r.target is not None]
    durations = [r.plan.duration_ms for r in records]
    turns = [r.plan.turns for r in records]
    return {
        "n_spins": len(records),
        "n_targeted": len(targeted),
        "n_hits": sum(1 for r in targeted if r.hit_target),
        "mean_duration_ms": float(np.mean(durations)) if durations else 0.0,
        "std_duration_ms": float(np.std(durations)) if durations else 0.0,
        "min_turns": int(min(turns)) if turns else 0,
        "max_turns": int(max(turns)) if turns else 0,
    }


def print_summary(records: List[SpinRecord], label: str = "Wheel"):
    """Print summary statistics"""
    stats = summarize(records)
    hit_rate = stats["n_hits"] / stats["n_targeted"] * 100 if stats["n_targeted"] else 0.0

    print(f"\n{'='*60}")
    print(f"{label} Spin Results ({stats['n_spins']} spins)")
    print(f"{'='*60}")
    print(f"Targeted spins:  {stats['n_targeted']} ({hit_rate:.1f}% on target)")
    print(f"Duration:        {stats['mean_duration_ms']:.0f} ± {stats['std_duration_ms']:.0f} ms")
    print(f"Turns:           {stats['min_turns']}-{stats['max_turns']}")
    for r in records:
        mode = f"targeted {r.target} [{r.plan.profile}]" if r.target else "natural"
        print(
            f"  #{r.spin_number:<3d} {mode:<24s} -> {r.outcome.winning_identifier} "
            f"(segment {r.outcome.segment_index})"
        )
    print(f"{'='*60}\n")
