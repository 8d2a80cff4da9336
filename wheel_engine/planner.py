"""
Trajectory Planner

Computes how far the wheel turns and for how long, for either a natural
(uniformly random) spin or a spin targeted at a specific identifier.

Targeted algorithm:
1. Look up the target's segment center in the AngleIndex (O(1))
2. Find the wheel-local angle currently under the indicator
3. angle_to_target = normalize(pointer - target)
4. Pick a trajectory profile (round-robin or random)
5. Clamp the micro-offset to a fraction of the slice width
6. delta = turns*360 + angle_to_target - micro_offset

Turning the wheel by delta moves the wheel-local pointer angle by -delta,
so the pointer comes to rest on target + micro_offset. Because turns is a
whole number and |micro_offset| stays well inside half a slice,
current_rotation + delta always resolves to the target segment.

A missing identifier or a non-finite result is not an error: plan()
returns a PlanFallback and the caller re-plans with Natural().

Usage:
    planner = TrajectoryPlanner(seed=42)
    plan = planner.plan(current_rotation, Targeted("T3"), index)
    if isinstance(plan, PlanFallback):
        plan = planner.plan(current_rotation, Natural(), index)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .angle_index import AngleIndex
from .geometry import FULL_TURN, is_finite, normalize_angle, pointer_angle, slice_width
from .profiles import DEFAULT_PROFILES, ProfileSelector, TrajectoryProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Natural:
    """Land on a uniformly random angle."""


@dataclass(frozen=True)
class Targeted:
    """Land inside the segment owned by ``identifier``."""

    identifier: str


SpinIntent = Union[Natural, Targeted]


@dataclass(frozen=True)
class SpinPlan:
    """
    A planned spin trajectory.

    Attributes:
        rotation_delta: Degrees to add to the current rotation
        duration_ms: Animation length in milliseconds
        intent: The intent the plan satisfies
        profile: Name of the trajectory profile used (None for natural)
        turns: Whole turns included in rotation_delta
        landing_angle: Degrees beyond the whole turns (before micro-offset)
        micro_offset: Landing perturbation in degrees (0 for natural)
    """

    rotation_delta: float
    duration_ms: float
    intent: SpinIntent
    profile: Optional[str] = None
    turns: int = 0
    landing_angle: float = 0.0
    micro_offset: float = 0.0

    @property
    def is_targeted(self) -> bool:
        return isinstance(self.intent, Targeted)


@dataclass(frozen=True)
class PlanFallback:
    """Signals that a targeted plan is impossible and Natural should be used.

    Attributes:
        reason: "lookup_miss" or "numeric_anomaly"
        identifier: The identifier that could not be planned, if any
    """

    reason: str
    identifier: Optional[str] = None


LOOKUP_MISS = "lookup_miss"
NUMERIC_ANOMALY = "numeric_anomaly"


class TrajectoryPlanner:
    """
    Plans natural and targeted spin trajectories.

    All random draws come from one numpy Generator so a seed reproduces
    every plan exactly.
    """

    def __init__(
        self,
        base_duration_ms: float = 11000.0,
        min_turns: int = 5,
        max_turns: int = 8,
        safety_fraction: float = 0.3,
        selector: Optional[ProfileSelector] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize planner.

        Args:
            base_duration_ms: Natural-mode duration and center of profile ranges
            min_turns: Minimum whole turns for a natural spin
            max_turns: Maximum whole turns for a natural spin (inclusive)
            safety_fraction: Largest micro-offset range as a fraction of
                slice width
            selector: Profile selector (default: A/B/C round-robin)
            seed: Random seed for reproducibility (None for random)
        """
        if min_turns < 1 or max_turns < min_turns:
            raise ValueError(f"Invalid turn range [{min_turns}, {max_turns}]")
        if not 0.0 <= safety_fraction < 1.0:
            raise ValueError(f"safety_fraction must be in [0, 1), got {safety_fraction}")

        self.base_duration_ms = base_duration_ms
        self.min_turns = min_turns
        self.max_turns = max_turns
        self.safety_fraction = safety_fraction
        self.selector = selector or ProfileSelector(DEFAULT_PROFILES)
        self.rng = np.random.default_rng(seed)
        self.targeted_spins = 0

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the generator and restart profile rotation."""
        self.rng = np.random.default_rng(seed)
        self.targeted_spins = 0

    def plan(
        self,
        current_rotation: float,
        intent: SpinIntent,
        angle_index: AngleIndex,
        profile: Optional[TrajectoryProfile] = None,
    ) -> Union[SpinPlan, PlanFallback]:
        """
        Plan a spin from ``current_rotation``.

        Args:
            current_rotation: Cumulative wheel rotation in degrees
            intent: Natural() or Targeted(identifier)
            angle_index: Index for the current entity list
            profile: Force a trajectory profile (targeted only)

        Returns:
            SpinPlan, or PlanFallback when a targeted plan is impossible
        """
        if isinstance(intent, Natural):
            return self.plan_natural()
        if isinstance(intent, Targeted):
            return self.plan_targeted(current_rotation, intent.identifier, angle_index, profile)
        raise TypeError(f"Unknown spin intent: {intent!r}")

    def plan_natural(self) -> SpinPlan:
        turns = int(self.rng.integers(self.min_turns, self.max_turns + 1))
        offset = float(self.rng.uniform(0.0, FULL_TURN))
        return SpinPlan(
            rotation_delta=turns * FULL_TURN + offset,
            duration_ms=float(self.base_duration_ms),
            intent=Natural(),
            turns=turns,
            landing_angle=offset,
        )

    def plan_targeted(
        self,
        current_rotation: float,
        identifier: str,
        angle_index: AngleIndex,
        profile: Optional[TrajectoryProfile] = None,
    ) -> Union[SpinPlan, PlanFallback]:
        target_angle = angle_index.lookup(identifier)
        if target_angle is None:
            logger.debug("Identifier %r not in angle index", identifier)
            return PlanFallback(LOOKUP_MISS, identifier)
        if not is_finite(current_rotation) or not is_finite(target_angle):
            return PlanFallback(NUMERIC_ANOMALY, identifier)

        if profile is None:
            profile = self.selector.select(self.targeted_spins, self.rng)
        self.targeted_spins += 1

        angle_to_target = normalize_angle(pointer_angle(current_rotation) - target_angle)

        turns = int(self.rng.integers(profile.min_turns, profile.max_turns + 1))
        half_range = self.micro_offset_bound(len(angle_index), profile)
        micro_offset = float(self.rng.uniform(-half_range, half_range)) if half_range > 0 else 0.0

        low, high = profile.duration_range(self.base_duration_ms)
        duration = float(self.rng.uniform(low, high)) if high > low else float(low)

        delta = turns * FULL_TURN + angle_to_target - micro_offset
        if not is_finite(delta) or not is_finite(duration):
            return PlanFallback(NUMERIC_ANOMALY, identifier)

        logger.debug(
            "Targeted plan for %r: profile=%s turns=%d angle=%.4f micro=%.4f duration=%.0fms",
            identifier,
            profile.name,
            turns,
            angle_to_target,
            micro_offset,
            duration,
        )
        return SpinPlan(
            rotation_delta=delta,
            duration_ms=duration,
            intent=Targeted(identifier),
            profile=profile.name,
            turns=turns,
            landing_angle=angle_to_target,
            micro_offset=micro_offset,
        )

    def micro_offset_bound(self, entity_count: int, profile: TrajectoryProfile) -> float:
        """
        Largest absolute micro-offset for a wheel of ``entity_count`` segments.

        The full range is min(profile range, safety_fraction * slice width),
        so for thousands of entities the perturbation shrinks with the
        slice instead of spilling into a neighbour.
        """
        max_safe_range = slice_width(entity_count) * self.safety_fraction
        return min(profile.micro_offset_range, max_safe_range) / 2.0
