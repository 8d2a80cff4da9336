"""
Trajectory Profiles

A trajectory profile bundles the turn-count range, micro-offset range and
duration jitter used for a targeted spin. Cycling through several
profiles keeps repeated targeted spins from sharing a visible signature.

Presets:
- A: slightly faster acceleration feel, longer deceleration
- B: tighter turn range, least jitter
- C: widest turn range, stronger inertia feel
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class TrajectoryProfile:
    """
    Parameters for one targeted-spin trajectory variant.

    Attributes:
        name: Profile identifier ("A", "B", "C" or "custom")
        min_turns: Minimum whole turns before landing
        max_turns: Maximum whole turns before landing (inclusive)
        micro_offset_range: Full width in degrees of the landing perturbation
            before the slice-width clamp is applied. The offset is drawn
            from [-range/2, range/2].
        duration_jitter_ms: Duration is drawn from
            base_duration ± duration_jitter_ms.
    """

    name: str
    min_turns: int = 5
    max_turns: int = 8
    micro_offset_range: float = 4.0  # degrees
    duration_jitter_ms: float = 0.0

    def __post_init__(self):
        if self.min_turns < 1 or self.max_turns < self.min_turns:
            raise ValueError(
                f"Invalid turn range [{self.min_turns}, {self.max_turns}] "
                f"for profile '{self.name}'"
            )
        if self.micro_offset_range < 0 or self.duration_jitter_ms < 0:
            raise ValueError(f"Profile '{self.name}' ranges must be non-negative")

    def duration_range(self, base_duration_ms: float) -> Tuple[float, float]:
        return (
            base_duration_ms - self.duration_jitter_ms,
            base_duration_ms + self.duration_jitter_ms,
        )

    @classmethod
    def profile_a(cls) -> "TrajectoryProfile":
        return cls(
            name="A",
            min_turns=6,
            max_turns=8,
            micro_offset_range=3.0,  # ±1.5°
            duration_jitter_ms=250.0,
        )

    @classmethod
    def profile_b(cls) -> "TrajectoryProfile":
        return cls(
            name="B",
            min_turns=6,
            max_turns=7,
            micro_offset_range=2.5,  # ±1.25°
            duration_jitter_ms=200.0,
        )

    @classmethod
    def profile_c(cls) -> "TrajectoryProfile":
        return cls(
            name="C",
            min_turns=5,
            max_turns=8,
            micro_offset_range=3.5,  # ±1.75°
            duration_jitter_ms=300.0,
        )

    @classmethod
    def get_preset(cls, name: str) -> "TrajectoryProfile":
        """
        Get a profile by preset name.

        Raises:
            ValueError: If the preset name is not recognized
        """
        presets = {
            "A": cls.profile_a,
            "B": cls.profile_b,
            "C": cls.profile_c,
        }

        if name not in presets:
            available = ", ".join(presets.keys())
            raise ValueError(f"Unknown trajectory profile '{name}'. Available: {available}")

        return presets[name]()

    @classmethod
    def custom(
        cls,
        min_turns: int,
        max_turns: int,
        micro_offset_range: float = 4.0,
        duration_jitter_ms: float = 0.0,
    ) -> "TrajectoryProfile":
        return cls(
            name="custom",
            min_turns=min_turns,
            max_turns=max_turns,
            micro_offset_range=micro_offset_range,
            duration_jitter_ms=duration_jitter_ms,
        )


DEFAULT_PROFILES: Tuple[TrajectoryProfile, ...] = (
    TrajectoryProfile.profile_a(),
    TrajectoryProfile.profile_b(),
    TrajectoryProfile.profile_c(),
)


class ProfileSelector:
    """
    Picks the profile for each targeted spin.

    Modes:
        "round_robin": profiles[spin_number % len(profiles)]
        "random": uniform choice from the supplied generator
    """

    MODES = ("round_robin", "random")

    def __init__(
        self,
        profiles: Sequence[TrajectoryProfile] = DEFAULT_PROFILES,
        mode: str = "round_robin",
    ):
        if not profiles:
            raise ValueError("ProfileSelector requires at least one profile")
        if mode not in self.MODES:
            raise ValueError(f"Unknown profile selection mode '{mode}'. Available: {', '.join(self.MODES)}")
        self.profiles = tuple(profiles)
        self.mode = mode

    @property
    def by_name(self) -> Dict[str, TrajectoryProfile]:
        return {p.name: p for p in self.profiles}

    def select(
        self, spin_number: int, rng: Optional[np.random.Generator] = None
    ) -> TrajectoryProfile:
        if self.mode == "random":
            rng = rng or np.random.default_rng()
            return self.profiles[int(rng.integers(len(self.profiles)))]
        return self.profiles[spin_number % len(self.profiles)]
