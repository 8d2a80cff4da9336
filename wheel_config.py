#!/usr/bin/env python3
"""
Wheel Engine Configuration System

This module provides a clean way to parametrize spin timing, easing,
targeting and simulation settings, avoiding magic numbers scattered
through the engine.

Usage:
    from wheel_config import WheelEngineConfig, load_config

    # Load from YAML file
    config = load_config("configs/reference.yaml")

    # Or create programmatically
    config = WheelEngineConfig.for_reference()

    controller = config.create_controller(entities, seed=42)
"""

import logging
import yaml
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, Optional, List, Sequence
from pathlib import Path


@dataclass
class SpinTimingConfig:
    """Spin duration, turn counts and idle motion"""

    base_duration_ms: float = 11000.0  # Natural spin length, center of profile ranges
    min_turns: int = 5  # Natural spin whole turns (inclusive)
    max_turns: int = 8
    idle_drift_deg_per_ms: float = 0.03  # 1.5 deg per 50 ms ambient drift
    tick_interval_deg: float = 25.0  # Rotation between tick events


@dataclass
class EasingConfig:
    """Progress easing curve"""

    name: str = "two_phase"  # "two_phase", "ease_out_cubic", "linear"
    crossover: float = 0.20  # two_phase: rise/fall handover
    rise_power: float = 3.0
    fall_power: float = 5.0

    def to_easing(self):
        """Build the easing callable described by this config."""
        from wheel_engine.easing import get_easing

        if self.name == "two_phase":
            return get_easing(
                "two_phase",
                crossover=self.crossover,
                rise_power=self.rise_power,
                fall_power=self.fall_power,
            )
        return get_easing(self.name)


@dataclass
class TargetingConfig:
    """Fixed-target queue and trajectory profile settings"""

    max_queue_length: int = 3
    micro_offset_safety_fraction: float = 0.3  # Max micro-offset range / slice width
    profile_selection: str = "round_robin"  # "round_robin" or "random"
    profiles: List[str] = field(default_factory=lambda: ["A", "B", "C"])

    def to_selector(self):
        from wheel_engine.profiles import ProfileSelector, TrajectoryProfile

        profiles = [TrajectoryProfile.get_preset(name) for name in self.profiles]
        return ProfileSelector(profiles, mode=self.profile_selection)


@dataclass
class DisplayConfig:
    """Outcome presentation settings"""

    palette: List[str] = field(
        default_factory=lambda: ["#efb71d", "#24a643", "#4d7ceb", "#d82135"]
    )
    strip_ticket_suffix: bool = True  # Remove "- T001" style suffixes from winner labels
    auto_remove_winner: bool = False


@dataclass
class SimulationConfig:
    """Headless simulation settings"""

    frame_interval_ms: float = 1000.0 / 60.0  # 60 Hz display refresh
    n_spins: int = 10
    n_entities: int = 8  # Generated T1..Tn list when no entity file is given
    seed: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging settings"""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    def apply(self):
        logging.basicConfig(level=getattr(logging, self.level.upper(), logging.INFO), format=self.format)


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a config section, ignoring keys the dataclass does not define."""
    data = data or {}
    valid = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in valid})


@dataclass
class WheelEngineConfig:
    """Complete wheel engine configuration"""

    timing: SpinTimingConfig = field(default_factory=SpinTimingConfig)
    easing: EasingConfig = field(default_factory=EasingConfig)
    targeting: TargetingConfig = field(default_factory=TargetingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    def save(self, path: str):
        """Save configuration to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: str) -> "WheelEngineConfig":
        """Load configuration from YAML file"""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            timing=_section(SpinTimingConfig, data.get("timing")),
            easing=_section(EasingConfig, data.get("easing")),
            targeting=_section(TargetingConfig, data.get("targeting")),
            display=_section(DisplayConfig, data.get("display")),
            simulation=_section(SimulationConfig, data.get("simulation")),
            logging=_section(LoggingConfig, data.get("logging")),
        )

    @classmethod
    def for_reference(cls) -> "WheelEngineConfig":
        """Reference settings: 11 s spins, A/B/C round-robin."""
        return cls()

    @classmethod
    def for_fast_demo(cls) -> "WheelEngineConfig":
        """
        Short spins for demos and quick simulations.

        Duration jitter of the A/B/C profiles still applies around the
        shorter base duration.
        """
        return cls(
            timing=SpinTimingConfig(base_duration_ms=3000.0, min_turns=3, max_turns=5),
            simulation=SimulationConfig(frame_interval_ms=1000.0 / 30.0, n_spins=5),
        )

    def create_planner(self, seed: Optional[int] = None):
        from wheel_engine.planner import TrajectoryPlanner

        return TrajectoryPlanner(
            base_duration_ms=self.timing.base_duration_ms,
            min_turns=self.timing.min_turns,
            max_turns=self.timing.max_turns,
            safety_fraction=self.targeting.micro_offset_safety_fraction,
            selector=self.targeting.to_selector(),
            seed=seed if seed is not None else self.simulation.seed,
        )

    def create_controller(self, entities: Sequence = (), seed: Optional[int] = None):
        """
        Build an AnimationController wired with this configuration.

        Args:
            entities: Initial ordered entity list
            seed: Planner seed (default: simulation.seed)
        """
        from wheel_engine import AngleIndex, AnimationController, FixedTargetQueue, WinnerResolver

        return AnimationController(
            angle_index=AngleIndex.build(entities),
            queue=FixedTargetQueue(max_length=self.targeting.max_queue_length),
            planner=self.create_planner(seed),
            resolver=WinnerResolver(palette=self.display.palette),
            easing=self.easing.to_easing(),
            idle_drift_deg_per_ms=self.timing.idle_drift_deg_per_ms,
            tick_interval_deg=self.timing.tick_interval_deg,
            auto_remove_winner=self.display.auto_remove_winner,
        )

    def validate(self) -> List[str]:
        """Validate configuration and return list of warnings/errors"""
        issues = []

        if self.timing.base_duration_ms <= 0:
            issues.append("CRITICAL: timing.base_duration_ms must be positive")
        if self.timing.min_turns < 1 or self.timing.max_turns < self.timing.min_turns:
            issues.append(
                f"CRITICAL: invalid turn range [{self.timing.min_turns}, {self.timing.max_turns}]"
            )

        if not 0.0 <= self.targeting.micro_offset_safety_fraction < 1.0:
            issues.append("CRITICAL: targeting.micro_offset_safety_fraction must be in [0, 1)")
        elif self.targeting.micro_offset_safety_fraction > 0.5:
            issues.append(
                f"WARNING: micro_offset_safety_fraction={self.targeting.micro_offset_safety_fraction} "
                "leaves little margin inside a slice"
            )

        try:
            self.targeting.to_selector()
        except ValueError as e:
            issues.append(f"CRITICAL: {e}")

        try:
            self.easing.to_easing()
        except ValueError as e:
            issues.append(f"CRITICAL: {e}")

        if not self.display.palette:
            issues.append("CRITICAL: display.palette must contain at least one colour")

        if not 0 <= self.targeting.max_queue_length <= 3:
            issues.append(
                f"CRITICAL: targeting.max_queue_length must be between 0 and 3, "
                f"got {self.targeting.max_queue_length}"
            )

        if self.simulation.frame_interval_ms > self.timing.base_duration_ms / 10:
            issues.append(
                f"WARNING: frame_interval_ms={self.simulation.frame_interval_ms} is coarse "
                f"for {self.timing.base_duration_ms} ms spins"
            )

        return issues


def load_config(path: str) -> WheelEngineConfig:
    """Convenience function to load configuration"""
    return WheelEngineConfig.load(path)


def create_default_configs():
    """Create default configuration files"""

    configs_dir = Path("configs")
    configs_dir.mkdir(exist_ok=True)

    WheelEngineConfig.for_reference().save(configs_dir / "reference.yaml")
    WheelEngineConfig.for_fast_demo().save(configs_dir / "fast_demo.yaml")

    print(f"Created configuration files in {configs_dir}/")


if __name__ == "__main__":
    create_default_configs()

    config = WheelEngineConfig.for_reference()
    issues = config.validate()

    print("\nConfiguration validation:")
    if issues:
        for issue in issues:
            print(f"  {issue}")
    else:
        print("  All checks passed")
