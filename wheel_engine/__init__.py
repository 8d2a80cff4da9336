"""
Wheel Engine Package

Spin planning and winner resolution for a segmented prize wheel that can
land either on a random segment or on a pre-selected identifier.
"""

from .errors import WheelEngineError, DegenerateIndexError, MalformedQueueError
from .angle_index import Entity, AngleIndex
from .profiles import TrajectoryProfile, ProfileSelector, DEFAULT_PROFILES
from .planner import (
    Natural,
    Targeted,
    SpinPlan,
    PlanFallback,
    TrajectoryPlanner,
)
from .resolver import SpinOutcome, WinnerResolver
from .target_queue import FixedTargetQueue
from .easing import TwoPhaseEasing, get_easing
from .animation import SpinPhase, SpinFrame, advance_frame, AnimationController

__all__ = [
    "WheelEngineError",
    "DegenerateIndexError",
    "MalformedQueueError",
    "Entity",
    "AngleIndex",
    "TrajectoryProfile",
    "ProfileSelector",
    "DEFAULT_PROFILES",
    "Natural",
    "Targeted",
    "SpinPlan",
    "PlanFallback",
    "TrajectoryPlanner",
    "SpinOutcome",
    "WinnerResolver",
    "FixedTargetQueue",
    "TwoPhaseEasing",
    "get_easing",
    "SpinPhase",
    "SpinFrame",
    "advance_frame",
    "AnimationController",
]
