"""
Animation Controller

Owns the wheel's rotation and drives one spin at a time:

    IDLE --request_spin()--> RUNNING --progress reaches 1--> SETTLED
      ^                                                         |
      +---------------- acknowledge_outcome() ------------------+

The host loop (timer callback, game loop, async task, or the headless
simulator) calls tick(dt_ms) once per frame. The interpolation itself is
the pure function advance_frame(), so it can be tested without a clock.

Invariants:
- At most one spin runs at a time; spin requests while RUNNING or SETTLED
  are no-ops.
- The AngleIndex is never rebuilt outside IDLE. Entity-list changes made
  during a spin are held and applied on acknowledge_outcome().
- The final rotation is set to the planned end value exactly, and the
  winner is resolved from it once per spin.
- Planning failures never reach the caller; they fall back to a natural
  spin. Only an empty wheel is refused (DegenerateIndexError).
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .angle_index import AngleIndex, Entity
from .easing import TwoPhaseEasing
from .errors import DegenerateIndexError
from .geometry import is_finite
from .planner import Natural, PlanFallback, SpinPlan, Targeted, TrajectoryPlanner
from .resolver import SpinOutcome, WinnerResolver
from .target_queue import FixedTargetQueue

logger = logging.getLogger(__name__)


class SpinPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


@dataclass(frozen=True)
class SpinFrame:
    """
    Interpolation state of one running spin.

    Attributes:
        start_rotation: Rotation when the spin began
        end_rotation: Planned final rotation
        duration_ms: Total animation time
        elapsed_ms: Time advanced so far
        rotation: Rotation at elapsed_ms
        progress: Eased progress in [0, 1]
    """

    start_rotation: float
    end_rotation: float
    duration_ms: float
    elapsed_ms: float = 0.0
    rotation: Optional[float] = None
    progress: float = 0.0

    def __post_init__(self):
        if self.rotation is None:
            object.__setattr__(self, "rotation", self.start_rotation)

    @property
    def finished(self) -> bool:
        return self.elapsed_ms >= self.duration_ms


def advance_frame(frame: SpinFrame, dt_ms: float, easing: Callable = TwoPhaseEasing()) -> SpinFrame:
    """
    Advance a spin by ``dt_ms`` and return the new frame.

    Once elapsed time reaches the duration the rotation is the exact
    planned end value, not the last interpolated sample.
    """
    elapsed = frame.elapsed_ms + max(dt_ms, 0.0)
    t = min(elapsed / frame.duration_ms, 1.0) if frame.duration_ms > 0 else 1.0

    if t >= 1.0:
        return replace(frame, elapsed_ms=max(elapsed, frame.duration_ms), rotation=frame.end_rotation, progress=1.0)

    p = easing(t)
    rotation = frame.start_rotation + (frame.end_rotation - frame.start_rotation) * p
    return replace(frame, elapsed_ms=elapsed, rotation=rotation, progress=p)


class AnimationController:
    """
    Single owner of the wheel rotation.

    Example:
        >>> index = AngleIndex.build(entities)
        >>> controller = AnimationController(index, FixedTargetQueue())
        >>> controller.subscribe(lambda outcome: print(outcome.winning_label))
        >>> controller.request_spin()
        >>> while controller.phase is SpinPhase.RUNNING:
        ...     controller.tick(16.7)
        >>> controller.acknowledge_outcome()
    """

    def __init__(
        self,
        angle_index: AngleIndex,
        queue: Optional[FixedTargetQueue] = None,
        planner: Optional[TrajectoryPlanner] = None,
        resolver: Optional[WinnerResolver] = None,
        easing: Callable = None,
        idle_drift_deg_per_ms: float = 0.03,
        tick_interval_deg: float = 25.0,
        auto_remove_winner: bool = False,
        initial_rotation: float = 0.0,
    ):
        """
        Initialize controller.

        Args:
            angle_index: Index for the initial entity list
            queue: Fixed target queue (default: empty queue)
            planner: Trajectory planner (default: unseeded planner)
            resolver: Winner resolver (default palette)
            easing: Progress easing curve (default: TwoPhaseEasing())
            idle_drift_deg_per_ms: Ambient rotation speed while idle
            tick_interval_deg: Rotation travel between tick events
            auto_remove_winner: Remove each winner from the list once the
                outcome is acknowledged
            initial_rotation: Starting rotation in degrees
        """
        self.angle_index = angle_index
        self.queue = queue if queue is not None else FixedTargetQueue()
        self.planner = planner or TrajectoryPlanner()
        self.resolver = resolver or WinnerResolver()
        self.easing = easing or TwoPhaseEasing()
        self.idle_drift_deg_per_ms = idle_drift_deg_per_ms
        self.tick_interval_deg = tick_interval_deg
        self.auto_remove_winner = auto_remove_winner

        self._rotation = float(initial_rotation)
        self.phase = SpinPhase.IDLE
        self.frame: Optional[SpinFrame] = None
        self.plan: Optional[SpinPlan] = None
        self.last_outcome: Optional[SpinOutcome] = None
        self.spin_count = 0
        self.pending_entities: Optional[List[Entity]] = None

        self._last_tick_rotation = self._rotation
        self._outcome_listeners: List[Callable[[SpinOutcome], None]] = []
        self._tick_listeners: List[Callable[[float], None]] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    @property
    def current_rotation(self) -> float:
        return self._rotation

    @property
    def index_version(self) -> int:
        return self.angle_index.version

    @property
    def is_spinning(self) -> bool:
        return self.phase is SpinPhase.RUNNING

    def subscribe(self, callback: Callable[[SpinOutcome], None]) -> None:
        """Register an outcome listener, called once per completed spin."""
        self._outcome_listeners.append(callback)

    def on_tick(self, callback: Callable[[float], None]) -> None:
        """Register a listener for tick events (every tick_interval_deg of travel)."""
        self._tick_listeners.append(callback)

    # ------------------------------------------------------------------
    # Entity list and queue
    # ------------------------------------------------------------------
    def set_entities(self, entities: Sequence[Entity]) -> None:
        """
        Replace the entity list.

        Applied immediately when idle, otherwise held until the current
        outcome is acknowledged.

        Raises:
            ValueError: If identifiers are not unique
        """
        entities = list(entities)
        identifiers = [e.identifier for e in entities]
        if len(set(identifiers)) != len(identifiers):
            raise ValueError("Entity identifiers must be unique")

        if self.phase is SpinPhase.IDLE:
            self.angle_index = AngleIndex.build(entities)
            self.pending_entities = None
        else:
            self.pending_entities = entities
            logger.info(
                "Entity list change deferred until the wheel is idle (%d entities)",
                len(entities),
            )

    def remove_entity(self, identifier: str) -> None:
        """Request a list change without ``identifier``."""
        base = self.pending_entities if self.pending_entities is not None else self.angle_index.entities
        self.set_entities([e for e in base if e.identifier != identifier])

    def replace_queue(self, identifiers: Sequence[str]) -> None:
        """Replace the fixed target queue, validated against the active index."""
        self.queue.replace(identifiers, self.angle_index)

    # ------------------------------------------------------------------
    # Spin lifecycle
    # ------------------------------------------------------------------
    def request_spin(self) -> Optional[SpinPlan]:
        """
        Start a spin.

        Returns:
            The plan of the new spin, or None if a spin is already in
            progress or an outcome awaits acknowledgement

        Raises:
            DegenerateIndexError: If the wheel has no entities
        """
        if self.phase is not SpinPhase.IDLE:
            logger.debug("Spin request ignored while %s", self.phase.value)
            return None
        if self.angle_index.is_empty:
            raise DegenerateIndexError()

        if not is_finite(self._rotation):
            logger.warning("Non-finite rotation %r reset to 0 before spin", self._rotation)
            self._rotation = 0.0

        start = self._rotation
        target = self.queue.consume_next()
        plan = self._plan_spin(start, target)

        self.spin_count += 1
        self.plan = plan
        self.frame = SpinFrame(
            start_rotation=start,
            end_rotation=start + plan.rotation_delta,
            duration_ms=plan.duration_ms,
        )
        self._last_tick_rotation = start
        self.phase = SpinPhase.RUNNING

        logger.info(
            "Spin %d started: %s, delta=%.2f deg, duration=%.0f ms",
            self.spin_count,
            f"targeted {plan.intent.identifier} (profile {plan.profile})" if plan.is_targeted else "natural",
            plan.rotation_delta,
            plan.duration_ms,
        )
        return plan

    def _plan_spin(self, start: float, target: Optional[str]) -> SpinPlan:
        intent = Natural() if target is None else Targeted(target)
        try:
            plan = self.planner.plan(start, intent, self.angle_index)
        except Exception:
            logger.exception("Spin planning failed; clearing fixed targets and spinning naturally")
            self.queue.clear()
            return self.planner.plan_natural()

        if isinstance(plan, PlanFallback):
            logger.warning(
                "Targeted spin for %r unavailable (%s); spinning naturally",
                plan.identifier,
                plan.reason,
            )
            return self.planner.plan_natural()

        if not is_finite(plan.rotation_delta) or not is_finite(plan.duration_ms) or plan.duration_ms <= 0:
            logger.warning("Plan produced non-finite values %r; spinning naturally", plan)
            return self.planner.plan_natural()

        return plan

    def tick(self, dt_ms: float) -> float:
        """
        Advance the wheel by one frame.

        Args:
            dt_ms: Time since the previous tick in milliseconds

        Returns:
            Rotation after the tick
        """
        if self.phase is SpinPhase.RUNNING:
            self.frame = advance_frame(self.frame, dt_ms, self.easing)
            self._rotation = self.frame.rotation
            self._emit_ticks()
            if self.frame.finished:
                self._settle()
        elif self.phase is SpinPhase.IDLE:
            self._rotation += self.idle_drift_deg_per_ms * max(dt_ms, 0.0)

        return self._rotation

    def _emit_ticks(self) -> None:
        if self.tick_interval_deg <= 0:
            return
        if abs(self._rotation - self._last_tick_rotation) >= self.tick_interval_deg:
            self._last_tick_rotation = self._rotation
            for callback in self._tick_listeners:
                callback(self._rotation)

    def _settle(self) -> None:
        self._rotation = self.frame.end_rotation
        self.phase = SpinPhase.SETTLED

        outcome = self.resolver.outcome(self._rotation, self.angle_index.entities)
        self.last_outcome = outcome

        if self.plan.is_targeted and outcome.winning_identifier != self.plan.intent.identifier:
            logger.warning(
                "Targeted spin for %r resolved to %r",
                self.plan.intent.identifier,
                outcome.winning_identifier,
            )
        logger.info(
            "Spin %d settled on %r (segment %d)",
            self.spin_count,
            outcome.winning_identifier,
            outcome.segment_index,
        )

        if self.auto_remove_winner:
            self.remove_entity(outcome.winning_identifier)

        for callback in self._outcome_listeners:
            callback(outcome)

    def acknowledge_outcome(self) -> Optional[SpinOutcome]:
        """
        Dismiss the displayed outcome and return to IDLE.

        Any entity-list change held during the spin is applied here.
        """
        if self.phase is not SpinPhase.SETTLED:
            return None

        self.phase = SpinPhase.IDLE
        self.frame = None
        if self.pending_entities is not None:
            self.set_entities(self.pending_entities)
        return self.last_outcome
