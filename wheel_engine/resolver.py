"""
Winner Resolver

Determines which segment the indicator rests on from the final rotation
alone. It is never told what was targeted; a targeted spin is correct
exactly when this resolver independently lands on the planned segment.

Algorithm:
1. pointer = normalize(360 - normalize(final_rotation))
2. Scan the half-open segment intervals, handling the interval that
   crosses 0°/360°
3. If nothing matches (float edge at a boundary), take the segment whose
   center is circularly closest to the pointer
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .angle_index import Entity
from .errors import DegenerateIndexError
from .geometry import circular_distance, in_slice, is_finite, pointer_angle, slice_bounds, slice_center
from .palette import DEFAULT_PALETTE, segment_color, strip_ticket_suffix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinOutcome:
    """Result of one completed spin.

    Attributes:
        winning_identifier: Identifier of the winning entity
        winning_label: Label exactly as supplied
        segment_index: Position of the winning segment on the wheel
        color: Segment colour
        final_rotation: Rotation the outcome was resolved from
    """

    winning_identifier: str
    winning_label: str
    segment_index: int
    color: str = DEFAULT_PALETTE[0]
    final_rotation: float = 0.0

    @property
    def display_label(self) -> str:
        """Label with any embedded ticket number removed."""
        return strip_ticket_suffix(self.winning_label)


class WinnerResolver:
    """Resolves the winning segment for a final rotation."""

    def __init__(self, palette: Sequence[str] = DEFAULT_PALETTE):
        self.palette = tuple(palette)

    @staticmethod
    def segment_bounds(entity_count: int) -> List[Tuple[float, float]]:
        """Half-open (start, end) interval of every segment."""
        return [slice_bounds(i, entity_count) for i in range(entity_count)]

    def resolve(self, final_rotation: float, entity_count: int) -> int:
        """
        Segment index under the indicator.

        Args:
            final_rotation: Cumulative rotation in degrees
            entity_count: Number of segments, in AngleIndex order

        Raises:
            DegenerateIndexError: If entity_count is not positive
            ValueError: If final_rotation is not finite
        """
        if entity_count <= 0:
            raise DegenerateIndexError("Cannot resolve a winner with no entities")
        if not is_finite(final_rotation):
            raise ValueError(f"Cannot resolve non-finite rotation {final_rotation!r}")

        pointer = pointer_angle(final_rotation)

        for i in range(entity_count):
            start, end = slice_bounds(i, entity_count)
            if in_slice(pointer, start, end):
                return i

        logger.debug("No interval matched pointer %.12f; using nearest center", pointer)
        return min(
            range(entity_count),
            key=lambda i: circular_distance(pointer, slice_center(i, entity_count)),
        )

    def outcome(self, final_rotation: float, entities: Sequence[Entity]) -> SpinOutcome:
        """Resolve and package the SpinOutcome for ``entities``."""
        index = self.resolve(final_rotation, len(entities))
        winner = entities[index]
        return SpinOutcome(
            winning_identifier=winner.identifier,
            winning_label=winner.label,
            segment_index=index,
            color=segment_color(index, self.palette),
            final_rotation=final_rotation,
        )
