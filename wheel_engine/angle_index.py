"""
Identifier → Angle Index

Maps each entity identifier (ticket) to the center angle of its wheel
segment. The index is built once per entity-list version and is the only
thing the trajectory planner consults when aiming a targeted spin.

A parallel identifier → position map is kept for display purposes only.
Spin math never reads it.

Usage:
    from wheel_engine import Entity, AngleIndex

    entities = [Entity("T1", "Alice"), Entity("T2", "Bob")]
    index = AngleIndex.build(entities)
    index.lookup("T2")        # 180.0
    index.lookup("missing")   # None
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .geometry import SEGMENT_ORIGIN, normalize_angle

logger = logging.getLogger(__name__)

_build_counter = itertools.count(1)


@dataclass(frozen=True)
class Entity:
    """One wheel segment source.

    Attributes:
        identifier: Externally meaningful unique key (ticket number)
        label: Display text
    """

    identifier: str
    label: str

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Entity":
        """Create from a mapping with ``identifier``/``label`` keys.

        ``ticketNumber`` is accepted as an alias for ``identifier``.
        """
        identifier = data.get("identifier", data.get("ticketNumber"))
        if identifier is None:
            raise ValueError(f"Entity has no identifier: {data!r}")
        return cls(identifier=str(identifier), label=str(data.get("label", identifier)))


class AngleIndex:
    """Immutable identifier → segment-center mapping for one entity list."""

    def __init__(
        self,
        identifier_to_angle: Dict[str, float],
        identifier_to_position: Dict[str, int],
        entities: Sequence[Entity] = (),
    ):
        self._angles = dict(identifier_to_angle)
        self._positions = dict(identifier_to_position)
        self._entities = tuple(entities)
        self.version = next(_build_counter)

    @classmethod
    def build(cls, entities: Iterable[Entity]) -> "AngleIndex":
        """
        Build the index from an ordered entity sequence.

        An empty sequence yields an empty index; callers treat that as
        "no spin possible".

        Raises:
            ValueError: If an identifier appears more than once
        """
        entities = list(entities)
        angles: Dict[str, float] = {}
        positions: Dict[str, int] = {}

        if entities:
            width = 360.0 / len(entities)
            for i, entity in enumerate(entities):
                if entity.identifier in angles:
                    raise ValueError(
                        f"Duplicate identifier '{entity.identifier}' in entity list"
                    )
                slice_start = i * width + SEGMENT_ORIGIN
                angles[entity.identifier] = normalize_angle(slice_start + width / 2)
                positions[entity.identifier] = i

        index = cls(angles, positions, entities)
        logger.info(
            "Built angle index v%d with %d entities", index.version, len(entities)
        )
        return index

    def lookup(self, identifier: str) -> Optional[float]:
        """Segment center angle for ``identifier``, or None if absent."""
        return self._angles.get(identifier)

    def position_of(self, identifier: str) -> Optional[int]:
        """List position of ``identifier``. For display only."""
        return self._positions.get(identifier)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._angles

    def __len__(self) -> int:
        return len(self._angles)

    @property
    def is_empty(self) -> bool:
        return not self._angles

    @property
    def entities(self) -> List[Entity]:
        """Entities in the order the index was built from."""
        return list(self._entities)

    @property
    def identifiers(self) -> List[str]:
        return [e.identifier for e in self._entities]
