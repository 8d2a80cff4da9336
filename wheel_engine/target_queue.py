"""
Fixed Target Queue

An ordered list of at most three identifiers that the next spins should
land on, consumed one per targeted spin. Replacement is wholesale and
atomic: an invalid replacement leaves the queue untouched. Consumption is
destructive; a later replacement never brings a consumed head back.

When the queue runs dry, spins fall back to natural mode with no further
action needed.
"""

import logging
from typing import List, Optional, Sequence

from .angle_index import AngleIndex
from .errors import MalformedQueueError

logger = logging.getLogger(__name__)

MAX_QUEUE_LENGTH = 3


class FixedTargetQueue:
    """FIFO queue of target identifiers."""

    def __init__(self, max_length: int = MAX_QUEUE_LENGTH):
        if not 0 <= max_length <= MAX_QUEUE_LENGTH:
            raise ValueError(
                f"max_length must be between 0 and {MAX_QUEUE_LENGTH}, got {max_length}"
            )
        self.max_length = max_length
        self._items: List[str] = []

    def replace(self, identifiers: Sequence[str], angle_index: AngleIndex) -> None:
        """
        Replace the whole queue.

        Args:
            identifiers: New queue contents, in spin order
            angle_index: Index of the current entity list

        Raises:
            MalformedQueueError: Too many entries, duplicates, or an
                identifier missing from ``angle_index``. The queue is unchanged.
        """
        identifiers = list(identifiers)

        if len(identifiers) > self.max_length:
            raise MalformedQueueError(
                f"Maximum {self.max_length} fixed targets allowed. Received {len(identifiers)}"
            )
        if len(set(identifiers)) != len(identifiers):
            raise MalformedQueueError("Duplicate identifiers not allowed in fixed target queue")
        for identifier in identifiers:
            if identifier not in angle_index:
                raise MalformedQueueError(
                    f"Identifier '{identifier}' not found in current entity list"
                )

        self._items = identifiers
        logger.debug("Fixed target queue replaced: %s", identifiers)

    def replace_single(self, identifier: Optional[str], angle_index: AngleIndex) -> None:
        """Set a single target, or clear the queue when ``identifier`` is None."""
        self.replace([] if identifier is None else [identifier], angle_index)

    def peek_next(self) -> Optional[str]:
        return self._items[0] if self._items else None

    def consume_next(self) -> Optional[str]:
        """Remove and return the head, or None when empty."""
        if not self._items:
            return None
        head, self._items = self._items[0], self._items[1:]
        logger.debug("Consumed fixed target %r (%d remaining)", head, len(self._items))
        return head

    def clear(self) -> None:
        self._items = []

    def snapshot(self) -> List[str]:
        """Copy of the pending identifiers."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
