"""
Cyclic navigation over the element children of a node.

A Cursor replaces the usual "next item, or back to the first one" index
arithmetic with a small state machine: it is either POSITIONED on one of a
fixed sequence of elements, or EMPTY.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from . import traversal

logger = logging.getLogger(__name__)


class CursorState(Enum):
    POSITIONED = "positioned"
    EMPTY = "empty"


class Cursor:
    """
    Stateful position within a snapshot of a parent's element children.

    advance() past the last element wraps to the first one and retreat()
    before the first wraps to the last. The sequence is taken once, at
    initialize(); later changes to the parent's children are not seen until
    initialize() is called again.
    """

    def __init__(self, parent: Optional['Node'] = None):
        self._sequence: Tuple['Element', ...] = ()
        self._position = 0
        if parent is not None:
            self.initialize(parent)

    def __len__(self) -> int:
        return len(self._sequence)

    def __repr__(self) -> str:
        if self.state is CursorState.EMPTY:
            return "<Cursor empty>"
        return f"<Cursor {self._position + 1}/{len(self._sequence)} at {self.current()!r}>"

    @property
    def state(self) -> CursorState:
        return CursorState.POSITIONED if self._sequence else CursorState.EMPTY

    @property
    def sequence(self) -> Tuple['Element', ...]:
        return self._sequence

    @property
    def position(self) -> Optional[int]:
        """Index of the current element, or None when the cursor is empty."""
        return self._position if self._sequence else None

    def initialize(self, parent: 'Node') -> Optional['Element']:
        """
        Take the element children of ``parent`` and move to the first one.

        Returns:
            The current element, or None when there are no element children
        """
        self._sequence = tuple(traversal.children_of(parent))
        self._position = 0
        logger.debug(f"Cursor initialized on {parent!r} with {len(self._sequence)} element(s)")
        return self.current()

    def current(self) -> Optional['Element']:
        if not self._sequence:
            return None
        return self._sequence[self._position]

    def advance(self) -> Optional['Element']:
        """Step to the next element, wrapping to the first; returns the new current."""
        if self._sequence:
            self._position = (self._position + 1) % len(self._sequence)
        return self.current()

    def retreat(self) -> Optional['Element']:
        """Step to the previous element, wrapping to the last; returns the new current."""
        if self._sequence:
            self._position = (self._position - 1 + len(self._sequence)) % len(self._sequence)
        return self.current()

    def reset(self) -> Optional['Element']:
        """Go back to the first element."""
        self._position = 0
        return self.current()

    def move_to(self, element: 'Element') -> 'Element':
        """
        Position the cursor on ``element``.

        Raises:
            ValueError: If ``element`` is not in the sequence
        """
        for index, candidate in enumerate(self._sequence):
            if candidate is element:
                self._position = index
                return element
        raise ValueError(f"{element!r} is not in the cursor's sequence")
