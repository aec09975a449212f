"""
Exceptions raised by the DOM kernel.

All of them derive from DOMError and are local, recoverable failures:
a mutation that raises leaves the tree exactly as it was before the call.
"""

from typing import Any, Callable, List, Optional, Tuple


class DOMError(Exception):
    """Base class for all DOM kernel errors."""


class InvalidKindError(DOMError):
    """The operation requires an Element but got a Text or Comment node."""

    def __init__(self, node: Any, operation: str):
        self.node = node
        self.operation = operation
        super().__init__(f"{operation} requires an element node, got {node!r}")


class NotAChildError(DOMError):
    """The given node is not a child of the given parent."""

    def __init__(self, parent: Any, child: Any):
        self.parent = parent
        self.child = child
        super().__init__(f"{child!r} is not a child of {parent!r}")


class DuplicateIdError(DOMError):
    """Attaching or renaming would put two elements with the same id in one tree."""

    def __init__(self, element_id: str):
        self.id = element_id
        super().__init__(f"id {element_id!r} is already present in the tree")


class HierarchyRequestError(DOMError):
    """The requested insertion would create a cycle or re-parent a tree root."""


class DispatchError(DOMError):
    """One or more event handlers raised during a dispatch.

    ``errors`` holds ``(handler, exception)`` pairs in the order they occurred.
    """

    def __init__(self, event_type: str, errors: List[Tuple[Callable, BaseException]]):
        self.event_type = event_type
        self.errors = errors
        super().__init__(f"{len(errors)} handler(s) failed while dispatching {event_type!r}")

    @property
    def first(self) -> Optional[BaseException]:
        return self.errors[0][1] if self.errors else None
