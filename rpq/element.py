from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")

STALE_POSITION = -1


@dataclass(eq=False)
class Element(Generic[K, V]):
    """A heap member: an identifier, its priority and its current heap slot.

    `position` belongs to the heap while the element is a member and is only
    written by the heap's sift routines. Outside the heap it is `-1`.
    Change `priority` through `IndexedMaxHeap.alter`, never directly, while the
    element is inserted.
    """

    identifier: K
    priority: V
    position: int = field(default=STALE_POSITION, repr=False)
