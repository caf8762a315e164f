from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

from rpq.element import STALE_POSITION, Element
from rpq.element_table import DictElementTable, ElementTable
from rpq.errors import DuplicateKeyError, HeapInvariantError, KeyNotFoundError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T", bound=Element)

INITIAL_CAPACITY = 8


class IndexedMaxHeap(Generic[K, V, T]):
    """Max-priority binary heap whose elements can be found by identifier.

    The two children of slot n are 2n+1 and 2n+2; no slot holds a priority
    smaller than either child's, so the maximum sits in slot 0. An element
    table maps each identifier to its element, and each element records its
    own slot, giving O(1) lookup and O(log n) alter / remove of any member.

    Only `<` is used to compare priorities. Order among equal priorities is
    unspecified.
    """

    def __init__(
        self,
        table: ElementTable[K, T] | None = None,
        *,
        initial_capacity: int = INITIAL_CAPACITY,
    ) -> None:
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be >= 1, got {initial_capacity}")
        if table is None:
            table = DictElementTable()
        elif len(table) != 0:
            raise ValueError("Element table must be empty when the heap is created.")
        self._initial_capacity = initial_capacity
        self._elements: list[T | None] = [None] * initial_capacity
        self._size = 0
        self._table = table

    # ---------- sift primitives ----------

    def _sift_up(self, k: int, element: T) -> None:
        """Place `element` into the hole at `k`, promoting it past smaller parents."""
        elements = self._elements
        while k > 0:
            parent = (k - 1) >> 1
            above = elements[parent]
            if not above.priority < element.priority:
                break
            elements[k] = above
            above.position = k
            k = parent
        elements[k] = element
        element.position = k

    def _sift_down(self, k: int, element: T) -> None:
        """Place `element` into the hole at `k`, demoting it below larger children."""
        elements = self._elements
        half = self._size >> 1  # slots below half have at least one child
        while k < half:
            child = (k << 1) + 1
            right = child + 1
            if right < self._size and not elements[right].priority < elements[child].priority:
                child = right
            below = elements[child]
            if not element.priority < below.priority:
                break
            elements[k] = below
            below.position = k
            k = child
        elements[k] = element
        element.position = k

    def _grow(self) -> None:
        self._elements.extend([None] * len(self._elements))

    def _take_last(self) -> T:
        """Shrink by one and return the element that was in the tail slot."""
        self._size -= 1
        last = self._elements[self._size]
        self._elements[self._size] = None
        return last

    # ---------- public API ----------

    def insert(self, element: T) -> None:
        if self._table.get(element.identifier) is not None:
            raise DuplicateKeyError(element.identifier)
        self._table.add(element)
        if self._size == len(self._elements):
            self._grow()
        self._size += 1
        self._sift_up(self._size - 1, element)

    def alter(self, identifier: K, priority: V) -> None:
        """Set the priority of the element with `identifier` and restore heap order.

        A lower priority can only break order with the children and a higher
        one only with the parent, so a single sift in that direction suffices.
        """
        element = self._table.get(identifier)
        if element is None:
            raise KeyNotFoundError(identifier)
        lowered = priority < element.priority
        element.priority = priority
        if lowered:
            self._sift_down(element.position, element)
        else:
            self._sift_up(element.position, element)

    def get_max(self) -> T | None:
        return self._elements[0] if self._size else None

    def delete_max(self) -> T | None:
        if self._size == 0:
            return None
        top = self._elements[0]
        last = self._take_last()
        if self._size:
            self._sift_down(0, last)
        self._table.remove(top)
        top.position = STALE_POSITION
        return top

    def get(self, identifier: K) -> T | None:
        return self._table.get(identifier)

    def remove_by_key(self, identifier: K) -> T | None:
        """Remove and return the element with `identifier`, or None if absent.

        The tail element fills the vacated slot and is sifted down if it is
        smaller than the removed element, up otherwise.
        """
        removed = self._table.get(identifier)
        if removed is None:
            return None
        index = removed.position
        self._table.remove(removed)
        last = self._take_last()
        if index < self._size:
            if last.priority < removed.priority:
                self._sift_down(index, last)
            else:
                self._sift_up(index, last)
        removed.position = STALE_POSITION
        return removed

    def clear(self) -> None:
        for element in list(self):
            self._table.remove(element)
            element.position = STALE_POSITION
        self._elements = [None] * self._initial_capacity
        self._size = 0

    # ---------- introspection ----------

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, identifier: object) -> bool:
        return self._table.get(identifier) is not None

    def __iter__(self) -> Iterator[T]:
        """Yield members in slot order, which is not priority order."""
        for i in range(self._size):
            yield self._elements[i]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, capacity={self.capacity})"

    def check_invariants(self) -> None:
        """Raise HeapInvariantError if heap order, positions or the table disagree."""
        elements = self._elements
        if self._size > len(elements):
            raise HeapInvariantError(
                f"size {self._size} exceeds capacity {len(elements)}"
            )
        if len(self._table) != self._size:
            raise HeapInvariantError(
                f"table holds {len(self._table)} entries but heap size is {self._size}"
            )
        for i in range(self._size):
            element = elements[i]
            if element is None:
                raise HeapInvariantError(f"slot {i} is empty inside the heap")
            if element.position != i:
                raise HeapInvariantError(
                    f"slot {i} holds {element.identifier!r} recorded at {element.position}"
                )
            if self._table.get(element.identifier) is not element:
                raise HeapInvariantError(
                    f"slot {i} holds {element.identifier!r} which the table does not map back"
                )
            for child in (2 * i + 1, 2 * i + 2):
                if child < self._size and element.priority < elements[child].priority:
                    raise HeapInvariantError(
                        f"slot {i} priority {element.priority!r} is below "
                        f"child slot {child} priority {elements[child].priority!r}"
                    )
        for i in range(self._size, len(elements)):
            if elements[i] is not None:
                raise HeapInvariantError(f"slot {i} past the end is not empty")
