from __future__ import annotations

from typing import Generic, Hashable, Protocol, TypeVar

from rpq.element import Element
from rpq.errors import DuplicateKeyError, KeyNotFoundError

K = TypeVar("K", bound=Hashable)
T = TypeVar("T", bound=Element)


class ElementTable(Protocol[K, T]):
    """Identifier -> element lookup used by `IndexedMaxHeap`.

    `add` must fail on a present identifier and `remove` on an absent one.
    """

    def add(self, element: T) -> None: ...

    def get(self, identifier: K) -> T | None: ...

    def remove(self, element: T) -> None: ...

    def __len__(self) -> int: ...


class DictElementTable(Generic[K, T]):
    def __init__(self) -> None:
        self._elements: dict[K, T] = {}

    def add(self, element: T) -> None:
        if element.identifier in self._elements:
            raise DuplicateKeyError(element.identifier)
        self._elements[element.identifier] = element

    def get(self, identifier: K) -> T | None:
        return self._elements.get(identifier)

    def remove(self, element: T) -> None:
        try:
            del self._elements[element.identifier]
        except KeyError:
            raise KeyNotFoundError(element.identifier) from None

    def clear(self) -> None:
        self._elements.clear()

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._elements
