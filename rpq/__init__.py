from rpq.element import Element
from rpq.element_table import DictElementTable, ElementTable
from rpq.errors import DuplicateKeyError, HeapInvariantError, KeyNotFoundError
from rpq.heap import IndexedMaxHeap

__all__ = [
    "DictElementTable",
    "DuplicateKeyError",
    "Element",
    "ElementTable",
    "HeapInvariantError",
    "IndexedMaxHeap",
    "KeyNotFoundError",
]
