from __future__ import annotations

from typing import Any


class DuplicateKeyError(KeyError):
    """Raised when an identifier is inserted while already present."""

    def __init__(self, identifier: Any) -> None:
        super().__init__(f"Key already exists: {identifier!r}")
        self.identifier = identifier


class KeyNotFoundError(KeyError):
    """Raised when an operation names an identifier that is not present."""

    def __init__(self, identifier: Any) -> None:
        super().__init__(f"Key not found: {identifier!r}")
        self.identifier = identifier


class HeapInvariantError(AssertionError):
    pass
