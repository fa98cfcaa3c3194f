"""
BookStack — LIFO container for carts

Carts and the working area are stacks: only the top book is ever reachable.
snapshot() returns a copy (top first) so callers can inspect a stack without
popping it.
"""

from typing import Iterable, List, Optional, Tuple

from src.core.domain.book import BookRecord
from src.core.errors import EmptyContainerError


class BookStack:
    """Last-in-first-out stack of BookRecord."""

    def __init__(self, books: Optional[Iterable[BookRecord]] = None, name: str = ""):
        """
        Args:
            books: initial contents, pushed in iteration order (last one ends on top)
            name: label used in logs
        """
        self.name = name
        self._items: List[BookRecord] = list(books) if books is not None else []

    def push(self, book: BookRecord) -> None:
        self._items.append(book)

    def pop(self) -> BookRecord:
        if not self._items:
            raise EmptyContainerError(f"pop from empty stack {self.name!r}")
        return self._items.pop()

    def top(self) -> BookRecord:
        if not self._items:
            raise EmptyContainerError(f"top of empty stack {self.name!r}")
        return self._items[-1]

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def snapshot(self) -> Tuple[BookRecord, ...]:
        """Contents top first, as a new tuple."""
        return tuple(reversed(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"BookStack(name={self.name!r}, size={len(self._items)})"
