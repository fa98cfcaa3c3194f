"""
BookRecord — catalog entry / cart item

Immutable Pydantic model for a single book. The ISBN is the identity:
equality, hashing and ordering look at the ISBN only, title/author/price are
informational.

A record placed in a cart usually carries no price (price defaults to 0);
the authoritative price comes from the catalog at checkout.
"""

from decimal import Decimal
from typing import Any, Final

from pydantic import BaseModel, Field


# Characters that must be backslash-escaped inside a quoted field
_ESCAPED_CHARS: Final[tuple[str, ...]] = ("\\", '"')


def _quote(value: str) -> str:
    for ch in _ESCAPED_CHARS:
        value = value.replace(ch, "\\" + ch)
    return f'"{value}"'


class BookRecord(BaseModel):
    """
    A book keyed by ISBN.

    Immutable model (frozen=True). Two records are equal iff their ISBNs
    are equal.
    """

    isbn: str = Field(..., min_length=1, description="Unique identifier (primary key)")
    title: str = Field(default="", description="Title, may contain quotes")
    author: str = Field(default="", description="Author")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Price in dollars")

    model_config = {"frozen": True}  # Immutable

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BookRecord):
            return NotImplemented
        return self.isbn == other.isbn

    def __hash__(self) -> int:
        return hash(self.isbn)

    def __lt__(self, other: "BookRecord") -> bool:
        if not isinstance(other, BookRecord):
            return NotImplemented
        return self.isbn < other.isbn

    def __le__(self, other: "BookRecord") -> bool:
        if not isinstance(other, BookRecord):
            return NotImplemented
        return self.isbn <= other.isbn

    def __gt__(self, other: "BookRecord") -> bool:
        if not isinstance(other, BookRecord):
            return NotImplemented
        return self.isbn > other.isbn

    def __ge__(self, other: "BookRecord") -> bool:
        if not isinstance(other, BookRecord):
            return NotImplemented
        return self.isbn >= other.isbn

    def to_line(self) -> str:
        """
        Render the record in the catalog file format.

        Returns:
            '"isbn", "title", "author", price' with embedded quotes escaped
        """
        return (
            f"{_quote(self.isbn)}, {_quote(self.title)}, "
            f"{_quote(self.author)}, {self.price}"
        )
