"""
Bookstore errors

Expected outcomes (a book missing from the catalog) are not errors and never
raise. Everything here is either a programmer error or a load failure.
"""


class BookstoreError(Exception):
    """Base class for all bookstore errors."""


class CatalogLoadError(BookstoreError, RuntimeError):
    """The catalog record source could not be read or parsed."""


class TransferPreconditionError(BookstoreError, ValueError):
    """transfer() was asked to move more items than the source holds."""


class EmptyContainerError(BookstoreError, IndexError):
    """pop/top on an empty container."""


class SessionStateError(BookstoreError, RuntimeError):
    """Checkout operation invoked from the wrong session state."""
