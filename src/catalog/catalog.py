"""
Catalog — in-memory book datastore

One process-wide instance, loaded on first access from the configured
record source and never mutated afterwards. Lookup is a linear scan in load
order: with duplicate ISBNs the first loaded record wins.
"""

import logging
from pathlib import Path
from typing import ClassVar, Iterable, Optional, Tuple, Union

from src.catalog.record_source import load_records
from src.config import settings
from src.core.domain import BookRecord

logger = logging.getLogger(__name__)


class Catalog:
    """
    Read-only sequence of BookRecord with lookup by ISBN.

    Use Catalog.instance() for the shared catalog. Copies are not allowed:
    the catalog owns its records and callers only ever hold references.
    """

    _instance: ClassVar[Optional["Catalog"]] = None

    def __init__(self, records: Iterable[BookRecord]):
        """
        Args:
            records: parsed records, in load order
        """
        self._records: Tuple[BookRecord, ...] = tuple(records)

    @classmethod
    def instance(cls) -> "Catalog":
        """
        The one and only catalog, built from settings.catalog_path on first call.

        Not guarded against concurrent first access.

        Raises:
            CatalogLoadError: record source missing or malformed
        """
        if cls._instance is None:
            cls._instance = cls.from_path(settings.catalog_path)
        return cls._instance

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Catalog":
        catalog = cls(load_records(path))
        logger.info("Catalog loaded from %s: %d books", path, catalog.size())
        return catalog

    def find(self, isbn: str) -> Optional[BookRecord]:
        """
        Find a book by ISBN.

        Args:
            isbn: key to look up

        Returns:
            First record with this ISBN in load order, None if absent
        """
        for record in self._records:
            if record.isbn == isbn:
                return record
        return None

    def size(self) -> int:
        return len(self._records)

    def records(self) -> Tuple[BookRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    # Intentionally prohibit copies
    def __copy__(self):
        raise TypeError("Catalog cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Catalog cannot be copied")

    def __reduce__(self):
        raise TypeError("Catalog cannot be pickled")

    def __repr__(self) -> str:
        return f"Catalog(size={len(self._records)})"
