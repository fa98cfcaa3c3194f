"""Catalog — read-only book datastore and its file record source."""

from .catalog import Catalog
from .record_source import load_records, parse_records

__all__ = [
    "Catalog",
    "load_records",
    "parse_records",
]
