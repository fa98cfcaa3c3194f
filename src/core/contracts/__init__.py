"""
Contract Validation Module

JSON Schema contracts for data crossing the core boundary: catalog records
coming from the record source and trace events going to observers.
"""

from .validators import (
    CONTRACTS,
    SCHEMA_DIR,
    ContractValidator,
    load_schema,
    validate_book_record,
    validate_trace_event,
)

__all__ = [
    "CONTRACTS",
    "SCHEMA_DIR",
    "ContractValidator",
    "load_schema",
    "validate_book_record",
    "validate_trace_event",
]
