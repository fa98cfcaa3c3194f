"""
JSON Schema Contract Validators

Data crossing the core boundary is checked against JSON Schema contracts
shipped next to this module (schema/*.json), using jsonschema Draft 2020-12.

Contracts:
- book_record: one raw record from the catalog record source
- trace_event: TraceEvent.to_dict() as handed to trace observers
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

# contract name -> schema file
CONTRACTS: Final[Dict[str, str]] = {
    "book_record": "book_record.json",
    "trace_event": "trace_event.json",
}


@lru_cache(maxsize=None)
def load_schema(contract: str) -> Dict[str, Any]:
    """
    Read and meta-validate the schema of a contract (cached per contract).

    Raises:
        KeyError: unknown contract name
        ValueError: schema file is not a valid Draft 2020-12 schema
    """
    schema_path = SCHEMA_DIR / CONTRACTS[contract]
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema for contract {contract}: {e}")
    return schema


class ContractValidator:
    """Validator bound to one named contract."""

    def __init__(self, contract: str):
        self.contract = contract
        self.schema = load_schema(contract)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: data breaks the contract
        """
        self._validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)


def validate_book_record(data: Dict[str, Any]) -> None:
    ContractValidator("book_record").validate(data)


def validate_trace_event(data: Dict[str, Any]) -> None:
    ContractValidator("trace_event").validate(data)


__all__ = [
    "CONTRACTS",
    "SCHEMA_DIR",
    "ContractValidator",
    "ValidationError",
    "load_schema",
    "validate_book_record",
    "validate_trace_event",
]
