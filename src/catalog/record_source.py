"""
Record source — catalog file parser

File format: books separated by arbitrary whitespace, each book is four
comma-delimited fields:

    Field     Type            Notes
    isbn      String          Unique identifier, always in double quotes
    title     String          May contain spaces, always in double quotes
    author    String          May contain spaces, always in double quotes
    price     Floating point  In dollars

Example:
    "0001062417",  "Early aircraft",                 "Maurice F. Allward", 65.65
    "0000255406",  "Shadow maker \\"1st edition)\\"",  "Rosemary Sullivan",   8.08

Double quotes inside a string are escaped with a backslash.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Union

from jsonschema import ValidationError

from src.core.contracts import ContractValidator
from src.core.domain import BookRecord
from src.core.errors import CatalogLoadError

logger = logging.getLogger(__name__)


# =============================================================================
# GRAMMAR
# =============================================================================

_QUOTED = r'"((?:[^"\\]|\\.)*)"'
_PRICE = r"([-+]?(?:\d+(?:\.\d*)?|\.\d+))"
_SEP = r"\s*,\s*"

_RECORD_RE = re.compile(
    r"\s*" + _QUOTED + _SEP + _QUOTED + _SEP + _QUOTED + _SEP + _PRICE,
    re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(r"\1", value)


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


# =============================================================================
# PARSING
# =============================================================================


def parse_records(text: str) -> List[BookRecord]:
    """
    Parse catalog text into records, in encountered order.

    Args:
        text: full contents of a record source

    Returns:
        List of BookRecord (empty for blank input)

    Raises:
        CatalogLoadError: malformed record or contract violation
    """
    validator = ContractValidator("book_record")
    records: List[BookRecord] = []
    pos = 0
    end = len(text)

    while True:
        # Skip inter-record whitespace; stop at end of input
        while pos < end and text[pos].isspace():
            pos += 1
        if pos >= end:
            break

        match = _RECORD_RE.match(text, pos)
        if match is None:
            raise CatalogLoadError(
                f"Malformed book record at line {_line_of(text, pos)}: "
                f"{text[pos:pos + 40]!r}"
            )

        isbn, title, author, price_text = match.groups()
        try:
            price = Decimal(price_text)
        except InvalidOperation as e:
            raise CatalogLoadError(
                f"Invalid price {price_text!r} at line {_line_of(text, pos)}"
            ) from e

        raw: Dict[str, Any] = {
            "isbn": _unescape(isbn),
            "title": _unescape(title),
            "author": _unescape(author),
            "price": price,
        }
        try:
            validator.validate(raw)
        except ValidationError as e:
            raise CatalogLoadError(
                f"Book record at line {_line_of(text, pos)} violates contract: {e.message}"
            ) from e

        records.append(BookRecord(**raw))
        pos = match.end()

    return records


def load_records(path: Union[str, Path]) -> List[BookRecord]:
    """
    Read and parse a catalog file.

    Args:
        path: path of the record source

    Returns:
        List of BookRecord in file order

    Raises:
        CatalogLoadError: file missing/unreadable or malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Cannot read catalog file {path}: {e}") from e

    records = parse_records(text)
    logger.debug("Parsed %d book records from %s", len(records), path)
    return records
