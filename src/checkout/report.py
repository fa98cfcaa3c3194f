"""
Text rendering of trace events and receipts.

Output destination is up to the caller; these functions only build strings.
"""

from typing import Final, List

from src.checkout.session import CheckoutTotal, NoChargeNotice
from src.transfer import TraceEvent

COLUMN_WIDTH: Final[int] = 23
TITLE_WIDTH: Final[int] = 20
_MARGIN: Final[str] = " " * 21


def _cell_text(title: str) -> str:
    # Long titles keep 17 characters followed by "..."
    if len(title) > TITLE_WIDTH:
        return title[: TITLE_WIDTH - 3] + "..."
    return title


def format_trace_event(event: TraceEvent) -> str:
    """
    Render the three carts side by side, tops aligned to each cart's height.

    Args:
        event: snapshot after one move

    Returns:
        Multi-line table ending with a blank separator
    """
    out: List[str] = []
    header = f"After {event.move_number:>3} moves:     "
    header += "".join(f"{snapshot.label:<{COLUMN_WIDTH}}" for snapshot in event.containers)
    out.append(header)
    out.append(_MARGIN + "-" * (COLUMN_WIDTH * 3))

    tallest = max(len(snapshot.books) for snapshot in event.containers)
    for level in range(tallest, 0, -1):
        row = _MARGIN
        for snapshot in event.containers:
            height = len(snapshot.books)
            if height >= level:
                book = snapshot.books[height - level]
                row += f"{_cell_text(book.title or book.isbn):<{COLUMN_WIDTH}}"
            else:
                row += " " * COLUMN_WIDTH
        out.append(row)

    out.append(_MARGIN + "=" * (COLUMN_WIDTH * 3))
    return "\n".join(out) + "\n\n\n"


def format_no_charge(notice: NoChargeNotice) -> str:
    return notice.message


def format_receipt(total: CheckoutTotal) -> str:
    """Every scanned line in checkout order, then the total."""
    out: List[str] = []
    for line in total.lines:
        if isinstance(line, NoChargeNotice):
            out.append(format_no_charge(line))
        else:
            out.append(line.to_line())
    out.append(f"Total: ${total.amount_due:.2f}")
    return "\n".join(out)
