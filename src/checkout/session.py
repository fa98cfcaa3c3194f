"""Checkout Session — from shopping cart to amount due.

Flow:
1. populate_cart()          EMPTY       -> SHOPPING
2. move_to_working_area()   SHOPPING    -> TRANSFERRED  (carefully, via a spare cart)
3. drain_to_checkout_line() TRANSFERRED -> DRAINING     (working cart -> FIFO line)
4. total()                  DRAINING    -> TOTALED      (price each book via the catalog)

Each session owns its carts and checkout line; nothing is shared or persisted.
"""

import logging
from collections import deque
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Deque, Dict, Final, Optional, Sequence, Tuple, Union

from src.catalog import Catalog
from src.core.domain import BookRecord, BookStack
from src.core.errors import SessionStateError
from src.transfer import TransferEngine, TransferResult

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Checkout session lifecycle."""

    EMPTY = "EMPTY"
    SHOPPING = "SHOPPING"
    TRANSFERRED = "TRANSFERRED"
    DRAINING = "DRAINING"
    TOTALED = "TOTALED"


# operation -> (required state, resulting state)
_TRANSITIONS: Final[Dict[str, Tuple[SessionState, SessionState]]] = {
    "populate_cart": (SessionState.EMPTY, SessionState.SHOPPING),
    "move_to_working_area": (SessionState.SHOPPING, SessionState.TRANSFERRED),
    "drain_to_checkout_line": (SessionState.TRANSFERRED, SessionState.DRAINING),
    "total": (SessionState.DRAINING, SessionState.TOTALED),
}


# Heaviest book first, lightest last: the cart is LIFO
DEFAULT_SHOPPING_LIST: Final[Tuple[BookRecord, ...]] = (
    BookRecord(isbn="9780545310581", title="Hunger Games"),
    BookRecord(isbn="9780399576775", title="Eat pray love"),
    BookRecord(isbn="0140444300", title="Les Mis"),
    BookRecord(isbn="54782169785", title="131 Answer Key"),
    BookRecord(isbn="9780895656926", title="Like the Animals"),
)


@dataclass(frozen=True)
class NoChargeNotice:
    """A scanned book the catalog does not know; it is not charged."""

    isbn: str

    @property
    def message(self) -> str:
        return f'Description and Price Not Found For "{self.isbn}"! There will be no charge...'


@dataclass(frozen=True)
class CheckoutTotal:
    """Result of total(): every scanned book in checkout order plus the sum."""

    amount_due: Decimal
    lines: Tuple[Union[BookRecord, NoChargeNotice], ...]

    @property
    def charged(self) -> Tuple[BookRecord, ...]:
        return tuple(line for line in self.lines if isinstance(line, BookRecord))

    @property
    def notices(self) -> Tuple[NoChargeNotice, ...]:
        return tuple(line for line in self.lines if isinstance(line, NoChargeNotice))

    @property
    def items_scanned(self) -> int:
        return len(self.lines)


class CheckoutSession:
    """One customer's trip through the checkout.

    Operations must be called in lifecycle order; calling one from the wrong
    state raises SessionStateError and changes nothing.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        engine: Optional[TransferEngine] = None,
    ):
        """
        Args:
            catalog: book datastore (default: Catalog.instance())
            engine: transfer engine (default: built from settings)
        """
        self.catalog = catalog if catalog is not None else Catalog.instance()
        self.engine = engine or TransferEngine()

        self._state = SessionState.EMPTY
        self._cart = BookStack(name="cart")
        self._working_area = BookStack(name="working_area")
        self._checkout_line: Deque[BookRecord] = deque()
        self._amount_due = Decimal("0")
        self._last_transfer: Optional[TransferResult] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _begin(self, operation: str) -> SessionState:
        required, target = _TRANSITIONS[operation]
        if self._state != required:
            raise SessionStateError(
                f"{operation}() requires state {required.value}, session is {self._state.value}"
            )
        return target

    def _advance(self, target: SessionState) -> None:
        logger.debug("Session %s -> %s", self._state.value, target.value)
        self._state = target

    def populate_cart(self, books: Optional[Sequence[BookRecord]] = None) -> None:
        """Push books into the cart, first one ends at the bottom.

        Args:
            books: purchases in push order (default: DEFAULT_SHOPPING_LIST)
        """
        target = self._begin("populate_cart")
        for book in DEFAULT_SHOPPING_LIST if books is None else books:
            self._cart.push(book)
        logger.info("Cart populated with %d books", self._cart.size())
        self._advance(target)

    def move_to_working_area(self) -> TransferResult:
        """Carefully move every book from the cart to the working area."""
        target = self._begin("move_to_working_area")
        spare = BookStack(name="spare")
        self._last_transfer = self.engine.transfer(
            self._cart.size(), self._cart, self._working_area, spare
        )
        logger.info(
            "Moved %d books to working area in %d moves",
            self._last_transfer.count,
            self._last_transfer.moves,
        )
        self._advance(target)
        return self._last_transfer

    def drain_to_checkout_line(self) -> None:
        """Pop the working area top-first into the checkout line."""
        target = self._begin("drain_to_checkout_line")
        while not self._working_area.is_empty():
            self._checkout_line.append(self._working_area.pop())
        self._advance(target)

    def total(self) -> CheckoutTotal:
        """Scan the checkout line in order and price each book from the catalog.

        Books missing from the catalog are not an error: each yields one
        NoChargeNotice and adds nothing to the amount due.
        """
        target = self._begin("total")
        amount = Decimal("0")
        lines = []
        while self._checkout_line:
            item = self._checkout_line.popleft()
            record = self.catalog.find(item.isbn)
            if record is not None:
                amount += record.price
                lines.append(record)
            else:
                notice = NoChargeNotice(isbn=item.isbn)
                logger.warning(notice.message)
                lines.append(notice)

        self._amount_due = amount
        self._advance(target)
        logger.info("Checkout total: %s for %d books", amount, len(lines))
        return CheckoutTotal(amount_due=amount, lines=tuple(lines))

    def checkout(self, books: Optional[Sequence[BookRecord]] = None) -> CheckoutTotal:
        """Run the whole flow from an empty session."""
        self.populate_cart(books)
        self.move_to_working_area()
        self.drain_to_checkout_line()
        return self.total()

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def amount_due(self) -> Decimal:
        return self._amount_due

    @property
    def last_transfer(self) -> Optional[TransferResult]:
        return self._last_transfer

    def cart(self) -> Tuple[BookRecord, ...]:
        """Cart contents, top first."""
        return self._cart.snapshot()

    def working_area(self) -> Tuple[BookRecord, ...]:
        """Working area contents, top first."""
        return self._working_area.snapshot()

    def checkout_line(self) -> Tuple[BookRecord, ...]:
        """Checkout line, front first."""
        return tuple(self._checkout_line)
