"""Transfer Engine — carefully move books between carts.

Books are moved from a source cart to a destination cart through a spare
cart, one book at a time, only ever taking the top book of a cart:

    carefully_move(n, source, destination, spare):
        if n == 1:
            move top book source -> destination, trace the move
        else:
            carefully_move(n - 1, source, spare, destination)
            move top book source -> destination, trace the move
            carefully_move(n - 1, spare, destination, source)

This is the three-peg (Tower of Hanoi) discipline. The moved books end in
the same top-to-bottom order they had in the source (two inversions cancel),
the spare ends empty, and exactly 2^n - 1 single moves are made. The cost is
exponential, O(2^n), and the move count is observable.

Tracing: the recursion permutes the roles of the three carts, so snapshots
are laid out by cart identity (the order of the top-level call), not by the
parameter position of the current frame.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Final, List, Optional, Tuple

from src.config import settings
from src.core.domain import BookRecord, BookStack
from src.core.errors import TransferPreconditionError

logger = logging.getLogger(__name__)


# Canonical column labels, in (source, destination, spare) order of the top-level call
DEFAULT_LABELS: Final[Tuple[str, str, str]] = ("Broken Cart", "Working Cart", "Spare Cart")


# =============================================================================
# TRACE EVENTS
# =============================================================================


@dataclass(frozen=True)
class ContainerSnapshot:
    """Copy of one cart's contents at a point in time."""

    label: str
    books: Tuple[BookRecord, ...]  # top first

    def isbns(self) -> List[str]:
        return [book.isbn for book in self.books]


@dataclass(frozen=True)
class TraceEvent:
    """State of the three carts after one single-book move."""

    move_number: int
    containers: Tuple[ContainerSnapshot, ContainerSnapshot, ContainerSnapshot]

    def container(self, label: str) -> ContainerSnapshot:
        for snapshot in self.containers:
            if snapshot.label == label:
                return snapshot
        raise KeyError(label)

    def to_dict(self) -> Dict[str, Any]:
        """Serialized form (trace_event contract)."""
        return {
            "move_number": self.move_number,
            "containers": [
                {"label": snapshot.label, "books": snapshot.isbns()}
                for snapshot in self.containers
            ],
        }


TraceObserver = Callable[[TraceEvent], None]


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one top-level transfer() call."""

    count: int
    moves: int
    events: Tuple[TraceEvent, ...]


@dataclass
class _TransferRun:
    """Bookkeeping shared by every frame of one top-level transfer."""

    # id(cart) -> canonical slot, built once per top-level call
    slots: Dict[int, int]
    moves: int = 0
    events: List[TraceEvent] = field(default_factory=list)


# =============================================================================
# ENGINE
# =============================================================================


class TransferEngine:
    """Three-cart, one-book-at-a-time transfer.

    Preconditions are checked up front (fail fast): a violated precondition
    raises before any book moves.
    """

    def __init__(
        self,
        trace_enabled: Optional[bool] = None,
        observer: Optional[TraceObserver] = None,
        labels: Tuple[str, str, str] = DEFAULT_LABELS,
    ):
        """
        Args:
            trace_enabled: emit a TraceEvent after each move
                (default: settings.output_trace, or True when an observer is given)
            observer: callable receiving each TraceEvent
            labels: snapshot labels for (source, destination, spare)
        """
        if trace_enabled is None:
            trace_enabled = settings.output_trace or observer is not None
        if len(labels) != 3:
            raise ValueError(f"exactly 3 labels required, got {len(labels)}")

        self.trace_enabled = trace_enabled
        self.observer = observer
        self.labels = tuple(labels)

    def transfer(
        self,
        count: int,
        source: BookStack,
        destination: BookStack,
        spare: BookStack,
    ) -> TransferResult:
        """Move the top `count` books of `source` onto `destination`.

        Args:
            count: number of books to move, 0 <= count <= source.size()
            source: cart to take books from
            destination: cart receiving the books (same order as in source)
            spare: auxiliary cart, left as it was found

        Returns:
            TransferResult with the number of single moves (2^count - 1)

        Raises:
            TransferPreconditionError: count out of range or carts not distinct
        """
        if count < 0:
            raise TransferPreconditionError(f"count must be >= 0, got {count}")
        if count > source.size():
            raise TransferPreconditionError(
                f"cannot move {count} books from a cart holding {source.size()}"
            )
        if len({id(source), id(destination), id(spare)}) != 3:
            raise TransferPreconditionError("source, destination and spare must be distinct carts")

        run = _TransferRun(slots={id(source): 0, id(destination): 1, id(spare): 2})
        if count > 0:
            self._carefully_move(count, source, destination, spare, run)

        logger.debug("Transferred %d books in %d moves", count, run.moves)
        return TransferResult(count=count, moves=run.moves, events=tuple(run.events))

    def _carefully_move(
        self,
        count: int,
        source: BookStack,
        destination: BookStack,
        spare: BookStack,
        run: _TransferRun,
    ) -> None:
        if count == 1:
            self._move_one(source, destination, spare, run)
        else:
            self._carefully_move(count - 1, source, spare, destination, run)
            self._move_one(source, destination, spare, run)
            self._carefully_move(count - 1, spare, destination, source, run)

    def _move_one(
        self,
        source: BookStack,
        destination: BookStack,
        spare: BookStack,
        run: _TransferRun,
    ) -> None:
        book = source.pop()
        destination.push(book)
        run.moves += 1
        logger.debug("Move %d: %s %s -> %s", run.moves, book.isbn, source.name, destination.name)

        if self.trace_enabled:
            self._trace(source, destination, spare, run)

    def _trace(
        self,
        source: BookStack,
        destination: BookStack,
        spare: BookStack,
        run: _TransferRun,
    ) -> None:
        ordered: List[Optional[BookStack]] = [None, None, None]
        for cart in (source, destination, spare):
            ordered[run.slots[id(cart)]] = cart

        event = TraceEvent(
            move_number=run.moves,
            containers=tuple(
                ContainerSnapshot(label=label, books=cart.snapshot())
                for label, cart in zip(self.labels, ordered)
            ),
        )
        run.events.append(event)
        if self.observer is not None:
            self.observer(event)
