"""Tests for CheckoutSession.

Coverage:
- Lifecycle EMPTY -> SHOPPING -> TRANSFERRED -> DRAINING -> TOTALED
- Wrong-state calls rejected without side effects
- Scenario: catalog {A: 10.00, B: 5.00}, cart A / C / B -> 15.00, one notice for C
- Empty cart
- Read-only accessors
- Default shopping list and default catalog
"""

import logging
from decimal import Decimal

import pytest

from src.catalog import Catalog
from src.checkout import (
    DEFAULT_SHOPPING_LIST,
    CheckoutSession,
    NoChargeNotice,
    SessionState,
)
from src.core.domain import BookRecord
from src.core.errors import SessionStateError
from src.transfer import TransferEngine


@pytest.fixture
def catalog():
    return Catalog(
        [
            BookRecord(isbn="A", title="Alpha", author="Ann", price=Decimal("10.00")),
            BookRecord(isbn="B", title="Beta", author="Bob", price=Decimal("5.00")),
        ]
    )


@pytest.fixture
def session(catalog):
    return CheckoutSession(catalog=catalog, engine=TransferEngine(trace_enabled=False))


@pytest.fixture
def cart_a_c_b():
    """Push order B, C, A: the cart reads A, C, B from the top."""
    return [BookRecord(isbn="B"), BookRecord(isbn="C"), BookRecord(isbn="A")]


def isbns(books):
    return [book.isbn for book in books]


# =============================================================================
# SCENARIO
# =============================================================================


class TestCheckoutScenario:
    def test_cart_top_to_bottom(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)

        assert session.state == SessionState.SHOPPING
        assert isbns(session.cart()) == ["A", "C", "B"]

    def test_transfer_preserves_order(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        result = session.move_to_working_area()

        assert session.state == SessionState.TRANSFERRED
        assert session.cart() == ()
        assert isbns(session.working_area()) == ["A", "C", "B"]
        assert result.moves == 7
        assert session.last_transfer is result

    def test_drain_in_pop_order(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        session.move_to_working_area()
        session.drain_to_checkout_line()

        assert session.state == SessionState.DRAINING
        assert session.working_area() == ()
        assert isbns(session.checkout_line()) == ["A", "C", "B"]

    def test_total(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        session.move_to_working_area()
        session.drain_to_checkout_line()
        total = session.total()

        assert session.state == SessionState.TOTALED
        assert total.amount_due == Decimal("15.00")
        assert session.amount_due == Decimal("15.00")
        assert total.notices == (NoChargeNotice(isbn="C"),)
        assert isbns(total.charged) == ["A", "B"]
        assert total.items_scanned == 3
        assert session.checkout_line() == ()

    def test_lines_in_checkout_order(self, session, cart_a_c_b):
        total = session.checkout(cart_a_c_b)

        kinds = [type(line) for line in total.lines]
        assert kinds == [BookRecord, NoChargeNotice, BookRecord]

    def test_charged_lines_are_catalog_records(self, session, catalog, cart_a_c_b):
        """Cart items carry no price; the charged line is the catalog's record."""
        total = session.checkout(cart_a_c_b)

        assert total.charged[0] is catalog.find("A")
        assert total.charged[0].title == "Alpha"

    def test_notice_message(self):
        notice = NoChargeNotice(isbn="C")
        assert notice.message == 'Description and Price Not Found For "C"! There will be no charge...'

    def test_notice_logged_as_warning(self, session, cart_a_c_b, caplog):
        caplog.set_level(logging.WARNING, logger="src.checkout.session")

        session.checkout(cart_a_c_b)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert [r.getMessage() for r in warnings] == [NoChargeNotice(isbn="C").message]

    def test_sum_of_found_prices_only(self, session):
        """k items, m found: the total is the sum of the m catalog prices."""
        books = [BookRecord(isbn=i) for i in ["A", "X", "A", "B", "Y", "Z"]]
        total = session.checkout(books)

        assert total.amount_due == Decimal("25.00")
        assert len(total.charged) == 3
        assert len(total.notices) == 3
        assert sorted(n.isbn for n in total.notices) == ["X", "Y", "Z"]

    def test_cart_price_is_ignored(self, session):
        total = session.checkout([BookRecord(isbn="A", price=Decimal("1.00"))])
        assert total.amount_due == Decimal("10.00")


# =============================================================================
# EMPTY CART
# =============================================================================


class TestEmptyCart:
    def test_empty_cart_total_zero(self, session):
        session.populate_cart([])
        result = session.move_to_working_area()
        session.drain_to_checkout_line()
        total = session.total()

        assert result.moves == 0
        assert total.amount_due == Decimal("0")
        assert total.lines == ()


# =============================================================================
# STATE MACHINE
# =============================================================================


class TestStateMachine:
    def test_initial_state(self, session):
        assert session.state == SessionState.EMPTY
        assert session.amount_due == Decimal("0")
        assert session.last_transfer is None

    def test_transfer_before_populate(self, session):
        with pytest.raises(SessionStateError, match="SHOPPING"):
            session.move_to_working_area()
        assert session.state == SessionState.EMPTY

    def test_total_before_drain(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        session.move_to_working_area()

        with pytest.raises(SessionStateError):
            session.total()

        assert session.state == SessionState.TRANSFERRED
        assert isbns(session.working_area()) == ["A", "C", "B"]

    def test_populate_twice(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        with pytest.raises(SessionStateError):
            session.populate_cart(cart_a_c_b)
        assert len(session.cart()) == 3

    def test_total_twice(self, session, cart_a_c_b):
        session.checkout(cart_a_c_b)
        with pytest.raises(SessionStateError):
            session.total()
        assert session.amount_due == Decimal("15.00")

    def test_checkout_runs_every_step(self, session, cart_a_c_b):
        session.checkout(cart_a_c_b)
        assert session.state == SessionState.TOTALED
        assert session.last_transfer.moves == 7


# =============================================================================
# ACCESSORS
# =============================================================================


class TestAccessors:
    def test_accessors_return_copies(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)

        snapshot = session.cart()
        assert isinstance(snapshot, tuple)
        session.move_to_working_area()
        assert len(snapshot) == 3

    def test_accessors_do_not_mutate(self, session, cart_a_c_b):
        session.populate_cart(cart_a_c_b)
        session.move_to_working_area()
        session.drain_to_checkout_line()

        for _ in range(3):
            session.checkout_line()
            session.working_area()
            session.cart()

        assert isbns(session.checkout_line()) == ["A", "C", "B"]


# =============================================================================
# DEFAULTS
# =============================================================================


class TestDefaults:
    def test_default_shopping_list(self, session):
        session.populate_cart()

        # Heaviest first -> bottom of the cart
        assert session.cart()[-1].title == "Hunger Games"
        assert session.cart()[0].title == "Like the Animals"
        assert len(session.cart()) == len(DEFAULT_SHOPPING_LIST)

    def test_default_list_transfer_moves(self, session):
        session.populate_cart()
        assert session.move_to_working_area().moves == 31

    def test_default_list_nothing_in_catalog(self, session):
        total = session.checkout()
        assert total.amount_due == Decimal("0")
        assert len(total.notices) == 5

    def test_default_catalog_is_singleton(self, monkeypatch, catalog):
        monkeypatch.setattr(Catalog, "_instance", catalog)
        session = CheckoutSession(engine=TransferEngine(trace_enabled=False))
        assert session.catalog is catalog

    def test_tracing_session(self, catalog, cart_a_c_b):
        events = []
        session = CheckoutSession(catalog=catalog, engine=TransferEngine(observer=events.append))

        session.checkout(cart_a_c_b)

        assert len(events) == 7
        assert events[-1].container("Working Cart").isbns() == ["A", "C", "B"]
