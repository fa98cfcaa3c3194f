"""Checkout — session state machine, totals and receipt text."""

from .report import format_no_charge, format_receipt, format_trace_event
from .session import (
    DEFAULT_SHOPPING_LIST,
    CheckoutSession,
    CheckoutTotal,
    NoChargeNotice,
    SessionState,
)

__all__ = [
    "DEFAULT_SHOPPING_LIST",
    "CheckoutSession",
    "CheckoutTotal",
    "NoChargeNotice",
    "SessionState",
    "format_no_charge",
    "format_receipt",
    "format_trace_event",
]
