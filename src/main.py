"""
Bookstore checkout entry point.

Runs one checkout of the default shopping list against the catalog at
settings.catalog_path and prints the receipt (and the move trace when
BOOKSTORE_OUTPUT_TRACE is set).
"""

import logging
import sys

from src.catalog import Catalog
from src.checkout import CheckoutSession, format_receipt, format_trace_event
from src.config import settings
from src.core.errors import CatalogLoadError
from src.transfer import TraceEvent, TransferEngine

logger = logging.getLogger(__name__)


def _print_trace(event: TraceEvent) -> None:
    print(format_trace_event(event))


def main() -> int:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        catalog = Catalog.instance()
    except CatalogLoadError as e:
        logger.error("Cannot start checkout: %s", e)
        return 1

    engine = TransferEngine(
        trace_enabled=settings.output_trace,
        observer=_print_trace if settings.output_trace else None,
    )
    session = CheckoutSession(catalog=catalog, engine=engine)
    total = session.checkout()

    print(format_receipt(total))
    return 0


if __name__ == "__main__":
    sys.exit(main())
