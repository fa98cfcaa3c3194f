"""Transfer — constrained three-cart book transfer with move tracing."""

from .engine import (
    DEFAULT_LABELS,
    ContainerSnapshot,
    TraceEvent,
    TraceObserver,
    TransferEngine,
    TransferResult,
)

__all__ = [
    "DEFAULT_LABELS",
    "ContainerSnapshot",
    "TraceEvent",
    "TraceObserver",
    "TransferEngine",
    "TransferResult",
]
