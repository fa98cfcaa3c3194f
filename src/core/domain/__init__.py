"""
Domain models and value objects.

Contains the BookRecord value type and the BookStack container.
"""

from src.core.domain.book import BookRecord
from src.core.domain.containers import BookStack

__all__ = [
    "BookRecord",
    "BookStack",
]
