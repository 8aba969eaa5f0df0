"""Runtime helpers - change detection across registry refreshes."""

from .change_detector import ChangeDetector
from .equality import deep_equal

__all__ = [
    "ChangeDetector",
    "deep_equal",
]
