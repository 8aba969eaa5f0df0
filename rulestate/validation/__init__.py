"""Validation package - rule evaluation and the tri-state result store.

Evaluation never touches the validated values; it only records whether each
rule's predicate accepted them.
"""

from .base import ResultListener, ResultStore, RuleResult
from .dispatcher import MISSING, ValidationDispatcher
from .evaluator import RuleEvaluator

__all__ = [
    "MISSING",
    "ResultListener",
    "ResultStore",
    "RuleEvaluator",
    "RuleResult",
    "ValidationDispatcher",
]
