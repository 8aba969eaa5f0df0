# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Rule evaluation - apply one predicate and record its outcome."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..registry import Predicate
from ..telemetry.metrics import rule_evaluation_total
from .base import ResultStore


logger = logging.getLogger(__name__)


class RuleEvaluator:
    """Run a rule predicate and hand the boolean outcome to a result store.

    Example:
        ```python
        store = ResultStore()
        evaluator = RuleEvaluator()
        evaluator.evaluate("name_entered", lambda s: len(s) > 0, "Alice", store=store)
        assert store["name_entered"] is RuleResult.VALID
        ```
    """

    def evaluate(
        self,
        name: str,
        predicate: Optional[Predicate],
        value: Any,
        *,
        store: Optional[ResultStore] = None,
    ) -> Optional[bool]:
        """Evaluate *predicate* against *value* for rule *name*.

        Args:
            name: Rule name the outcome is stored under
            predicate: Callable judging the value; ``None`` yields no result
            value: Input handed to the predicate
            store: Result store to update; omitted for dry evaluations

        Returns:
            The outcome coerced to ``bool``, or ``None`` when no predicate exists.
            Exceptions raised by the predicate propagate unchanged.
        """

        if predicate is None:
            logger.debug("No predicate registered for rule '%s'; nothing evaluated", name)
            rule_evaluation_total.add(1, {"rule": name, "outcome": "no_result"})
            return None

        outcome = bool(predicate(value))
        rule_evaluation_total.add(1, {"rule": name, "outcome": "valid" if outcome else "invalid"})

        if store is not None:
            store.set(name, outcome)
        return outcome


__all__ = ["RuleEvaluator"]
