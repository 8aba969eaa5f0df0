# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Validation dispatch - route validate calls to the current rule registry."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from ..registry import RegistryRef
from ..telemetry.metrics import record_validate_latency
from ..telemetry.runtime import get_tracer
from .base import ResultStore
from .evaluator import RuleEvaluator


logger = logging.getLogger(__name__)


# Sentinel marking an omitted explicit input; None is a legitimate value.
MISSING = object()


class ValidationDispatcher:
    """Evaluate one rule or all rules of the latest registry.

    The dispatcher holds a :class:`RegistryRef`, never a registry, so rules
    renamed or replaced by the host are always evaluated with their current
    predicate.
    """

    def __init__(self, registry_ref: RegistryRef, store: ResultStore, evaluator: Optional[RuleEvaluator] = None):
        self._registry_ref = registry_ref
        self._store = store
        self._evaluator = evaluator or RuleEvaluator()

    def validate(self, name: Optional[str] = None, value: Any = MISSING) -> Optional[bool]:
        """Validate rule *name*, or every rule when *name* is omitted.

        Args:
            name: Rule to validate; ``None`` validates the whole registry
            value: Explicit input overriding the registered snapshot. Only
                honoured together with *name*; pass nothing (not ``None``) to
                use the snapshot.

        Returns:
            For a single rule its outcome, or ``None`` when the rule is unknown
            or has no predicate. For the whole registry the AND of every
            outcome, skipping rules that produced no result.
        """

        started_at = time.perf_counter()
        if name is None:
            result = self._validate_all()
            record_validate_latency("all", started_at)
            return result

        result = self._validate_one(name, value)
        record_validate_latency("rule", started_at)
        return result

    def _validate_one(self, name: str, value: Any) -> Optional[bool]:
        registry = self._registry_ref.current
        rule = registry.get(name)
        if rule is None:
            logger.debug("validate() called for unknown rule '%s'; ignoring", name)
            return None

        if value is MISSING:
            value = rule.snapshot
        return self._evaluator.evaluate(name, rule.predicate, value, store=self._store)

    def _validate_all(self) -> bool:
        registry = self._registry_ref.current
        with get_tracer().start_as_current_span(
            "rulestate.validate_all",
            attributes={"rulestate.rule_count": len(registry)},
        ) as span:
            aggregate = True
            for name, rule in registry.items():
                outcome = self._evaluator.evaluate(name, rule.predicate, rule.snapshot, store=self._store)
                if outcome is None:
                    continue
                # Every rule is evaluated and stored even after the first failure.
                aggregate = aggregate and outcome
            span.set_attribute("rulestate.valid", aggregate)

        logger.debug("Validated %d rules; aggregate=%s", len(registry), aggregate)
        return aggregate


__all__ = ["MISSING", "ValidationDispatcher"]
