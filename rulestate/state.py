# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

# rulestate/state.py

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from .config import ValidationOptions, resolve_options
from .exceptions import ValidationClosedError
from .registry import RegistryRef, RuleRegistry
from .runtime import ChangeDetector
from .validation import (
    MISSING,
    ResultListener,
    ResultStore,
    RuleEvaluator,
    RuleResult,
    ValidationDispatcher,
)
from .views import ResultViews

logger = logging.getLogger(__name__)


class Validation:
    """
    Tri-state validation results for a set of host-owned values.

    The host owns the values being validated. It hands over a fresh rule
    mapping on every state-change cycle through :meth:`refresh`, and asks for
    explicit validation through :meth:`validate`. Results start out
    unvalidated and are only ever written when a rule is evaluated.

    :param rules: Mapping of rule name to ``(snapshot, predicate)``. Entries
                  may also be :class:`~rulestate.Rule` instances or mappings
                  with ``snapshot`` / ``predicate`` keys.
    :param options: Optional :class:`~rulestate.ValidationOptions` or mapping.
    :param overrides: Keyword overrides for individual options, e.g.
                      ``validate_on_change=True``.

    .. code-block:: python

        from rulestate import Validation

        name = ""
        validation = Validation({"name_entered": (name, lambda s: len(s) > 0)})
        validation.valid["name_entered"]       # False, not validated yet
        validation.invalid["name_entered"]     # False

        # An onChange handler has the new value before the next refresh.
        name = "Alice"
        validation.validate("name_entered", name)
        validation.valid["name_entered"]       # True

        # Revalidate on every detected input change.
        with Validation(rules, validate_on_change=True) as validation:
            validation.refresh(build_rules())
    """

    def __init__(
        self,
        rules: Union[RuleRegistry, Mapping[str, Any]],
        options: Optional[Union[ValidationOptions, Mapping[str, Any]]] = None,
        **overrides: Any,
    ):
        self.options = resolve_options(options, **overrides)
        self._closed = False

        self._registry_ref = RegistryRef()
        registry = self._registry_ref.set(rules)
        evaluator = RuleEvaluator()

        if self.options.validate_on_init:
            initial = {}
            for name, rule in registry.items():
                outcome = evaluator.evaluate(name, rule.predicate, rule.snapshot)
                initial[name] = RuleResult.UNVALIDATED if outcome is None else RuleResult.from_outcome(outcome)
            self._store = ResultStore(initial)
        else:
            self._store = ResultStore.with_names(registry)

        self._dispatcher = ValidationDispatcher(self._registry_ref, self._store, evaluator)
        self._detector = ChangeDetector(
            self._registry_ref,
            self._dispatcher,
            auto_validate=self.options.validate_on_change,
        )
        self._views = ResultViews(self._store, self._registry_ref)

        # First tick: records the baseline, never triggers validation.
        self._detector.tick()
        logger.debug("Created validation for %d rules with %s", len(registry), self.options)

    # ------------------------------------------------------------------
    # Host-facing operations
    # ------------------------------------------------------------------

    def refresh(self, rules: Union[RuleRegistry, Mapping[str, Any]]) -> List[str]:
        """Install the host's latest rules and run one change-detection tick.

        Returns the names of the rules whose input changed since the last
        baseline. With ``validate_on_change`` those rules have already been
        revalidated when this returns.
        """

        self._ensure_open("refresh")
        self._registry_ref.set(rules)
        return self._detector.tick()

    def validate(self, name: Optional[str] = None, value: Any = MISSING) -> Optional[bool]:
        """Validate one rule, or every rule when *name* is omitted.

        *value* overrides the registered snapshot for a single rule; use it
        when the host already holds a newer value than the last refresh.
        """

        self._ensure_open("validate")
        return self._dispatcher.validate(name, value)

    def is_valid(self, name: Optional[str] = None) -> bool:
        self._ensure_open("is_valid")
        return self._views.is_valid(name)

    def is_invalid(self, name: Optional[str] = None) -> bool:
        self._ensure_open("is_invalid")
        return self._views.is_invalid(name)

    @property
    def valid(self) -> Mapping[str, bool]:
        self._ensure_open("valid")
        return self._views.valid

    @property
    def invalid(self) -> Mapping[str, bool]:
        self._ensure_open("invalid")
        return self._views.invalid

    @property
    def results(self) -> Mapping[str, RuleResult]:
        self._ensure_open("results")
        return self._store.snapshot()

    @property
    def rules(self) -> RuleRegistry:
        """The registry supplied most recently."""

        self._ensure_open("rules")
        return self._registry_ref.current

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Call *listener(name, previous, current)* after every result change."""

        self._ensure_open("subscribe")
        return self._store.subscribe(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down results, baseline and listeners. Safe to call twice."""

        if self._closed:
            return
        self._store.clear()
        self._detector.reset()
        self._closed = True
        logger.debug("Closed validation")

    def __enter__(self) -> "Validation":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._store)} results"
        return f"<Validation rules={list(self._registry_ref.current)!r} {state}>"

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ValidationClosedError(operation)


def use_validation(
    rules: Union[RuleRegistry, Mapping[str, Any]],
    options: Optional[Union[ValidationOptions, Mapping[str, Any]]] = None,
    **overrides: Any,
) -> Validation:
    """Functional spelling of ``Validation(rules, options, **overrides)``."""

    return Validation(rules, options, **overrides)


__all__ = ["Validation", "use_validation"]
