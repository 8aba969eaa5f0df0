# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Result store shared by the evaluator, the dispatcher and the views."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ..telemetry.metrics import result_write_deduplicated_total, result_write_total


logger = logging.getLogger(__name__)


class RuleResult(Enum):
    """Tri-state outcome of a rule. Exactly one state holds at a time."""

    UNVALIDATED = "unvalidated"
    VALID = "valid"
    INVALID = "invalid"

    @classmethod
    def from_outcome(cls, outcome: bool) -> "RuleResult":
        return cls.VALID if outcome else cls.INVALID

    @property
    def is_valid(self) -> bool:
        return self is RuleResult.VALID

    @property
    def is_invalid(self) -> bool:
        return self is RuleResult.INVALID


ResultListener = Callable[[str, RuleResult, RuleResult], None]


class ResultStore(Mapping):
    """``name -> RuleResult`` mapping written only when an outcome changes.

    Reads go through the regular mapping interface; names that were never
    evaluated read as :attr:`RuleResult.UNVALIDATED` via :meth:`get`.
    Listeners are called synchronously after each effective write with
    ``(name, previous, current)``. A write whose outcome equals the stored
    result is dropped before any listener sees it, and :attr:`version` only
    moves on effective writes.
    """

    def __init__(self, initial: Optional[Mapping] = None):
        self._results: Dict[str, RuleResult] = dict(initial or {})
        self._listeners: List[ResultListener] = []
        self._version = 0

    # -- Mapping interface -------------------------------------------------

    def __getitem__(self, name: str) -> RuleResult:
        return self._results[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def get(self, name: str, default: RuleResult = RuleResult.UNVALIDATED) -> RuleResult:
        return self._results.get(name, default)

    # -- Writes ------------------------------------------------------------

    @property
    def version(self) -> int:
        """Counter bumped on every write that changed a stored result."""

        return self._version

    def set(self, name: str, outcome: bool) -> bool:
        """Store *outcome* for *name*; return False when nothing changed."""

        current = RuleResult.from_outcome(outcome)
        previous = self._results.get(name, RuleResult.UNVALIDATED)
        if previous is current:
            logger.debug("Result for rule '%s' unchanged (%s); skipping write", name, current.value)
            result_write_deduplicated_total.add(1, {"rule": name})
            return False

        self._results[name] = current
        self._version += 1
        logger.debug("Result for rule '%s' changed: %s -> %s", name, previous.value, current.value)
        result_write_total.add(1, {"rule": name, "result": current.value})

        for listener in tuple(self._listeners):
            listener(name, previous, current)
        return True

    def snapshot(self) -> Mapping:
        """Read-only copy of the current results."""

        return MappingProxyType(dict(self._results))

    # -- Listeners ---------------------------------------------------------

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Register *listener*; the returned callable unregisters it."""

        if not callable(listener):
            raise TypeError(f"Result listener must be callable, got {listener!r}")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def clear(self) -> None:
        """Drop every result and listener."""

        self._results.clear()
        self._listeners.clear()
        self._version += 1

    @classmethod
    def with_names(cls, names: Iterable[str]) -> "ResultStore":
        return cls({name: RuleResult.UNVALIDATED for name in names})


__all__ = ["RuleResult", "ResultListener", "ResultStore"]
