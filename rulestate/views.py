# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Read-only projections of the result store over the current rules."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .registry import RegistryRef, RuleRegistry
from .validation.base import ResultStore, RuleResult


class ResultViews:
    """Boolean ``valid`` / ``invalid`` projections and query helpers.

    Both forms cover exactly the rules of the latest registry. A rule that
    was never evaluated reads as unvalidated, and results of rules the host
    has since removed are ignored. The projections are rebuilt only when the
    store's version or the registry moved, so repeated reads between writes
    return the same mapping objects.
    """

    def __init__(self, store: ResultStore, registry_ref: RegistryRef):
        self._store = store
        self._registry_ref = registry_ref
        self._version: Optional[int] = None
        self._registry: Optional[RuleRegistry] = None
        self._valid: Mapping[str, bool] = MappingProxyType({})
        self._invalid: Mapping[str, bool] = MappingProxyType({})

    def _results(self) -> Iterator[RuleResult]:
        for name in self._registry_ref.current:
            yield self._store.get(name)

    def _refresh(self) -> None:
        registry = self._registry_ref.current
        if self._version == self._store.version and self._registry is registry:
            return
        results = {name: self._store.get(name) for name in registry}
        self._valid = MappingProxyType({name: result.is_valid for name, result in results.items()})
        self._invalid = MappingProxyType({name: result.is_invalid for name, result in results.items()})
        self._version = self._store.version
        self._registry = registry

    @property
    def valid(self) -> Mapping[str, bool]:
        self._refresh()
        return self._valid

    @property
    def invalid(self) -> Mapping[str, bool]:
        self._refresh()
        return self._invalid

    def is_valid(self, name: Optional[str] = None) -> bool:
        """True when *name* is valid, or when every current rule is valid."""

        if name is not None:
            return name in self._registry_ref.current and self._store.get(name) is RuleResult.VALID
        return all(result is RuleResult.VALID for result in self._results())

    def is_invalid(self, name: Optional[str] = None) -> bool:
        """True when *name* is invalid, or when any current rule is not valid.

        Without a name, rules that were never validated count as not valid.
        """

        if name is not None:
            return name in self._registry_ref.current and self._store.get(name) is RuleResult.INVALID
        return any(result is not RuleResult.VALID for result in self._results())


__all__ = ["ResultViews"]
