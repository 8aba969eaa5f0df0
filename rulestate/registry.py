# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Rule registry data structures."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)

Predicate = Callable[[Any], Any]


@dataclass(frozen=True)
class Rule:
    """A named pairing of an input snapshot and the predicate that judges it."""

    name: str
    snapshot: Any
    predicate: Optional[Predicate] = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ConfigurationError(f"Rule names must be strings, got {self.name!r}", rule=str(self.name))
        if self.predicate is not None and not callable(self.predicate):
            raise ConfigurationError(
                f"Predicate for rule '{self.name}' is not callable: {self.predicate!r}",
                rule=self.name,
            )


def _coerce_rule(name: Any, entry: Any) -> Rule:
    """Turn one host-supplied registry entry into a :class:`Rule`."""

    if isinstance(entry, Rule):
        if entry.name != name:
            # Identity is the registry key, not the name the Rule was built with.
            return Rule(name=name, snapshot=entry.snapshot, predicate=entry.predicate)
        return entry

    if isinstance(entry, Mapping):
        unknown = set(entry) - {"snapshot", "predicate"}
        if unknown:
            raise ConfigurationError(
                f"Rule '{name}' has unknown keys: {sorted(map(str, unknown))}",
                rule=str(name),
            )
        return Rule(name=name, snapshot=entry.get("snapshot"), predicate=entry.get("predicate"))

    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        snapshot, predicate = entry
        return Rule(name=name, snapshot=snapshot, predicate=predicate)

    raise ConfigurationError(
        f"Rule '{name}' must be a Rule, a (snapshot, predicate) pair or a mapping; got {type(entry).__name__}",
        rule=str(name),
    )


class RuleRegistry(Mapping):
    """Read-only ``name -> Rule`` mapping, rebuilt by the host on every tick.

    Iteration follows the order in which the host listed the rules.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Optional[Mapping[str, Any]] = None):
        self._rules: Dict[str, Rule] = {}
        for name, entry in (rules or {}).items():
            self._rules[name] = _coerce_rule(name, entry)
        logger.debug("Built rule registry with %d rules: %s", len(self._rules), list(self._rules))

    @classmethod
    def from_rules(cls, rules: Any) -> "RuleRegistry":
        """Return *rules* as a registry, reusing it when it already is one."""

        if isinstance(rules, RuleRegistry):
            return rules
        if rules is None:
            return cls()
        if not isinstance(rules, Mapping):
            raise ConfigurationError(
                f"Rules must be supplied as a mapping of name to rule, got {type(rules).__name__}"
            )
        return cls(rules)

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({list(self._rules)!r})"

    def snapshots(self) -> Dict[str, Any]:
        """Current input snapshot per rule name."""

        return {name: rule.snapshot for name, rule in self._rules.items()}


class RegistryRef:
    """Single slot holding the most recently supplied registry.

    Long-lived collaborators keep the ref, never the registry itself, so that
    every operation sees the rules the host handed over last.
    """

    __slots__ = ("current",)

    def __init__(self, registry: Optional[RuleRegistry] = None):
        self.current: RuleRegistry = registry if registry is not None else RuleRegistry()

    def set(self, rules: Any) -> RuleRegistry:
        self.current = RuleRegistry.from_rules(rules)
        return self.current


__all__ = ["Predicate", "Rule", "RuleRegistry", "RegistryRef"]
