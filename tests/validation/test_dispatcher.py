# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Unit tests for validate() routing against the latest registry."""

from __future__ import annotations

import pytest

from rulestate.registry import RegistryRef
from rulestate.validation import MISSING, ResultStore, RuleResult, ValidationDispatcher


def _dispatcher(rules):
    ref = RegistryRef()
    ref.set(rules)
    store = ResultStore.with_names(ref.current)
    return ref, store, ValidationDispatcher(ref, store)


def test_validate_all_returns_aggregate_and_stores_every_rule(sign_rules):
    _, store, dispatcher = _dispatcher(sign_rules)

    assert dispatcher.validate() is False
    assert store["a"] is RuleResult.VALID
    assert store["b"] is RuleResult.INVALID


def test_validate_all_keeps_evaluating_after_a_failure(recorder):
    later = recorder(lambda x: x > 0)
    _, store, dispatcher = _dispatcher({"first": (0, lambda x: x > 0), "later": (5, later)})

    assert dispatcher.validate() is False
    assert later.calls == [5]
    assert store["later"] is RuleResult.VALID


def test_validate_all_skips_rules_without_predicate():
    _, store, dispatcher = _dispatcher({"a": (1, lambda x: x > 0), "pending": (None, None)})

    assert dispatcher.validate() is True
    assert store["pending"] is RuleResult.UNVALIDATED


def test_validate_all_on_empty_registry_is_true():
    _, _, dispatcher = _dispatcher({})

    assert dispatcher.validate() is True


def test_validate_named_rule_uses_registered_snapshot(sign_rules):
    _, store, dispatcher = _dispatcher(sign_rules)

    assert dispatcher.validate("b") is False
    assert store["b"] is RuleResult.INVALID
    assert store["a"] is RuleResult.UNVALIDATED


def test_explicit_value_overrides_snapshot(sign_rules):
    _, store, dispatcher = _dispatcher(sign_rules)

    assert dispatcher.validate("b", 10) is True
    assert store["b"] is RuleResult.VALID


def test_none_is_a_legitimate_explicit_value():
    _, _, dispatcher = _dispatcher({"present": ("x", lambda v: v is not None)})

    assert dispatcher.validate("present", None) is False
    assert dispatcher.validate("present", MISSING) is True


def test_unknown_rule_is_silent():
    _, store, dispatcher = _dispatcher({"a": (1, lambda x: x > 0)})

    assert dispatcher.validate("nope") is None
    assert dispatcher.validate("nope", 5) is None
    assert "nope" not in store
    assert store.version == 0


def test_dispatcher_reads_latest_registry():
    ref, store, dispatcher = _dispatcher({"rule": ("abc", lambda s: len(s) > 5)})

    assert dispatcher.validate("rule") is False

    ref.set({"rule": ("abc", lambda s: len(s) > 1)})
    assert dispatcher.validate("rule") is True
    assert store["rule"] is RuleResult.VALID

    ref.set({"renamed": ("abc", lambda s: True)})
    assert dispatcher.validate("rule") is None
    assert dispatcher.validate("renamed") is True


def test_predicate_error_is_not_reported_as_invalid():
    def explode(_value):
        raise KeyError("missing field")

    _, store, dispatcher = _dispatcher({"a": (1, lambda x: x > 0), "b": ({}, explode)})

    with pytest.raises(KeyError):
        dispatcher.validate()

    assert store["a"] is RuleResult.VALID
    assert store["b"] is RuleResult.UNVALIDATED


def test_missing_sentinel_is_distinct_from_none():
    _, store, dispatcher = _dispatcher({"is_none": ("x", lambda v: v is None)})

    assert MISSING is not None
    assert dispatcher.validate("is_none") is False
    assert dispatcher.validate("is_none", None) is True
    assert store["is_none"] is RuleResult.VALID
