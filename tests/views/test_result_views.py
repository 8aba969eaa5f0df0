# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Unit tests for the valid/invalid projections."""

from __future__ import annotations

import pytest

from rulestate.registry import RegistryRef
from rulestate.validation import ResultStore
from rulestate.views import ResultViews


def _views(**outcomes):
    store = ResultStore.with_names(outcomes)
    for name, outcome in outcomes.items():
        if outcome is not None:
            store.set(name, outcome)
    ref = RegistryRef()
    ref.set({name: (None, None) for name in outcomes})
    return store, ResultViews(store, ref)


def test_projections_follow_tri_state():
    _, views = _views(ok=True, bad=False, pending=None)

    assert dict(views.valid) == {"ok": True, "bad": False, "pending": False}
    assert dict(views.invalid) == {"ok": False, "bad": True, "pending": False}


def test_valid_and_invalid_are_never_both_true():
    store, views = _views(a=None, b=None)
    for outcome in (True, False, True):
        store.set("a", outcome)
        for name in store:
            assert not (views.valid[name] and views.invalid[name])


def test_projections_are_cached_until_store_changes():
    store, views = _views(a=True)
    valid = views.valid

    store.set("a", True)
    assert views.valid is valid

    store.set("a", False)
    assert views.valid is not valid
    assert views.invalid["a"] is True


def test_projections_are_read_only():
    _, views = _views(a=True)

    with pytest.raises(TypeError):
        views.valid["a"] = False  # type: ignore[index]


@pytest.mark.parametrize(
    "outcomes,is_valid,is_invalid",
    [
        ({}, True, False),
        ({"a": True, "b": True}, True, False),
        ({"a": True, "b": False}, False, True),
        ({"a": True, "b": None}, False, True),
        ({"a": None}, False, True),
    ],
)
def test_aggregate_queries(outcomes, is_valid, is_invalid):
    _, views = _views(**outcomes)

    assert views.is_valid() is is_valid
    assert views.is_invalid() is is_invalid


def test_named_queries_and_unknown_names():
    _, views = _views(ok=True, bad=False, pending=None)

    assert views.is_valid("ok") is True
    assert views.is_invalid("bad") is True
    assert views.is_valid("pending") is False
    assert views.is_invalid("pending") is False
    assert views.is_valid("unknown") is False
    assert views.is_invalid("unknown") is False


def test_views_follow_the_current_registry():
    ref = RegistryRef()
    ref.set({"a": (1, None)})
    store = ResultStore.with_names(ref.current)
    store.set("a", True)
    views = ResultViews(store, ref)
    before = views.valid

    ref.set({"a": (1, None), "added": (2, None)})

    assert views.valid is not before
    assert dict(views.valid) == {"a": True, "added": False}
    assert dict(views.invalid) == {"a": False, "added": False}
    assert views.is_valid() is False
    assert views.is_invalid() is True


def test_results_of_removed_rules_are_ignored():
    ref = RegistryRef()
    ref.set({"a": (1, None), "gone": (2, None)})
    store = ResultStore.with_names(ref.current)
    store.set("a", True)
    store.set("gone", False)
    views = ResultViews(store, ref)

    ref.set({"a": (1, None)})

    assert dict(views.invalid) == {"a": False}
    assert views.is_valid() is True
    assert views.is_invalid() is False
    assert views.is_invalid("gone") is False
