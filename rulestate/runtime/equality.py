# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Structural equality used to decide whether a rule's input changed."""

from __future__ import annotations

import dataclasses
import math
import re
from datetime import date, datetime
from typing import AbstractSet, Any, Mapping, Sequence


def deep_equal(left: Any, right: Any) -> bool:
    """Return True when *left* and *right* hold the same data.

    Object identity is irrelevant: two freshly built dicts, lists or
    dataclasses with equal contents compare equal. Containers must be of the
    same type (a list never equals a tuple), mapping key order is ignored and
    ``NaN`` equals ``NaN``.
    """

    if left is right:
        return True

    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right

    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        if _is_nan(left) and _is_nan(right):
            return True
        return left == right

    if type(left) is not type(right):
        return False

    if isinstance(left, (str, bytes, bytearray)):
        return left == right

    if isinstance(left, (datetime, date)):
        return left == right

    if isinstance(left, re.Pattern):
        return left.pattern == right.pattern and left.flags == right.flags

    if isinstance(left, Mapping):
        return _mapping_equal(left, right)

    if isinstance(left, AbstractSet):
        return _set_equal(left, right)

    if isinstance(left, Sequence):
        return _sequence_equal(left, right)

    if dataclasses.is_dataclass(left) and not isinstance(left, type):
        return all(
            deep_equal(getattr(left, f.name), getattr(right, f.name))
            for f in dataclasses.fields(left)
        )

    return bool(left == right)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _mapping_equal(left: Mapping, right: Mapping) -> bool:
    if len(left) != len(right):
        return False
    for key, value in left.items():
        if key not in right:
            return False
        if not deep_equal(value, right[key]):
            return False
    return True


def _sequence_equal(left: Sequence, right: Sequence) -> bool:
    if len(left) != len(right):
        return False
    return all(deep_equal(a, b) for a, b in zip(left, right))


def _set_equal(left: AbstractSet, right: AbstractSet) -> bool:
    if len(left) != len(right):
        return False
    # Members are hashable, so plain membership is already structural.
    return all(item in right for item in left)


__all__ = ["deep_equal"]
