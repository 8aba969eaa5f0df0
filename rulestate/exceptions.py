# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for rulestate.

Unknown rule names are not errors (they evaluate to no result), and predicate
exceptions are never wrapped: they reach the caller as raised.
"""

from __future__ import annotations

from typing import Optional


class RuleStateError(Exception):
    """Base class for every error raised by rulestate itself."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(RuleStateError):
    """Raised for malformed rule registries or option values."""

    def __init__(self, message: str, *, rule: Optional[str] = None, option: Optional[str] = None):
        self.rule = rule
        self.option = option
        super().__init__(message)


class ValidationClosedError(RuleStateError):
    """Raised when a closed :class:`~rulestate.Validation` is used again."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call '{operation}' on a closed validation.")


__all__ = [
    "RuleStateError",
    "ConfigurationError",
    "ValidationClosedError",
]
