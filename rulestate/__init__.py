# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""rulestate - tri-state validation results for externally owned state."""

from .config import ValidationOptions, resolve_options
from .exceptions import ConfigurationError, RuleStateError, ValidationClosedError
from .registry import RegistryRef, Rule, RuleRegistry
from .runtime import ChangeDetector, deep_equal
from .state import Validation, use_validation
from .validation import MISSING, ResultStore, RuleEvaluator, RuleResult, ValidationDispatcher
from .views import ResultViews

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ChangeDetector",
    "ConfigurationError",
    "RegistryRef",
    "ResultStore",
    "ResultViews",
    "Rule",
    "RuleEvaluator",
    "RuleRegistry",
    "RuleResult",
    "RuleStateError",
    "Validation",
    "ValidationClosedError",
    "ValidationDispatcher",
    "ValidationOptions",
    "deep_equal",
    "resolve_options",
    "use_validation",
]
