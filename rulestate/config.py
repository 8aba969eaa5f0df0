# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Validation options and their resolution from env, YAML files and arguments.

Precedence, lowest first:

1. Built-in defaults (both flags off)
2. The YAML file named by ``RULESTATE_CONFIG_FILE``
3. ``RULESTATE_VALIDATE_ON_INIT`` / ``RULESTATE_VALIDATE_ON_CHANGE``
4. The ``options`` argument
5. Keyword overrides
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "RULESTATE_CONFIG_FILE"
VALIDATE_ON_INIT_ENV = "RULESTATE_VALIDATE_ON_INIT"
VALIDATE_ON_CHANGE_ENV = "RULESTATE_VALIDATE_ON_CHANGE"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("", "0", "false", "no", "off")

# camelCase spellings accepted for hosts that share option records with JS code.
_ALIASES = {
    "validateOnInit": "validate_on_init",
    "validateOnChange": "validate_on_change",
}


@dataclass(frozen=True)
class ValidationOptions:
    """Behaviour switches for a :class:`~rulestate.Validation`."""

    validate_on_init: bool = False  # evaluate every rule once at construction
    validate_on_change: bool = False  # revalidate rules whose input changed on refresh


_OPTION_NAMES = tuple(f.name for f in fields(ValidationOptions))


def parse_flag(value: Any, *, option: str) -> bool:
    """Interpret a bool or a string flag such as ``"1"``, ``"yes"`` or ``"off"``."""

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigurationError(f"Option '{option}' expects a boolean, got {value!r}", option=option)


def _normalize(values: Mapping[str, Any], *, source: str) -> Dict[str, bool]:
    normalized: Dict[str, bool] = {}
    for key, value in values.items():
        name = _ALIASES.get(key, key)
        if name not in _OPTION_NAMES:
            raise ConfigurationError(
                f"Unknown validation option '{key}' in {source}; expected one of {list(_OPTION_NAMES)}",
                option=str(key),
            )
        normalized[name] = parse_flag(value, option=name)
    return normalized


def load_options_file(path: Union[str, Path]) -> Dict[str, bool]:
    """Read option values from a YAML file.

    The options may sit at the top level or under a ``rulestate:`` key.
    """

    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Validation config file not found: {path}")

    data = yaml.safe_load(path.read_text()) or {}
    if isinstance(data, Mapping) and "rulestate" in data:
        data = data["rulestate"] or {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Validation config file {path} must contain a mapping")

    logger.debug("Loaded validation options from %s", path)
    return _normalize(data, source=str(path))


def options_from_env() -> Dict[str, bool]:
    """Option values set through ``RULESTATE_*`` environment variables."""

    values: Dict[str, bool] = {}
    config_file = os.getenv(CONFIG_FILE_ENV)
    if config_file:
        values.update(load_options_file(config_file))

    for env_name, option in (
        (VALIDATE_ON_INIT_ENV, "validate_on_init"),
        (VALIDATE_ON_CHANGE_ENV, "validate_on_change"),
    ):
        raw = os.getenv(env_name)
        if raw is not None:
            values[option] = parse_flag(raw, option=env_name)
    return values


def resolve_options(
    options: Optional[Union[ValidationOptions, Mapping[str, Any]]] = None,
    **overrides: Any,
) -> ValidationOptions:
    """Merge defaults, environment, *options* and *overrides* into one record."""

    resolved = replace(ValidationOptions(), **options_from_env())

    if isinstance(options, ValidationOptions):
        resolved = replace(resolved, **{name: getattr(options, name) for name in _OPTION_NAMES})
    elif isinstance(options, Mapping):
        resolved = replace(resolved, **_normalize(options, source="options"))
    elif options is not None:
        raise ConfigurationError(
            f"Options must be a ValidationOptions or a mapping, got {type(options).__name__}"
        )

    if overrides:
        resolved = replace(resolved, **_normalize(overrides, source="keyword arguments"))

    logger.debug("Resolved validation options: %s", resolved)
    return resolved


__all__ = [
    "CONFIG_FILE_ENV",
    "VALIDATE_ON_CHANGE_ENV",
    "VALIDATE_ON_INIT_ENV",
    "ValidationOptions",
    "load_options_file",
    "options_from_env",
    "parse_flag",
    "resolve_options",
]
