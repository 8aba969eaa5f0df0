# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Per-tick input change detection and automatic revalidation."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..registry import RegistryRef
from ..telemetry.metrics import change_detected_total
from ..validation.dispatcher import ValidationDispatcher
from .equality import deep_equal


logger = logging.getLogger(__name__)


class ChangeDetector:
    """Compare each rule's input against the previous tick's baseline.

    The first tick only records the baseline. Afterwards every tick compares
    the latest registry's snapshots to the baseline with :func:`deep_equal`
    and, when *auto_validate* is set, revalidates each changed rule with the
    snapshot that triggered it.

    A rule missing from the baseline has no previous value, so it is never
    reported on the tick it first appears in; tracking starts from there.
    """

    def __init__(self, registry_ref: RegistryRef, dispatcher: ValidationDispatcher, *, auto_validate: bool = False):
        self._registry_ref = registry_ref
        self._dispatcher = dispatcher
        self.auto_validate = auto_validate
        self._baseline: Optional[Dict[str, Any]] = None

    @property
    def baseline(self) -> Optional[Dict[str, Any]]:
        """Snapshots recorded at the last baseline replacement, or None before the first tick."""

        return None if self._baseline is None else dict(self._baseline)

    def tick(self) -> List[str]:
        """Run one detection cycle; return the names whose input changed."""

        current = self._registry_ref.current.snapshots()

        if self._baseline is None:
            self._baseline = current
            logger.debug("Recorded initial input baseline for %d rules", len(current))
            return []

        changed = [
            name
            for name, snapshot in current.items()
            if name in self._baseline and not deep_equal(self._baseline[name], snapshot)
        ]

        if changed or current.keys() != self._baseline.keys():
            # Replaced wholesale, never merged per rule.
            self._baseline = current

        if not changed:
            return []

        logger.debug("Inputs changed for rules: %s", changed)
        for name in changed:
            change_detected_total.add(1, {"rule": name})

        if self.auto_validate:
            for name in changed:
                logger.debug("Revalidating rule '%s' after input change", name)
                self._dispatcher.validate(name, current[name])

        return changed

    def reset(self) -> None:
        """Forget the baseline; the next tick records a fresh one."""

        self._baseline = None


__all__ = ["ChangeDetector"]
