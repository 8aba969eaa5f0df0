# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for rulestate."""

from __future__ import annotations

import time

from .runtime import meter

rule_evaluation_total = meter.create_counter(
    name="rulestate.rule.evaluation.total",
    description="Counts predicate evaluations, partitioned by outcome (valid, invalid, no_result).",
    unit="1",
)

result_write_total = meter.create_counter(
    name="rulestate.result.write.total",
    description="Counts result store writes that changed a rule's stored result.",
    unit="1",
)

result_write_deduplicated_total = meter.create_counter(
    name="rulestate.result.write.deduplicated.total",
    description="Counts result store writes skipped because the outcome was unchanged.",
    unit="1",
)

change_detected_total = meter.create_counter(
    name="rulestate.change.detected.total",
    description="Counts rule inputs found changed by the change detector.",
    unit="1",
)

validate_latency_ms = meter.create_histogram(
    name="rulestate.validate.latency.ms",
    description="Time spent in a single validate call.",
    unit="ms",
)


def record_validate_latency(scope: str, started_at: float) -> None:
    """Record the duration of a validate call started at *started_at*.

    Args:
        scope: ``"rule"`` for single-rule calls, ``"all"`` for evaluate-all
        started_at: Timestamp from time.perf_counter() when the call started
    """

    duration_ms = (time.perf_counter() - started_at) * 1000.0
    validate_latency_ms.record(duration_ms, {"scope": scope})


__all__ = [
    "rule_evaluation_total",
    "result_write_total",
    "result_write_deduplicated_total",
    "change_detected_total",
    "validate_latency_ms",
    "record_validate_latency",
]
