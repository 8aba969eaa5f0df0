"""Telemetry package - OpenTelemetry instruments for rulestate."""

from .metrics import (
    change_detected_total,
    record_validate_latency,
    result_write_deduplicated_total,
    result_write_total,
    rule_evaluation_total,
    validate_latency_ms,
)
from .runtime import get_tracer, meter

__all__ = [
    "change_detected_total",
    "record_validate_latency",
    "result_write_deduplicated_total",
    "result_write_total",
    "rule_evaluation_total",
    "validate_latency_ms",
    "get_tracer",
    "meter",
]
