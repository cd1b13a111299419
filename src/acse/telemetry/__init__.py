"""Telemetry helpers (analytics sink, JSONL records)."""

from .jsonl import append_jsonl, read_jsonl
from .sink import AnalyticsSink, CalculationTelemetry, JsonlAnalyticsSink, SinkLike, emit_safely

__all__ = [
    "append_jsonl",
    "read_jsonl",
    "AnalyticsSink",
    "SinkLike",
    "emit_safely",
    "JsonlAnalyticsSink",
    "CalculationTelemetry",
]
