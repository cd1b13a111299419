"""Optional analytics sink used by the engine for observability."""

from __future__ import annotations

import time
import warnings
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from acse.core.errors import InvalidInputError, SinkFailureWarning

from .jsonl import append_jsonl


@runtime_checkable
class AnalyticsSink(Protocol):
    """Receiver for engine events (counts and durations only, never raw inputs)."""

    def emit(self, event_name: str, payload: Mapping[str, Any]) -> None: ...


SinkLike = AnalyticsSink | Callable[[str, Mapping[str, Any]], None]


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def emit_safely(sink: SinkLike | None, event_name: str, payload: Mapping[str, Any]) -> bool:
    """Deliver an event to ``sink``; failures are reported as warnings and never propagate.

    Returns ``True`` when the sink accepted the event.
    """

    if sink is None:
        return False
    try:
        if isinstance(sink, AnalyticsSink):
            sink.emit(event_name, dict(payload))
        else:
            sink(event_name, dict(payload))
    except Exception as exc:  # noqa: BLE001 - sink errors must never reach the caller
        warnings.warn(
            f"Analytics sink failed on '{event_name}': {exc!r}",
            SinkFailureWarning,
            stacklevel=2,
        )
        return False
    return True


@dataclass
class JsonlAnalyticsSink:
    """Append every event to a JSONL file.

    Parameters
    ----------
    path:
        JSONL path where event records are appended (parent directories are created).
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def emit(self, event_name: str, payload: Mapping[str, Any]) -> None:
        append_jsonl(
            self.path,
            {"event": event_name, "timestamp": _iso_now(), "payload": dict(payload)},
        )


@dataclass(slots=True)
class CalculationTelemetry(AbstractContextManager["CalculationTelemetry"]):
    """Emit ``forest_<scope>_calculation_start|complete|error`` around one calculation.

    Parameters
    ----------
    sink:
        Optional analytics sink (object with ``emit`` or a plain callable).
    scope:
        Calculation scope used in the event names (e.g. ``multi_species``).
    counts:
        Integer counts attached to every event (species, years).
    """

    sink: SinkLike | None
    scope: str
    counts: Mapping[str, int] = field(default_factory=dict)
    _start_time: float = field(default=0.0, init=False)
    _closed: bool = field(default=False, init=False)
    _extra_counts: dict[str, int] = field(default_factory=dict, init=False)

    def event_name(self, stage: str) -> str:
        return f"forest_{self.scope}_calculation_{stage}"

    def __enter__(self) -> "CalculationTelemetry":
        self._start_time = time.perf_counter()
        emit_safely(self.sink, self.event_name("start"), dict(self.counts))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            payload: dict[str, Any] = {"error_type": exc_type.__name__}
            if isinstance(exc, InvalidInputError):
                payload["issue_count"] = len(exc.issues)
            self._close("error", payload)
            return False
        self._close("complete", {})
        return False

    def record(self, **counts: int) -> None:
        """Attach additional counts to the terminal event."""
        self._extra_counts.update(counts)

    def elapsed(self) -> float:
        """Return the elapsed seconds since the calculation started."""
        return time.perf_counter() - self._start_time

    def _close(self, stage: str, extra: Mapping[str, Any]) -> None:
        if self._closed:
            return
        payload = {
            **dict(self.counts),
            **self._extra_counts,
            **dict(extra),
            "duration_ms": round(self.elapsed() * 1000.0, 3),
        }
        emit_safely(self.sink, self.event_name(stage), payload)
        self._closed = True


__all__ = [
    "AnalyticsSink",
    "SinkLike",
    "emit_safely",
    "JsonlAnalyticsSink",
    "CalculationTelemetry",
]
