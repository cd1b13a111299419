from __future__ import annotations

import json
from collections import Counter, deque
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.table import Table

telemetry_app = typer.Typer(
    add_completion=False, no_args_is_help=True, help="Calculation telemetry utilities."
)
console = Console()


def _read_event_lines(path: Path) -> Iterable[tuple[str, dict[str, object] | None]]:
    with path.open("r", encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if not line:
                yield raw, None
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                yield raw, None
            else:
                yield raw, payload if isinstance(payload, dict) else None


@telemetry_app.command("summary")
def summary(
    telemetry_log: Path = typer.Argument(
        Path("telemetry/events.jsonl"),
        dir_okay=False,
        help="Telemetry JSONL file written by --telemetry-log.",
    ),
) -> None:
    """Count events and report mean durations per event name."""
    if not telemetry_log.exists():
        typer.echo(f"No telemetry log found at {telemetry_log}.")
        raise typer.Exit(0)

    counts: Counter[str] = Counter()
    durations: dict[str, list[float]] = {}
    for _, payload in _read_event_lines(telemetry_log):
        if payload is None or not isinstance(payload.get("event"), str):
            continue
        event = str(payload["event"])
        counts[event] += 1
        body = payload.get("payload")
        if isinstance(body, dict) and isinstance(body.get("duration_ms"), (int, float)):
            durations.setdefault(event, []).append(float(body["duration_ms"]))

    table = Table(title=f"Telemetry: {telemetry_log}")
    table.add_column("Event")
    table.add_column("Count", justify="right")
    table.add_column("Mean duration (ms)", justify="right")
    for event in sorted(counts):
        samples = durations.get(event)
        mean = f"{sum(samples) / len(samples):.3f}" if samples else "-"
        table.add_row(event, str(counts[event]), mean)
    console.print(table)


@telemetry_app.command("prune")
def prune(
    telemetry_log: Path = typer.Argument(
        Path("telemetry/events.jsonl"),
        exists=False,
        dir_okay=False,
        writable=True,
        help="Telemetry JSONL file to prune.",
    ),
    keep: int = typer.Option(
        5000,
        "--keep",
        "-k",
        min=1,
        help="Number of most-recent event records to retain.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Preview the prune operation without modifying any files.",
    ),
) -> None:
    """Trim the telemetry JSONL to the most recent events."""
    if not telemetry_log.exists():
        typer.echo(f"No telemetry log found at {telemetry_log}. Nothing to prune.")
        raise typer.Exit(0)

    lines = list(_read_event_lines(telemetry_log))
    if len(lines) <= keep:
        typer.echo(
            f"Telemetry log contains {len(lines)} record(s); nothing to prune (keep={keep})."
        )
        raise typer.Exit(0)

    kept_entries = deque(lines, maxlen=keep)
    removed = len(lines) - len(kept_entries)
    if dry_run:
        typer.echo(f"[dry-run] Would keep {len(kept_entries)} record(s) and prune {removed}.")
        raise typer.Exit(0)

    tmp_path = telemetry_log.with_suffix(telemetry_log.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as handle:
        for raw_line, _ in kept_entries:
            handle.write(raw_line if raw_line.endswith("\n") else raw_line + "\n")
    tmp_path.replace(telemetry_log)
    typer.echo(f"Pruned {removed} record(s); kept {len(kept_entries)}.")
