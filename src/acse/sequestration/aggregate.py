"""Multi-species aggregation of annual sequestration results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from acse.core.errors import EmptyDatasetError
from acse.core.types import AnnualResult, SpeciesResult
from acse.project.contract.models import ProjectInputs, SpeciesRecord
from acse.telemetry.sink import CalculationTelemetry, SinkLike
from acse.validation.ranges import validate_project_inputs, validate_species_records

from .results import CalculationResult, summarise
from .species import merge_species_inputs, run_species

ProjectLike = ProjectInputs | Mapping[str, Any]
SpeciesLike = SpeciesRecord | Mapping[str, Any]


def apportion_area(records: Sequence[SpeciesRecord], project_area: float) -> list[float]:
    """Split ``project_area`` across species.

    Shares are proportional to ``Number of Trees`` when every record supplies a count and the
    counts sum above zero, so a zero count gets a zero share. A missing count or an all-zero
    set splits the area equally. The shares always sum to ``project_area``.
    """

    if not records:
        return []
    counts = [record.number_of_trees for record in records]
    if all(count is not None for count in counts):
        total = float(sum(counts))
        if total > 0:
            return [project_area * float(count) / total for count in counts]
    share = project_area / len(records)
    return [share] * len(records)


def aggregate_totals(
    species_results: Sequence[SpeciesResult],
    duration: int,
    annual_baseline: float,
) -> list[AnnualResult]:
    """Sum per-species annual CO2e into project totals.

    The baseline is subtracted once per year at the totals level and the cumulative is a
    single left-to-right pass over the total net values.
    """

    totals: list[AnnualResult] = []
    cumulative = 0.0
    for index in range(duration):
        gross = sum(result.results[index].net_annual_co2e for result in species_results)
        volume = sum(result.results[index].volume_increment for result in species_results)
        net = gross - annual_baseline
        cumulative += net
        totals.append(
            AnnualResult(
                year=index + 1,
                age=index + 1,
                volume_increment=volume,
                gross_annual_co2e=gross,
                net_annual_co2e=net,
                cumulative_net_co2e=cumulative,
            )
        )
    return totals


def _calculate(
    inputs: ProjectInputs,
    records: Sequence[SpeciesRecord],
    *,
    species_key: str | None = None,
) -> CalculationResult:
    shares = apportion_area(records, inputs.project_area)
    species_results: list[SpeciesResult] = []
    for record, share in zip(records, shares):
        species = merge_species_inputs(
            inputs, record, area_share=share, species_count=len(records)
        )
        if species_key is not None:
            species = replace(species, species_key=species_key)
        species_results.append(run_species(species))

    total_results = aggregate_totals(
        species_results, inputs.project_duration, inputs.annual_baseline_co2e
    )
    return CalculationResult(
        inputs=inputs,
        total_results=tuple(total_results),
        species_results=tuple(species_results),
        summary=summarise(inputs, total_results, species_results),
        species_records=tuple(records),
    )


def calculate_sequestration_multi_species(
    inputs: ProjectLike,
    species: Iterable[SpeciesLike],
    sink: SinkLike | None = None,
) -> CalculationResult:
    """
    Run every species record and aggregate them into project totals.

    Parameters
    ----------
    inputs:
        Project inputs (model or raw mapping, validated at the boundary).
    species:
        Species records or raw rows keyed by the species column names.
    sink:
        Optional analytics sink receiving ``forest_multi_species_calculation_*`` events.

    Raises
    ------
    EmptyDatasetError
        When ``species`` is empty.
    InvalidInputError
        When project inputs or species rows fail validation. Nothing is computed.
    """

    rows = list(species)
    with CalculationTelemetry(sink, "multi_species", {"species_count": len(rows)}) as telemetry:
        if not rows:
            raise EmptyDatasetError()
        project = validate_project_inputs(inputs)
        records = validate_species_records(rows)
        result = _calculate(project, records)
        telemetry.record(duration_years=project.project_duration)
    return result


def single_species_record(inputs: ProjectInputs) -> SpeciesRecord:
    """Return the synthetic record used by the single-species path."""

    return SpeciesRecord(
        species_name=inputs.display_name,
        number_of_trees=inputs.total_trees,
    )


def calculate_single_species(
    inputs: ProjectLike,
    sink: SinkLike | None = None,
) -> CalculationResult:
    """Single-species calculation returning the full :class:`CalculationResult`."""

    with CalculationTelemetry(sink, "single_species", {"species_count": 1}) as telemetry:
        project = validate_project_inputs(inputs)
        result = _calculate(
            project, [single_species_record(project)], species_key=project.species_key
        )
        telemetry.record(duration_years=project.project_duration)
    return result


def calculate_sequestration(
    inputs: ProjectLike,
    sink: SinkLike | None = None,
) -> list[AnnualResult]:
    """
    Single-species path: the whole project area is planted with one species.

    The species is identified by ``species_key`` (built-in growth anchors) and/or
    ``species_name`` (name inference); project factors apply throughout.
    """

    return list(calculate_single_species(inputs, sink).total_results)


__all__ = [
    "apportion_area",
    "aggregate_totals",
    "single_species_record",
    "calculate_sequestration_multi_species",
    "calculate_single_species",
    "calculate_sequestration",
]
