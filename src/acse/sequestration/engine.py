"""End-to-end project calculation (totals, credits, green cover, cost)."""

from __future__ import annotations

from collections.abc import Iterable

from acse.costing.forest import calculate_forest_cost_analysis
from acse.credits.green_cover import compute_green_cover
from acse.telemetry.sink import SinkLike

from .aggregate import (
    ProjectLike,
    SpeciesLike,
    calculate_sequestration_multi_species,
    calculate_single_species,
)
from .results import CalculationResult


def _first_value(records, attribute: str, fallback):
    for record in records:
        value = getattr(record, attribute)
        if value is not None:
            return value
    return fallback


def run_calculation(
    inputs: ProjectLike,
    species: Iterable[SpeciesLike] | None = None,
    sink: SinkLike | None = None,
) -> CalculationResult:
    """
    Run the full pipeline and attach the derived reports.

    Parameters
    ----------
    inputs:
        Project inputs (model or raw mapping).
    species:
        Optional species rows. ``None`` selects the single-species path; an empty iterable
        raises ``EmptyDatasetError``.
    sink:
        Optional analytics sink.

    Returns
    -------
    CalculationResult
        Totals and per-species series plus the enhanced credit metrics, the green cover
        impact and, when ``project_cost`` is set, the cost analysis.
    """

    if species is None:
        result = calculate_single_species(inputs, sink)
    else:
        result = calculate_sequestration_multi_species(inputs, species, sink)

    project = result.inputs
    records = result.species_records
    result = result.with_enhanced(
        result.recompute_enhanced(
            dead_attribute_pct=_first_value(
                records, "dead_attribute_pct", project.dead_attribute_pct
            ),
        )
    )
    result = result.with_green_cover(
        compute_green_cover(
            project_area=project.project_area,
            survival_rate=project.survival_rate,
            initial_green_cover=_first_value(
                records, "initial_green_cover", project.initial_green_cover
            ),
            total_geographical_area=_first_value(
                records, "total_geographical_area", project.total_geographical_area
            ),
        )
    )
    if project.project_cost is not None:
        result = result.with_cost_analysis(
            calculate_forest_cost_analysis(result, project.project_cost)
        )
    return result


__all__ = ["run_calculation"]
