"""Cost-effectiveness of an afforestation project ($ per tCO2e)."""

from __future__ import annotations

import math
import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from acse.core.errors import FieldIssue, InvalidInputError, NonPositiveSequestrationWarning
from acse.core.types import AnnualResult

NOT_APPLICABLE = "N/A"
NOT_APPLICABLE_NOTE = "Cost calculation not applicable (zero or negative sequestration)"

# Indicative split of the total project cost.
COST_BREAKDOWN_SHARES: Mapping[str, float] = {
    "establishment": 0.4,
    "maintenance": 0.3,
    "monitoring": 0.2,
    "other": 0.1,
}


@dataclass(frozen=True)
class CostAnalysis:
    """
    Cost summary tying the project budget to its sequestration total.

    Attributes
    ----------
    total_project_cost:
        Budget in the caller's monetary unit.
    total_sequestration:
        Final cumulative net CO2e (t).
    project_area:
        Project area (ha).
    cost_per_tonne:
        ``total_project_cost / total_sequestration``; ``None`` when not applicable.
    cost_per_hectare:
        ``total_project_cost / project_area``.
    cost_per_hectare_per_tonne:
        ``cost_per_hectare / total_sequestration``; ``None`` when not applicable.
    status:
        ``ok`` or ``not_applicable`` (zero, negative or non-finite sequestration).
    note:
        Human-readable explanation surfaced by the CLI.
    breakdown:
        Indicative establishment/maintenance/monitoring/other split.
    """

    total_project_cost: float
    total_sequestration: float
    project_area: float
    cost_per_tonne: float | None
    cost_per_hectare: float
    cost_per_hectare_per_tonne: float | None
    status: str = "ok"
    note: str = ""
    breakdown: dict[str, float] = field(default_factory=dict)

    @property
    def applicable(self) -> bool:
        return self.status == "ok"

    def display_cost_per_tonne(self, digits: int = 2) -> str:
        if self.cost_per_tonne is None:
            return NOT_APPLICABLE
        return f"{self.cost_per_tonne:,.{digits}f}"

    def display_cost_per_hectare_per_tonne(self, digits: int = 2) -> str:
        if self.cost_per_hectare_per_tonne is None:
            return NOT_APPLICABLE
        return f"{self.cost_per_hectare_per_tonne:,.{digits}f}"


def _total_results_of(results: Any) -> Sequence[AnnualResult]:
    if hasattr(results, "total_results"):
        return results.total_results
    return results


def calculate_forest_cost_analysis(
    results: Any,
    total_cost: float,
    *,
    project_area: float | None = None,
) -> CostAnalysis:
    """
    Return cost per tCO2e and cost per hectare per tCO2e.

    Parameters
    ----------
    results:
        A ``CalculationResult`` (its ``inputs.project_area`` is used) or a sequence of
        ``AnnualResult`` together with ``project_area``.
    total_cost:
        Total project cost (>= 0).
    project_area:
        Project area (ha); overrides the area carried by ``results``.

    Raises
    ------
    InvalidInputError
        If ``total_cost`` is negative/non-finite, the area is not positive or ``results`` is
        empty. Zero or negative sequestration is not an error: the report is marked
        ``not_applicable`` and a ``NonPositiveSequestrationWarning`` is emitted.
    """

    issues: list[FieldIssue] = []
    cost = float(total_cost) if total_cost is not None else math.nan
    if not math.isfinite(cost) or cost < 0:
        issues.append(FieldIssue("total_cost", "must be a non-negative number"))

    if project_area is None:
        inputs = getattr(results, "inputs", None)
        project_area = getattr(inputs, "project_area", None)
    area = float(project_area) if project_area is not None else math.nan
    if not math.isfinite(area) or area <= 0:
        issues.append(FieldIssue("project_area", "must be > 0"))

    series = _total_results_of(results)
    if not series:
        issues.append(FieldIssue("results", "no results available for cost analysis"))
    if issues:
        raise InvalidInputError(issues)

    final_cumulative = float(series[-1].cumulative_net_co2e)
    breakdown = {name: cost * share for name, share in COST_BREAKDOWN_SHARES.items()}
    cost_per_hectare = cost / area

    if not math.isfinite(final_cumulative) or final_cumulative <= 0:
        warnings.warn(NOT_APPLICABLE_NOTE, NonPositiveSequestrationWarning, stacklevel=2)
        return CostAnalysis(
            total_project_cost=cost,
            total_sequestration=final_cumulative,
            project_area=area,
            cost_per_tonne=None,
            cost_per_hectare=cost_per_hectare,
            cost_per_hectare_per_tonne=None,
            status="not_applicable",
            note=NOT_APPLICABLE_NOTE,
            breakdown=breakdown,
        )

    cost_per_tonne = cost / final_cumulative
    return CostAnalysis(
        total_project_cost=cost,
        total_sequestration=final_cumulative,
        project_area=area,
        cost_per_tonne=cost_per_tonne,
        cost_per_hectare=cost_per_hectare,
        cost_per_hectare_per_tonne=cost_per_hectare / final_cumulative,
        note=(
            f"Cost per tCO2e = {cost:,.2f} / {final_cumulative:,.2f} tCO2e "
            f"= {cost_per_tonne:,.2f} per tCO2e"
        ),
        breakdown=breakdown,
    )


__all__ = [
    "CostAnalysis",
    "calculate_forest_cost_analysis",
    "COST_BREAKDOWN_SHARES",
    "NOT_APPLICABLE",
    "NOT_APPLICABLE_NOTE",
]
