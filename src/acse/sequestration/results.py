"""Result handle returned by the sequestration engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from acse.core.types import AnnualResult, SpeciesResult
from acse.costing.forest import CostAnalysis
from acse.credits.green_cover import GreenCoverImpact
from acse.credits.vers import EnhancedMetrics, compute_enhanced, resolve_credit_risk_rate
from acse.project.contract.models import ProjectInputs, SpeciesRecord


@dataclass(frozen=True)
class ProjectSummary:
    """Headline figures for a calculation.

    Attributes
    ----------
    total_net_co2e:
        Final cumulative net CO2e (t).
    total_gross_co2e:
        Sum of the per-species annual CO2e before the baseline (t).
    baseline_total:
        Baseline removed over the project (t).
    average_annual_net_co2e:
        ``total_net_co2e / duration``.
    net_co2e_per_hectare:
        ``total_net_co2e / project_area``.
    peak_year:
        Year with the largest net annual CO2e (first one on ties).
    species_count / duration / total_trees / effective_trees:
        Counts echoed for reporting and telemetry.
    """

    total_net_co2e: float
    total_gross_co2e: float
    baseline_total: float
    average_annual_net_co2e: float
    net_co2e_per_hectare: float
    peak_year: int
    species_count: int
    duration: int
    total_trees: float
    effective_trees: int

    def to_dict(self) -> dict[str, float | int]:
        return {
            "total_net_co2e": self.total_net_co2e,
            "total_gross_co2e": self.total_gross_co2e,
            "baseline_total": self.baseline_total,
            "average_annual_net_co2e": self.average_annual_net_co2e,
            "net_co2e_per_hectare": self.net_co2e_per_hectare,
            "peak_year": self.peak_year,
            "species_count": self.species_count,
            "duration": self.duration,
            "total_trees": self.total_trees,
            "effective_trees": self.effective_trees,
        }


def summarise(
    inputs: ProjectInputs,
    total_results: Sequence[AnnualResult],
    species_results: Sequence[SpeciesResult],
) -> ProjectSummary:
    """Build the :class:`ProjectSummary` for a totals series."""

    duration = len(total_results)
    total_net = total_results[-1].cumulative_net_co2e if total_results else 0.0
    total_gross = sum(result.gross_annual_co2e for result in total_results)
    peak_year = 0
    if total_results:
        peak = max(total_results, key=lambda result: result.net_annual_co2e)
        peak_year = peak.year
    return ProjectSummary(
        total_net_co2e=total_net,
        total_gross_co2e=total_gross,
        baseline_total=inputs.annual_baseline_co2e * duration,
        average_annual_net_co2e=total_net / duration if duration else 0.0,
        net_co2e_per_hectare=total_net / inputs.project_area,
        peak_year=peak_year,
        species_count=len(species_results),
        duration=duration,
        total_trees=sum(result.number_of_trees for result in species_results),
        effective_trees=sum(result.effective_trees for result in species_results),
    )


@dataclass(frozen=True)
class CalculationResult:
    """Immutable outcome of one project calculation.

    The handle keeps the validated inputs and species records so that credit knobs can be
    re-applied with :meth:`recompute_enhanced` without re-running the growth pipeline.
    """

    inputs: ProjectInputs
    total_results: tuple[AnnualResult, ...]
    species_results: tuple[SpeciesResult, ...]
    summary: ProjectSummary
    species_records: tuple[SpeciesRecord, ...] = ()
    cost_analysis: CostAnalysis | None = None
    enhanced: EnhancedMetrics | None = None
    green_cover: GreenCoverImpact | None = None

    @property
    def total_net_co2e(self) -> float:
        return self.summary.total_net_co2e

    def recompute_enhanced(
        self,
        *,
        dead_attribute_pct: float | None = None,
        carbon_price_per_tonne: float | None = None,
        risk_rate: float | None = None,
    ) -> EnhancedMetrics:
        """Return VERs and revenue for new credit knobs using the cached totals.

        Omitted knobs default to the values on :attr:`inputs`; the risk rate follows
        :func:`~acse.credits.vers.resolve_credit_risk_rate`.
        """

        if risk_rate is None:
            risk_rate = resolve_credit_risk_rate(
                self.species_records, self.inputs.risk_rate_override
            )
        return compute_enhanced(
            self.total_results,
            dead_attribute_pct=(
                self.inputs.dead_attribute_pct if dead_attribute_pct is None else dead_attribute_pct
            ),
            carbon_price_per_tonne=(
                self.inputs.carbon_price_per_tonne
                if carbon_price_per_tonne is None
                else carbon_price_per_tonne
            ),
            risk_rate=risk_rate,
        )

    def with_enhanced(self, enhanced: EnhancedMetrics) -> "CalculationResult":
        return replace(self, enhanced=enhanced)

    def with_cost_analysis(self, cost_analysis: CostAnalysis | None) -> "CalculationResult":
        return replace(self, cost_analysis=cost_analysis)

    def with_green_cover(self, green_cover: GreenCoverImpact | None) -> "CalculationResult":
        return replace(self, green_cover=green_cover)


__all__ = ["ProjectSummary", "summarise", "CalculationResult"]
