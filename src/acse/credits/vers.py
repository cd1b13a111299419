"""Verified emission reductions (VERs) and carbon revenue."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from acse.conditions.risk import clip_risk_rate
from acse.core.errors import FieldIssue, InvalidInputError
from acse.core.types import AnnualResult
from acse.project.contract.models import SpeciesRecord

# Percent points; summed when no explicit risk rate is available.
DEFAULT_RISK_FACTORS: Mapping[str, float] = {"fire": 5.0, "insect": 3.0, "disease": 2.0}
DEFAULT_CARBON_PRICE = 5.0


@dataclass(frozen=True)
class EnhancedMetrics:
    """
    Carbon credit projection after non-additionality and risk-buffer discounts.

    Attributes
    ----------
    gross_total:
        Project sequestration before the baseline is removed (tCO2e).
    baseline_total:
        Baseline sequestration over the project (tCO2e).
    dead_attribute_pct:
        Share of ``gross_total`` assumed to happen without the project (%).
    risk_rate:
        Fraction of the net withheld as a risk buffer.
    carbon_price_per_tonne:
        Price applied to each VER.
    non_additional, net_before_risk, risk_buffer:
        Intermediate discounts (tCO2e).
    verified_emission_reductions:
        Credits issued, never negative (tCO2e).
    revenue:
        ``verified_emission_reductions × carbon_price_per_tonne``.
    """

    gross_total: float
    baseline_total: float
    dead_attribute_pct: float
    risk_rate: float
    carbon_price_per_tonne: float
    non_additional: float
    net_before_risk: float
    risk_buffer: float
    verified_emission_reductions: float
    revenue: float

    def to_dict(self) -> dict[str, float]:
        return {
            "gross_total": self.gross_total,
            "baseline_total": self.baseline_total,
            "dead_attribute_pct": self.dead_attribute_pct,
            "risk_rate": self.risk_rate,
            "carbon_price_per_tonne": self.carbon_price_per_tonne,
            "non_additional": self.non_additional,
            "net_before_risk": self.net_before_risk,
            "risk_buffer": self.risk_buffer,
            "verified_emission_reductions": self.verified_emission_reductions,
            "revenue": self.revenue,
        }


def _require(name: str, value: float, lower: float, upper: float | None = None) -> float:
    number = float(value)
    if not math.isfinite(number) or number < lower or (upper is not None and number > upper):
        bound = f"[{lower}, {upper}]" if upper is not None else f">= {lower}"
        raise InvalidInputError(FieldIssue(name, f"must be {bound}"))
    return number


def compute_carbon_credits(
    *,
    gross_total: float,
    baseline_total: float = 0.0,
    dead_attribute_pct: float = 0.0,
    risk_rate: float,
    carbon_price_per_tonne: float = DEFAULT_CARBON_PRICE,
) -> EnhancedMetrics:
    """
    Apply non-additionality and risk buffering to a sequestration total.

    ``non_additional = gross × pct/100``; ``net = gross − baseline − non_additional``;
    ``buffer = max(0, net × risk)``; ``VERs = max(0, net − buffer)``; ``revenue = VERs × price``.

    Raises
    ------
    InvalidInputError
        When a knob is outside its range (percent 0-100, risk 0-1, price >= 0).
    """

    gross = float(gross_total)
    baseline = float(baseline_total)
    if not math.isfinite(gross) or not math.isfinite(baseline):
        raise InvalidInputError(FieldIssue("gross_total", "totals must be finite"))
    pct = _require("dead_attribute_pct", dead_attribute_pct, 0.0, 100.0)
    risk = _require("risk_rate", risk_rate, 0.0, 1.0)
    price = _require("carbon_price_per_tonne", carbon_price_per_tonne, 0.0)

    non_additional = gross * pct / 100.0
    net_before_risk = gross - baseline - non_additional
    risk_buffer = max(0.0, net_before_risk * risk)
    vers = max(0.0, net_before_risk - risk_buffer)
    return EnhancedMetrics(
        gross_total=gross,
        baseline_total=baseline,
        dead_attribute_pct=pct,
        risk_rate=risk,
        carbon_price_per_tonne=price,
        non_additional=non_additional,
        net_before_risk=net_before_risk,
        risk_buffer=risk_buffer,
        verified_emission_reductions=vers,
        revenue=vers * price,
    )


def default_risk_rate(factors: Mapping[str, float] = DEFAULT_RISK_FACTORS) -> float:
    """Sum percent risk factors into a fraction (fire 5 + insect 3 + disease 2 → 0.10)."""

    return sum(float(value) for value in factors.values()) / 100.0


def resolve_credit_risk_rate(
    species: Iterable[SpeciesRecord] = (),
    override: float | None = None,
    factors: Mapping[str, float] = DEFAULT_RISK_FACTORS,
) -> float:
    """
    Pick the risk rate used for the credit buffer.

    The first species record's ``Risk Rate (%)`` wins, then ``override``, then the summed
    default risk factors. The result is clipped to ``[0.05, 0.25]``.
    """

    first = next(iter(species), None)
    if first is not None and first.risk_rate is not None:
        return clip_risk_rate(first.risk_rate)
    if override is not None:
        return clip_risk_rate(override)
    return clip_risk_rate(default_risk_rate(factors))


def compute_enhanced(
    total_results: Sequence[AnnualResult],
    *,
    dead_attribute_pct: float = 0.0,
    carbon_price_per_tonne: float = DEFAULT_CARBON_PRICE,
    risk_rate: float | None = None,
    baseline_total: float | None = None,
) -> EnhancedMetrics:
    """
    Derive VERs and revenue from a totals time series.

    The gross total is the sum of the pre-baseline annual values. When ``baseline_total`` is
    omitted the baseline already removed by the aggregator is used, so the baseline is never
    subtracted twice.
    """

    if not total_results:
        raise InvalidInputError(FieldIssue("total_results", "no results available"))
    gross_total = sum(result.gross_annual_co2e for result in total_results)
    if baseline_total is None:
        baseline_total = gross_total - total_results[-1].cumulative_net_co2e
    if risk_rate is None:
        risk_rate = default_risk_rate()
    return compute_carbon_credits(
        gross_total=gross_total,
        baseline_total=baseline_total,
        dead_attribute_pct=dead_attribute_pct,
        risk_rate=risk_rate,
        carbon_price_per_tonne=carbon_price_per_tonne,
    )


__all__ = [
    "EnhancedMetrics",
    "DEFAULT_RISK_FACTORS",
    "DEFAULT_CARBON_PRICE",
    "compute_carbon_credits",
    "compute_enhanced",
    "default_risk_rate",
    "resolve_credit_risk_rate",
]
