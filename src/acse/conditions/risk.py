"""Bounded project risk rate (share of net carbon withheld against loss events)."""

from __future__ import annotations

from acse.core.types import ProjectType, Rainfall, SiteQuality, SoilType

from .modifiers import clip

MIN_RISK_RATE = 0.05
MAX_RISK_RATE = 0.25

BASE_RISK_RATES: dict[ProjectType, float] = {
    ProjectType.FOREST: 0.10,
    ProjectType.WATER: 0.05,
}
DEFAULT_BASE_RISK_RATE = 0.10

POOR_SITE_PENALTY = 0.05
GOOD_SITE_BONUS = 0.03
LOW_RAINFALL_PENALTY = 0.03
DEGRADED_SOIL_PENALTY = 0.04
DIVERSITY_BONUS_PER_SPECIES = 0.01
MAX_DIVERSITY_BONUS = 0.05
DROUGHT_TOLERANCE_BONUS = 0.02


def clip_risk_rate(rate: float) -> float:
    """Clip ``rate`` to ``[0.05, 0.25]``."""

    return clip(rate, MIN_RISK_RATE, MAX_RISK_RATE)


def calculate_risk_rate(
    project_type: ProjectType | str = ProjectType.FOREST,
    *,
    site_quality: SiteQuality | str = SiteQuality.MEDIUM,
    avg_rainfall: Rainfall | str = Rainfall.MEDIUM,
    soil_type: SoilType | str = SoilType.LOAM,
    species_count: int = 1,
    drought_tolerant: bool = False,
) -> float:
    """
    Return the project risk rate.

    Forest projects start at 0.10 and adjust additively: poor site +0.05, good site -0.03, low
    rainfall +0.03, degraded soil +0.04, species diversity ``-min(0.05, n × 0.01)`` and
    drought-tolerant species -0.02. Water projects use a flat 0.05 base; unknown types 0.10.
    The result is clipped to ``[0.05, 0.25]``.
    """

    try:
        kind = ProjectType(project_type)
    except ValueError:
        kind = None
    rate = BASE_RISK_RATES.get(kind, DEFAULT_BASE_RISK_RATE)

    if kind is ProjectType.FOREST:
        quality = SiteQuality(site_quality)
        if quality is SiteQuality.POOR:
            rate += POOR_SITE_PENALTY
        elif quality is SiteQuality.GOOD:
            rate -= GOOD_SITE_BONUS
        if Rainfall(avg_rainfall) is Rainfall.LOW:
            rate += LOW_RAINFALL_PENALTY
        if SoilType(soil_type) is SoilType.DEGRADED:
            rate += DEGRADED_SOIL_PENALTY
        rate -= min(MAX_DIVERSITY_BONUS, max(species_count, 0) * DIVERSITY_BONUS_PER_SPECIES)
        if drought_tolerant:
            rate -= DROUGHT_TOLERANCE_BONUS

    return clip_risk_rate(rate)


__all__ = ["calculate_risk_rate", "clip_risk_rate", "MIN_RISK_RATE", "MAX_RISK_RATE"]
