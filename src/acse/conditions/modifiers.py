"""Site and climate growth modifiers with species interaction."""

from __future__ import annotations

from dataclasses import dataclass

from acse.core.types import Rainfall, SiteQuality, SoilType, SpeciesTraits

MIN_GROWTH_MODIFIER = 0.1
MAX_GROWTH_MODIFIER = 1.5

SITE_QUALITY_MODIFIERS: dict[SiteQuality, float] = {
    SiteQuality.GOOD: 1.2,
    SiteQuality.MEDIUM: 1.0,
    SiteQuality.POOR: 0.7,
}
RAINFALL_MODIFIERS: dict[Rainfall, float] = {
    Rainfall.HIGH: 1.05,
    Rainfall.MEDIUM: 1.0,
    Rainfall.LOW: 0.8,
}
SOIL_MODIFIERS: dict[SoilType, float] = {
    SoilType.LOAM: 1.0,
    SoilType.MEDIUM: 1.0,
    SoilType.SANDY: 0.9,
    SoilType.CLAY: 0.9,
    SoilType.DEGRADED: 0.65,
}

DROUGHT_TOLERANT_LOW_RAINFALL = 0.9
WATER_SENSITIVE_HIGH_RAINFALL = 0.95
SANDY_PREFERRING_SANDY_SOIL = 1.0
WATER_SENSITIVE_CLAY_SOIL = 0.8


@dataclass(frozen=True)
class SiteModifiers:
    """Per-axis modifiers and their clipped product."""

    quality: float
    rainfall: float
    soil: float
    growth_modifier: float


def clip(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def get_site_modifiers(
    site_quality: SiteQuality | str,
    avg_rainfall: Rainfall | str,
    soil_type: SoilType | str,
    traits: SpeciesTraits | None = None,
) -> SiteModifiers:
    """
    Return the multiplicative growth modifier for a site and species.

    Parameters
    ----------
    site_quality, avg_rainfall, soil_type:
        Site descriptors (enum members or their string values, case-insensitive).
    traits:
        Optional species traits. Drought-tolerant species are penalised less on low rainfall,
        water-sensitive species more on high rainfall and clay, and sandy-preferring species are
        not penalised on sandy soil.

    Returns
    -------
    SiteModifiers
        Base/adjusted per-axis values plus ``growth_modifier`` clipped to ``[0.1, 1.5]``.
    """

    quality_key = SiteQuality(site_quality)
    rainfall_key = Rainfall(avg_rainfall)
    soil_key = SoilType(soil_type)

    quality = SITE_QUALITY_MODIFIERS[quality_key]
    rainfall = RAINFALL_MODIFIERS[rainfall_key]
    soil = SOIL_MODIFIERS[soil_key]

    if traits is not None:
        if rainfall_key is Rainfall.LOW and traits.drought_tolerant:
            rainfall = DROUGHT_TOLERANT_LOW_RAINFALL
        if rainfall_key is Rainfall.HIGH and traits.water_sensitive:
            rainfall = WATER_SENSITIVE_HIGH_RAINFALL
        if soil_key is SoilType.SANDY and traits.prefers_sandy:
            soil = SANDY_PREFERRING_SANDY_SOIL
        if soil_key is SoilType.CLAY and traits.water_sensitive:
            soil = WATER_SENSITIVE_CLAY_SOIL

    combined = quality * rainfall * soil
    return SiteModifiers(
        quality=quality,
        rainfall=rainfall,
        soil=soil,
        growth_modifier=clip(combined, MIN_GROWTH_MODIFIER, MAX_GROWTH_MODIFIER),
    )


__all__ = [
    "SiteModifiers",
    "get_site_modifiers",
    "clip",
    "MIN_GROWTH_MODIFIER",
    "MAX_GROWTH_MODIFIER",
]
