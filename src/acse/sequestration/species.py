"""Per-species growth → biomass → carbon → CO2e conversion."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

from acse.conditions.modifiers import get_site_modifiers
from acse.conditions.risk import calculate_risk_rate, clip_risk_rate
from acse.core.errors import ClampedValueWarning, FieldIssue, InvalidInputError
from acse.core.limits import CO2_PER_C, PROJECT_RANGES, SPECIES_RANGES
from acse.core.types import (
    AnnualResult,
    ProjectType,
    Rainfall,
    SiteQuality,
    SoilType,
    SpeciesResult,
)
from acse.growth.curves import annual_increment
from acse.growth.species import infer_species_traits, resolve_growth_params
from acse.project.contract.models import ProjectInputs, SpeciesRecord
from acse.validation.ranges import clamp_field, validate_range


@dataclass(frozen=True)
class SpeciesInputs:
    """
    Fully merged inputs for one species run.

    Attributes
    ----------
    species_name, species_key:
        Display name and optional built-in identifier (drive growth/trait inference).
    species_area:
        Hectares apportioned to this species.
    number_of_trees:
        Declared trees for reporting (``None`` = derive from density × area).
    planting_density, survival_rate:
        Trees/ha and surviving fraction.
    wood_density, bef, rsr, carbon_fraction:
        Biomass conversion factors.
    growth_rate, age_at_peak_mai:
        Explicit growth anchors (``None`` = resolve from key/name/fallback).
    drought_tolerance, water_sensitivity, soil_preference:
        Raw trait columns (``High``/``Sandy``/``Loam`` etc.).
    risk_rate:
        Explicit species risk rate (fraction) taking precedence over ``risk_rate_override``.
    species_count:
        Number of species in the project (diversity bonus).
    """

    species_name: str
    project_duration: int
    species_area: float
    planting_density: float = 1600.0
    survival_rate: float = 0.85
    wood_density: float = 0.5
    bef: float = 1.5
    rsr: float = 0.25
    carbon_fraction: float = 0.47
    site_quality: SiteQuality = SiteQuality.MEDIUM
    avg_rainfall: Rainfall = Rainfall.MEDIUM
    soil_type: SoilType = SoilType.LOAM
    species_key: str | None = None
    number_of_trees: float | None = None
    growth_rate: float | None = None
    age_at_peak_mai: float | None = None
    drought_tolerance: str | None = None
    water_sensitivity: str | None = None
    soil_preference: str | None = None
    risk_rate: float | None = None
    risk_rate_override: float | None = None
    species_count: int = 1
    project_type: ProjectType = ProjectType.FOREST
    apply_site_modifiers: bool = True


def _species_value(
    record: SpeciesRecord,
    value: float | None,
    fallback: float,
    name: str,
) -> float:
    if value is None:
        return fallback
    limits = PROJECT_RANGES[name]
    accepted = validate_range(
        value, None, limits.minimum, limits.maximum, min_inclusive=limits.min_inclusive
    )
    if accepted is None:
        warnings.warn(
            f"Species {record.species_name}: {name}={value} {limits.describe()}; using {fallback}",
            ClampedValueWarning,
            stacklevel=3,
        )
        return fallback
    return accepted


def _optional_species_value(record: SpeciesRecord, value: float | None, name: str) -> float | None:
    if value is None:
        return None
    limits = SPECIES_RANGES[name]
    accepted = validate_range(
        value, None, limits.minimum, limits.maximum, min_inclusive=limits.min_inclusive
    )
    if accepted is None:
        warnings.warn(
            f"Species {record.species_name}: {name}={value} {limits.describe()}; ignoring",
            ClampedValueWarning,
            stacklevel=3,
        )
    return accepted


def merge_species_inputs(
    inputs: ProjectInputs,
    record: SpeciesRecord,
    *,
    area_share: float,
    species_count: int,
) -> SpeciesInputs:
    """Overlay a species record on the project inputs.

    Species fields take precedence; ``None`` fields fall back to the project value. Out of
    range species values are replaced by the project value with a ``ClampedValueWarning``.
    """

    survival_pct = _optional_species_value(record, record.survival_rate_pct, "survival_rate_pct")
    return SpeciesInputs(
        species_name=record.species_name,
        species_key=None,
        project_duration=inputs.project_duration,
        species_area=area_share,
        number_of_trees=record.number_of_trees,
        planting_density=inputs.planting_density,
        survival_rate=inputs.survival_rate if survival_pct is None else survival_pct / 100.0,
        wood_density=_species_value(record, record.wood_density, inputs.wood_density, "wood_density"),
        bef=_species_value(record, record.bef, inputs.bef, "bef"),
        rsr=_species_value(record, record.rsr, inputs.rsr, "rsr"),
        carbon_fraction=_species_value(
            record, record.carbon_fraction, inputs.carbon_fraction, "carbon_fraction"
        ),
        site_quality=inputs.site_quality if record.site_quality is None else record.site_quality,
        avg_rainfall=inputs.avg_rainfall if record.avg_rainfall is None else record.avg_rainfall,
        soil_type=inputs.soil_type if record.soil_type is None else record.soil_type,
        growth_rate=_optional_species_value(record, record.growth_rate, "growth_rate"),
        age_at_peak_mai=_optional_species_value(record, record.age_at_peak_mai, "age_at_peak_mai"),
        drought_tolerance=record.drought_tolerance,
        water_sensitivity=record.water_sensitivity,
        soil_preference=record.soil_preference,
        risk_rate=record.risk_rate,
        risk_rate_override=inputs.risk_rate_override,
        species_count=species_count,
        project_type=inputs.project_type,
        apply_site_modifiers=inputs.apply_site_modifiers,
    )


def _check_duration(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(FieldIssue("project_duration", "must be a whole number of years"))
    if not math.isfinite(value) or value <= 0 or int(value) != value:
        raise InvalidInputError(FieldIssue("project_duration", "must be a positive whole number"))
    return int(value)


def run_species(species: SpeciesInputs) -> SpeciesResult:
    """
    Run the growth-to-CO2e pipeline for one species.

    Numeric inputs are clamped to their documented ranges (silently substituting defaults),
    the growth curve is scaled by the site modifier, biomass is expanded with BEF and RSR,
    converted to carbon for the surviving trees, reduced by the risk rate and expressed as
    CO2e (× 44/12). The cumulative is a left-to-right sum of the annual values.

    Raises
    ------
    InvalidInputError
        If ``project_duration`` is not a positive whole number or ``species_area`` is negative.
    """

    duration = _check_duration(species.project_duration)
    if not math.isfinite(species.species_area) or species.species_area < 0:
        raise InvalidInputError(FieldIssue("species_area", "must be a non-negative number"))

    density = clamp_field("planting_density", species.planting_density)
    survival = clamp_field("survival_rate", species.survival_rate)
    wood_density = clamp_field("wood_density", species.wood_density)
    bef = clamp_field("bef", species.bef)
    rsr = clamp_field("rsr", species.rsr)
    carbon_fraction = clamp_field("carbon_fraction", species.carbon_fraction)

    params = resolve_growth_params(
        species_key=species.species_key,
        species_name=species.species_name,
        peak_mai=species.growth_rate,
        age_at_peak_mai=species.age_at_peak_mai,
    )
    traits = infer_species_traits(
        species.species_name,
        species_key=species.species_key,
        drought_tolerance=species.drought_tolerance,
        water_sensitivity=species.water_sensitivity,
        soil_preference=species.soil_preference,
    )
    modifiers = get_site_modifiers(
        species.site_quality, species.avg_rainfall, species.soil_type, traits
    )
    growth_modifier = modifiers.growth_modifier if species.apply_site_modifiers else 1.0

    effective_trees = int(round(density * species.species_area * survival))

    if species.risk_rate is not None:
        risk_rate = clip_risk_rate(species.risk_rate)
    elif species.risk_rate_override is not None:
        risk_rate = clip_risk_rate(species.risk_rate_override)
    else:
        risk_rate = calculate_risk_rate(
            species.project_type,
            site_quality=species.site_quality,
            avg_rainfall=species.avg_rainfall,
            soil_type=species.soil_type,
            species_count=species.species_count,
            drought_tolerant=traits.drought_tolerant,
        )

    results: list[AnnualResult] = []
    cumulative = 0.0
    for year in range(1, duration + 1):
        volume = annual_increment(params, year, duration) * growth_modifier
        stem_biomass = volume * wood_density
        agb = stem_biomass * bef
        bgb = agb * rsr
        biomass = agb + bgb
        carbon_stock = biomass * carbon_fraction * effective_trees
        net_carbon = carbon_stock * (1.0 - risk_rate)
        annual_co2e = net_carbon * CO2_PER_C
        cumulative += annual_co2e
        results.append(
            AnnualResult(
                year=year,
                age=year,
                volume_increment=volume,
                gross_annual_co2e=annual_co2e,
                net_annual_co2e=annual_co2e,
                cumulative_net_co2e=cumulative,
            )
        )

    declared_trees = species.number_of_trees
    if declared_trees is None:
        declared_trees = float(round(density * species.species_area))

    return SpeciesResult(
        species_name=species.species_name,
        number_of_trees=declared_trees,
        area_share=species.species_area,
        effective_trees=effective_trees,
        risk_rate=risk_rate,
        growth_modifier=growth_modifier,
        growth_params=params,
        results=tuple(results),
    )


def calculate_species_sequestration(species: SpeciesInputs) -> list[AnnualResult]:
    """Return the annual CO2e records for one species (see :func:`run_species`)."""

    return list(run_species(species).results)


__all__ = [
    "SpeciesInputs",
    "merge_species_inputs",
    "run_species",
    "calculate_species_sequestration",
]
