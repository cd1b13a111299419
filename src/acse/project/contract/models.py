"""Pydantic models describing afforestation project inputs."""

from __future__ import annotations

import math

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from acse.core.limits import PROJECT_RANGES, SPECIES_RANGES
from acse.core.types import ProjectType, Rainfall, SiteQuality, SoilType
from acse.growth.species import BUILTIN_SPECIES, normalize_species_key


def _blank_to_none(value: object) -> object:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class ProjectInputs(BaseModel):
    """Caller-supplied description of one afforestation project.

    Attributes
    ----------
    project_area:
        Planted area (ha), > 0.
    planting_density:
        Trees planted per hectare (>= 100).
    project_duration:
        Project length in whole years (4-50).
    baseline_rate_per_ha:
        Sequestration that would occur without the project (tCO2e/ha/yr), subtracted once at
        the totals level.
    survival_rate:
        Surviving fraction of planted trees (0.5-1.0). Percentages (e.g. ``85``) are accepted
        and converted to fractions.
    wood_density / bef / rsr / carbon_fraction:
        Default biomass conversion factors used when a species record lacks its own.
    site_quality / avg_rainfall / soil_type:
        Site descriptors feeding the growth modifier and risk rate.
    species_key / species_name:
        Built-in species identifier (a key of ``BUILTIN_SPECIES``) and/or free-text name for the
        single-species path.
    project_cost:
        Optional total project cost (caller's monetary unit) for the cost report.
    dead_attribute_pct / carbon_price_per_tonne / risk_rate_override:
        Carbon credit knobs (non-additionality %, price per VER, explicit risk rate).
    initial_green_cover / total_geographical_area:
        Green cover inputs (ha); the geographical area falls back to the project area.
    project_type:
        ``forest`` (default) or ``water``; selects the base risk rate.
    apply_site_modifiers:
        Multiply the volume increment by the site growth modifier.

    Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_area: float = 10.0
    planting_density: float = 1600.0
    project_duration: int = 10
    baseline_rate_per_ha: float = 0.0
    survival_rate: float = 0.85
    wood_density: float = 0.5
    bef: float = 1.5
    rsr: float = 0.25
    carbon_fraction: float = 0.47
    site_quality: SiteQuality = SiteQuality.MEDIUM
    avg_rainfall: Rainfall = Rainfall.MEDIUM
    soil_type: SoilType = SoilType.LOAM
    species_key: str | None = None
    species_name: str | None = None
    project_cost: float | None = None
    dead_attribute_pct: float = 0.0
    carbon_price_per_tonne: float = 5.0
    risk_rate_override: float | None = None
    initial_green_cover: float = 0.0
    total_geographical_area: float | None = None
    project_type: ProjectType = ProjectType.FOREST
    apply_site_modifiers: bool = True

    @field_validator("species_key", "species_name", "project_cost", "risk_rate_override",
                     "total_geographical_area", mode="before")
    @classmethod
    def _optional_blank(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("species_key")
    @classmethod
    def _normalise_key(cls, value: str | None) -> str | None:
        key = normalize_species_key(value)
        if key is not None and key not in BUILTIN_SPECIES:
            raise ValueError(f"unknown species key; expected one of: {', '.join(BUILTIN_SPECIES)}")
        return key

    @field_validator("survival_rate", mode="before")
    @classmethod
    def _percent_to_fraction(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and 1.0 < value <= 100.0:
            return value / 100.0
        return value

    @field_validator(
        "project_area",
        "planting_density",
        "project_duration",
        "baseline_rate_per_ha",
        "survival_rate",
        "wood_density",
        "bef",
        "rsr",
        "carbon_fraction",
        "project_cost",
        "dead_attribute_pct",
        "carbon_price_per_tonne",
        "risk_rate_override",
        "initial_green_cover",
        "total_geographical_area",
    )
    @classmethod
    def _within_documented_range(cls, value: float | None, info: ValidationInfo) -> float | None:
        if value is None:
            return value
        limits = PROJECT_RANGES[info.field_name]
        if not limits.contains(float(value)):
            raise ValueError(limits.describe())
        return value

    @property
    def total_trees(self) -> float:
        return self.planting_density * self.project_area

    @property
    def annual_baseline_co2e(self) -> float:
        return self.baseline_rate_per_ha * self.project_area

    @property
    def display_name(self) -> str:
        return self.species_name or self.species_key or "Generic"


class SpeciesRecord(BaseModel):
    """One species row of a multi-species project.

    Field aliases are the column names used by CSV/Excel species sheets. Unknown columns are
    ignored, blank cells become ``None`` and every ``None`` falls back to the project value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    species_name: str = Field("Unknown", alias="Species Name")
    number_of_trees: float | None = Field(None, alias="Number of Trees")
    growth_rate: float | None = Field(None, alias="Growth Rate (m³/ha/yr)")
    wood_density: float | None = Field(None, alias="Wood Density (tdm/m³)")
    bef: float | None = Field(None, alias="BEF")
    rsr: float | None = Field(None, alias="Root-Shoot Ratio")
    carbon_fraction: float | None = Field(None, alias="Carbon Fraction")
    survival_rate_pct: float | None = Field(None, alias="Survival Rate (%)")
    age_at_peak_mai: float | None = Field(None, alias="Age at Peak MAI")
    site_quality: SiteQuality | None = Field(None, alias="Site Quality")
    avg_rainfall: Rainfall | None = Field(None, alias="Average Rainfall")
    soil_type: SoilType | None = Field(None, alias="Soil Type")
    drought_tolerance: str | None = Field(None, alias="Drought Tolerance")
    water_sensitivity: str | None = Field(None, alias="Water Sensitivity")
    soil_preference: str | None = Field(None, alias="Soil Preference")
    risk_rate_pct: float | None = Field(None, alias="Risk Rate (%)")
    initial_green_cover: float | None = Field(None, alias="Initial Green Cover (ha)")
    total_geographical_area: float | None = Field(None, alias="Total Geographical Area (ha)")
    dead_attribute_pct: float | None = Field(None, alias="Dead Attribute (%)")

    @model_validator(mode="before")
    @classmethod
    def _blank_cells(cls, data: object) -> object:
        if isinstance(data, dict):
            return {key: _blank_to_none(value) for key, value in data.items()}
        return data

    @field_validator("species_name", mode="before")
    @classmethod
    def _default_name(cls, value: object) -> object:
        return "Unknown" if value is None else str(value)

    @field_validator("number_of_trees")
    @classmethod
    def _trees_non_negative(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("Number of Trees must be non-negative")
        return value

    @field_validator("risk_rate_pct", "dead_attribute_pct", "initial_green_cover", "total_geographical_area")
    @classmethod
    def _documented_range(cls, value: float | None, info: ValidationInfo) -> float | None:
        if value is None:
            return value
        limits = SPECIES_RANGES[info.field_name]
        if not limits.contains(value):
            raise ValueError(limits.describe())
        return value

    @property
    def risk_rate(self) -> float | None:
        return None if self.risk_rate_pct is None else self.risk_rate_pct / 100.0

    def to_row(self) -> dict[str, object]:
        """Return the record keyed by its external column names."""

        return self.model_dump(by_alias=True, mode="json")


__all__ = ["ProjectInputs", "SpeciesRecord"]
