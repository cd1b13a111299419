"""Domain value types shared by the engine and the I/O adapters."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum


class _CaseInsensitiveEnum(str, Enum):
    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value.lower() == key or member.name.lower() == key:
                    return member
        return None


class SiteQuality(_CaseInsensitiveEnum):
    GOOD = "Good"
    MEDIUM = "Medium"
    POOR = "Poor"


class Rainfall(_CaseInsensitiveEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SoilType(_CaseInsensitiveEnum):
    LOAM = "Loam"
    MEDIUM = "Medium"  # legacy form value, treated like loam
    SANDY = "Sandy"
    CLAY = "Clay"
    DEGRADED = "Degraded"


class ProjectType(_CaseInsensitiveEnum):
    FOREST = "forest"
    WATER = "water"


@dataclass(frozen=True)
class SpeciesGrowthParams:
    """Rise-decline growth curve anchors.

    Attributes
    ----------
    peak_mai:
        Peak mean annual increment (m³/ha/yr).
    age_at_peak_mai:
        Stand age (years) where the increment peaks.
    source:
        How the anchors were resolved (``record``, ``builtin``, ``name``, ``fallback``).
    """

    peak_mai: float
    age_at_peak_mai: float
    source: str = "fallback"


@dataclass(frozen=True)
class SpeciesTraits:
    """Species traits that interact with site conditions."""

    name: str = ""
    drought_tolerant: bool = False
    water_sensitive: bool = False
    prefers_sandy: bool = False
    prefers_loam: bool = False


@dataclass(frozen=True)
class AnnualResult:
    """One year of the sequestration time series (raw floats, tonnes CO2e)."""

    year: int
    age: int
    volume_increment: float
    gross_annual_co2e: float
    net_annual_co2e: float
    cumulative_net_co2e: float

    def to_dict(self) -> dict[str, float | int]:
        return asdict(self)

    def formatted(self, digits: int = 2) -> dict[str, str | int]:
        """Return display values rounded to ``digits`` decimals."""

        return {
            "year": self.year,
            "age": self.age,
            "volume_increment": f"{self.volume_increment:.{digits}f}",
            "gross_annual_co2e": f"{self.gross_annual_co2e:.{digits}f}",
            "net_annual_co2e": f"{self.net_annual_co2e:.{digits}f}",
            "cumulative_net_co2e": f"{self.cumulative_net_co2e:.{digits}f}",
        }


@dataclass(frozen=True)
class SpeciesResult:
    """Per-species slice of a project calculation.

    Attributes
    ----------
    species_name:
        Display name taken from the species record.
    number_of_trees:
        Trees declared on the record (``density × area_share`` when the record omitted it).
    area_share:
        Hectares apportioned to the species.
    effective_trees:
        Surviving trees used by the carbon stock conversion.
    risk_rate:
        Effective risk rate after clipping.
    growth_modifier:
        Combined site modifier applied to the volume increment.
    growth_params:
        Resolved growth curve anchors.
    results:
        Annual records for years ``1..N``.
    """

    species_name: str
    number_of_trees: float
    area_share: float
    effective_trees: int
    risk_rate: float
    growth_modifier: float
    growth_params: SpeciesGrowthParams
    results: tuple[AnnualResult, ...] = field(default_factory=tuple)

    @property
    def total_net_co2e(self) -> float:
        return self.results[-1].cumulative_net_co2e if self.results else 0.0


__all__ = [
    "SiteQuality",
    "Rainfall",
    "SoilType",
    "ProjectType",
    "SpeciesGrowthParams",
    "SpeciesTraits",
    "AnnualResult",
    "SpeciesResult",
]
