"""Core utilities shared across ACSE modules."""

from .errors import (
    ACSEValueError,
    ClampedValueWarning,
    EmptyDatasetError,
    FieldIssue,
    InvalidInputError,
    NonPositiveSequestrationWarning,
    SinkFailureWarning,
)
from .types import (
    AnnualResult,
    ProjectType,
    Rainfall,
    SiteQuality,
    SoilType,
    SpeciesGrowthParams,
    SpeciesResult,
    SpeciesTraits,
)

__all__ = [
    "ACSEValueError",
    "InvalidInputError",
    "EmptyDatasetError",
    "FieldIssue",
    "NonPositiveSequestrationWarning",
    "SinkFailureWarning",
    "ClampedValueWarning",
    "AnnualResult",
    "SpeciesResult",
    "SpeciesGrowthParams",
    "SpeciesTraits",
    "SiteQuality",
    "Rainfall",
    "SoilType",
    "ProjectType",
]
