"""Afforestation carbon sequestration engine."""

from acse.core.errors import (
    ACSEValueError,
    EmptyDatasetError,
    FieldIssue,
    InvalidInputError,
    NonPositiveSequestrationWarning,
    SinkFailureWarning,
)
from acse.core.types import AnnualResult, SpeciesResult
from acse.costing import CostAnalysis, calculate_forest_cost_analysis
from acse.credits import (
    EnhancedMetrics,
    GreenCoverImpact,
    compute_carbon_credits,
    compute_enhanced,
    compute_green_cover,
)
from acse.project.contract import ProjectInputs, SpeciesRecord
from acse.sequestration import (
    CalculationResult,
    calculate_sequestration,
    calculate_sequestration_multi_species,
    run_calculation,
)
from acse.validation import validate_project_inputs, validate_range, validate_species_records

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProjectInputs",
    "SpeciesRecord",
    "AnnualResult",
    "SpeciesResult",
    "CalculationResult",
    "CostAnalysis",
    "EnhancedMetrics",
    "GreenCoverImpact",
    "calculate_sequestration",
    "calculate_sequestration_multi_species",
    "run_calculation",
    "calculate_forest_cost_analysis",
    "compute_carbon_credits",
    "compute_enhanced",
    "compute_green_cover",
    "validate_range",
    "validate_project_inputs",
    "validate_species_records",
    "ACSEValueError",
    "InvalidInputError",
    "EmptyDatasetError",
    "FieldIssue",
    "NonPositiveSequestrationWarning",
    "SinkFailureWarning",
]
