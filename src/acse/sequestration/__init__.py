"""Sequestration engine: per-species runs, aggregation and the result handle."""

from .aggregate import (
    apportion_area,
    calculate_sequestration,
    calculate_sequestration_multi_species,
    calculate_single_species,
)
from .engine import run_calculation
from .results import CalculationResult, ProjectSummary, summarise
from .species import (
    SpeciesInputs,
    calculate_species_sequestration,
    merge_species_inputs,
    run_species,
)

__all__ = [
    "SpeciesInputs",
    "merge_species_inputs",
    "run_species",
    "calculate_species_sequestration",
    "apportion_area",
    "calculate_sequestration",
    "calculate_single_species",
    "calculate_sequestration_multi_species",
    "run_calculation",
    "CalculationResult",
    "ProjectSummary",
    "summarise",
]
