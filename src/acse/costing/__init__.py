"""Costing helper exports."""

from .forest import (
    COST_BREAKDOWN_SHARES,
    NOT_APPLICABLE,
    CostAnalysis,
    calculate_forest_cost_analysis,
)

__all__ = [
    "CostAnalysis",
    "calculate_forest_cost_analysis",
    "COST_BREAKDOWN_SHARES",
    "NOT_APPLICABLE",
]
