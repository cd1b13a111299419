"""Carbon credit and green cover metrics."""

from .green_cover import GreenCoverImpact, compute_green_cover
from .vers import (
    DEFAULT_CARBON_PRICE,
    DEFAULT_RISK_FACTORS,
    EnhancedMetrics,
    compute_carbon_credits,
    compute_enhanced,
    default_risk_rate,
    resolve_credit_risk_rate,
)

__all__ = [
    "EnhancedMetrics",
    "compute_carbon_credits",
    "compute_enhanced",
    "default_risk_rate",
    "resolve_credit_risk_rate",
    "DEFAULT_RISK_FACTORS",
    "DEFAULT_CARBON_PRICE",
    "GreenCoverImpact",
    "compute_green_cover",
]
