"""Site, climate and risk adjustments."""

from .modifiers import (
    MAX_GROWTH_MODIFIER,
    MIN_GROWTH_MODIFIER,
    SiteModifiers,
    get_site_modifiers,
)
from .risk import MAX_RISK_RATE, MIN_RISK_RATE, calculate_risk_rate, clip_risk_rate

__all__ = [
    "SiteModifiers",
    "get_site_modifiers",
    "MIN_GROWTH_MODIFIER",
    "MAX_GROWTH_MODIFIER",
    "calculate_risk_rate",
    "clip_risk_rate",
    "MIN_RISK_RATE",
    "MAX_RISK_RATE",
]
