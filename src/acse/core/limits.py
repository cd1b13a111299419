"""Documented ranges and defaults for project and species inputs."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldRange:
    """
    Accepted range and fallback for a numeric input.

    Attributes
    ----------
    default:
        Value substituted when the input is missing or out of range (``None`` = no default).
    minimum, maximum:
        Bounds (``None`` = unbounded). ``minimum`` is exclusive when ``min_inclusive`` is false.
    unit:
        Unit label used in error messages.
    """

    default: float | None
    minimum: float | None = None
    maximum: float | None = None
    unit: str = ""
    min_inclusive: bool = True

    def contains(self, value: float) -> bool:
        if not math.isfinite(value):
            return False
        if self.minimum is not None:
            if self.min_inclusive and value < self.minimum:
                return False
            if not self.min_inclusive and value <= self.minimum:
                return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    def describe(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        if self.minimum is not None and self.maximum is not None:
            left = "[" if self.min_inclusive else "("
            return f"must be within {left}{self.minimum}, {self.maximum}]{unit}"
        if self.minimum is not None:
            op = ">=" if self.min_inclusive else ">"
            return f"must be {op} {self.minimum}{unit}"
        if self.maximum is not None:
            return f"must be <= {self.maximum}{unit}"
        return "must be a finite number"


PROJECT_RANGES: dict[str, FieldRange] = {
    "project_area": FieldRange(10.0, 0.0, 1_000_000.0, "ha", min_inclusive=False),
    "planting_density": FieldRange(1600.0, 100.0, 10_000.0, "trees/ha"),
    "project_duration": FieldRange(10, 4, 50, "years"),
    "baseline_rate_per_ha": FieldRange(0.0, 0.0, None, "tCO2e/ha/yr"),
    "survival_rate": FieldRange(0.85, 0.5, 1.0),
    "wood_density": FieldRange(0.5, 0.1, 1.5, "t/m³"),
    "bef": FieldRange(1.5, 1.0, 3.0),
    "rsr": FieldRange(0.25, 0.1, 0.8),
    "carbon_fraction": FieldRange(0.47, 0.4, 0.6),
    "project_cost": FieldRange(None, 0.0, None),
    "dead_attribute_pct": FieldRange(0.0, 0.0, 100.0, "%"),
    "carbon_price_per_tonne": FieldRange(5.0, 0.0, None),
    "risk_rate_override": FieldRange(None, 0.0, 1.0),
    "initial_green_cover": FieldRange(0.0, 0.0, None, "ha"),
    "total_geographical_area": FieldRange(None, 0.0, None, "ha", min_inclusive=False),
}

SPECIES_RANGES: dict[str, FieldRange] = {
    "number_of_trees": FieldRange(None, 0.0, None),
    "growth_rate": FieldRange(None, 0.0, None, "m³/ha/yr", min_inclusive=False),
    "age_at_peak_mai": FieldRange(None, 1.0, 50.0, "years"),
    "survival_rate_pct": FieldRange(None, 50.0, 100.0, "%"),
    "risk_rate_pct": FieldRange(None, 0.0, 100.0, "%"),
    "dead_attribute_pct": FieldRange(None, 0.0, 100.0, "%"),
    "initial_green_cover": FieldRange(None, 0.0, None, "ha"),
    "total_geographical_area": FieldRange(None, 0.0, None, "ha", min_inclusive=False),
}

CO2_PER_C = 44.0 / 12.0


__all__ = [
    "FieldRange",
    "PROJECT_RANGES",
    "SPECIES_RANGES",
    "CO2_PER_C",
]
