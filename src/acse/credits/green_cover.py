"""Green cover impact of a planting project."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

from acse.core.errors import ClampedValueWarning, FieldIssue, InvalidInputError

FALLBACK_SURVIVAL_RATE = 0.9


@dataclass(frozen=True)
class GreenCoverImpact:
    """Vegetated area before/after planting (ha and % of the reference area)."""

    initial_green_cover: float
    absolute_increase: float
    final_green_cover: float
    total_area: float
    initial_pct: float
    final_pct: float

    @property
    def percentage_point_increase(self) -> float:
        return self.final_pct - self.initial_pct


def compute_green_cover(
    *,
    project_area: float,
    survival_rate: float,
    initial_green_cover: float = 0.0,
    total_geographical_area: float | None = None,
) -> GreenCoverImpact:
    """
    Return the green cover added by the surviving share of the project area.

    Percentages use ``total_geographical_area`` and fall back to ``project_area`` when it is
    missing or non-positive. A survival rate outside ``[0, 1]`` is replaced by 0.9.
    """

    area = float(project_area)
    initial = float(initial_green_cover or 0.0)
    if not math.isfinite(area) or area < 0:
        raise InvalidInputError(FieldIssue("project_area", "must be a non-negative number"))
    if not math.isfinite(initial) or initial < 0:
        raise InvalidInputError(FieldIssue("initial_green_cover", "must be a non-negative number"))

    survival = float(survival_rate)
    if not math.isfinite(survival) or survival < 0 or survival > 1:
        warnings.warn(
            f"Invalid survival rate {survival_rate!r} for green cover; using {FALLBACK_SURVIVAL_RATE}",
            ClampedValueWarning,
            stacklevel=2,
        )
        survival = FALLBACK_SURVIVAL_RATE

    total_area = total_geographical_area
    if total_area is None or not math.isfinite(total_area) or total_area <= 0:
        total_area = area

    added = area * survival
    final = initial + added
    initial_pct = initial / total_area * 100.0 if total_area > 0 else 0.0
    final_pct = final / total_area * 100.0 if total_area > 0 else 0.0
    return GreenCoverImpact(
        initial_green_cover=initial,
        absolute_increase=added,
        final_green_cover=final,
        total_area=float(total_area),
        initial_pct=initial_pct,
        final_pct=final_pct,
    )


__all__ = ["GreenCoverImpact", "compute_green_cover", "FALLBACK_SURVIVAL_RATE"]
