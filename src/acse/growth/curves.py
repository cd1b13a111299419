"""Rise-to-peak then linear-decline periodic annual increment curve."""

from __future__ import annotations

from acse.core.types import SpeciesGrowthParams

PEAK_PAI_MULTIPLIER = 1.8
END_PAI_MULTIPLIER = 0.1
RISE_EXPONENT = 1.5


def annual_increment(params: SpeciesGrowthParams, age: float, total_duration: float) -> float:
    """Return the periodic annual increment (m³/ha/yr) at ``age``.

    The curve rises as ``peak_pai × (age / age_at_peak)^1.5`` up to the age of peak MAI, then
    declines linearly towards ``end_pai`` over the remainder of the project and never drops
    below it.

    Parameters
    ----------
    params:
        Growth anchors (``peak_mai`` in m³/ha/yr and ``age_at_peak_mai`` in years).
    age:
        Stand age in years. Non-positive ages yield ``0``.
    total_duration:
        Project duration (years) used to size the decline segment.
    """

    if params.age_at_peak_mai <= 0:
        raise ValueError("age_at_peak_mai must be > 0")
    if age <= 0:
        return 0.0
    peak_pai = PEAK_PAI_MULTIPLIER * params.peak_mai
    end_pai = END_PAI_MULTIPLIER * params.peak_mai
    age_at_peak = params.age_at_peak_mai
    if age <= age_at_peak:
        pai = peak_pai * (age / age_at_peak) ** RISE_EXPONENT
    else:
        decline_duration = max(1.0, total_duration - age_at_peak)
        age_past_peak = age - age_at_peak
        pai = max(end_pai, peak_pai - (peak_pai - end_pai) * age_past_peak / decline_duration)
    return max(0.0, pai)


def increment_curve(params: SpeciesGrowthParams, duration: int) -> list[float]:
    """Return ``annual_increment`` for stand ages ``1..duration``."""

    return [annual_increment(params, age, duration) for age in range(1, duration + 1)]


__all__ = ["annual_increment", "increment_curve", "PEAK_PAI_MULTIPLIER", "END_PAI_MULTIPLIER"]
