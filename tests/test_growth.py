import pytest
from hypothesis import given, settings, strategies as st

from acse.core.types import SpeciesGrowthParams
from acse.growth import annual_increment, increment_curve


def test_annual_increment_zero_before_planting():
    params = SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=15.0)
    assert annual_increment(params, 0, 20) == 0.0
    assert annual_increment(params, -3, 20) == 0.0


def test_annual_increment_rise_and_peak():
    params = SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=15.0)
    assert pytest.approx(annual_increment(params, 15, 30)) == 18.0
    assert pytest.approx(annual_increment(params, 7.5, 30)) == 18.0 * 0.5**1.5


def test_annual_increment_linear_decline():
    params = SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=15.0)
    # decline over 10 years from 18 towards 1
    assert pytest.approx(annual_increment(params, 20, 25)) == 18.0 - 17.0 * 5 / 10
    assert pytest.approx(annual_increment(params, 25, 25)) == 1.0


def test_annual_increment_floor_after_decline():
    params = SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=15.0)
    assert pytest.approx(annual_increment(params, 40, 16)) == 1.0


def test_annual_increment_short_project_uses_one_year_decline():
    params = SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=15.0)
    # duration shorter than the peak age: decline span is clamped to one year
    assert pytest.approx(annual_increment(params, 16, 10)) == 1.0


def test_annual_increment_rejects_non_positive_peak_age():
    with pytest.raises(ValueError):
        annual_increment(SpeciesGrowthParams(peak_mai=10.0, age_at_peak_mai=0.0), 1, 10)


def test_increment_curve_peaks_at_age_of_peak_mai():
    params = SpeciesGrowthParams(peak_mai=25.0, age_at_peak_mai=10.0)
    curve = increment_curve(params, 30)
    assert len(curve) == 30
    assert curve.index(max(curve)) + 1 == 10


@settings(max_examples=50, deadline=None)
@given(
    peak_mai=st.floats(min_value=1.0, max_value=40.0),
    age_at_peak=st.integers(min_value=2, max_value=30),
    duration=st.integers(min_value=4, max_value=50),
)
def test_increment_monotone_before_peak(peak_mai, age_at_peak, duration):
    params = SpeciesGrowthParams(peak_mai=peak_mai, age_at_peak_mai=float(age_at_peak))
    for age in range(1, min(age_at_peak, duration)):
        assert annual_increment(params, age + 1, duration) >= annual_increment(
            params, age, duration
        )


@settings(max_examples=50, deadline=None)
@given(
    peak_mai=st.floats(min_value=1.0, max_value=40.0),
    age_at_peak=st.floats(min_value=1.0, max_value=30.0),
    duration=st.integers(min_value=4, max_value=50),
)
def test_increment_floor_after_peak(peak_mai, age_at_peak, duration):
    params = SpeciesGrowthParams(peak_mai=peak_mai, age_at_peak_mai=age_at_peak)
    for age in range(1, duration + 1):
        if age > age_at_peak:
            assert annual_increment(params, age, duration) >= 0.1 * peak_mai
