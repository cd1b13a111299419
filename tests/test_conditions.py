import pytest
from hypothesis import given, settings, strategies as st

from acse.conditions import calculate_risk_rate, clip_risk_rate, get_site_modifiers
from acse.conditions.modifiers import clip
from acse.core.types import ProjectType, Rainfall, SiteQuality, SoilType, SpeciesTraits


def test_site_modifiers_product():
    mods = get_site_modifiers("Good", "High", "Loam")
    assert (mods.quality, mods.rainfall, mods.soil) == (1.2, 1.05, 1.0)
    assert pytest.approx(mods.growth_modifier) == 1.26


def test_site_modifiers_accept_case_insensitive_strings():
    mods = get_site_modifiers("poor", "low", "degraded")
    assert pytest.approx(mods.growth_modifier) == 0.7 * 0.8 * 0.65


def test_medium_soil_treated_as_loam():
    assert get_site_modifiers("Medium", "Medium", "Medium").growth_modifier == 1.0


def test_species_interactions_adjust_axes():
    drought = SpeciesTraits(drought_tolerant=True)
    assert get_site_modifiers("Medium", "Low", "Loam", drought).rainfall == 0.9

    sensitive = SpeciesTraits(water_sensitive=True)
    mods = get_site_modifiers("Medium", "High", "Clay", sensitive)
    assert (mods.rainfall, mods.soil) == (0.95, 0.8)

    sandy = SpeciesTraits(prefers_sandy=True)
    assert get_site_modifiers("Medium", "Medium", "Sandy", sandy).soil == 1.0
    assert get_site_modifiers("Medium", "Medium", "Sandy").soil == 0.9


def test_unknown_site_value_rejected():
    with pytest.raises(ValueError):
        get_site_modifiers("Excellent", "Medium", "Loam")


def test_clip_bounds():
    assert clip(2.0, 0.1, 1.5) == 1.5
    assert clip(0.01, 0.1, 1.5) == 0.1


def test_risk_rate_default_forest():
    assert pytest.approx(calculate_risk_rate()) == 0.09


def test_risk_rate_harsh_site():
    rate = calculate_risk_rate(
        ProjectType.FOREST,
        site_quality=SiteQuality.POOR,
        avg_rainfall=Rainfall.LOW,
        soil_type=SoilType.DEGRADED,
        species_count=1,
    )
    assert pytest.approx(rate) == 0.10 + 0.05 + 0.03 + 0.04 - 0.01


def test_risk_rate_clipped_to_floor():
    rate = calculate_risk_rate(
        "forest", site_quality="Good", species_count=10, drought_tolerant=True
    )
    assert rate == 0.05


def test_risk_rate_water_and_unknown_types():
    assert calculate_risk_rate("water", site_quality="Poor") == 0.05
    assert pytest.approx(calculate_risk_rate("wetland", site_quality="Poor")) == 0.10


def test_clip_risk_rate():
    assert clip_risk_rate(0.5) == 0.25
    assert clip_risk_rate(0.0) == 0.05
    assert clip_risk_rate(0.12) == 0.12


@settings(max_examples=100, deadline=None)
@given(
    quality=st.sampled_from(list(SiteQuality)),
    rainfall=st.sampled_from(list(Rainfall)),
    soil=st.sampled_from(list(SoilType)),
    species_count=st.integers(min_value=0, max_value=200),
    drought_tolerant=st.booleans(),
    project_type=st.sampled_from(["forest", "water", "other"]),
)
def test_risk_rate_always_within_bounds(
    quality, rainfall, soil, species_count, drought_tolerant, project_type
):
    rate = calculate_risk_rate(
        project_type,
        site_quality=quality,
        avg_rainfall=rainfall,
        soil_type=soil,
        species_count=species_count,
        drought_tolerant=drought_tolerant,
    )
    assert 0.05 <= rate <= 0.25


@settings(max_examples=100, deadline=None)
@given(
    quality=st.sampled_from(list(SiteQuality)),
    rainfall=st.sampled_from(list(Rainfall)),
    soil=st.sampled_from(list(SoilType)),
    drought=st.booleans(),
    sensitive=st.booleans(),
    sandy=st.booleans(),
)
def test_growth_modifier_always_within_bounds(quality, rainfall, soil, drought, sensitive, sandy):
    traits = SpeciesTraits(drought_tolerant=drought, water_sensitive=sensitive, prefers_sandy=sandy)
    assert 0.1 <= get_site_modifiers(quality, rainfall, soil, traits).growth_modifier <= 1.5
