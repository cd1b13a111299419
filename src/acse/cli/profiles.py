"""Calculation profiles exposed via the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from acse.growth.species import species_reference_factors


@dataclass(frozen=True)
class FactorPreset:
    """Biomass conversion factors applied to the project defaults."""

    wood_density: float | None = None
    bef: float | None = None
    rsr: float | None = None
    carbon_fraction: float | None = None

    def as_overrides(self) -> dict[str, float]:
        values = {
            "wood_density": self.wood_density,
            "bef": self.bef,
            "rsr": self.rsr,
            "carbon_fraction": self.carbon_fraction,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class CreditPreset:
    """Carbon credit knobs (price per VER, non-additional share, risk buffer)."""

    carbon_price_per_tonne: float | None = None
    dead_attribute_pct: float | None = None
    risk_rate_override: float | None = None

    def as_overrides(self) -> dict[str, float]:
        values = {
            "carbon_price_per_tonne": self.carbon_price_per_tonne,
            "dead_attribute_pct": self.dead_attribute_pct,
            "risk_rate_override": self.risk_rate_override,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class Profile:
    """Named calculation profile combining a species, factor and credit preset."""

    name: str
    description: str
    species_key: str | None = None
    factors: FactorPreset = field(default_factory=FactorPreset)
    credits: CreditPreset = field(default_factory=CreditPreset)

    def as_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if self.species_key is not None:
            overrides["species_key"] = self.species_key
        overrides.update(self.factors.as_overrides())
        overrides.update(self.credits.as_overrides())
        return overrides


def _species_factors(key: str) -> FactorPreset:
    return FactorPreset(**species_reference_factors(key), carbon_fraction=0.47)


DEFAULT_PROFILES: dict[str, Profile] = {
    "default": Profile(
        name="default",
        description="Generic factors (0.5/1.5/0.25), carbon price 5 per VER, default risk buffer.",
        factors=_species_factors("generic"),
        credits=CreditPreset(carbon_price_per_tonne=5.0),
    ),
    "eucalyptus": Profile(
        name="eucalyptus",
        description="Fast-growing eucalyptus plantation with its reference biomass factors.",
        species_key="eucalyptus_fast",
        factors=_species_factors("eucalyptus_fast"),
    ),
    "teak": Profile(
        name="teak",
        description="Moderate-growth teak with dense wood (0.68 t/m³).",
        species_key="teak_moderate",
        factors=_species_factors("teak_moderate"),
    ),
    "native": Profile(
        name="native",
        description="Slow-growing mixed native planting with a high root-shoot ratio.",
        species_key="native_slow",
        factors=_species_factors("native_slow"),
    ),
    "conservative": Profile(
        name="conservative",
        description="Conservative crediting: 10% non-additional share and a 20% risk buffer.",
        credits=CreditPreset(dead_attribute_pct=10.0, risk_rate_override=0.20),
    ),
}


def get_profile(name: str) -> Profile:
    key = name.lower()
    if key not in DEFAULT_PROFILES:
        available = ", ".join(sorted(DEFAULT_PROFILES))
        raise KeyError(f"Unknown profile '{name}'. Available: {available}")
    return DEFAULT_PROFILES[key]


def list_profiles() -> tuple[Profile, ...]:
    return tuple(DEFAULT_PROFILES[key] for key in sorted(DEFAULT_PROFILES))


def format_profiles() -> str:
    return "\n".join(f"  {profile.name}: {profile.description}" for profile in list_profiles())


def merge_profile_with_cli(
    profile: Profile | None,
    base: Mapping[str, Any],
    cli_values: Mapping[str, Any],
) -> dict[str, Any]:
    """Layer project values: ``base`` (file) → profile presets → explicit CLI options.

    ``None`` CLI values are treated as "not given" and never override lower layers.
    """

    merged = dict(base)
    if profile is not None:
        merged.update(profile.as_overrides())
    merged.update({key: value for key, value in cli_values.items() if value is not None})
    return merged


__all__ = [
    "FactorPreset",
    "CreditPreset",
    "Profile",
    "DEFAULT_PROFILES",
    "get_profile",
    "list_profiles",
    "format_profiles",
    "merge_profile_with_cli",
]
