"""Built-in species reference table and growth-parameter resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass

from acse.core.types import SpeciesGrowthParams, SpeciesTraits

FALLBACK_SPECIES_KEY = "generic"


@dataclass(frozen=True)
class BuiltinSpecies:
    """
    Reference growth and biomass factors for one built-in planting option.

    Attributes
    ----------
    key:
        Identifier accepted as ``species_key`` (e.g. ``teak_moderate``).
    label:
        Human-readable label surfaced in the CLI.
    peak_mai, age_at_peak_mai:
        Growth curve anchors (m³/ha/yr, years).
    wood_density, bef, rsr:
        Indicative biomass conversion factors used to pre-fill project defaults.
    """

    key: str
    label: str
    peak_mai: float
    age_at_peak_mai: float
    wood_density: float
    bef: float
    rsr: float

    @property
    def growth_params(self) -> SpeciesGrowthParams:
        return SpeciesGrowthParams(
            peak_mai=self.peak_mai, age_at_peak_mai=self.age_at_peak_mai, source="builtin"
        )


BUILTIN_SPECIES: dict[str, BuiltinSpecies] = {
    "eucalyptus_fast": BuiltinSpecies(
        key="eucalyptus_fast",
        label="Eucalyptus (fast growing)",
        peak_mai=25.0,
        age_at_peak_mai=10.0,
        wood_density=0.45,
        bef=1.5,
        rsr=0.24,
    ),
    "teak_moderate": BuiltinSpecies(
        key="teak_moderate",
        label="Teak (moderate growth)",
        peak_mai=12.0,
        age_at_peak_mai=15.0,
        wood_density=0.68,
        bef=1.4,
        rsr=0.27,
    ),
    "native_slow": BuiltinSpecies(
        key="native_slow",
        label="Mixed native (slow growing)",
        peak_mai=8.0,
        age_at_peak_mai=20.0,
        wood_density=0.53,
        bef=1.6,
        rsr=0.32,
    ),
    FALLBACK_SPECIES_KEY: BuiltinSpecies(
        key=FALLBACK_SPECIES_KEY,
        label="Generic broadleaf",
        peak_mai=10.0,
        age_at_peak_mai=15.0,
        wood_density=0.5,
        bef=1.5,
        rsr=0.25,
    ),
}

# Substring → built-in key, checked in order.
NAME_HINTS: tuple[tuple[str, str], ...] = (
    ("eucalyptus", "eucalyptus_fast"),
    ("teak", "teak_moderate"),
    ("native", "native_slow"),
)

DROUGHT_TOLERANT_HINTS = ("acacia", "casuarina", "native_slow")
WATER_SENSITIVE_HINTS = ("eucalyptus_fast",)
LOAM_PREFERRING_HINTS = ("teak",)


def normalize_species_key(value: str | None) -> str | None:
    """Return a snake-cased identifier for ``value`` or ``None`` for blank input."""

    if value is None:
        return None
    slug = re.sub(r"[^\w]+", "_", value.strip().lower()).strip("_")
    return slug or None


def get_builtin_species(key: str | None) -> BuiltinSpecies | None:
    """Return the built-in entry for ``key`` (case-insensitive) or ``None`` when unknown."""

    normalised = normalize_species_key(key)
    if normalised is None:
        return None
    return BUILTIN_SPECIES.get(normalised)


def infer_species_key(name: str | None) -> str | None:
    """Map a free-text species name onto a built-in key using substring hints."""

    if not name:
        return None
    lowered = name.lower()
    for hint, key in NAME_HINTS:
        if hint in lowered:
            return key
    return None


def resolve_growth_params(
    *,
    species_key: str | None = None,
    species_name: str | None = None,
    peak_mai: float | None = None,
    age_at_peak_mai: float | None = None,
) -> SpeciesGrowthParams:
    """
    Resolve growth curve anchors for a species.

    Each anchor is resolved independently in priority order: explicit value → built-in table
    keyed by ``species_key`` → built-in entry inferred from ``species_name`` → fallback
    (peak MAI 10, age at peak 15). Explicit values must be positive to be used.

    Returns
    -------
    SpeciesGrowthParams
        Anchors with ``source`` describing where ``peak_mai`` came from.
    """

    fallback = BUILTIN_SPECIES[FALLBACK_SPECIES_KEY]
    candidates: list[tuple[str, BuiltinSpecies]] = []
    builtin = get_builtin_species(species_key)
    if builtin is not None:
        candidates.append(("builtin", builtin))
    inferred = infer_species_key(species_name)
    if inferred is not None:
        candidates.append(("name", BUILTIN_SPECIES[inferred]))
    candidates.append(("fallback", fallback))

    if peak_mai is not None and peak_mai > 0:
        resolved_peak, source = float(peak_mai), "record"
    else:
        source, entry = candidates[0]
        resolved_peak = entry.peak_mai

    if age_at_peak_mai is not None and age_at_peak_mai > 0:
        resolved_age = float(age_at_peak_mai)
    else:
        resolved_age = candidates[0][1].age_at_peak_mai

    return SpeciesGrowthParams(peak_mai=resolved_peak, age_at_peak_mai=resolved_age, source=source)


def _is_high(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "high"


def infer_species_traits(
    name: str | None,
    *,
    species_key: str | None = None,
    drought_tolerance: str | None = None,
    water_sensitivity: str | None = None,
    soil_preference: str | None = None,
) -> SpeciesTraits:
    """
    Combine explicit trait columns with name-based hints.

    Explicit ``High`` drought tolerance / water sensitivity and ``Sandy`` / ``Loam`` soil
    preference are honoured first; names (or keys) containing ``acacia``, ``casuarina`` or
    ``native_slow`` are treated as drought tolerant, ``eucalyptus_fast`` as water sensitive and
    ``teak`` as loam-preferring.
    """

    label = " ".join(part for part in (name, species_key) if part).lower()
    preference = (soil_preference or "").strip().lower()

    drought_tolerant = _is_high(drought_tolerance) or any(h in label for h in DROUGHT_TOLERANT_HINTS)
    water_sensitive = _is_high(water_sensitivity) or any(h in label for h in WATER_SENSITIVE_HINTS)
    prefers_sandy = preference == "sandy"
    prefers_loam = preference == "loam" or (
        not preference and any(h in label for h in LOAM_PREFERRING_HINTS)
    )
    return SpeciesTraits(
        name=name or species_key or "",
        drought_tolerant=drought_tolerant,
        water_sensitive=water_sensitive,
        prefers_sandy=prefers_sandy,
        prefers_loam=prefers_loam,
    )


def species_reference_factors(key: str | None) -> dict[str, float]:
    """Return the indicative wood density/BEF/RSR for ``key`` (generic values when unknown)."""

    entry = get_builtin_species(key) or BUILTIN_SPECIES[FALLBACK_SPECIES_KEY]
    return {"wood_density": entry.wood_density, "bef": entry.bef, "rsr": entry.rsr}


__all__ = [
    "BuiltinSpecies",
    "BUILTIN_SPECIES",
    "FALLBACK_SPECIES_KEY",
    "normalize_species_key",
    "get_builtin_species",
    "infer_species_key",
    "resolve_growth_params",
    "infer_species_traits",
    "species_reference_factors",
]
