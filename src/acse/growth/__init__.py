"""Growth curve and species reference helpers."""

from .curves import annual_increment, increment_curve
from .species import (
    BUILTIN_SPECIES,
    FALLBACK_SPECIES_KEY,
    BuiltinSpecies,
    get_builtin_species,
    infer_species_key,
    infer_species_traits,
    normalize_species_key,
    resolve_growth_params,
    species_reference_factors,
)

__all__ = [
    "annual_increment",
    "increment_curve",
    "BuiltinSpecies",
    "BUILTIN_SPECIES",
    "FALLBACK_SPECIES_KEY",
    "get_builtin_species",
    "infer_species_key",
    "infer_species_traits",
    "normalize_species_key",
    "resolve_growth_params",
    "species_reference_factors",
]
