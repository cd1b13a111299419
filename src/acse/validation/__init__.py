"""Input validation helpers."""

from .ranges import (
    clamp_field,
    validate_project_inputs,
    validate_range,
    validate_species_records,
)

__all__ = [
    "validate_range",
    "clamp_field",
    "validate_project_inputs",
    "validate_species_records",
]
