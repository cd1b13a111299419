"""Project contract models (Pydantic schemas, validators)."""

from .models import ProjectInputs, SpeciesRecord

__all__ = ["ProjectInputs", "SpeciesRecord"]
