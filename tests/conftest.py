from __future__ import annotations

import pytest

from acse.project.contract import ProjectInputs, SpeciesRecord


@pytest.fixture
def teak_inputs() -> ProjectInputs:
    """Single-species teak project (10 ha × 1600 trees/ha over 10 years)."""
    return ProjectInputs(
        project_area=10.0,
        planting_density=1600.0,
        project_duration=10,
        baseline_rate_per_ha=0.0,
        survival_rate=0.85,
        species_key="teak_moderate",
    )


@pytest.fixture
def mixed_inputs() -> ProjectInputs:
    return ProjectInputs(
        project_area=10.0,
        planting_density=1600.0,
        project_duration=20,
        baseline_rate_per_ha=1.0,
        survival_rate=0.85,
    )


@pytest.fixture
def two_species() -> list[SpeciesRecord]:
    return [
        SpeciesRecord.model_validate(
            {"Species Name": "Teak", "Number of Trees": 500, "Growth Rate (m³/ha/yr)": 12}
        ),
        SpeciesRecord.model_validate(
            {"Species Name": "Eucalyptus", "Number of Trees": 500, "Growth Rate (m³/ha/yr)": 25}
        ),
    ]


class RecordingSink:
    """Analytics sink collecting ``(event_name, payload)`` pairs."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def emit(self, event_name, payload) -> None:
        self.events.append((event_name, dict(payload)))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
