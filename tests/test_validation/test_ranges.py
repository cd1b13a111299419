import math

import pytest

from acse.core.errors import InvalidInputError
from acse.project.contract import ProjectInputs, SpeciesRecord
from acse.validation import (
    clamp_field,
    validate_project_inputs,
    validate_range,
    validate_species_records,
)


@pytest.mark.parametrize(
    "value,expected",
    [(5, 5.0), (0, 0.0), (10, 10.0), (11, 1.0), (-1, 1.0), (math.nan, 1.0), (math.inf, 1.0), (None, 1.0), ("abc", 1.0), ("7", 7.0)],
)
def test_validate_range(value, expected):
    assert validate_range(value, 1.0, 0.0, 10.0) == expected


def test_validate_range_exclusive_minimum():
    assert validate_range(0.0, 5.0, 0.0, None, min_inclusive=False) == 5.0


def test_clamp_field_uses_documented_defaults():
    assert clamp_field("survival_rate", 0.2) == 0.85
    assert clamp_field("bef", 4.0) == 1.5
    assert clamp_field("wood_density", 0.6) == 0.6


def test_validate_project_inputs_defaults():
    inputs = validate_project_inputs({})
    assert inputs.project_area == 10.0
    assert inputs.planting_density == 1600.0
    assert inputs.project_duration == 10
    assert inputs.survival_rate == 0.85
    assert inputs.carbon_price_per_tonne == 5.0


def test_validate_project_inputs_reports_every_field():
    with pytest.raises(InvalidInputError) as excinfo:
        validate_project_inputs(
            {"project_area": -1, "planting_density": 50, "project_duration": 2, "bef": 9}
        )
    assert set(excinfo.value.fields) == {
        "project_area",
        "planting_density",
        "project_duration",
        "bef",
    }
    assert all(issue.reason for issue in excinfo.value.issues)


def test_validate_project_inputs_rejects_non_mapping():
    with pytest.raises(InvalidInputError):
        validate_project_inputs([1, 2, 3])


def test_survival_percentage_converted_to_fraction():
    assert validate_project_inputs({"survival_rate": 85}).survival_rate == pytest.approx(0.85)


def test_blank_optionals_become_none():
    inputs = ProjectInputs(species_key="  ", project_cost="", total_geographical_area=None)
    assert inputs.species_key is None
    assert inputs.project_cost is None


def test_species_key_normalised():
    assert ProjectInputs(species_key="Teak Moderate").species_key == "teak_moderate"


def test_unknown_species_key_reported():
    with pytest.raises(InvalidInputError) as excinfo:
        validate_project_inputs({"species_key": "pine_fast", "project_duration": 12})
    assert excinfo.value.fields == ["species_key"]
    assert "eucalyptus_fast" in excinfo.value.issues[0].reason


def test_unknown_project_keys_rejected():
    with pytest.raises(InvalidInputError) as excinfo:
        validate_project_inputs({"area": 20, "project_duration": 12})
    assert excinfo.value.fields == ["area"]


def test_species_record_aliases_and_blanks():
    record = SpeciesRecord.model_validate(
        {
            "Species Name": "Pine",
            "Number of Trees": 400,
            "BEF": "  ",
            "Survival Rate (%)": 85,
            "Risk Rate (%)": 12,
            "Colour": "green",
        }
    )
    assert record.species_name == "Pine"
    assert record.number_of_trees == 400
    assert record.bef is None
    assert record.survival_rate_pct == 85
    assert record.risk_rate == pytest.approx(0.12)
    assert "Colour" not in record.to_row()
    assert record.to_row()["Species Name"] == "Pine"


def test_species_record_zero_is_a_value():
    record = SpeciesRecord.model_validate({"Species Name": "Pine", "Wood Density (tdm/m³)": 0})
    assert record.wood_density == 0


def test_validate_species_records_row_indexed_issues():
    with pytest.raises(InvalidInputError) as excinfo:
        validate_species_records(
            [
                {"Species Name": "A", "Number of Trees": 100},
                {"Species Name": "B", "Number of Trees": -5},
                {"Species Name": "C", "Risk Rate (%)": 150},
            ]
        )
    fields = excinfo.value.fields
    assert len(fields) == 2
    assert fields[0].startswith("species[1].")
    assert fields[1].startswith("species[2].")
