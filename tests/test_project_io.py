import json

import pandas as pd
import pytest

from acse.core.errors import InvalidInputError
from acse.project.io import (
    SPECIES_COLUMNS,
    export_results,
    load_project,
    read_species_csv,
    results_dataframe,
    species_dataframe,
    write_species_template,
)
from acse.sequestration import run_calculation


def test_species_template_roundtrip(tmp_path):
    path = write_species_template(tmp_path / "templates" / "species.csv")
    frame = pd.read_csv(path)
    assert list(frame.columns) == list(SPECIES_COLUMNS)
    records = read_species_csv(path)
    assert [record.species_name for record in records] == ["Pine", "Eucalyptus", "Oak", "Mixed Native"]
    eucalyptus = records[1]
    assert eucalyptus.number_of_trees == 400
    assert eucalyptus.growth_rate == 25
    assert eucalyptus.wood_density == pytest.approx(0.55)
    assert eucalyptus.survival_rate_pct == 90


def test_read_species_csv_blank_cells(tmp_path):
    path = tmp_path / "species.csv"
    path.write_text(
        "Species Name,Number of Trees,BEF,Notes\nPine,400,,hillside\nOak,,1.4,\n",
        encoding="utf-8",
    )
    pine, oak = read_species_csv(path)
    assert pine.bef is None
    assert oak.number_of_trees is None
    assert oak.bef == pytest.approx(1.4)


def test_read_species_csv_reports_row(tmp_path):
    path = tmp_path / "species.csv"
    path.write_text("Species Name,Number of Trees\nPine,400\nOak,-3\n", encoding="utf-8")
    with pytest.raises(InvalidInputError) as excinfo:
        read_species_csv(path)
    assert excinfo.value.fields[0].startswith("species[1].")


def test_load_project_with_species_csv(tmp_path):
    write_species_template(tmp_path / "data" / "species.csv")
    config = tmp_path / "project.yaml"
    config.write_text(
        "name: Hillside restoration\n"
        "project_area: 25\n"
        "project_duration: 15\n"
        "survival_rate: 80\n"
        "site_quality: good\n"
        "species_csv: data/species.csv\n",
        encoding="utf-8",
    )
    bundle = load_project(config)
    assert bundle.name == "Hillside restoration"
    assert bundle.inputs.project_area == 25
    assert bundle.inputs.project_duration == 15
    assert bundle.inputs.survival_rate == pytest.approx(0.8)
    assert bundle.inputs.site_quality.value == "Good"
    assert len(bundle.species) == 4


def test_load_project_inline_species(tmp_path):
    config = tmp_path / "project.yaml"
    config.write_text(
        "project_duration: 12\n"
        "species:\n"
        "  - Species Name: Teak\n"
        "    Number of Trees: 300\n"
        "  - Species Name: Acacia\n"
        "    Number of Trees: 100\n",
        encoding="utf-8",
    )
    bundle = load_project(config)
    assert [record.species_name for record in bundle.species] == ["Teak", "Acacia"]


def test_load_project_without_species(tmp_path):
    config = tmp_path / "project.yaml"
    config.write_text("species_key: native_slow\n", encoding="utf-8")
    bundle = load_project(config)
    assert bundle.species is None
    assert bundle.inputs.species_key == "native_slow"


def test_load_project_missing_species_csv(tmp_path):
    config = tmp_path / "project.yaml"
    config.write_text("species_csv: missing.csv\n", encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        load_project(config)


def test_load_project_invalid_values(tmp_path):
    config = tmp_path / "project.yaml"
    config.write_text("project_area: -4\nplanting_density: 20\n", encoding="utf-8")
    with pytest.raises(InvalidInputError) as excinfo:
        load_project(config)
    assert set(excinfo.value.fields) == {"project_area", "planting_density"}


def test_results_dataframes(mixed_inputs, two_species):
    result = run_calculation(mixed_inputs, two_species)
    totals = results_dataframe(result)
    assert len(totals) == 20
    assert totals["cumulative_net_co2e"].iloc[-1] == pytest.approx(result.total_net_co2e)
    long = species_dataframe(result)
    assert len(long) == 40
    assert set(long["species_name"]) == {"Teak", "Eucalyptus"}


def test_export_results_csv_and_json(tmp_path, teak_inputs):
    result = run_calculation(teak_inputs.model_copy(update={"project_cost": 5000.0}))
    csv_path = export_results(result, tmp_path / "out" / "results.csv")
    assert len(pd.read_csv(csv_path)) == 10

    json_path = export_results(result, tmp_path / "out" / "results.json")
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert len(payload["total_results"]) == 10
    assert payload["summary"]["duration"] == 10
    assert payload["cost_analysis"]["status"] == "ok"
    assert payload["inputs"]["species_key"] == "teak_moderate"
    assert "verified_emission_reductions" in payload["enhanced"]


def test_export_results_rejects_unknown_suffix(tmp_path, teak_inputs):
    with pytest.raises(ValueError):
        export_results(run_calculation(teak_inputs), tmp_path / "results.xlsx")
