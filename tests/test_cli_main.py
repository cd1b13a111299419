from __future__ import annotations

import json

from typer.testing import CliRunner

from acse.cli.main import app
from acse.project.io import read_species_csv, write_species_template
from acse.telemetry import read_jsonl

runner = CliRunner()


def test_calculate_single_species():
    result = runner.invoke(
        app, ["calculate", "--species-key", "teak_moderate", "--duration", "12"]
    )
    assert result.exit_code == 0, result.output
    assert "Annual sequestration" in result.output
    assert "revenue" in result.output
    assert "Green cover" in result.output


def test_calculate_invalid_input_exits_with_issues():
    result = runner.invoke(app, ["calculate", "--area=-5", "--duration", "3"])
    assert result.exit_code == 1
    assert "project_area" in result.output
    assert "project_duration" in result.output


def test_calculate_cost_not_applicable():
    result = runner.invoke(
        app,
        ["calculate", "--baseline-rate", "1000000", "--project-cost", "100000"],
    )
    assert result.exit_code == 0, result.output
    assert "N/A" in result.output
    assert "not applicable" in result.output


def test_calculate_project_file_with_export(tmp_path):
    write_species_template(tmp_path / "species.csv")
    config = tmp_path / "project.yaml"
    config.write_text(
        "project_area: 20\nproject_duration: 15\nproject_cost: 250000\nspecies_csv: species.csv\n",
        encoding="utf-8",
    )
    out = tmp_path / "results.json"
    telemetry = tmp_path / "events.jsonl"
    result = runner.invoke(
        app,
        [
            "calculate",
            str(config),
            "--profile",
            "conservative",
            "--out",
            str(out),
            "--telemetry-log",
            str(telemetry),
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert len(payload["total_results"]) == 15
    assert len(payload["species_results"]) == 4
    assert payload["inputs"]["dead_attribute_pct"] == 10.0
    assert payload["enhanced"]["risk_rate"] == 0.2
    events = [record["event"] for record in read_jsonl(telemetry)]
    assert events == [
        "forest_multi_species_calculation_start",
        "forest_multi_species_calculation_complete",
    ]


def test_calculate_unknown_profile():
    result = runner.invoke(app, ["calculate", "--profile", "mystery"])
    assert result.exit_code == 1
    assert "Unknown profile" in result.output


def test_credits_command():
    result = runner.invoke(
        app,
        [
            "credits",
            "--gross-total",
            "1000",
            "--baseline-total",
            "100",
            "--dead-attribute",
            "10",
            "--risk-rate",
            "0.15",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "680.00" in result.output
    assert "3,400.00" in result.output


def test_credits_command_rejects_bad_risk():
    result = runner.invoke(app, ["credits", "--gross-total", "1000", "--risk-rate", "2"])
    assert result.exit_code == 1
    assert "risk_rate" in result.output


def test_green_cover_command():
    result = runner.invoke(
        app,
        [
            "green-cover",
            "--project-area",
            "20",
            "--survival-rate",
            "0.9",
            "--initial",
            "5",
            "--total-area",
            "100",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "18.00" in result.output
    assert "23.00" in result.output


def test_species_command():
    result = runner.invoke(app, ["species"])
    assert result.exit_code == 0, result.output
    assert "Built-in species" in result.output


def test_template_command(tmp_path):
    target = tmp_path / "template.csv"
    result = runner.invoke(app, ["template", str(target)])
    assert result.exit_code == 0, result.output
    assert len(read_species_csv(target)) == 4


def test_profiles_command():
    result = runner.invoke(app, ["profiles"])
    assert result.exit_code == 0, result.output
    assert "conservative" in result.output
    assert "eucalyptus" in result.output


def test_telemetry_summary_and_prune(tmp_path):
    log = tmp_path / "events.jsonl"
    for _ in range(3):
        assert runner.invoke(app, ["calculate", "--telemetry-log", str(log)]).exit_code == 0
    summary = runner.invoke(app, ["telemetry", "summary", str(log)])
    assert summary.exit_code == 0, summary.output

    pruned = runner.invoke(app, ["telemetry", "prune", str(log), "--keep", "2"])
    assert pruned.exit_code == 0, pruned.output
    assert "Pruned 4 record(s)" in pruned.output
    assert len(list(read_jsonl(log))) == 2
