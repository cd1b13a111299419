import warnings

import pytest

from acse.core.errors import EmptyDatasetError, NonPositiveSequestrationWarning, SinkFailureWarning
from acse.project.contract import SpeciesRecord
from acse.sequestration import calculate_sequestration_multi_species, run_calculation
from acse.telemetry import JsonlAnalyticsSink, read_jsonl


def test_run_calculation_single_species(teak_inputs):
    result = run_calculation(teak_inputs)
    assert len(result.species_results) == 1
    assert result.species_results[0].species_name == "teak_moderate"
    assert result.enhanced is not None
    assert result.green_cover is not None
    assert result.cost_analysis is None


def test_run_calculation_attaches_cost(teak_inputs):
    inputs = teak_inputs.model_copy(update={"project_cost": 100_000.0})
    result = run_calculation(inputs)
    final = result.total_results[-1].cumulative_net_co2e
    assert result.cost_analysis.cost_per_tonne == pytest.approx(100_000.0 / final)


def test_cost_not_applicable_when_baseline_exceeds_growth(teak_inputs):
    inputs = teak_inputs.model_copy(
        update={"baseline_rate_per_ha": 1_000_000.0, "project_cost": 100_000.0}
    )
    with pytest.warns(NonPositiveSequestrationWarning):
        result = run_calculation(inputs)
    assert result.total_results[-1].cumulative_net_co2e <= 0
    assert result.cost_analysis.cost_per_tonne is None
    assert result.cost_analysis.status == "not_applicable"
    assert result.enhanced.verified_emission_reductions == 0.0


def test_enhanced_never_subtracts_baseline_twice(mixed_inputs, two_species):
    result = run_calculation(mixed_inputs, two_species)
    enhanced = result.enhanced
    assert enhanced.baseline_total == pytest.approx(200.0)
    assert enhanced.gross_total - enhanced.baseline_total == pytest.approx(result.total_net_co2e)
    assert enhanced.net_before_risk == pytest.approx(result.total_net_co2e)


def test_recompute_enhanced_uses_cached_totals(mixed_inputs, two_species):
    result = run_calculation(mixed_inputs, two_species)
    doubled = result.recompute_enhanced(carbon_price_per_tonne=10.0)
    assert doubled.verified_emission_reductions == pytest.approx(
        result.enhanced.verified_emission_reductions
    )
    assert doubled.revenue == pytest.approx(2 * result.enhanced.revenue)

    discounted = result.recompute_enhanced(dead_attribute_pct=10.0, risk_rate=0.2)
    assert discounted.non_additional == pytest.approx(0.1 * result.enhanced.gross_total)
    assert discounted.risk_rate == 0.2
    assert discounted.verified_emission_reductions < result.enhanced.verified_emission_reductions


def test_default_credit_risk_rate_is_ten_percent(teak_inputs):
    assert run_calculation(teak_inputs).enhanced.risk_rate == pytest.approx(0.10)


def test_first_species_risk_rate_drives_credit_buffer(mixed_inputs):
    records = [
        SpeciesRecord.model_validate({"Species Name": "Pine", "Number of Trees": 100, "Risk Rate (%)": 20}),
        SpeciesRecord.model_validate({"Species Name": "Oak", "Number of Trees": 100}),
    ]
    assert run_calculation(mixed_inputs, records).enhanced.risk_rate == pytest.approx(0.20)


def test_green_cover_uses_project_inputs(teak_inputs):
    inputs = teak_inputs.model_copy(
        update={"initial_green_cover": 5.0, "total_geographical_area": 100.0}
    )
    cover = run_calculation(inputs).green_cover
    assert cover.absolute_increase == pytest.approx(8.5)
    assert cover.final_pct == pytest.approx(13.5)


def test_empty_species_list_is_not_single_species(mixed_inputs):
    with pytest.raises(EmptyDatasetError):
        run_calculation(mixed_inputs, [])


def test_sink_receives_counts_only(mixed_inputs, two_species, recording_sink):
    calculate_sequestration_multi_species(mixed_inputs, two_species, sink=recording_sink)
    assert recording_sink.names == [
        "forest_multi_species_calculation_start",
        "forest_multi_species_calculation_complete",
    ]
    _, complete = recording_sink.events[-1]
    assert complete["species_count"] == 2
    assert complete["duration_years"] == 20
    assert complete["duration_ms"] >= 0
    assert "project_area" not in complete


def test_sink_error_event(mixed_inputs, recording_sink):
    with pytest.raises(EmptyDatasetError):
        calculate_sequestration_multi_species(mixed_inputs, [], sink=recording_sink)
    assert recording_sink.names[-1] == "forest_multi_species_calculation_error"
    _, payload = recording_sink.events[-1]
    assert payload["error_type"] == "EmptyDatasetError"
    assert payload["issue_count"] == 1


def test_callable_sink(teak_inputs):
    seen = []
    run_calculation(teak_inputs, sink=lambda name, payload: seen.append(name))
    assert seen == [
        "forest_single_species_calculation_start",
        "forest_single_species_calculation_complete",
    ]


def test_failing_sink_does_not_change_result(mixed_inputs, two_species):
    def broken(name, payload):
        raise RuntimeError("sink offline")

    expected = calculate_sequestration_multi_species(mixed_inputs, two_species)
    with pytest.warns(SinkFailureWarning):
        actual = calculate_sequestration_multi_species(mixed_inputs, two_species, sink=broken)
    assert actual == expected


def test_jsonl_sink_appends_events(tmp_path, teak_inputs):
    log = tmp_path / "telemetry" / "events.jsonl"
    run_calculation(teak_inputs, sink=JsonlAnalyticsSink(log))
    run_calculation(teak_inputs, sink=JsonlAnalyticsSink(log))
    records = list(read_jsonl(log))
    assert len(records) == 4
    assert records[0]["event"] == "forest_single_species_calculation_start"
    assert records[1]["payload"]["duration_years"] == 10
    assert "timestamp" in records[0]


def test_results_have_no_warnings_for_valid_inputs(teak_inputs):
    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        run_calculation(teak_inputs)
