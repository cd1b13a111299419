from __future__ import annotations

import warnings
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from acse.cli.profiles import format_profiles, get_profile, list_profiles, merge_profile_with_cli
from acse.cli.telemetry import telemetry_app
from acse.core.errors import InvalidInputError
from acse.credits import compute_carbon_credits, compute_green_cover
from acse.growth import BUILTIN_SPECIES, increment_curve
from acse.project.io import export_results, load_project, read_species_csv, write_species_template
from acse.sequestration import CalculationResult, run_calculation
from acse.telemetry import JsonlAnalyticsSink

app = typer.Typer(add_completion=False, no_args_is_help=True)
app.add_typer(telemetry_app, name="telemetry")
console = Console()

T = TypeVar("T")


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables."""
    import rich.traceback as _rt

    _rt.install(show_locals=True, width=140, extra_lines=2)


def _report_invalid(exc: InvalidInputError) -> None:
    console.print("[red]Invalid input:[/red]")
    for issue in exc.issues:
        console.print(f"  [red]-[/red] {issue.field}: {issue.reason}")


def _guarded(func: Callable[[], T]) -> T:
    """Run ``func`` printing captured warnings; invalid input exits with status 1."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            result = func()
        except InvalidInputError as exc:
            _report_invalid(exc)
            raise typer.Exit(1) from exc
    for item in caught:
        console.print(f"[yellow]Warning:[/yellow] {item.message}")
    return result


def _fmt(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.{digits}f}"


def _print_totals(result: CalculationResult) -> None:
    table = Table(title="Annual sequestration (tCO2e)")
    for column in ("Year", "Age", "Volume (m³/ha)", "Net annual", "Cumulative"):
        table.add_column(column, justify="right")
    for annual in result.total_results:
        row = annual.formatted()
        table.add_row(
            str(row["year"]),
            str(row["age"]),
            str(row["volume_increment"]),
            str(row["net_annual_co2e"]),
            str(row["cumulative_net_co2e"]),
        )
    console.print(table)


def _print_species(result: CalculationResult) -> None:
    table = Table(title="Species breakdown")
    table.add_column("Species")
    table.add_column("Trees", justify="right")
    table.add_column("Area (ha)", justify="right")
    table.add_column("Effective trees", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Growth modifier", justify="right")
    table.add_column("Total tCO2e", justify="right")
    for species in result.species_results:
        table.add_row(
            species.species_name,
            _fmt(species.number_of_trees, 0),
            _fmt(species.area_share),
            str(species.effective_trees),
            f"{species.risk_rate:.1%}",
            f"{species.growth_modifier:.3f}",
            _fmt(species.total_net_co2e),
        )
    console.print(table)


def _print_reports(result: CalculationResult) -> None:
    summary = result.summary
    console.print("[bold]Summary[/bold]")
    console.print(f"  total_net_co2e: {_fmt(summary.total_net_co2e)} tCO2e")
    console.print(f"  average_annual_net_co2e: {_fmt(summary.average_annual_net_co2e)} tCO2e/yr")
    console.print(f"  net_co2e_per_hectare: {_fmt(summary.net_co2e_per_hectare)} tCO2e/ha")
    console.print(f"  peak_year: {summary.peak_year}")

    if result.enhanced is not None:
        enhanced = result.enhanced
        console.print("[bold]Carbon credits[/bold]")
        console.print(f"  non_additional: {_fmt(enhanced.non_additional)} tCO2e")
        console.print(f"  risk_buffer: {_fmt(enhanced.risk_buffer)} tCO2e ({enhanced.risk_rate:.1%})")
        console.print(f"  verified_emission_reductions: {_fmt(enhanced.verified_emission_reductions)}")
        console.print(f"  revenue: {_fmt(enhanced.revenue)}")

    if result.green_cover is not None:
        cover = result.green_cover
        console.print("[bold]Green cover[/bold]")
        console.print(f"  absolute_increase: {_fmt(cover.absolute_increase)} ha")
        console.print(f"  initial_pct: {_fmt(cover.initial_pct)}%  final_pct: {_fmt(cover.final_pct)}%")

    if result.cost_analysis is not None:
        cost = result.cost_analysis
        console.print("[bold]Cost analysis[/bold]")
        console.print(f"  cost_per_tonne: {cost.display_cost_per_tonne()}")
        console.print(f"  cost_per_hectare: {_fmt(cost.cost_per_hectare)}")
        console.print(f"  cost_per_hectare_per_tonne: {cost.display_cost_per_hectare_per_tonne()}")
        if not cost.applicable:
            console.print(f"  [yellow]{cost.note}[/yellow]")


@app.command()
def calculate(
    project: Path | None = typer.Argument(
        None, exists=True, dir_okay=False, help="Project YAML (fields of ProjectInputs)."
    ),
    species_csv: Path | None = typer.Option(
        None, "--species-csv", exists=True, dir_okay=False, help="Species sheet (CSV)."
    ),
    area: float | None = typer.Option(None, "--area", help="Project area (ha)."),
    density: float | None = typer.Option(None, "--density", help="Planting density (trees/ha)."),
    duration: int | None = typer.Option(None, "--duration", help="Project duration (years)."),
    species_key: str | None = typer.Option(
        None, "--species-key", help="Built-in species identifier (see `acse species`)."
    ),
    species_name: str | None = typer.Option(None, "--species-name", help="Species name."),
    survival_rate: float | None = typer.Option(
        None, "--survival-rate", help="Survival rate (% or fraction)."
    ),
    site_quality: str | None = typer.Option(None, "--site-quality", help="Good|Medium|Poor"),
    rainfall: str | None = typer.Option(None, "--rainfall", help="High|Medium|Low"),
    soil_type: str | None = typer.Option(None, "--soil-type", help="Loam|Sandy|Clay|Degraded"),
    baseline_rate: float | None = typer.Option(
        None, "--baseline-rate", help="Baseline sequestration (tCO2e/ha/yr)."
    ),
    project_cost: float | None = typer.Option(None, "--project-cost", help="Total project cost."),
    dead_attribute: float | None = typer.Option(
        None, "--dead-attribute", help="Non-additional share of gross sequestration (%)."
    ),
    carbon_price: float | None = typer.Option(None, "--carbon-price", help="Price per VER."),
    risk_rate: float | None = typer.Option(
        None, "--risk-rate", help="Risk buffer override (fraction, clipped to 0.05-0.25)."
    ),
    profile: str | None = typer.Option(
        None, "--profile", help="Calculation profile (see `acse profiles`)."
    ),
    out: Path | None = typer.Option(None, "--out", help="Export results (.csv or .json)."),
    telemetry_log: Path | None = typer.Option(
        None,
        "--telemetry-log",
        help="Append calculation events to this JSONL file.",
        writable=True,
        dir_okay=False,
    ),
    show_species: bool = typer.Option(
        True, "--show-species/--hide-species", help="Print the per-species table."
    ),
    debug: bool = typer.Option(False, "--debug", help="Verbose tracebacks."),
):
    """Run the sequestration engine and print totals, credits, green cover and cost."""
    if debug:
        _enable_rich_tracebacks()

    selected_profile = None
    if profile:
        try:
            selected_profile = get_profile(profile)
        except KeyError as exc:
            console.print(f"[red]{exc.args[0]}[/red]")
            raise typer.Exit(1) from exc

    def _load() -> tuple[dict[str, Any], list | None]:
        if project is None:
            return {}, None
        bundle = load_project(project)
        return bundle.inputs.model_dump(exclude_unset=True), bundle.species

    base, species = _guarded(_load)
    if species_csv is not None:
        species = _guarded(lambda: read_species_csv(species_csv))

    raw = merge_profile_with_cli(
        selected_profile,
        base,
        {
            "project_area": area,
            "planting_density": density,
            "project_duration": duration,
            "species_key": species_key,
            "species_name": species_name,
            "survival_rate": survival_rate,
            "site_quality": site_quality,
            "avg_rainfall": rainfall,
            "soil_type": soil_type,
            "baseline_rate_per_ha": baseline_rate,
            "project_cost": project_cost,
            "dead_attribute_pct": dead_attribute,
            "carbon_price_per_tonne": carbon_price,
            "risk_rate_override": risk_rate,
        },
    )
    sink = JsonlAnalyticsSink(telemetry_log) if telemetry_log is not None else None
    result = _guarded(lambda: run_calculation(raw, species, sink=sink))

    _print_totals(result)
    if show_species and len(result.species_results) > 1:
        _print_species(result)
    _print_reports(result)

    if out is not None:
        try:
            export_results(result, out)
        except ValueError as exc:
            console.print(f"[red]Export failed:[/red] {exc}")
            raise typer.Exit(1) from exc
        console.print(f"Results saved to {out}")


@app.command()
def credits(
    gross_total: float = typer.Option(..., "--gross-total", help="Gross sequestration (tCO2e)."),
    baseline_total: float = typer.Option(0.0, "--baseline-total", help="Baseline (tCO2e)."),
    dead_attribute: float = typer.Option(0.0, "--dead-attribute", help="Non-additional (%)."),
    risk_rate: float = typer.Option(0.10, "--risk-rate", help="Risk buffer (fraction)."),
    carbon_price: float = typer.Option(5.0, "--carbon-price", help="Price per VER."),
):
    """Apply non-additionality and the risk buffer to a sequestration total."""
    metrics = _guarded(
        lambda: compute_carbon_credits(
            gross_total=gross_total,
            baseline_total=baseline_total,
            dead_attribute_pct=dead_attribute,
            risk_rate=risk_rate,
            carbon_price_per_tonne=carbon_price,
        )
    )
    table = Table(title="Carbon credits")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in metrics.to_dict().items():
        table.add_row(key, _fmt(value))
    console.print(table)


@app.command("green-cover")
def green_cover(
    project_area: float = typer.Option(..., "--project-area", help="Planted area (ha)."),
    survival_rate: float = typer.Option(0.85, "--survival-rate", help="Survival (fraction)."),
    initial: float = typer.Option(0.0, "--initial", help="Initial green cover (ha)."),
    total_area: float | None = typer.Option(
        None, "--total-area", help="Total geographical area (ha)."
    ),
):
    """Report the green cover added by a planting project."""
    cover = _guarded(
        lambda: compute_green_cover(
            project_area=project_area,
            survival_rate=survival_rate,
            initial_green_cover=initial,
            total_geographical_area=total_area,
        )
    )
    table = Table(title="Green cover")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Initial green cover (ha)", _fmt(cover.initial_green_cover))
    table.add_row("Absolute increase (ha)", _fmt(cover.absolute_increase))
    table.add_row("Final green cover (ha)", _fmt(cover.final_green_cover))
    table.add_row("Initial (%)", _fmt(cover.initial_pct))
    table.add_row("Final (%)", _fmt(cover.final_pct))
    table.add_row("Increase (pp)", _fmt(cover.percentage_point_increase))
    console.print(table)


@app.command()
def species(
    duration: int = typer.Option(
        30, "--duration", min=1, help="Horizon used to locate the increment peak."
    ),
):
    """List the built-in species with their growth anchors and reference factors."""
    table = Table(title="Built-in species")
    table.add_column("Key")
    table.add_column("Label")
    table.add_column("Peak MAI", justify="right")
    table.add_column("Age at peak", justify="right")
    table.add_column("Peak PAI", justify="right")
    table.add_column("Wood density", justify="right")
    table.add_column("BEF", justify="right")
    table.add_column("RSR", justify="right")
    for entry in BUILTIN_SPECIES.values():
        curve = increment_curve(entry.growth_params, duration)
        table.add_row(
            entry.key,
            entry.label,
            _fmt(entry.peak_mai, 1),
            _fmt(entry.age_at_peak_mai, 0),
            _fmt(max(curve) if curve else 0.0),
            _fmt(entry.wood_density),
            _fmt(entry.bef),
            _fmt(entry.rsr),
        )
    console.print(table)


@app.command()
def template(
    path: Path = typer.Argument(Path("species_template.csv"), help="Destination CSV path."),
):
    """Write an example species CSV (Pine, Eucalyptus, Oak, Mixed Native)."""
    written = write_species_template(path)
    console.print(f"Species template saved to {written}")


@app.command()
def profiles():
    """List the calculation profiles accepted by `acse calculate --profile`."""
    console.print("Calculation profiles:")
    console.print(format_profiles())
    table = Table(title="Profile overrides")
    table.add_column("Profile")
    table.add_column("Overrides")
    for entry in list_profiles():
        overrides = entry.as_overrides()
        table.add_row(entry.name, ", ".join(f"{k}={v}" for k, v in overrides.items()) or "-")
    console.print(table)


if __name__ == "__main__":
    app()
