"""Project loading utilities (YAML metadata + species CSV) and results export."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml

from acse.core.errors import FieldIssue, InvalidInputError
from acse.project.contract.models import ProjectInputs, SpeciesRecord
from acse.validation.ranges import validate_project_inputs, validate_species_records

__all__ = [
    "ProjectBundle",
    "load_project",
    "read_csv",
    "read_species_csv",
    "write_species_template",
    "species_template_frame",
    "results_dataframe",
    "species_dataframe",
    "export_results",
    "SPECIES_COLUMNS",
]

SPECIES_COLUMNS: tuple[str, ...] = (
    "Species Name",
    "Number of Trees",
    "Growth Rate (m³/ha/yr)",
    "Wood Density (tdm/m³)",
    "BEF",
    "Root-Shoot Ratio",
    "Carbon Fraction",
    "Survival Rate (%)",
)

_TEMPLATE_ROWS: tuple[tuple[object, ...], ...] = (
    ("Pine", 400, 10, 0.42, 1.3, 0.25, 0.47, 85),
    ("Eucalyptus", 400, 25, 0.55, 1.3, 0.24, 0.47, 90),
    ("Oak", 200, 5, 0.65, 1.4, 0.25, 0.47, 80),
    ("Mixed Native", 600, 8, 0.5, 1.4, 0.25, 0.47, 85),
)

_RESERVED_KEYS = {"species_csv", "species", "name"}


@dataclass(frozen=True)
class ProjectBundle:
    """Validated project inputs plus optional species records loaded from disk."""

    name: str | None
    inputs: ProjectInputs
    species: list[SpeciesRecord] | None = None
    source: Path | None = None


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path, encoding="utf-8")


def _as_optional_cell(value: object) -> object:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return value


def _frame_rows(frame: pd.DataFrame) -> list[dict[str, object]]:
    frame = frame.rename(columns=lambda column: str(column).strip())
    rows = cast(list[dict[str, object]], frame.to_dict("records"))
    return [{key: _as_optional_cell(value) for key, value in row.items()} for row in rows]


def read_species_csv(path: str | Path) -> list[SpeciesRecord]:
    """Read a species sheet into validated :class:`SpeciesRecord` objects.

    Blank cells become ``None`` so that the project defaults apply; unknown columns are
    ignored. Raises ``InvalidInputError`` (row-indexed) when a row is invalid.
    """

    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(csv_path)
    rows = _frame_rows(read_csv(csv_path))
    return validate_species_records(rows)


def species_template_frame() -> pd.DataFrame:
    """Return the example species sheet as a DataFrame."""
    return pd.DataFrame(list(_TEMPLATE_ROWS), columns=list(SPECIES_COLUMNS))


def write_species_template(path: str | Path) -> Path:
    """Write the example species CSV (Pine, Eucalyptus, Oak, Mixed Native) to ``path``."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    species_template_frame().to_csv(target, index=False, encoding="utf-8")
    return target


def _resolve_path(root: Path, value: str | None) -> Path | None:
    if value is None:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def load_project(yaml_path: str | Path) -> ProjectBundle:
    """Load a project from a YAML file.

    Parameters
    ----------
    yaml_path:
        Path to a YAML mapping of :class:`ProjectInputs` fields. Two optional keys describe
        the species: ``species_csv`` (path relative to the YAML file) or an inline
        ``species`` list keyed by the species column names.

    Returns
    -------
    ProjectBundle
        Validated inputs and, when present, the species records.
    """

    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise InvalidInputError(FieldIssue("project", f"{base_path} must contain a mapping"))
    root = base_path.parent

    inputs = validate_project_inputs(
        {key: value for key, value in meta.items() if key not in _RESERVED_KEYS}
    )

    species: list[SpeciesRecord] | None = None
    csv_path = _resolve_path(root, meta.get("species_csv"))
    if csv_path is not None:
        species = read_species_csv(csv_path)
    elif "species" in meta:
        rows = meta["species"] or []
        if not isinstance(rows, list):
            raise InvalidInputError(FieldIssue("species", "must be a list of species records"))
        species = validate_species_records(rows)

    return ProjectBundle(
        name=meta.get("name"),
        inputs=inputs,
        species=species,
        source=base_path,
    )


def results_dataframe(result: Any) -> pd.DataFrame:
    """Return the totals series of a ``CalculationResult`` as a DataFrame (one row per year)."""

    records = [annual.to_dict() for annual in result.total_results]
    return pd.DataFrame.from_records(
        records,
        columns=[
            "year",
            "age",
            "volume_increment",
            "gross_annual_co2e",
            "net_annual_co2e",
            "cumulative_net_co2e",
        ],
    )


def species_dataframe(result: Any) -> pd.DataFrame:
    """Return the per-species series in long format (species, year, ...)."""

    rows: list[dict[str, object]] = []
    for species in result.species_results:
        for annual in species.results:
            rows.append(
                {
                    "species_name": species.species_name,
                    "area_share": species.area_share,
                    "effective_trees": species.effective_trees,
                    "risk_rate": species.risk_rate,
                    **annual.to_dict(),
                }
            )
    return pd.DataFrame(rows)


def _report_payload(result: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "inputs": result.inputs.model_dump(mode="json"),
        "summary": result.summary.to_dict(),
        "total_results": [annual.to_dict() for annual in result.total_results],
        "species_results": [
            {
                "species_name": species.species_name,
                "number_of_trees": species.number_of_trees,
                "area_share": species.area_share,
                "effective_trees": species.effective_trees,
                "risk_rate": species.risk_rate,
                "growth_modifier": species.growth_modifier,
                "results": [annual.to_dict() for annual in species.results],
            }
            for species in result.species_results
        ],
    }
    if result.enhanced is not None:
        payload["enhanced"] = result.enhanced.to_dict()
    if result.green_cover is not None:
        cover = result.green_cover
        payload["green_cover"] = {
            "initial_green_cover": cover.initial_green_cover,
            "absolute_increase": cover.absolute_increase,
            "final_green_cover": cover.final_green_cover,
            "total_area": cover.total_area,
            "initial_pct": cover.initial_pct,
            "final_pct": cover.final_pct,
        }
    if result.cost_analysis is not None:
        cost = result.cost_analysis
        payload["cost_analysis"] = {
            "total_project_cost": cost.total_project_cost,
            "total_sequestration": cost.total_sequestration,
            "cost_per_tonne": cost.cost_per_tonne,
            "cost_per_hectare": cost.cost_per_hectare,
            "cost_per_hectare_per_tonne": cost.cost_per_hectare_per_tonne,
            "status": cost.status,
            "note": cost.note,
            "breakdown": dict(cost.breakdown),
        }
    return payload


def export_results(result: Any, path: str | Path) -> Path:
    """Write a ``CalculationResult`` to ``path``.

    ``.csv`` writes the totals table; ``.json`` writes the full report (inputs, summary,
    totals, per-species series and the optional credit/green cover/cost reports).
    """

    target = Path(path)
    suffix = target.suffix.lower()
    target.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        results_dataframe(result).to_csv(target, index=False)
    elif suffix == ".json":
        target.write_text(json.dumps(_report_payload(result), indent=2), encoding="utf-8")
    else:
        raise ValueError(f"Unsupported export format '{target.suffix}' (use .csv or .json)")
    return target
