"""Range checks for project and species inputs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from acse.core.errors import FieldIssue, InvalidInputError
from acse.core.limits import PROJECT_RANGES
from acse.project.contract.models import ProjectInputs, SpeciesRecord

_VALUE_ERROR_PREFIX = "Value error, "


def validate_range(
    value: Any,
    default: float | None,
    minimum: float | None = None,
    maximum: float | None = None,
    *,
    min_inclusive: bool = True,
) -> float | None:
    """Return ``value`` when it is a finite number within bounds, else ``default``.

    Used for silent clamping inside the engine; ``None``, non-numeric and non-finite values
    all fall back to ``default``.
    """

    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    if minimum is not None and (number < minimum or (not min_inclusive and number == minimum)):
        return default
    if maximum is not None and number > maximum:
        return default
    return number


def clamp_field(name: str, value: Any, default: float | None = None) -> float | None:
    """Apply ``validate_range`` with the documented bounds for a project field."""

    limits = PROJECT_RANGES[name]
    return validate_range(
        value,
        limits.default if default is None else default,
        limits.minimum,
        limits.maximum,
        min_inclusive=limits.min_inclusive,
    )


def _issues_from(exc: ValidationError, prefix: str = "") -> list[FieldIssue]:
    issues: list[FieldIssue] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ())) or "input"
        reason = str(error.get("msg", "invalid value"))
        if reason.startswith(_VALUE_ERROR_PREFIX):
            reason = reason[len(_VALUE_ERROR_PREFIX):]
        issues.append(FieldIssue(field=f"{prefix}{loc}", reason=reason))
    return issues


def validate_project_inputs(raw: Mapping[str, Any] | ProjectInputs) -> ProjectInputs:
    """
    Validate a raw mapping into :class:`ProjectInputs`.

    Raises
    ------
    InvalidInputError
        Listing every offending field (not only the first).
    """

    if isinstance(raw, ProjectInputs):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInputError(FieldIssue("input", "project inputs must be a mapping"))
    try:
        return ProjectInputs.model_validate(dict(raw))
    except ValidationError as exc:
        raise InvalidInputError(_issues_from(exc)) from exc


def validate_species_records(
    rows: Iterable[Mapping[str, Any] | SpeciesRecord],
) -> list[SpeciesRecord]:
    """Validate species rows, reporting issues as ``species[<index>].<field>``."""

    records: list[SpeciesRecord] = []
    issues: list[FieldIssue] = []
    for index, row in enumerate(rows):
        if isinstance(row, SpeciesRecord):
            records.append(row)
            continue
        if not isinstance(row, Mapping):
            issues.append(FieldIssue(f"species[{index}]", "species record must be a mapping"))
            continue
        try:
            records.append(SpeciesRecord.model_validate(dict(row)))
        except ValidationError as exc:
            issues.extend(_issues_from(exc, prefix=f"species[{index}]."))
    if issues:
        raise InvalidInputError(issues)
    return records


__all__ = [
    "validate_range",
    "clamp_field",
    "validate_project_inputs",
    "validate_species_records",
]
