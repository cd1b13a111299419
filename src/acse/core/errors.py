"""Common ACSE-specific exceptions and warnings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldIssue:
    """Single offending input field reported by the validation layer."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class ACSEValueError(ValueError):
    """Raised when ACSE detects invalid user-provided data."""


class InvalidInputError(ACSEValueError):
    """Raised when one or more caller-supplied values violate their declared range or type.

    Attributes
    ----------
    issues:
        Every offending field, in the order they were detected.
    """

    def __init__(self, issues: list[FieldIssue] | FieldIssue | str, message: str | None = None):
        if isinstance(issues, str):
            issues = [FieldIssue(field="input", reason=issues)]
        elif isinstance(issues, FieldIssue):
            issues = [issues]
        self.issues: list[FieldIssue] = list(issues)
        if message is None:
            message = "; ".join(str(issue) for issue in self.issues) or "invalid input"
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class EmptyDatasetError(InvalidInputError):
    """Raised when the multi-species path receives no species records."""

    def __init__(self, message: str = "No species data provided for multi-species calculation"):
        super().__init__([FieldIssue(field="species", reason=message)], message)


class NonPositiveSequestrationWarning(RuntimeWarning):
    """Cost analysis requested for a project whose final cumulative CO2e is zero or negative."""


class SinkFailureWarning(RuntimeWarning):
    """An analytics sink raised while receiving an event; the event was dropped."""


class ClampedValueWarning(RuntimeWarning):
    """A species-level value fell outside its documented range and was replaced by a default."""


__all__ = [
    "FieldIssue",
    "ACSEValueError",
    "InvalidInputError",
    "EmptyDatasetError",
    "NonPositiveSequestrationWarning",
    "SinkFailureWarning",
    "ClampedValueWarning",
]
