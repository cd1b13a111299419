"""Project I/O helpers."""

from .loaders import (
    SPECIES_COLUMNS,
    ProjectBundle,
    export_results,
    load_project,
    read_species_csv,
    results_dataframe,
    species_dataframe,
    write_species_template,
)

__all__ = [
    "ProjectBundle",
    "load_project",
    "read_species_csv",
    "write_species_template",
    "results_dataframe",
    "species_dataframe",
    "export_results",
    "SPECIES_COLUMNS",
]
