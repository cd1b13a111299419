"""Command-line interface for the sequestration engine."""
