"""Project inputs: contract models and file loaders."""
