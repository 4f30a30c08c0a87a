"""Services used by the workflow engine."""
