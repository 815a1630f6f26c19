"""Execution engine: step plans and the staged pipeline."""
