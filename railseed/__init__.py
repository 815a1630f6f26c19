"""railseed — one-shot scaffolding orchestrator for fresh Rails projects."""

__version__ = "0.1.0"
