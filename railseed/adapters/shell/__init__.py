"""Local process and file adapters."""
