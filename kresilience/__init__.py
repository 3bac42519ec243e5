"""Checkpoint and restart for iterative computations, stored in plain files."""

__version__ = "0.1.0"

__all__ = ["checkpoint", "cli", "config", "context", "factory", "filters", "handlers", "stdfile"]