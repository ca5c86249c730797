"""devtime — estimate developer time for a change from its unified diff."""

__version__ = "1.0.0"
