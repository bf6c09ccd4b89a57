"""Four-way intersection traffic simulation with collision-aware cars."""

__version__ = "0.1.0"