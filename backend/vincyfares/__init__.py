"""Vincy fare calculator: bus and taxi fare estimates from a static rate table."""

__version__ = "1.0.0"
