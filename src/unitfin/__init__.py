"""Unit finance aggregation and period-comparison engine."""

__version__ = "0.1.0"
