"""KPI Decision Map — dashboard archetype recommendation engine."""

__version__ = "0.1.0"
