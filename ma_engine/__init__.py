"""VAR acquisition scoring, ranking, explanation and scenario engine."""

__version__ = "0.1.0"
