"""Scoring engine for ranking VAR acquisition targets."""

from .dimensions import DimensionScorer, NEUTRAL_SCORE
from .ranker import Ranker, aggregate

__all__ = ["DimensionScorer", "Ranker", "aggregate", "NEUTRAL_SCORE"]
