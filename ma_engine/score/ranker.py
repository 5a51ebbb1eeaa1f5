"""Composite scoring and deterministic ranking of VAR candidates."""

import logging
import math
from typing import Callable, Optional, Sequence

from ma_engine.errors import ScoreIntegrityError
from ma_engine.models import AcquisitionCriteria, DimensionWeight, ScoredVar, UnifiedVar, VarScores
from .dimensions import DimensionScorer, clamp

logger = logging.getLogger(__name__)


def aggregate(scores: VarScores, weights: Sequence[DimensionWeight]) -> float:
    """Weighted sum of dimension scores.

    ``weights`` is the criteria's ordered weight list, so this is a single
    fold over a known-length sequence. Weights are assumed validated; they are
    not renormalized here.
    """
    composite = math.fsum(entry.weight * scores.get(entry.dimension) for entry in weights)
    if not math.isfinite(composite):
        raise ScoreIntegrityError(f"Composite score is not finite: {composite}")
    return clamp(composite)


def rank_key(scored: ScoredVar) -> tuple:
    """Sort key: composite descending, then name ignoring case, then id."""
    name = scored.var.name
    return (-scored.composite_score, name.casefold(), name, scored.var.id)


class Ranker:
    """Score and rank candidates against acquisition criteria."""

    def __init__(
        self,
        scorer: Optional[DimensionScorer] = None,
        headline: Optional[Callable[[ScoredVar], str]] = None,
        headline_count: int = 0,
    ):
        self.scorer = scorer or DimensionScorer()
        self.headline = headline
        self.headline_count = headline_count

    def score(self, candidate: UnifiedVar, criteria: AcquisitionCriteria) -> ScoredVar:
        """Score a single candidate. Rank is provisional until ranked."""
        scores, imputed = self.scorer.evaluate(candidate, criteria)
        return ScoredVar(
            var=candidate,
            scores=scores,
            composite_score=aggregate(scores, criteria.weights),
            rank=1,
            imputed_dimensions=imputed,
        )

    def rank(
        self,
        candidates: Sequence[UnifiedVar],
        criteria: AcquisitionCriteria,
    ) -> list[ScoredVar]:
        """Score all candidates and return them ordered by rank."""
        scored = [self.score(candidate, criteria) for candidate in candidates]
        ranked = self.rerank(scored)
        logger.debug(f"Ranked {len(ranked)} candidates")
        return ranked

    def rerank(self, scored: Sequence[ScoredVar]) -> list[ScoredVar]:
        """Order already-scored candidates and number them from 1.

        Ranks carried over from a larger set are discarded.
        """
        ordered = sorted(scored, key=rank_key)
        ranked = []
        for i, item in enumerate(ordered, 1):
            item = item.model_copy(update={"rank": i, "reasoning": None})
            if self.headline and i <= self.headline_count:
                item = item.model_copy(update={"reasoning": self.headline(item)})
            ranked.append(item)
        return ranked
