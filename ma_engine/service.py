"""Engine context tying the data source to the scoring components."""

import logging
from typing import Optional, Sequence

from ma_engine.config import Settings, settings as default_settings
from ma_engine.errors import EmptySelectionError, EngineValidationError, UnknownCandidateError
from ma_engine.explain import ExplanationSynthesizer, build_narrator, headline
from ma_engine.models import (
    AcquirerProfile,
    AcquisitionCriteria,
    ExplanationPayload,
    ScenarioRequest,
    ScenarioResult,
    ScoredVar,
    DEFAULT_ACQUIRER,
    DEFAULT_CRITERIA,
)
from ma_engine.scenario import ScenarioSimulator
from ma_engine.score import Ranker
from ma_engine.sources import CandidateSource

logger = logging.getLogger(__name__)

COMPARE_MIN = 2
COMPARE_MAX = 3


class MaEngine:
    """Request-scoped operations over an explicitly supplied candidate source.

    Holds no cache: every call loads candidates and recomputes from scratch.
    """

    def __init__(
        self,
        source: CandidateSource,
        ranker: Optional[Ranker] = None,
        synthesizer: Optional[ExplanationSynthesizer] = None,
        simulator: Optional[ScenarioSimulator] = None,
        acquirer: AcquirerProfile = DEFAULT_ACQUIRER,
        config: Optional[Settings] = None,
    ):
        config = config or default_settings
        self.source = source
        self.ranker = ranker or Ranker(headline=headline, headline_count=config.headline_count)
        self.synthesizer = synthesizer or ExplanationSynthesizer(
            narrator=build_narrator(config),
            narrative_timeout=config.narrative_timeout,
        )
        self.simulator = simulator or ScenarioSimulator(
            default_ebitda_margin=config.default_ebitda_margin,
        )
        self.acquirer = acquirer

    async def compute_rankings(
        self,
        criteria: Optional[AcquisitionCriteria] = None,
    ) -> list[ScoredVar]:
        """Score and rank every candidate."""
        criteria = criteria or DEFAULT_CRITERIA
        candidates = await self.source.load()
        ranked = self.ranker.rank(candidates, criteria)
        logger.info(f"Ranked {len(ranked)} VARs from {self.source.name} source")
        return ranked

    async def explain(
        self,
        var_id: int,
        criteria: Optional[AcquisitionCriteria] = None,
    ) -> ExplanationPayload:
        """Explain one candidate's score, re-ranking on demand."""
        criteria = criteria or DEFAULT_CRITERIA
        ranked = await self.compute_rankings(criteria)
        scored = next((sv for sv in ranked if sv.var.id == var_id), None)
        if scored is None:
            raise UnknownCandidateError([var_id])
        return await self.synthesizer.explain(scored, criteria)

    async def compare(
        self,
        var_ids: Sequence[int],
        criteria: Optional[AcquisitionCriteria] = None,
    ) -> list[ScoredVar]:
        """Return 2-3 ranked candidates side by side, in the order requested."""
        if not COMPARE_MIN <= len(var_ids) <= COMPARE_MAX:
            raise EngineValidationError(
                f"Provide {COMPARE_MIN} or {COMPARE_MAX} VAR IDs for comparison"
            )
        ranked = {sv.var.id: sv for sv in await self.compute_rankings(criteria)}
        missing = [i for i in var_ids if i not in ranked]
        if missing:
            raise UnknownCandidateError(missing)
        return [ranked[i] for i in var_ids]

    async def simulate(self, request: ScenarioRequest) -> ScenarioResult:
        """Simulate acquiring the requested targets."""
        if not request.target_var_ids:
            # Checked before loading candidates
            raise EmptySelectionError("targetVarIds must contain at least one VAR id")
        candidates = await self.source.load()
        return self.simulator.simulate(
            request.target_var_ids,
            candidates,
            assumptions=request.assumptions(),
            acquirer=self.acquirer,
            name=request.name,
        )
