"""Financial projection for a hypothetical multi-target acquisition."""

import logging
import math
from typing import Iterable, Optional, Sequence

from ma_engine.errors import EmptySelectionError, ScenarioError, ScoreIntegrityError, UnknownCandidateError
from ma_engine.models import (
    AcquirerProfile,
    DealAssumptions,
    PriceRange,
    ScenarioResult,
    UnifiedVar,
    DEFAULT_ACQUIRER,
)

logger = logging.getLogger(__name__)


def _unique(items: Iterable[str]) -> list[str]:
    """De-duplicate preserving first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class ScenarioSimulator:
    """Project combined financials, valuation, synergies and ROI."""

    def __init__(self, default_ebitda_margin: float = 10.0):
        # Percent margin assumed for targets with no reported margin
        self.default_ebitda_margin = default_ebitda_margin

    def simulate(
        self,
        target_ids: Sequence[int],
        candidates: Sequence[UnifiedVar],
        assumptions: Optional[DealAssumptions] = None,
        acquirer: AcquirerProfile = DEFAULT_ACQUIRER,
        name: Optional[str] = None,
    ) -> ScenarioResult:
        """Simulate acquiring ``target_ids`` out of ``candidates``.

        Raises a validation error for an empty, duplicated or unknown
        selection; nothing partial is returned.
        """
        assumptions = assumptions or DealAssumptions()
        targets = self.resolve_targets(target_ids, candidates)

        # Financial roll-up, $M
        target_revenue = math.fsum(t.annual_revenue or 0.0 for t in targets)
        combined_revenue = acquirer.baseline_revenue + target_revenue
        target_ebitda = math.fsum(self._ebitda(t) for t in targets)
        combined_ebitda = acquirer.baseline_ebitda + target_ebitda

        estimated_valuation = combined_ebitda * assumptions.ebitda_multiple
        if estimated_valuation <= 0:
            raise ScenarioError(
                f"Combined EBITDA of {combined_ebitda:.2f}M gives no positive valuation"
            )
        price_range = PriceRange(
            low=estimated_valuation * (1 - assumptions.price_band),
            high=estimated_valuation * (1 + assumptions.price_band),
        )

        # Synergies, year 1
        cross_sell_revenue = combined_revenue * assumptions.cross_sell_rate
        margin_gain = combined_revenue * assumptions.margin_improvement_rate
        integration_cost = estimated_valuation * assumptions.integration_cost_rate
        projected_roi = (
            (cross_sell_revenue + margin_gain - integration_cost) / estimated_valuation * 100
        )
        if not math.isfinite(projected_roi):
            raise ScoreIntegrityError(f"Projected ROI is not finite: {projected_roi}")

        # Capabilities and footprint
        capabilities = set(acquirer.capabilities)
        specialties = _unique(s for t in targets for s in t.specialties)
        acquirer_vendors = set(acquirer.vendors)
        home_states = set(acquirer.home_states)

        result = ScenarioResult(
            name=name or f"Scenario: {' + '.join(t.name for t in targets)}",
            targets=targets,
            assumptions=assumptions,
            combined_revenue=combined_revenue,
            target_ebitda=target_ebitda,
            combined_ebitda=combined_ebitda,
            estimated_valuation=estimated_valuation,
            estimated_price_range=price_range,
            cross_sell_revenue=cross_sell_revenue,
            margin_gain=margin_gain,
            integration_cost=integration_cost,
            projected_roi=projected_roi,
            capability_gains=[s for s in specialties if s not in capabilities],
            capability_overlaps=[s for s in specialties if s in capabilities],
            vendor_overlaps=_unique(
                v for t in targets for v in t.top_vendors if v in acquirer_vendors
            ),
            geographic_overlaps=_unique(
                t.hq_state for t in targets if t.hq_state in home_states
            ),
        )
        logger.debug(
            f"{result.name}: valuation {estimated_valuation:.1f}M, ROI {projected_roi:.1f}%"
        )
        return result

    def resolve_targets(
        self,
        target_ids: Sequence[int],
        candidates: Sequence[UnifiedVar],
    ) -> list[UnifiedVar]:
        """Map target ids to candidate records, in the order given."""
        if not target_ids:
            raise EmptySelectionError("targetVarIds must contain at least one VAR id")

        duplicates = sorted({i for i in target_ids if list(target_ids).count(i) > 1})
        if duplicates:
            raise ScenarioError(
                f"Duplicate VAR id(s) in selection: {', '.join(str(i) for i in duplicates)}"
            )

        by_id = {c.id: c for c in candidates}
        missing = [i for i in target_ids if i not in by_id]
        if missing:
            raise UnknownCandidateError(missing)
        return [by_id[i] for i in target_ids]

    def _ebitda(self, target: UnifiedVar) -> float:
        margin = target.ebitda_margin
        if margin is None:
            margin = self.default_ebitda_margin
        return (target.annual_revenue or 0.0) * margin / 100
