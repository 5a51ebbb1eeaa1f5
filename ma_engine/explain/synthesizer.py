"""Structured explanations of composite scores."""

import asyncio
import logging
from typing import Callable, Optional

from ma_engine.models import (
    AcquisitionCriteria,
    BreakdownEntry,
    Dimension,
    ExplanationPayload,
    ScoredVar,
    UnifiedVar,
)
from .narrator import Narrator, TemplateNarrator

logger = logging.getLogger(__name__)

# Shared with the UI colour-coding: >= STRONG is green, <= WEAK is red.
STRONG_THRESHOLD = 8.0
WEAK_THRESHOLD = 4.0

DEFAULT_DATA_SOURCES = ["Company website", "Industry reports"]


def score_band(score: float) -> str:
    """Classify a dimension score as 'strong', 'weak' or 'moderate'."""
    if score >= STRONG_THRESHOLD:
        return "strong"
    if score <= WEAK_THRESHOLD:
        return "weak"
    return "moderate"


def _money(value: Optional[float]) -> str:
    return f"${value:,.0f}M" if value is not None else "undisclosed revenue"


def _pct(value: Optional[float]) -> str:
    return f"{value:g}%" if value is not None else "N/A"


def _join(items: list[str]) -> str:
    return ", ".join(items) if items else "none"


def _revenue_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    target = f"${c.revenue_range.minimum:,.0f}-{c.revenue_range.maximum:,.0f}M"
    if band == "strong":
        return f"Revenue of {_money(v.annual_revenue)} falls in the {target} sweet spot for a tuck-in"
    if band == "moderate":
        return f"Revenue of {_money(v.annual_revenue)} is near but outside the {target} band"
    return f"Revenue of {_money(v.annual_revenue)} is well outside the {target} acquisition range"


def _geography_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    if band == "strong":
        return f"HQ in {v.hq_state} is within the core footprint"
    if band == "moderate":
        return f"{v.hq_state} is an adjacent market, reachable but not core geography"
    return f"{v.hq_state} adds geographic complexity to integration"


def _specialty_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    wanted = {s.casefold() for s in c.preferred_specialties}
    matched = [s for s in v.specialties if s.casefold() in wanted]
    if band == "strong":
        return f"Strong alignment with {_join(c.preferred_specialties)} priorities"
    if band == "moderate":
        return f"Partial specialty alignment ({_join(matched)}); some capability gaps to address"
    return f"Limited overlap with {_join(c.preferred_specialties)}"


def _culture_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    ownership = v.ownership_type or "Unknown"
    if band == "strong":
        return f"{ownership} ownership and organization profile simplify acquisition dynamics"
    if band == "moderate":
        return f"{ownership} ownership is workable but may add negotiation complexity"
    return f"{ownership} ownership or organization size introduces integration friction"


def _customer_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    segment = v.customer_segment or "Unknown"
    if band == "strong":
        return f"{segment} customer base aligns with the {c.target_customer_segment} target market"
    if band == "moderate":
        return f"{segment} customer mix has some alignment but serves a different primary segment"
    return f"{segment} customer base skews away from the {c.target_customer_segment} core"


def _vendor_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    wanted = {s.casefold() for s in c.preferred_vendors}
    shared = [s for s in v.top_vendors if s.casefold() in wanted]
    if band == "strong":
        return f"Strong vendor overlap ({_join(shared)}) accelerates integration"
    if band == "moderate":
        return f"Some vendor partnerships align ({_join(shared)}); incremental synergies possible"
    return "Limited vendor overlap; would add new but unfamiliar partnerships"


def _growth_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    if band == "strong":
        return f"{_pct(v.growth_rate)} YoY growth demonstrates strong market momentum"
    if band == "moderate":
        return f"Growth of {_pct(v.growth_rate)} is steady but not exceptional"
    return f"Growth of {_pct(v.growth_rate)} has slowed; may signal saturation or operational issues"


def _margin_reason(v: UnifiedVar, c: AcquisitionCriteria, band: str) -> str:
    if band == "strong":
        return f"{_pct(v.ebitda_margin)} EBITDA margin reflects healthy unit economics"
    if band == "moderate":
        return f"Margins of {_pct(v.ebitda_margin)} are acceptable but leave room for improvement"
    return f"Thin {_pct(v.ebitda_margin)} margins suggest operational inefficiency or pricing pressure"


REASONERS: dict[Dimension, Callable[[UnifiedVar, AcquisitionCriteria, str], str]] = {
    Dimension.REVENUE_FIT: _revenue_reason,
    Dimension.GEOGRAPHIC_FIT: _geography_reason,
    Dimension.SPECIALTY_FIT: _specialty_reason,
    Dimension.CULTURE_FIT: _culture_reason,
    Dimension.CUSTOMER_OVERLAP: _customer_reason,
    Dimension.VENDOR_SYNERGY: _vendor_reason,
    Dimension.GROWTH_TRAJECTORY: _growth_reason,
    Dimension.MARGIN_PROFILE: _margin_reason,
}


def headline(scored: ScoredVar) -> str:
    """One-line verdict used on the rankings list."""
    v = scored.var
    s = scored.scores

    strengths = []
    if s.revenue_fit >= STRONG_THRESHOLD:
        strengths.append(f"revenue of {_money(v.annual_revenue)} sits in the sweet spot")
    if s.geographic_fit >= STRONG_THRESHOLD:
        strengths.append(f"{v.hq_city}, {v.hq_state} is home turf")
    if s.specialty_fit >= STRONG_THRESHOLD:
        strengths.append("specialty alignment is strong")
    if s.vendor_synergy >= STRONG_THRESHOLD:
        strengths.append("vendor partnerships overlap well")
    if s.growth_trajectory >= STRONG_THRESHOLD and v.growth_rate is not None:
        strengths.append(f"{v.growth_rate:g}% growth shows momentum")
    if s.margin_profile >= STRONG_THRESHOLD and v.ebitda_margin is not None:
        strengths.append(f"{v.ebitda_margin:g}% EBITDA margins are healthy")
    if s.culture_fit >= STRONG_THRESHOLD and v.ownership_type:
        strengths.append(f"{v.ownership_type.lower()} ownership makes integration simpler")
    if s.customer_overlap >= STRONG_THRESHOLD and v.customer_segment:
        strengths.append(f"{v.customer_segment.lower()} customer base matches the target market")

    concerns = []
    if s.revenue_fit <= WEAK_THRESHOLD:
        concerns.append("revenue size is a stretch")
    if s.geographic_fit <= WEAK_THRESHOLD:
        concerns.append("geography adds complexity")
    if s.margin_profile <= WEAK_THRESHOLD:
        concerns.append("margins need work")
    if s.growth_trajectory <= WEAK_THRESHOLD:
        concerns.append("growth has stalled")

    strength_text = ", ".join(strengths[:3]) if strengths else "several dimensions look promising"
    concern_text = f" Watch it: {concerns[0]}." if concerns else ""
    return (
        f"{v.name} makes sense. The {strength_text}. "
        f"Composite score of {scored.composite_score:.1f} puts them at #{scored.rank}.{concern_text}"
    )


class ExplanationSynthesizer:
    """Derive a justification payload from a scored candidate."""

    def __init__(
        self,
        narrator: Optional[Narrator] = None,
        narrative_timeout: Optional[float] = None,
    ):
        self.narrator = narrator or TemplateNarrator()
        self.narrative_timeout = narrative_timeout

    def build(self, scored: ScoredVar, criteria: AcquisitionCriteria) -> ExplanationPayload:
        """Build the structural explanation. Deterministic, no I/O."""
        v = scored.var
        imputed = set(scored.imputed_dimensions)
        breakdown = []

        for entry in criteria.weights:
            dimension = entry.dimension
            score = scored.scores.get(dimension)
            if dimension in imputed:
                reasoning = f"No data available for {dimension.label.lower()}; scored neutral"
            else:
                reasoning = REASONERS[dimension](v, criteria, score_band(score))
            breakdown.append(
                BreakdownEntry(
                    dimension=dimension,
                    label=dimension.label,
                    score=score,
                    weight=entry.weight,
                    contribution=entry.weight * score,
                    reasoning=reasoning,
                    imputed=dimension in imputed,
                )
            )

        strengths = [b.reasoning for b in breakdown if b.score >= STRONG_THRESHOLD]
        concerns = [b.reasoning for b in breakdown if b.score <= WEAK_THRESHOLD]

        return ExplanationPayload(
            var_id=v.id,
            name=v.name,
            composite_score=scored.composite_score,
            rank=scored.rank,
            summary=self._template_summary(scored, breakdown),
            breakdown=breakdown,
            strengths=strengths,
            concerns=concerns,
            data_sources=v.data_sources or list(DEFAULT_DATA_SOURCES),
        )

    async def explain(self, scored: ScoredVar, criteria: AcquisitionCriteria) -> ExplanationPayload:
        """Build the explanation and let the narrator rewrite its text.

        Narrator failures and timeouts keep the templated text.
        """
        payload = self.build(scored, criteria)

        try:
            narrative = await asyncio.wait_for(
                self.narrator.narrate(scored.var, payload),
                timeout=self.narrative_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Narrative for {scored.var.name} timed out after {self.narrative_timeout}s; "
                "using template"
            )
            return payload
        except Exception as e:
            logger.warning(f"Narrative generation failed for {scored.var.name}: {e}")
            return payload

        if narrative is None or not narrative.summary.strip():
            return payload

        breakdown = [
            entry.model_copy(update={"reasoning": narrative.reasoning[entry.dimension.value]})
            if narrative.reasoning.get(entry.dimension.value)
            else entry
            for entry in payload.breakdown
        ]
        return payload.model_copy(
            update={
                "summary": narrative.summary,
                "breakdown": breakdown,
                "narrative_source": self.narrator.name,
            }
        )

    def _template_summary(self, scored: ScoredVar, breakdown: list[BreakdownEntry]) -> str:
        best = max(breakdown, key=lambda b: b.contribution)
        weakest = min(breakdown, key=lambda b: b.score)
        summary = (
            f"{scored.var.name}: composite score {scored.composite_score:.1f} "
            f"(#{scored.rank} rank). Largest contributor is {best.label} "
            f"({best.score:.1f} x {best.weight:.2f}); weakest dimension is "
            f"{weakest.label} ({weakest.score:.1f})."
        )
        if scored.imputed_dimensions:
            missing = ", ".join(d.label for d in scored.imputed_dimensions)
            summary += f" Neutral scores used where data is missing: {missing}."
        return summary
