"""Per-dimension fit scoring for VAR candidates."""

import logging
import math
from typing import Iterable, Optional

from ma_engine.errors import ScoreIntegrityError
from ma_engine.models import AcquisitionCriteria, Dimension, UnifiedVar, ValueRange, VarScores

logger = logging.getLogger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 10.0

# Substituted when a dimension's input data is missing
NEUTRAL_SCORE = 5.0

# Size fit: 10 inside the band, minus RANGE_DECAY per unit of log-distance outside it
RANGE_DECAY = 6.0
RANGE_FLOOR = 2.0

# Geography
PREFERRED_STATE_SCORE = 10.0
ADJACENT_STATE_SCORE = 7.0
OTHER_STATE_SCORE = 4.0

# Customer segments on a size ladder; "Mixed" straddles all of them
SEGMENT_LADDER = ["SMB", "Mid-Market", "Enterprise"]
MIXED_SEGMENT = "Mixed"
SEGMENT_EXACT_SCORE = 10.0
SEGMENT_MIXED_SCORE = 8.0
SEGMENT_STEP_SCORES = {1: 6.0, 2: 3.0}

# Growth (percent YoY): concave up to saturation, flat above it
GROWTH_BASE_SCORE = 3.0
GROWTH_SATURATION = 25.0
GROWTH_DECLINE_SLOPE = 5.0  # percentage points of decline per score point

# EBITDA margin (percent), scaled against a typical VAR band
MARGIN_FLOOR = 5.0
MARGIN_CEILING = 18.0
MARGIN_BASE_SCORE = 3.0


def clamp(value: float) -> float:
    """Clamp a score into [0, 10]."""
    return min(MAX_SCORE, max(MIN_SCORE, value))


def _finite(value: Optional[float], field: str) -> Optional[float]:
    if value is not None and not math.isfinite(value):
        raise ScoreIntegrityError(f"{field} is not a finite number: {value}")
    return value


def _normalized(values: Iterable[str]) -> set[str]:
    return {v.strip().casefold() for v in values if v and v.strip()}


def band_score(value: float, band: ValueRange) -> float:
    """Score a value against a preferred band.

    Inside the band scores 10. Outside, the score falls linearly with the
    log-ratio to the nearest bound (so half and double the band are treated
    alike) and never drops below RANGE_FLOOR.
    """
    if band.contains(value):
        return MAX_SCORE
    if value <= 0:
        return RANGE_FLOOR
    bound = band.minimum if value < band.minimum else band.maximum
    distance = abs(math.log(value / bound))
    return max(RANGE_FLOOR, MAX_SCORE - RANGE_DECAY * distance)


class DimensionScorer:
    """Compute the eight dimension scores for a candidate.

    Every ``_score_*`` method returns None when the data it needs is
    missing; ``evaluate`` substitutes NEUTRAL_SCORE and reports which
    dimensions were imputed so callers can tell them apart from genuinely
    low scores.
    """

    def score(self, candidate: UnifiedVar, criteria: AcquisitionCriteria) -> VarScores:
        """Score a candidate against acquisition criteria."""
        scores, _ = self.evaluate(candidate, criteria)
        return scores

    def evaluate(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> tuple[VarScores, list[Dimension]]:
        """Score a candidate and list the dimensions that fell back to neutral."""
        raw = {
            Dimension.REVENUE_FIT: self._score_revenue_fit(candidate, criteria),
            Dimension.GEOGRAPHIC_FIT: self._score_geographic_fit(candidate, criteria),
            Dimension.SPECIALTY_FIT: self._score_specialty_fit(candidate, criteria),
            Dimension.CULTURE_FIT: self._score_culture_fit(candidate, criteria),
            Dimension.CUSTOMER_OVERLAP: self._score_customer_overlap(candidate, criteria),
            Dimension.VENDOR_SYNERGY: self._score_vendor_synergy(candidate, criteria),
            Dimension.GROWTH_TRAJECTORY: self._score_growth_trajectory(candidate),
            Dimension.MARGIN_PROFILE: self._score_margin_profile(candidate),
        }

        imputed = [d for d in Dimension if raw[d] is None]
        if imputed:
            logger.debug(
                f"{candidate.name}: neutral score for {', '.join(d.value for d in imputed)}"
            )

        values = {
            d.value: NEUTRAL_SCORE if raw[d] is None else clamp(raw[d])
            for d in Dimension
        }
        return VarScores(**values), imputed

    def _score_revenue_fit(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Score annual revenue against the target range."""
        revenue = _finite(candidate.annual_revenue, "annual_revenue")
        if revenue is None:
            return None
        return band_score(revenue, criteria.revenue_range)

    def _score_geographic_fit(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Score HQ state against preferred and adjacent geographies."""
        state = candidate.hq_state.strip().upper()
        if not state:
            return None

        if state in {s.upper() for s in criteria.preferred_states}:
            return PREFERRED_STATE_SCORE
        if state in {s.upper() for s in criteria.adjacent_states}:
            return ADJACENT_STATE_SCORE
        return OTHER_STATE_SCORE

    def _score_specialty_fit(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Score the share of desired specialties the candidate offers.

        An empty specialty list scores like one with no overlap.
        """
        desired = _normalized(criteria.preferred_specialties)
        if not desired:
            return None
        offered = _normalized(candidate.specialties)

        return MAX_SCORE * len(desired & offered) / len(desired)

    def _score_culture_fit(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Average ownership alignment, headcount band and employer rating."""
        parts = []

        if candidate.ownership_type is not None:
            parts.append(
                criteria.ownership_scores.get(
                    candidate.ownership_type,
                    criteria.default_ownership_score,
                )
            )

        if candidate.employee_count is not None:
            parts.append(band_score(candidate.employee_count, criteria.employee_range))

        rating = _finite(candidate.glassdoor_rating, "glassdoor_rating")
        if rating is not None:
            parts.append(rating * 2)

        if not parts:
            return None
        return sum(parts) / len(parts)

    def _score_customer_overlap(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Score similarity of the candidate's segment to the target segment."""
        target = criteria.target_customer_segment
        if candidate.customer_segment is None or not target:
            return None

        segment = candidate.customer_segment
        if segment.casefold() == target.casefold():
            return SEGMENT_EXACT_SCORE
        if MIXED_SEGMENT in (segment, target):
            return SEGMENT_MIXED_SCORE

        ladder = [s.casefold() for s in SEGMENT_LADDER]
        if segment.casefold() not in ladder or target.casefold() not in ladder:
            return None
        steps = abs(ladder.index(segment.casefold()) - ladder.index(target.casefold()))
        return SEGMENT_STEP_SCORES[steps]

    def _score_vendor_synergy(
        self,
        candidate: UnifiedVar,
        criteria: AcquisitionCriteria,
    ) -> Optional[float]:
        """Score the share of the candidate's vendors that are preferred."""
        preferred = _normalized(criteria.preferred_vendors)
        if not preferred:
            return None
        vendors = _normalized(candidate.top_vendors)
        if not vendors:
            return MIN_SCORE

        return MAX_SCORE * len(preferred & vendors) / len(vendors)

    def _score_growth_trajectory(self, candidate: UnifiedVar) -> Optional[float]:
        """Score growth with diminishing returns up to a saturation point."""
        growth = _finite(candidate.growth_rate, "growth_rate")
        if growth is None:
            return None

        if growth < 0:
            return GROWTH_BASE_SCORE + growth / GROWTH_DECLINE_SLOPE
        if growth >= GROWTH_SATURATION:
            return MAX_SCORE
        headroom = MAX_SCORE - GROWTH_BASE_SCORE
        return GROWTH_BASE_SCORE + headroom * math.sqrt(growth / GROWTH_SATURATION)

    def _score_margin_profile(self, candidate: UnifiedVar) -> Optional[float]:
        """Score EBITDA margin against the typical VAR band."""
        margin = _finite(candidate.ebitda_margin, "ebitda_margin")
        if margin is None:
            return None

        if margin < MARGIN_FLOOR:
            return MARGIN_BASE_SCORE * margin / MARGIN_FLOOR
        if margin >= MARGIN_CEILING:
            return MAX_SCORE
        headroom = MAX_SCORE - MARGIN_BASE_SCORE
        return MARGIN_BASE_SCORE + headroom * (margin - MARGIN_FLOOR) / (MARGIN_CEILING - MARGIN_FLOOR)
