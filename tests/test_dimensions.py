"""Tests for per-dimension scoring."""

import pytest

from ma_engine.errors import ScoreIntegrityError
from ma_engine.models import Dimension, UnifiedVar, DEFAULT_CRITERIA
from ma_engine.score.dimensions import DimensionScorer, NEUTRAL_SCORE, RANGE_FLOOR


def make_var(**kwargs) -> UnifiedVar:
    """Create a test VAR with no optional data."""
    defaults = {
        "id": 1,
        "name": "Test VAR",
    }
    defaults.update(kwargs)
    return UnifiedVar(**defaults)


def make_criteria(**kwargs):
    return DEFAULT_CRITERIA.model_copy(update=kwargs)


def evaluate(**kwargs):
    return DimensionScorer().evaluate(make_var(**kwargs), DEFAULT_CRITERIA)


class TestMissingData:
    """Missing inputs fall back to a neutral score and are reported."""

    def test_empty_record_is_neutral(self):
        scores, imputed = evaluate()
        listed = {Dimension.SPECIALTY_FIT, Dimension.VENDOR_SYNERGY}
        assert set(imputed) == set(Dimension) - listed
        for dimension, score in scores.items():
            if dimension in listed:
                assert score == 0
            else:
                assert score == NEUTRAL_SCORE

    def test_imputed_distinguishable_from_low_score(self):
        _, imputed_missing = evaluate()
        scores, imputed_low = evaluate(ebitda_margin=4.0)
        assert Dimension.MARGIN_PROFILE in imputed_missing
        assert Dimension.MARGIN_PROFILE not in imputed_low
        assert scores.margin_profile < NEUTRAL_SCORE

    def test_score_never_omits_dimension(self):
        scores = DimensionScorer().score(make_var(annual_revenue=200), DEFAULT_CRITERIA)
        assert [d for d, _ in scores.items()] == list(Dimension)


class TestRevenueFit:

    def test_inside_range_is_max(self):
        scores, _ = evaluate(annual_revenue=100)
        assert scores.revenue_fit == 10
        scores, _ = evaluate(annual_revenue=300)
        assert scores.revenue_fit == 10

    def test_decays_below_range(self):
        near, _ = evaluate(annual_revenue=80)
        far, _ = evaluate(annual_revenue=50)
        assert 10 > near.revenue_fit > far.revenue_fit > RANGE_FLOOR

    def test_decays_above_range(self):
        near, _ = evaluate(annual_revenue=400)
        far, _ = evaluate(annual_revenue=800)
        assert 10 > near.revenue_fit > far.revenue_fit

    def test_floor(self):
        huge, _ = evaluate(annual_revenue=20000)
        zero, _ = evaluate(annual_revenue=0)
        assert huge.revenue_fit == RANGE_FLOOR
        assert zero.revenue_fit == RANGE_FLOOR


class TestGeographicFit:

    def test_preferred_state(self):
        scores, _ = evaluate(hq_state="NC")
        assert scores.geographic_fit == 10

    def test_state_case_insensitive(self):
        scores, _ = evaluate(hq_state="va ")
        assert scores.geographic_fit == 10

    def test_adjacent_state(self):
        scores, _ = evaluate(hq_state="NY")
        assert scores.geographic_fit == 7

    def test_other_state(self):
        scores, imputed = evaluate(hq_state="CA")
        assert scores.geographic_fit == 4
        assert Dimension.GEOGRAPHIC_FIT not in imputed


class TestSpecialtyFit:

    def test_full_overlap(self):
        scores, _ = evaluate(specialties=["Cloud", "Cybersecurity", "Managed Services"])
        assert scores.specialty_fit == 10

    def test_partial_overlap(self):
        scores, _ = evaluate(specialties=["cloud", "Networking"])
        assert scores.specialty_fit == pytest.approx(10 / 3)

    def test_no_overlap_is_zero(self):
        scores, imputed = evaluate(specialties=["Networking"])
        assert scores.specialty_fit == 0
        assert Dimension.SPECIALTY_FIT not in imputed

    def test_empty_list_never_beats_a_mismatch(self):
        empty, imputed = evaluate(specialties=[])
        mismatch, _ = evaluate(specialties=["Networking"])
        assert empty.specialty_fit <= mismatch.specialty_fit
        assert Dimension.SPECIALTY_FIT not in imputed

    def test_no_desired_specialties_is_neutral(self):
        criteria = make_criteria(preferred_specialties=[])
        scores, imputed = DimensionScorer().evaluate(make_var(specialties=["Cloud"]), criteria)
        assert scores.specialty_fit == NEUTRAL_SCORE
        assert Dimension.SPECIALTY_FIT in imputed


class TestCultureFit:

    def test_ownership_only(self):
        scores, _ = evaluate(ownership_type="PE-Backed")
        assert scores.culture_fit == 9

    def test_unlisted_ownership_uses_default(self):
        criteria = make_criteria(ownership_scores={"Private": 8.0})
        scores = DimensionScorer().score(make_var(ownership_type="Public"), criteria)
        assert scores.culture_fit == criteria.default_ownership_score

    def test_unknown_ownership_uses_default(self):
        scores, imputed = evaluate(ownership_type="Employee-Owned")
        assert scores.culture_fit == DEFAULT_CRITERIA.default_ownership_score
        assert Dimension.CULTURE_FIT not in imputed

    def test_ownership_spelling_normalized(self):
        var = make_var(ownership_type=" pe-backed")
        assert var.ownership_type == "PE-Backed"
        assert DimensionScorer().score(var, DEFAULT_CRITERIA).culture_fit == 9

    def test_combines_available_parts(self):
        scores, _ = evaluate(ownership_type="Private", employee_count=400, glassdoor_rating=4.0)
        assert scores.culture_fit == pytest.approx((8 + 10 + 8) / 3)

    def test_large_public_company_scores_low(self):
        scores, _ = evaluate(ownership_type="Public", employee_count=15000)
        assert scores.culture_fit == pytest.approx((4 + RANGE_FLOOR) / 2)


class TestCustomerOverlap:

    @pytest.mark.parametrize(
        "segment,expected",
        [("Mid-Market", 10), ("Mixed", 8), ("Enterprise", 6), ("SMB", 6)],
    )
    def test_segments_against_mid_market(self, segment, expected):
        scores, _ = evaluate(customer_segment=segment)
        assert scores.customer_overlap == expected

    def test_two_steps_apart(self):
        criteria = make_criteria(target_customer_segment="Enterprise")
        scores = DimensionScorer().score(make_var(customer_segment="SMB"), criteria)
        assert scores.customer_overlap == 3

    def test_unknown_segment_is_neutral(self):
        scores, imputed = evaluate(customer_segment="Government")
        assert scores.customer_overlap == NEUTRAL_SCORE
        assert Dimension.CUSTOMER_OVERLAP in imputed


class TestVendorSynergy:

    def test_all_preferred(self):
        scores, _ = evaluate(top_vendors=["Microsoft", "Cisco"])
        assert scores.vendor_synergy == 10

    def test_share_of_candidate_vendors(self):
        scores, _ = evaluate(top_vendors=["Microsoft", "Cisco", "Dell", "HPE", "NetApp", "VMware"])
        assert scores.vendor_synergy == 5.0

    def test_partial(self):
        scores, _ = evaluate(top_vendors=["microsoft", "HP", "Lenovo", "Apple"])
        assert scores.vendor_synergy == 2.5

    def test_none_shared(self):
        scores, _ = evaluate(top_vendors=["HP", "Lenovo"])
        assert scores.vendor_synergy == 0

    def test_empty_list_scores_as_no_overlap(self):
        empty, imputed = evaluate(top_vendors=[])
        mismatch, _ = evaluate(top_vendors=["HP"])
        assert empty.vendor_synergy == mismatch.vendor_synergy == 0
        assert Dimension.VENDOR_SYNERGY not in imputed

    def test_no_preferred_vendors_is_neutral(self):
        criteria = make_criteria(preferred_vendors=[])
        scores, imputed = DimensionScorer().evaluate(make_var(top_vendors=["HP"]), criteria)
        assert scores.vendor_synergy == NEUTRAL_SCORE
        assert Dimension.VENDOR_SYNERGY in imputed


class TestGrowthTrajectory:

    def test_monotonic(self):
        rates = [-20, -5, 0, 5, 10, 15, 20, 25, 40, 300]
        values = [evaluate(growth_rate=r)[0].growth_trajectory for r in rates]
        assert values == sorted(values)

    def test_saturates(self):
        at, _ = evaluate(growth_rate=25)
        outlier, _ = evaluate(growth_rate=500)
        assert at.growth_trajectory == outlier.growth_trajectory == 10

    def test_diminishing_returns(self):
        s = {r: evaluate(growth_rate=r)[0].growth_trajectory for r in (5, 10, 15, 20)}
        assert s[10] - s[5] > s[20] - s[15]

    def test_decline_clamps_at_zero(self):
        scores, _ = evaluate(growth_rate=-80)
        assert scores.growth_trajectory == 0


class TestMarginProfile:

    def test_band_points(self):
        assert evaluate(ebitda_margin=5)[0].margin_profile == 3
        assert evaluate(ebitda_margin=11.5)[0].margin_profile == pytest.approx(6.5)
        assert evaluate(ebitda_margin=18)[0].margin_profile == 10
        assert evaluate(ebitda_margin=35)[0].margin_profile == 10

    def test_negative_margin_clamps_at_zero(self):
        scores, _ = evaluate(ebitda_margin=-12)
        assert scores.margin_profile == 0

    def test_monotonic(self):
        margins = [-5, 0, 3, 5, 8, 10, 12, 15, 18, 25]
        values = [evaluate(ebitda_margin=m)[0].margin_profile for m in margins]
        assert values == sorted(values)


class TestIntegrity:

    def test_nan_input_fails_loudly(self):
        with pytest.raises(ScoreIntegrityError):
            evaluate(annual_revenue=float("nan"))

    def test_infinite_growth_fails_loudly(self):
        with pytest.raises(ScoreIntegrityError):
            evaluate(growth_rate=float("inf"))

    def test_scores_bounded(self):
        extremes = [
            dict(annual_revenue=1e9, growth_rate=1e6, ebitda_margin=99, employee_count=10**6),
            dict(annual_revenue=0.001, growth_rate=-99, ebitda_margin=-99, employee_count=1),
        ]
        for kwargs in extremes:
            scores, _ = evaluate(**kwargs)
            for _, score in scores.items():
                assert 0 <= score <= 10
