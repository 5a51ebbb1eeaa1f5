"""Tests for composite aggregation and ranking."""

import pytest

from ma_engine.errors import ScoreIntegrityError
from ma_engine.explain import headline
from ma_engine.models import AcquisitionCriteria, Dimension, UnifiedVar, VarScores, DEFAULT_CRITERIA
from ma_engine.score import Ranker, aggregate
from ma_engine.sources import sample_vars

EQUAL_WEIGHTS = {d.value: 1 / 8 for d in Dimension}


def make_scores(value: float = 5.0, **kwargs) -> VarScores:
    values = {d.value: value for d in Dimension}
    values.update(kwargs)
    return VarScores(**values)


def make_var(var_id: int, name: str, **kwargs) -> UnifiedVar:
    defaults = {
        "id": var_id,
        "name": name,
        "hq_state": "NC",
        "annual_revenue": 150,
        "ebitda_margin": 12,
        "growth_rate": 10,
        "specialties": ["Cloud"],
        "top_vendors": ["Microsoft"],
    }
    defaults.update(kwargs)
    return UnifiedVar(**defaults)


def equal_criteria() -> AcquisitionCriteria:
    return DEFAULT_CRITERIA.with_weights(EQUAL_WEIGHTS)


class TestAggregate:

    def test_equal_weights_all_eights(self):
        criteria = equal_criteria()
        assert aggregate(make_scores(8.0), criteria.weights) == 8.0

    def test_bounds(self):
        for criteria in (DEFAULT_CRITERIA, equal_criteria()):
            assert aggregate(make_scores(0.0), criteria.weights) == 0.0
            top = aggregate(make_scores(10.0), criteria.weights)
            assert 9.999999 <= top <= 10.0

    def test_single_dimension_weight(self):
        weights = {d.value: 0.0 for d in Dimension}
        weights["vendor_synergy"] = 1.0
        criteria = DEFAULT_CRITERIA.with_weights(weights)
        scores = make_scores(1.0, vendor_synergy=7.0)
        assert aggregate(scores, criteria.weights) == 7.0

    def test_non_finite_fails_loudly(self):
        class BrokenScores:
            def get(self, dimension):
                return float("nan")

        with pytest.raises(ScoreIntegrityError):
            aggregate(BrokenScores(), DEFAULT_CRITERIA.weights)


class TestRanker:

    def test_ranks_are_contiguous(self):
        ranked = Ranker().rank(sample_vars(), DEFAULT_CRITERIA)
        assert [r.rank for r in ranked] == list(range(1, len(ranked) + 1))
        assert sorted(r.var.id for r in ranked) == sorted(v.id for v in sample_vars())

    def test_composite_non_increasing(self):
        ranked = Ranker().rank(sample_vars(), DEFAULT_CRITERIA)
        composites = [r.composite_score for r in ranked]
        assert composites == sorted(composites, reverse=True)

    def test_best_fit_ranks_first(self):
        ranked = Ranker().rank(sample_vars(), DEFAULT_CRITERIA)
        assert ranked[0].var.name == "Carolina Cloud Partners"

    def test_alphabetical_tie_break(self):
        zenith = make_var(1, "Zenith")
        acme = make_var(2, "Acme")
        ranked = Ranker().rank([zenith, acme], DEFAULT_CRITERIA)
        assert ranked[0].composite_score == ranked[1].composite_score
        assert [r.var.name for r in ranked] == ["Acme", "Zenith"]
        assert ranked[0].rank == 1

    def test_tie_break_ignores_case(self):
        ranked = Ranker().rank([make_var(1, "Zenith"), make_var(2, "acme")], DEFAULT_CRITERIA)
        assert [r.var.name for r in ranked] == ["acme", "Zenith"]

    def test_deterministic(self):
        candidates = sample_vars() + [make_var(10, "Acme"), make_var(11, "Zenith")]
        first = Ranker().rank(candidates, DEFAULT_CRITERIA)
        second = Ranker().rank(list(reversed(candidates)), DEFAULT_CRITERIA)
        assert [(r.var.id, r.rank, r.composite_score) for r in first] == [
            (r.var.id, r.rank, r.composite_score) for r in second
        ]

    def test_rerank_subset_renumbers(self):
        ranker = Ranker()
        ranked = ranker.rank(sample_vars(), DEFAULT_CRITERIA)
        subset = ranker.rerank(ranked[2:5])
        assert [r.rank for r in subset] == [1, 2, 3]
        assert [r.var.id for r in subset] == [r.var.id for r in ranked[2:5]]

    def test_criteria_change_reorders(self):
        candidates = [
            make_var(1, "Grower", growth_rate=30, ebitda_margin=4),
            make_var(2, "Earner", growth_rate=0, ebitda_margin=20),
        ]
        growth = {d.value: 0.0 for d in Dimension}
        growth["growth_trajectory"] = 1.0
        margin = {d.value: 0.0 for d in Dimension}
        margin["margin_profile"] = 1.0

        by_growth = Ranker().rank(candidates, DEFAULT_CRITERIA.with_weights(growth))
        by_margin = Ranker().rank(candidates, DEFAULT_CRITERIA.with_weights(margin))
        assert by_growth[0].var.name == "Grower"
        assert by_margin[0].var.name == "Earner"

    def test_imputed_dimensions_recorded(self):
        ranked = Ranker().rank([make_var(1, "Sparse", growth_rate=None)], DEFAULT_CRITERIA)
        assert ranked[0].imputed_dimensions == [
            Dimension.CULTURE_FIT,
            Dimension.CUSTOMER_OVERLAP,
            Dimension.GROWTH_TRAJECTORY,
        ]

    def test_headlines_for_top_n_only(self):
        ranker = Ranker(headline=headline, headline_count=2)
        ranked = ranker.rank(sample_vars(), DEFAULT_CRITERIA)
        assert all(r.reasoning for r in ranked[:2])
        assert all(r.reasoning is None for r in ranked[2:])
        assert ranked[0].var.name in ranked[0].reasoning
        assert "#1" in ranked[0].reasoning

    def test_empty_candidate_set(self):
        assert Ranker().rank([], DEFAULT_CRITERIA) == []
