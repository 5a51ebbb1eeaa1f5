"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from ma_engine import __version__
from ma_engine.api import create_app
from ma_engine.explain import ExplanationSynthesizer
from ma_engine.service import MaEngine
from ma_engine.sources import StaticSource


@pytest.fixture
def client():
    engine = MaEngine(StaticSource(), synthesizer=ExplanationSynthesizer())
    return TestClient(create_app(engine))


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestRankings:

    def test_rankings(self, client):
        response = client.get("/api/ma/rankings")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 6
        assert [r["rank"] for r in data["rankings"]] == [1, 2, 3, 4, 5, 6]
        top = data["rankings"][0]
        assert top["var"]["name"] == "Carolina Cloud Partners"
        assert set(top["scores"]) == {
            "revenue_fit",
            "geographic_fit",
            "specialty_fit",
            "culture_fit",
            "customer_overlap",
            "vendor_synergy",
            "growth_trajectory",
            "margin_profile",
        }
        assert top["reasoning"]

    def test_imputed_dimensions_exposed(self, client):
        data = client.get("/api/ma/rankings").json()
        sparse = next(r for r in data["rankings"] if r["var"]["id"] == 5)
        assert sparse["imputed_dimensions"] == ["growth_trajectory", "margin_profile"]


class TestCriteria:

    def test_get_criteria(self, client):
        data = client.get("/api/ma/criteria").json()
        weights = {w["dimension"]: w["weight"] for w in data["weights"]}
        assert weights["specialty_fit"] == 0.20
        assert data["revenue_range"] == {"minimum": 100.0, "maximum": 300.0}

    def test_update_weights(self, client):
        response = client.put(
            "/api/ma/criteria",
            json={"revenue_fit": 0.10, "specialty_fit": 0.25},
        )
        assert response.status_code == 200
        weights = {w["dimension"]: w["weight"] for w in response.json()["criteria"]["weights"]}
        assert weights["revenue_fit"] == 0.10
        assert weights["specialty_fit"] == 0.25

        current = client.get("/api/ma/criteria").json()
        assert {w["dimension"]: w["weight"] for w in current["weights"]} == weights

    def test_unknown_key_rejected(self, client):
        response = client.put("/api/ma/criteria", json={"brand_strength": 0.1})
        assert response.status_code == 400
        assert "brand_strength" in response.json()["detail"]

    def test_bad_sum_rejected_and_not_applied(self, client):
        response = client.put("/api/ma/criteria", json={"revenue_fit": 0.9})
        assert response.status_code == 400

        current = client.get("/api/ma/criteria").json()
        weights = {w["dimension"]: w["weight"] for w in current["weights"]}
        assert weights["revenue_fit"] == 0.15


class TestExplanation:

    def test_explanation(self, client):
        response = client.get("/api/ma/rankings/1/explanation")
        assert response.status_code == 200
        data = response.json()
        assert data["var_id"] == 1
        assert data["rank"] == 1
        assert len(data["breakdown"]) == 8
        assert data["narrative_source"] == "template"

    def test_unknown_var(self, client):
        response = client.get("/api/ma/rankings/999/explanation")
        assert response.status_code == 404


class TestCompare:

    def test_compare(self, client):
        response = client.get("/api/ma/compare", params={"ids": "3,1"})
        assert response.status_code == 200
        assert [c["var"]["id"] for c in response.json()["candidates"]] == [3, 1]

    def test_missing_ids(self, client):
        assert client.get("/api/ma/compare").status_code == 400

    @pytest.mark.parametrize("ids", ["1", "1,2,3,4"])
    def test_wrong_count(self, client, ids):
        response = client.get("/api/ma/compare", params={"ids": ids})
        assert response.status_code == 400

    def test_unknown_id(self, client):
        response = client.get("/api/ma/compare", params={"ids": "1,999"})
        assert response.status_code == 404


class TestScenarios:

    def test_simulate(self, client):
        response = client.post(
            "/api/ma/scenarios",
            json={"targetVarIds": [1, 3], "ebitdaMultiple": 8},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["combined_revenue"] == pytest.approx(325.0)
        assert data["assumptions"]["ebitda_multiple"] == 8.0
        assert data["estimated_price_range"]["low"] < data["estimated_valuation"]

    def test_empty_selection(self, client):
        response = client.post("/api/ma/scenarios", json={"targetVarIds": []})
        assert response.status_code == 400

    def test_unknown_target(self, client):
        response = client.post("/api/ma/scenarios", json={"targetVarIds": [1, 999]})
        assert response.status_code == 400
        assert "999" in response.json()["detail"]

    def test_multiple_out_of_range(self, client):
        response = client.post(
            "/api/ma/scenarios",
            json={"targetVarIds": [1], "ebitdaMultiple": 20},
        )
        assert response.status_code == 400
