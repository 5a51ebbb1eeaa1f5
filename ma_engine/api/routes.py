"""API routes for VAR rankings, explanations and scenarios."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from ma_engine.errors import EngineValidationError, UnknownCandidateError
from ma_engine.models import (
    AcquisitionCriteria,
    ExplanationPayload,
    ScenarioRequest,
    ScenarioResult,
    ScoredVar,
)
from ma_engine.service import MaEngine

logger = logging.getLogger(__name__)

router = APIRouter()


class RankingsResponse(BaseModel):
    """Response for ranking requests."""
    rankings: list[ScoredVar]
    criteria: AcquisitionCriteria
    count: int


class CompareResponse(BaseModel):
    """Response for side-by-side comparison."""
    candidates: list[ScoredVar]
    criteria: AcquisitionCriteria


def _engine(request: Request) -> MaEngine:
    return request.app.state.engine


def _criteria(request: Request) -> AcquisitionCriteria:
    return request.app.state.criteria


@router.get("/ma/rankings", response_model=RankingsResponse)
async def get_rankings(request: Request):
    """Return ranked VARs with scores."""
    criteria = _criteria(request)
    rankings = await _engine(request).compute_rankings(criteria)
    return RankingsResponse(rankings=rankings, criteria=criteria, count=len(rankings))


@router.get("/ma/criteria", response_model=AcquisitionCriteria)
async def get_criteria(request: Request):
    """Return the current acquisition criteria."""
    return _criteria(request)


@router.put("/ma/criteria", response_model=RankingsResponse)
async def update_criteria(updates: dict[str, float], request: Request):
    """Update dimension weights and recalculate rankings."""
    try:
        criteria = _criteria(request).with_weights(updates)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request.app.state.criteria = criteria
    logger.info(f"Criteria weights updated: {criteria.weight_map()}")

    rankings = await _engine(request).compute_rankings(criteria)
    return RankingsResponse(rankings=rankings, criteria=criteria, count=len(rankings))


@router.get("/ma/rankings/{var_id}/explanation", response_model=ExplanationPayload)
async def get_explanation(var_id: int, request: Request):
    """Detailed score breakdown for one VAR."""
    try:
        return await _engine(request).explain(var_id, _criteria(request))
    except UnknownCandidateError:
        raise HTTPException(status_code=404, detail=f"VAR with id {var_id} not found in rankings")


@router.get("/ma/compare", response_model=CompareResponse)
async def compare(request: Request, ids: Optional[str] = Query(default=None)):
    """Compare 2 or 3 VARs given as comma-separated ids."""
    if not ids:
        raise HTTPException(status_code=400, detail="ids query parameter required (comma-separated)")

    var_ids = [int(part) for part in (p.strip() for p in ids.split(",")) if part.isdigit()]
    criteria = _criteria(request)
    try:
        candidates = await _engine(request).compare(var_ids, criteria)
    except UnknownCandidateError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EngineValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CompareResponse(candidates=candidates, criteria=criteria)


@router.post("/ma/scenarios", response_model=ScenarioResult)
async def simulate_scenario(body: ScenarioRequest, request: Request):
    """Simulate acquiring one or more VARs."""
    try:
        return await _engine(request).simulate(body)
    except ValueError as e:
        # Unknown or empty selection, out-of-range deal assumptions
        raise HTTPException(status_code=400, detail=str(e))
