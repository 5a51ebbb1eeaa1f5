"""Dimension scores, ranked candidates and explanation payloads."""

from typing import Iterator, Optional
from pydantic import BaseModel, ConfigDict, Field

from .candidate import UnifiedVar
from .criteria import Dimension

Score = float


class VarScores(BaseModel):
    """Scores for all eight dimensions. Every field is required."""

    model_config = ConfigDict(frozen=True)

    revenue_fit: Score = Field(ge=0.0, le=10.0)
    geographic_fit: Score = Field(ge=0.0, le=10.0)
    specialty_fit: Score = Field(ge=0.0, le=10.0)
    culture_fit: Score = Field(ge=0.0, le=10.0)
    customer_overlap: Score = Field(ge=0.0, le=10.0)
    vendor_synergy: Score = Field(ge=0.0, le=10.0)
    growth_trajectory: Score = Field(ge=0.0, le=10.0)
    margin_profile: Score = Field(ge=0.0, le=10.0)

    def get(self, dimension: Dimension) -> float:
        return getattr(self, dimension.value)

    def items(self) -> Iterator[tuple[Dimension, float]]:
        """Yield ``(dimension, score)`` in canonical order."""
        for dimension in Dimension:
            yield dimension, self.get(dimension)


class ScoredVar(BaseModel):
    """A candidate with its dimension scores, composite and rank."""

    model_config = ConfigDict(frozen=True)

    var: UnifiedVar
    scores: VarScores
    composite_score: float = Field(ge=0.0, le=10.0)
    rank: int = Field(ge=1)
    imputed_dimensions: list[Dimension] = Field(
        default_factory=list,
        description="Dimensions scored with the neutral default because data was missing",
    )
    reasoning: Optional[str] = None


class BreakdownEntry(BaseModel):
    """Contribution of one dimension to the composite score."""

    dimension: Dimension
    label: str
    score: float
    weight: float
    contribution: float
    reasoning: str
    imputed: bool = False


class ExplanationPayload(BaseModel):
    """Structured justification for a candidate's score."""

    var_id: int
    name: str
    composite_score: float
    rank: int
    summary: str
    breakdown: list[BreakdownEntry]
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    data_sources: list[str] = Field(default_factory=list)
    narrative_source: str = Field(
        default="template",
        description="Which collaborator produced the summary: 'template' or 'llm'",
    )
