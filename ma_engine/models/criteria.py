"""Acquisition criteria profile and the fixed scoring dimension set."""

import math
from enum import Enum
from typing import Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Tolerance on the weight sum; weights are never renormalized.
WEIGHT_SUM_TOLERANCE = 1e-6


class Dimension(str, Enum):
    """The eight fit dimensions, in canonical order."""

    REVENUE_FIT = "revenue_fit"
    GEOGRAPHIC_FIT = "geographic_fit"
    SPECIALTY_FIT = "specialty_fit"
    CULTURE_FIT = "culture_fit"
    CUSTOMER_OVERLAP = "customer_overlap"
    VENDOR_SYNERGY = "vendor_synergy"
    GROWTH_TRAJECTORY = "growth_trajectory"
    MARGIN_PROFILE = "margin_profile"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class DimensionWeight(BaseModel):
    """Weight assigned to a single dimension."""

    model_config = ConfigDict(frozen=True)

    dimension: Dimension
    weight: float = Field(ge=0.0, le=1.0)


class ValueRange(BaseModel):
    """Closed numeric range used for revenue and headcount targets."""

    model_config = ConfigDict(frozen=True)

    minimum: float = Field(gt=0.0)
    maximum: float = Field(gt=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> "ValueRange":
        if self.minimum > self.maximum:
            raise ValueError(f"range minimum {self.minimum} exceeds maximum {self.maximum}")
        return self

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


class AcquisitionCriteria(BaseModel):
    """The acquirer's reference profile that candidates are scored against."""

    model_config = ConfigDict(frozen=True)

    # Size
    revenue_range: ValueRange = Field(description="Target annual revenue range in $M")
    employee_range: ValueRange = Field(description="Preferred employee headcount band")

    # Geography (US state codes)
    preferred_states: list[str] = Field(default_factory=list)
    adjacent_states: list[str] = Field(default_factory=list)

    # Capabilities and partnerships
    preferred_specialties: list[str] = Field(default_factory=list)
    preferred_vendors: list[str] = Field(default_factory=list)

    # Culture
    ownership_scores: dict[str, float] = Field(
        default_factory=dict,
        description="Ownership type -> alignment score 0-10",
    )
    default_ownership_score: float = Field(default=4.0, ge=0.0, le=10.0)

    # Customers
    target_customer_segment: Optional[str] = None

    # Scoring configuration, index-aligned with Dimension
    weights: list[DimensionWeight]

    @field_validator("weights", mode="before")
    @classmethod
    def _weights_from_mapping(cls, value):
        """Accept ``{dimension: weight}`` as well as a list of pairs."""
        if isinstance(value, Mapping):
            known = {d.value for d in Dimension}
            unknown = [str(k) for k in value if k not in known]
            if unknown:
                raise ValueError(f"Unknown dimension(s) in weights: {', '.join(sorted(unknown))}")
            return [
                {"dimension": d, "weight": value[d.value]}
                for d in Dimension
                if d.value in value
            ]
        return value

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, value: list[DimensionWeight]) -> list[DimensionWeight]:
        seen = [w.dimension for w in value]
        duplicates = sorted({d.value for d in seen if seen.count(d) > 1})
        if duplicates:
            raise ValueError(f"Duplicate weights for: {', '.join(duplicates)}")
        missing = [d.value for d in Dimension if d not in seen]
        if missing:
            raise ValueError(f"Missing weights for: {', '.join(missing)}")

        total = math.fsum(w.weight for w in value)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"Weights must sum to 1.0, got {total:.6f}")

        # Index-align with the canonical dimension order
        order = list(Dimension)
        return sorted(value, key=lambda w: order.index(w.dimension))

    @field_validator("ownership_scores")
    @classmethod
    def _check_ownership_scores(cls, value: dict[str, float]) -> dict[str, float]:
        for ownership, score in value.items():
            if not 0.0 <= score <= 10.0:
                raise ValueError(f"ownership score for {ownership!r} must be within 0-10, got {score}")
        return value

    def get_weight(self, dimension: Dimension) -> float:
        """Get weight for a dimension."""
        for entry in self.weights:
            if entry.dimension == dimension:
                return entry.weight
        raise KeyError(dimension)

    def weight_map(self) -> dict[str, float]:
        return {w.dimension.value: w.weight for w in self.weights}

    def with_weights(self, updates: Mapping[str, float]) -> "AcquisitionCriteria":
        """Return a copy with some weights replaced; the result is re-validated."""
        merged = self.weight_map()
        unknown = [k for k in updates if k not in merged]
        if unknown:
            raise ValueError(f"Invalid criteria keys: {', '.join(sorted(unknown))}")
        merged.update(updates)
        data = self.model_dump()
        data["weights"] = merged
        return AcquisitionCriteria(**data)


DEFAULT_WEIGHTS: dict[str, float] = {
    Dimension.REVENUE_FIT.value: 0.15,
    Dimension.GEOGRAPHIC_FIT.value: 0.10,
    Dimension.SPECIALTY_FIT.value: 0.20,
    Dimension.CULTURE_FIT.value: 0.10,
    Dimension.CUSTOMER_OVERLAP.value: 0.10,
    Dimension.VENDOR_SYNERGY.value: 0.15,
    Dimension.GROWTH_TRAJECTORY.value: 0.10,
    Dimension.MARGIN_PROFILE.value: 0.10,
}

# Applied whenever a request omits criteria, so results are reproducible.
DEFAULT_CRITERIA = AcquisitionCriteria(
    revenue_range=ValueRange(minimum=100, maximum=300),
    employee_range=ValueRange(minimum=100, maximum=1000),
    preferred_states=["NC", "VA", "GA", "FL", "TX", "SC", "MD", "AL", "TN", "PA"],
    adjacent_states=["NY", "NJ", "MA", "CT", "DE", "WV", "KY", "MS", "LA", "OH", "IN", "IL"],
    preferred_specialties=["Cloud", "Cybersecurity", "Managed Services"],
    preferred_vendors=["Microsoft", "Cisco", "Dell"],
    ownership_scores={
        "PE-Backed": 9.0,
        "PE": 9.0,
        "Private": 8.0,
        "Family-Owned": 8.0,
        "ESOP": 6.0,
        "VC-Backed": 4.0,
        "VC": 4.0,
        "Public": 4.0,
    },
    target_customer_segment="Mid-Market",
    weights=DEFAULT_WEIGHTS,
)
