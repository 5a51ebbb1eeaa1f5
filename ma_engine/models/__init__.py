"""Data models for the VAR acquisition engine."""

from .candidate import (
    UnifiedVar,
    OwnershipType,
    CustomerSegment,
    BranchLocation,
)
from .criteria import (
    AcquisitionCriteria,
    Dimension,
    DimensionWeight,
    ValueRange,
    DEFAULT_CRITERIA,
    DEFAULT_WEIGHTS,
)
from .scores import (
    VarScores,
    ScoredVar,
    BreakdownEntry,
    ExplanationPayload,
)
from .scenario import (
    AcquirerProfile,
    DealAssumptions,
    PriceRange,
    ScenarioRequest,
    ScenarioResult,
    DEFAULT_ACQUIRER,
)

__all__ = [
    "UnifiedVar",
    "OwnershipType",
    "CustomerSegment",
    "BranchLocation",
    "AcquisitionCriteria",
    "Dimension",
    "DimensionWeight",
    "ValueRange",
    "DEFAULT_CRITERIA",
    "DEFAULT_WEIGHTS",
    "VarScores",
    "ScoredVar",
    "BreakdownEntry",
    "ExplanationPayload",
    "AcquirerProfile",
    "DealAssumptions",
    "PriceRange",
    "ScenarioRequest",
    "ScenarioResult",
    "DEFAULT_ACQUIRER",
]
