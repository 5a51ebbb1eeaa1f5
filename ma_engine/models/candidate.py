"""Candidate VAR records."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class OwnershipType(str, Enum):
    """Known ownership structures. Other values are kept as given."""

    PRIVATE = "Private"
    PE_BACKED = "PE-Backed"
    PE = "PE"
    PUBLIC = "Public"
    FAMILY_OWNED = "Family-Owned"
    ESOP = "ESOP"
    VC_BACKED = "VC-Backed"
    VC = "VC"


class CustomerSegment(str, Enum):
    """Known customer segments. Other values are kept as given."""

    SMB = "SMB"
    MID_MARKET = "Mid-Market"
    ENTERPRISE = "Enterprise"
    MIXED = "Mixed"


def canonical_label(value, known: type[Enum]) -> Optional[str]:
    """Spell a known label the standard way; pass unknown labels through."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    text = str(value).strip()
    if not text:
        return None
    for member in known:
        if member.value.casefold() == text.casefold():
            return member.value
    return text


class BranchLocation(BaseModel):
    """A branch office location."""

    model_config = ConfigDict(frozen=True)

    city: str
    state: str


class UnifiedVar(BaseModel):
    """A value-added reseller record as supplied by the data layer.

    Financial figures follow the data layer's conventions: revenue in $M,
    margins and growth as percentages (``12.5`` means 12.5%).
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Stable VAR identifier")
    name: str = Field(description="Company name")
    website: Optional[str] = None

    # Location
    hq_city: str = ""
    hq_state: str = ""
    branch_locations: list[BranchLocation] = Field(default_factory=list)

    # Financials
    annual_revenue: Optional[float] = Field(default=None, description="Annual revenue in $M")
    ebitda_margin: Optional[float] = Field(default=None, description="EBITDA margin in percent")
    growth_rate: Optional[float] = Field(default=None, description="YoY revenue growth in percent")

    # Organization
    employee_count: Optional[int] = None
    ownership_type: Optional[str] = Field(default=None, description="See OwnershipType for known values")
    glassdoor_rating: Optional[float] = Field(default=None, ge=0.0, le=5.0)
    year_founded: Optional[int] = None

    # Go-to-market
    specialties: list[str] = Field(default_factory=list)
    top_vendors: list[str] = Field(default_factory=list)
    top_customers: list[str] = Field(default_factory=list)
    customer_segment: Optional[str] = Field(default=None, description="See CustomerSegment for known values")
    certifications: list[str] = Field(default_factory=list)

    # Descriptive
    strategic_specialty: Optional[str] = None
    description: str = ""
    data_sources: list[str] = Field(default_factory=list)
    confidence_score: float = Field(default=0.5, ge=0.0, le=1.0, description="Data-quality indicator")

    @field_validator("ownership_type", mode="before")
    @classmethod
    def _normalize_ownership(cls, value):
        return canonical_label(value, OwnershipType)

    @field_validator("customer_segment", mode="before")
    @classmethod
    def _normalize_segment(cls, value):
        return canonical_label(value, CustomerSegment)
