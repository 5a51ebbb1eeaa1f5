"""Deal assumptions and scenario simulation results."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .candidate import UnifiedVar

EBITDA_MULTIPLE_MIN = 4.0
EBITDA_MULTIPLE_MAX = 12.0
EBITDA_MULTIPLE_STEP = 0.5


class DealAssumptions(BaseModel):
    """Adjustable assumptions for a scenario. Rates are fractions, not percent."""

    model_config = ConfigDict(frozen=True)

    ebitda_multiple: float = Field(
        default=7.0,
        ge=EBITDA_MULTIPLE_MIN,
        le=EBITDA_MULTIPLE_MAX,
        description="Valuation multiple applied to EBITDA",
    )
    cross_sell_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    margin_improvement_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    integration_cost_rate: float = Field(
        default=0.03,
        ge=0.0,
        le=1.0,
        description="Integration cost as a fraction of valuation",
    )
    price_band: float = Field(
        default=0.15,
        ge=0.0,
        lt=1.0,
        description="Uncertainty band around the valuation point estimate",
    )

    @field_validator("ebitda_multiple")
    @classmethod
    def _check_multiple_step(cls, value: float) -> float:
        if not (value / EBITDA_MULTIPLE_STEP).is_integer():
            raise ValueError(f"ebitda_multiple must be a multiple of {EBITDA_MULTIPLE_STEP}, got {value}")
        return value


class AcquirerProfile(BaseModel):
    """Baseline financials and capabilities of the acquiring company."""

    model_config = ConfigDict(frozen=True)

    name: str = "Acquirer"
    baseline_revenue: float = Field(default=0.0, ge=0.0, description="Revenue in $M")
    baseline_ebitda: float = Field(default=0.0, ge=0.0, description="EBITDA in $M")
    capabilities: list[str] = Field(default_factory=list)
    vendors: list[str] = Field(default_factory=list)
    home_states: list[str] = Field(default_factory=list)


DEFAULT_ACQUIRER = AcquirerProfile(
    name="BlueAlly",
    baseline_revenue=50.0,
    baseline_ebitda=5.0,
    capabilities=["Cloud", "AI/ML", "Data Analytics", "Managed Services"],
    vendors=["Microsoft", "AWS", "Dell", "Cisco", "Anthropic", "ServiceNow"],
    home_states=["NC"],
)


class ScenarioRequest(BaseModel):
    """Request body for simulating an acquisition scenario.

    Accepts camelCase keys (``targetVarIds``) as well as snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    target_var_ids: list[int] = Field(default_factory=list, description="VAR ids to acquire")
    ebitda_multiple: float = 7.0
    cross_sell_rate: float = 0.05
    margin_improvement_rate: float = 0.15
    integration_cost_rate: float = 0.03

    def assumptions(self) -> DealAssumptions:
        return DealAssumptions(
            ebitda_multiple=self.ebitda_multiple,
            cross_sell_rate=self.cross_sell_rate,
            margin_improvement_rate=self.margin_improvement_rate,
            integration_cost_rate=self.integration_cost_rate,
        )


class PriceRange(BaseModel):
    """Low/high bounds around a valuation."""

    low: float
    high: float


class ScenarioResult(BaseModel):
    """Projected outcome of acquiring a set of targets. Monetary values in $M."""

    name: str
    targets: list[UnifiedVar]
    assumptions: DealAssumptions

    # Financial roll-up
    combined_revenue: float
    target_ebitda: float = Field(description="EBITDA of the acquired targets only")
    combined_ebitda: float = Field(description="Acquirer baseline EBITDA plus target EBITDA")
    estimated_valuation: float = Field(
        description="combined_ebitda x multiple; includes the acquirer's own baseline earnings",
    )
    estimated_price_range: PriceRange

    # Synergies
    cross_sell_revenue: float
    margin_gain: float
    integration_cost: float
    projected_roi: float = Field(description="Year-1 ROI in percent")

    # Capability and footprint
    capability_gains: list[str] = Field(default_factory=list)
    capability_overlaps: list[str] = Field(default_factory=list)
    vendor_overlaps: list[str] = Field(default_factory=list)
    geographic_overlaps: list[str] = Field(default_factory=list)
