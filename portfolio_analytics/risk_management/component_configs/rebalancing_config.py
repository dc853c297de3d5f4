"""Rebalancing Advisor Configuration."""

from pydantic import BaseModel, ConfigDict, Field


class RebalancingConfig(BaseModel):
    """Configuration for rebalancing suggestions."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    recommended_sectors: list[str] = Field(
        default_factory=lambda: [
            "Technology",
            "Healthcare",
            "Financials",
            "Consumer",
            "Industrials",
        ],
        description="Sectors suggested when diversification is low, in priority order",
    )
    max_new_sectors: int = Field(default=3, ge=0, description="Maximum sectors suggested")
    new_position_weight: float = Field(
        default=5.0, gt=0, le=100, description="Target weight for new positions (%)"
    )
    diversification_trigger: float = Field(
        default=50.0,
        ge=0,
        le=100,
        description="Sector diversification below which buys are suggested",
    )
    max_suggestions: int = Field(default=10, ge=1, description="Maximum suggestions returned")
    sell_risk_reduction: float = Field(
        default=5.0, ge=0, description="Estimated risk reduction per sell"
    )
    buy_risk_reduction: float = Field(
        default=3.0, ge=0, description="Estimated risk reduction per buy"
    )
    max_risk_reduction: float = Field(
        default=30.0, ge=0, description="Cap on estimated risk reduction"
    )
