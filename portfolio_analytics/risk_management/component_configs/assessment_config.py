"""Risk Assessment Configuration.

Thresholds and weights used by the risk assessment engine. Exposures and
scores are percentages on a 0-100 scale.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ConcentrationConfig(BaseModel):
    """Configuration for single-asset concentration checks."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    single_asset_limit: float = Field(
        default=25.0, gt=0, le=100, description="Maximum weight of a single holding (%)"
    )
    high_top_holding: float = Field(
        default=40.0, gt=0, le=100, description="Top holding exposure above which level is high"
    )
    high_top5: float = Field(
        default=80.0, gt=0, le=100, description="Top-5 exposure above which level is high"
    )
    medium_top_holding: float = Field(
        default=25.0, gt=0, le=100, description="Top holding exposure above which level is medium"
    )
    medium_top5: float = Field(
        default=60.0, gt=0, le=100, description="Top-5 exposure above which level is medium"
    )

    @model_validator(mode='after')
    def validate_threshold_order(self) -> 'ConcentrationConfig':
        """Validate medium thresholds do not exceed high thresholds."""
        if self.medium_top_holding > self.high_top_holding:
            raise ValueError("medium_top_holding must not exceed high_top_holding")
        if self.medium_top5 > self.high_top5:
            raise ValueError("medium_top5 must not exceed high_top5")
        return self


class LiquidityConfig(BaseModel):
    """Configuration for liquidity classification."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    crypto_min_market_cap: float = Field(
        default=1_000_000.0, ge=0, description="Crypto assets below this market cap are illiquid"
    )
    min_daily_volume: float = Field(
        default=100_000.0, ge=0, description="Assets below this daily volume are illiquid"
    )
    crypto_liquidation_days: int = Field(
        default=7, ge=1, description="Days to liquidate a small-cap crypto position"
    )
    low_volume_liquidation_days: int = Field(
        default=5, ge=1, description="Days to liquidate a low-volume position"
    )
    liquid_liquidation_days: int = Field(
        default=1, ge=1, description="Days to liquidate a liquid position"
    )
    high_illiquid_percentage: float = Field(
        default=30.0, ge=0, le=100, description="Illiquid share above which level is high"
    )
    medium_illiquid_percentage: float = Field(
        default=15.0, ge=0, le=100, description="Illiquid share above which level is medium"
    )
    liquidation_rate: float = Field(
        default=10.0, gt=0, description="Illiquid percentage points liquidated per day"
    )

    @model_validator(mode='after')
    def validate_threshold_order(self) -> 'LiquidityConfig':
        """Validate the medium threshold does not exceed the high threshold."""
        if self.medium_illiquid_percentage > self.high_illiquid_percentage:
            raise ValueError("medium_illiquid_percentage must not exceed high_illiquid_percentage")
        return self


class ScoringConfig(BaseModel):
    """Weights and level scores for the overall 0-100 risk score."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    concentration_weight: float = Field(default=0.25, ge=0, le=1)
    volatility_weight: float = Field(default=0.30, ge=0, le=1)
    liquidity_weight: float = Field(default=0.15, ge=0, le=1)
    market_weight: float = Field(default=0.20, ge=0, le=1)
    sector_weight: float = Field(default=0.10, ge=0, le=1)

    concentration_level_scores: dict[str, float] = Field(
        default_factory=lambda: {'high': 80.0, 'medium': 50.0, 'low': 20.0},
        description="Score contributed by each concentration level",
    )
    liquidity_level_scores: dict[str, float] = Field(
        default_factory=lambda: {'high': 70.0, 'medium': 40.0, 'low': 10.0},
        description="Score contributed by each liquidity level",
    )
    volatility_multiplier: float = Field(
        default=2.0, gt=0, description="Volatility (%) to score multiplier"
    )
    beta_multiplier: float = Field(
        default=50.0, gt=0, description="|beta - 1| to score multiplier"
    )

    # category upper bounds (exclusive)
    low_category_max: float = Field(default=25.0, description="Scores below this are low")
    medium_category_max: float = Field(default=50.0, description="Scores below this are medium")
    high_category_max: float = Field(default=75.0, description="Scores below this are high")

    @field_validator('concentration_level_scores', 'liquidity_level_scores')
    @classmethod
    def validate_level_scores(cls, v: dict[str, float]) -> dict[str, float]:
        """Validate every risk level has a score."""
        missing = {'low', 'medium', 'high'} - set(v)
        if missing:
            raise ValueError(f"Level scores missing for: {sorted(missing)}")
        return v

    @model_validator(mode='after')
    def validate_weights(self) -> 'ScoringConfig':
        """Validate weights sum to 1 and category bounds are ordered."""
        total = (
            self.concentration_weight
            + self.volatility_weight
            + self.liquidity_weight
            + self.market_weight
            + self.sector_weight
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Risk score weights must sum to 1, got {total}")
        if not self.low_category_max < self.medium_category_max < self.high_category_max:
            raise ValueError("Category bounds must be strictly increasing")
        return self


class AlignmentConfig(BaseModel):
    """Risk-profile alignment targets and alert thresholds."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    tolerance_targets: dict[str, float] = Field(
        default_factory=lambda: {
            'conservative': 25.0,
            'moderate': 50.0,
            'aggressive': 75.0,
            'very_aggressive': 90.0,
        },
        description="Target risk score per risk tolerance",
    )
    misalignment_threshold: float = Field(
        default=20.0, ge=0, description="Score gap above which a misalignment is reported"
    )
    penalty_per_point: float = Field(
        default=2.0, ge=0, description="Alignment points lost per point of score gap"
    )
    mismatch_alert_threshold: float = Field(
        default=25.0, ge=0, description="Score gap above which a critical alert is raised"
    )
    illiquid_alert_threshold: float = Field(
        default=20.0, ge=0, le=100, description="Illiquid share above which an alert is raised"
    )

    @field_validator('tolerance_targets')
    @classmethod
    def validate_targets(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Validate every risk tolerance has a target on the 0-100 scale."""
        missing = {'conservative', 'moderate', 'aggressive', 'very_aggressive'} - set(v)
        if missing:
            raise ValueError(f"Tolerance targets missing for: {sorted(missing)}")
        for tolerance, target in v.items():
            if not 0 <= target <= 100:
                raise ValueError(f"Target for {tolerance} must be between 0 and 100")
        return v
