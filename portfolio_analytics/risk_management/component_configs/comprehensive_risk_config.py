"""Comprehensive Risk Management Configuration.

This module provides the main risk configuration model that combines the
individual assessment, stress test and rebalancing configurations.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .assessment_config import AlignmentConfig, ConcentrationConfig, LiquidityConfig, ScoringConfig
from .rebalancing_config import RebalancingConfig
from .stress_test_config import StressTestConfig


class ComprehensiveRiskConfig(BaseModel):
    """Comprehensive risk management configuration."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    concentration: ConcentrationConfig = Field(
        default_factory=ConcentrationConfig, description="Concentration thresholds"
    )
    liquidity: LiquidityConfig = Field(
        default_factory=LiquidityConfig, description="Liquidity classification"
    )
    scoring: ScoringConfig = Field(
        default_factory=ScoringConfig, description="Overall risk score weights"
    )
    alignment: AlignmentConfig = Field(
        default_factory=AlignmentConfig, description="Risk profile alignment"
    )
    stress_tests: StressTestConfig = Field(
        default_factory=StressTestConfig, description="Stress scenario catalogue"
    )
    rebalancing: RebalancingConfig = Field(
        default_factory=RebalancingConfig, description="Rebalancing suggestions"
    )

    base_currency: str = Field(default="USD", description="Reporting currency")
    sector_benchmark: float = Field(
        default=10.0, gt=0, le=100, description="Flat benchmark weight per sector (%)"
    )
    systematic_risk_share: float = Field(
        default=0.7, ge=0, le=1, description="Share of risk attributed to the market"
    )

    def get_summary(self) -> dict[str, Any]:
        """Summarize the headline risk settings.

        Returns:
            Dictionary with the key thresholds
        """
        return {
            'single_asset_limit': self.concentration.single_asset_limit,
            'min_daily_volume': self.liquidity.min_daily_volume,
            'scenarios': [s.name for s in self.stress_tests.scenarios],
            'base_currency': self.base_currency,
            'max_suggestions': self.rebalancing.max_suggestions,
        }
