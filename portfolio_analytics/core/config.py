"""Configuration System for Portfolio Analytics.

This module provides a centralized configuration system that can be used
globally throughout the analytics package.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from portfolio_analytics.risk_management.component_configs.comprehensive_risk_config import (
    ComprehensiveRiskConfig,
)


class PerformanceConfig(BaseModel):
    """Performance analysis configuration settings."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    risk_free_rate: float = Field(default=2.0, description="Annual risk-free rate (%)")
    trading_days: int = Field(default=252, ge=1, description="Trading days per year")
    volatility_windows: list[int] = Field(
        default_factory=lambda: [30, 90, 365],
        description="Short, medium and long volatility windows in days",
    )
    benchmark_symbol: str = Field(default="SPY", description="Benchmark symbol")
    market_symbol: str = Field(default="VTI", description="Broad market symbol")

    # risk score normalisation
    risk_score_max_volatility: float = Field(
        default=50.0, gt=0, description="Volatility (%) mapped to the top of the risk score"
    )
    risk_score_max_drawdown: float = Field(
        default=50.0, gt=0, description="Drawdown (%) mapped to the top of the risk score"
    )
    risk_score_diversified_holdings: int = Field(
        default=20, ge=1, description="Holding count at which concentration adds no risk"
    )
    risk_score_max_beta: float = Field(
        default=2.0, gt=0, description="|beta| mapped to the top of the risk score"
    )

    @field_validator('volatility_windows')
    @classmethod
    def validate_windows(cls, v: list[int]) -> list[int]:
        """Validate three positive, increasing windows."""
        if len(v) != 3:
            raise ValueError("volatility_windows must contain exactly three windows")
        if any(w <= 0 for w in v):
            raise ValueError("volatility windows must be positive")
        if not v[0] < v[1] < v[2]:
            raise ValueError("volatility windows must be strictly increasing")
        return v


class AllocationConfig(BaseModel):
    """Allocation and diversification configuration settings."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    top_holdings_count: int = Field(default=10, ge=1, description="Number of top holdings")
    asset_type_weight: float = Field(default=0.3, ge=0, le=1)
    sector_weight: float = Field(default=0.4, ge=0, le=1)
    region_weight: float = Field(default=0.3, ge=0, le=1)

    min_asset_types: int = Field(default=2, ge=1, description="Asset types below which to advise")
    min_sectors: int = Field(default=5, ge=1, description="Sectors below which to advise")
    min_holdings: int = Field(default=10, ge=1, description="Holdings below which to advise")
    min_overall_score: float = Field(
        default=50.0, ge=0, le=100, description="Overall diversity below which to advise"
    )

    @model_validator(mode='after')
    def validate_weights(self) -> 'AllocationConfig':
        """Validate diversification weights sum to 1."""
        total = self.asset_type_weight + self.sector_weight + self.region_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Diversification weights must sum to 1, got {total}")
        return self


class ESGConfig(BaseModel):
    """ESG analysis configuration settings."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    sustainable_threshold: float = Field(
        default=70.0, ge=0, le=100, description="Composite score counted as sustainable"
    )
    divest_threshold: float = Field(
        default=50.0, ge=0, le=100, description="Composite score below which to divest"
    )
    top_holdings_count: int = Field(default=5, ge=0)
    bottom_holdings_count: int = Field(default=3, ge=0)
    max_divest_recommendations: int = Field(default=2, ge=0)
    max_improve_recommendations: int = Field(default=2, ge=0)

    # heuristic impact coefficients, per unit of invested value
    co2_per_dollar: float = Field(default=0.0001, ge=0, description="Tons of CO2 avoided")
    renewable_mwh_per_dollar: float = Field(default=0.05, ge=0, description="MWh renewable")
    jobs_per_dollar: float = Field(default=0.00001, ge=0, description="Jobs supported")

    clean_energy_symbol: str = Field(default="ICLN")
    clean_energy_name: str = Field(default="iShares Global Clean Energy ETF")
    clean_energy_impact: float = Field(
        default=15.0, description="Estimated score improvement from the clean-energy fund"
    )

    governance_ratings: list[tuple[float, str]] = Field(
        default_factory=lambda: [
            (80.0, "Excellent"),
            (70.0, "Good"),
            (60.0, "Moderate"),
            (50.0, "Fair"),
        ],
        description="Minimum score per rating, highest first; anything lower is Poor",
    )

    @model_validator(mode='after')
    def validate_thresholds(self) -> 'ESGConfig':
        """Validate the divest threshold sits below the sustainable threshold."""
        if self.divest_threshold > self.sustainable_threshold:
            raise ValueError("divest_threshold must not exceed sustainable_threshold")
        bounds = [score for score, _ in self.governance_ratings]
        if bounds != sorted(bounds, reverse=True):
            raise ValueError("governance_ratings must be ordered highest first")
        return self


class ProjectionConfig(BaseModel):
    """Projection and Monte Carlo configuration settings."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    simulations: int = Field(default=1000, ge=1, description="Monte Carlo paths")
    max_simulations: int = Field(default=100_000, ge=1, description="Upper bound on paths")
    horizon_years: int = Field(default=5, ge=0, description="Monte Carlo horizon")
    seed: int | None = Field(default=None, description="Seed for reproducible simulations")

    @model_validator(mode='after')
    def validate_simulations(self) -> 'ProjectionConfig':
        """Validate the simulation count respects the configured bound."""
        if self.simulations > self.max_simulations:
            raise ValueError("simulations must not exceed max_simulations")
        return self


class ServiceConfig(BaseModel):
    """Provider access and concurrency settings."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    provider_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout applied to each provider call"
    )
    max_workers: int = Field(default=6, ge=1, description="Analytics fan-out thread count")
    log_level: str = Field(default="INFO", description="Default log level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level name."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()


class AnalyticsConfig(BaseModel):
    """Main configuration class for portfolio analytics."""

    model_config = ConfigDict(
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    performance: PerformanceConfig | None = Field(
        default=None, description="Performance configuration"
    )
    allocation: AllocationConfig | None = Field(
        default=None, description="Allocation configuration"
    )
    esg: ESGConfig | None = Field(default=None, description="ESG configuration")
    projections: ProjectionConfig | None = Field(
        default=None, description="Projection configuration"
    )
    risk: ComprehensiveRiskConfig | None = Field(default=None, description="Risk configuration")
    service: ServiceConfig | None = Field(default=None, description="Service configuration")

    def __init__(self, **data: Any) -> None:
        """Initialize AnalyticsConfig and fill in default sub-configurations."""
        super().__init__(**data)
        if self.performance is None:
            self.performance = PerformanceConfig()
        if self.allocation is None:
            self.allocation = AllocationConfig()
        if self.esg is None:
            self.esg = ESGConfig()
        if self.projections is None:
            self.projections = ProjectionConfig()
        if self.risk is None:
            self.risk = ComprehensiveRiskConfig()
        if self.service is None:
            self.service = ServiceConfig()


# Global configuration instance
_global_config: AnalyticsConfig | None = None


def get_config() -> AnalyticsConfig:
    """Get the global configuration instance.

    Returns:
        Global AnalyticsConfig instance
    """
    global _global_config
    if _global_config is None:
        _global_config = AnalyticsConfig()
    return _global_config


def set_config(config: AnalyticsConfig) -> None:
    """Set the global configuration instance.

    Args:
        config: AnalyticsConfig instance to set as global
    """
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = AnalyticsConfig()
