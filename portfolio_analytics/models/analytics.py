"""Result types produced by the analytics engines.

All of these are derived, immutable and recomputed on demand.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from .base import SerializableMixin


@dataclass(frozen=True)
class AllocationBucket(SerializableMixin):
    """Aggregated value of one group along an allocation dimension."""

    name: str
    value: float
    percentage: float
    count: int


@dataclass(frozen=True)
class TopHolding(SerializableMixin):
    asset_id: str
    symbol: str
    name: str
    value: float
    percentage: float
    performance: float  # unrealized gain vs cost basis, percent


@dataclass(frozen=True)
class ConcentrationSummary(SerializableMixin):
    top5_percentage: float = 0.0
    top10_percentage: float = 0.0
    largest_holding_percentage: float = 0.0


@dataclass(frozen=True)
class AllocationAnalysis(SerializableMixin):
    by_asset_type: list[AllocationBucket] = field(default_factory=list)
    by_sector: list[AllocationBucket] = field(default_factory=list)
    by_region: list[AllocationBucket] = field(default_factory=list)
    top_holdings: list[TopHolding] = field(default_factory=list)
    concentration: ConcentrationSummary = field(default_factory=ConcentrationSummary)


@dataclass(frozen=True)
class DiversificationScore(SerializableMixin):
    """HHI-style diversity per dimension and a weighted overall score (0-100)."""

    overall: float = 0.0
    asset_type_diversity: float = 0.0
    sector_diversity: float = 0.0
    geographic_diversity: float = 0.0
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DrawdownDetails(SerializableMixin):
    """Largest peak-to-trough decline, in percent, with its date range."""

    value: float = 0.0
    start_date: date | None = None
    end_date: date | None = None
    duration_days: int = 0


@dataclass(frozen=True)
class PerformanceMetrics(SerializableMixin):
    total_value: float = 0.0
    total_return: float = 0.0
    total_return_percentage: float = 0.0
    annualized_return: float = 0.0
    daily_return: float = 0.0
    weekly_return: float = 0.0
    monthly_return: float = 0.0
    year_to_date_return: float = 0.0
    all_time_high: float = 0.0
    all_time_low: float = 0.0
    sharpe_ratio: float = 0.0
    volatility: float = 0.0
    alpha: float = 0.0
    beta: float = 0.0
    max_drawdown: float = 0.0
    win_rate: float = 0.0


@dataclass(frozen=True)
class CorrelationSummary(SerializableMixin):
    to_market: float = 0.0
    to_benchmark: float = 0.0


@dataclass(frozen=True)
class RiskMetrics(SerializableMixin):
    risk_score: float = 1.0  # 1-10
    volatility_30d: float = 0.0
    volatility_90d: float = 0.0
    volatility_1y: float = 0.0
    value_at_risk_95: float = 0.0
    value_at_risk_99: float = 0.0
    downside_deviation: float = 0.0
    max_drawdown: DrawdownDetails = field(default_factory=DrawdownDetails)
    correlation: CorrelationSummary = field(default_factory=CorrelationSummary)


@dataclass(frozen=True)
class ImpactMetrics(SerializableMixin):
    """Heuristic impact estimates.

    These are linear functions of invested value and the weighted E/S scores.
    They are indicative only and are not audited measurements.
    """

    co2_avoided_tons: float = 0.0
    renewable_energy_mwh: float = 0.0
    jobs_created: int = 0
    is_estimate: bool = True


@dataclass(frozen=True)
class ESGHolding(SerializableMixin):
    symbol: str
    name: str
    esg_score: float
    environmental: float = 0.0
    social: float = 0.0
    governance: float = 0.0


@dataclass(frozen=True)
class ESGRecommendation(SerializableMixin):
    type: str  # improve / divest / invest
    asset_symbol: str
    asset_name: str
    reason: str
    potential_impact: float


@dataclass(frozen=True)
class ESGAnalysis(SerializableMixin):
    portfolio_score: float = 0.0
    environmental_score: float = 0.0
    social_score: float = 0.0
    governance_score: float = 0.0
    carbon_footprint: float = 0.0
    sustainable_investment_percentage: float = 0.0
    coverage_percentage: float = 0.0
    governance_rating: str = "Poor"
    impact_metrics: ImpactMetrics = field(default_factory=ImpactMetrics)
    top_esg_holdings: list[ESGHolding] = field(default_factory=list)
    bottom_esg_holdings: list[ESGHolding] = field(default_factory=list)
    recommendations: list[ESGRecommendation] = field(default_factory=list)


@dataclass(frozen=True)
class MonteCarloResult(SerializableMixin):
    median_outcome: float = 0.0
    percentile_10: float = 0.0
    percentile_90: float = 0.0
    probability_of_gain: float = 0.0
    simulations: int = 0
    years: int = 0


@dataclass(frozen=True)
class ExpectedReturns(SerializableMixin):
    conservative: float = 0.0
    moderate: float = 0.0
    optimistic: float = 0.0


@dataclass(frozen=True)
class ProjectedValues(SerializableMixin):
    one_month: float = 0.0
    three_months: float = 0.0
    six_months: float = 0.0
    one_year: float = 0.0
    five_years: float = 0.0


@dataclass(frozen=True)
class ProjectionData(SerializableMixin):
    expected_return: ExpectedReturns = field(default_factory=ExpectedReturns)
    projected_value: ProjectedValues = field(default_factory=ProjectedValues)
    monte_carlo_simulation: MonteCarloResult = field(default_factory=MonteCarloResult)


@dataclass(frozen=True)
class PortfolioAnalytics(SerializableMixin):
    """Complete analytics bundle for one portfolio."""

    portfolio_id: str
    performance: PerformanceMetrics
    allocation: AllocationAnalysis
    risk: RiskMetrics
    diversification: DiversificationScore
    esg: ESGAnalysis
    projections: ProjectionData
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class PortfolioSummary(SerializableMixin):
    id: str
    name: str
    total_return: float
    annualized_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float


@dataclass(frozen=True)
class PortfolioComparison(SerializableMixin):
    portfolios: list[PortfolioSummary] = field(default_factory=list)
    correlation_matrix: list[list[float]] = field(default_factory=list)
