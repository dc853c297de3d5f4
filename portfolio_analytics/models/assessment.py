"""Risk assessment, stress test, limit and rebalancing result types."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .base import SerializableMixin
from .risk_profile import RiskLimit


class RiskLevel(str, Enum):
    """Three-step level used by individual exposures."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskCategory(str, Enum):
    """Four-step category for the overall risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class RebalanceAction(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class ConcentrationViolation(SerializableMixin):
    asset_id: str
    symbol: str
    exposure: float
    limit: float
    value: float = 0.0


@dataclass(frozen=True)
class ConcentrationRisk(SerializableMixin):
    level: RiskLevel = RiskLevel.LOW
    top_holding_exposure: float = 0.0
    top5_exposure: float = 0.0
    single_asset_limit: float = 25.0
    violations: list[ConcentrationViolation] = field(default_factory=list)


@dataclass(frozen=True)
class MarketRisk(SerializableMixin):
    beta: float = 1.0
    correlation: float = 0.0
    systematic_risk: float = 0.7
    specific_risk: float = 0.3
    tracking_error: float = 0.0


@dataclass(frozen=True)
class IlliquidHolding(SerializableMixin):
    symbol: str
    percentage: float
    estimated_liquidation_days: int


@dataclass(frozen=True)
class LiquidityRisk(SerializableMixin):
    level: RiskLevel = RiskLevel.LOW
    illiquid_percentage: float = 0.0
    average_daily_volume: float = 0.0
    liquidation_time: float = 0.0  # days to liquidate the illiquid part
    illiquid_holdings: list[IlliquidHolding] = field(default_factory=list)


@dataclass(frozen=True)
class CurrencyExposure(SerializableMixin):
    currency: str
    exposure: float
    hedged: bool = False


@dataclass(frozen=True)
class CurrencyRisk(SerializableMixin):
    exposures: list[CurrencyExposure] = field(default_factory=list)
    unhedged_exposure: float = 0.0


@dataclass(frozen=True)
class SectorConcentration(SerializableMixin):
    sector: str
    exposure: float
    benchmark: float
    overweight: float


@dataclass(frozen=True)
class SectorRisk(SerializableMixin):
    concentrations: list[SectorConcentration] = field(default_factory=list)
    diversification_score: float = 0.0


@dataclass(frozen=True)
class RiskExposures(SerializableMixin):
    concentration: ConcentrationRisk
    market: MarketRisk
    liquidity: LiquidityRisk
    currency: CurrencyRisk
    sector: SectorRisk


@dataclass(frozen=True)
class HoldingImpact(SerializableMixin):
    symbol: str
    impact: float  # percent
    estimated_loss: float = 0.0


@dataclass(frozen=True)
class ScenarioResult(SerializableMixin):
    name: str
    description: str
    portfolio_impact: float  # percent
    worst_holdings: list[HoldingImpact] = field(default_factory=list)


@dataclass(frozen=True)
class HistoricalWorstCase(SerializableMixin):
    period: str
    loss: float
    recovery: int  # days to recover


@dataclass(frozen=True)
class StressTestResults(SerializableMixin):
    scenarios: list[ScenarioResult]
    historical_worst_case: HistoricalWorstCase


@dataclass(frozen=True)
class Alignment(SerializableMixin):
    score: float = 50.0
    misalignments: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RiskAlert(SerializableMixin):
    id: str
    severity: AlertSeverity
    type: str
    title: str
    description: str
    action_required: str | None = None
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class RiskAssessment(SerializableMixin):
    portfolio_id: str
    overall_risk_score: float
    risk_category: RiskCategory
    alignment: Alignment
    exposures: RiskExposures
    stress_tests: StressTestResults
    alerts: list[RiskAlert] = field(default_factory=list)


@dataclass(frozen=True)
class LimitViolation(SerializableMixin):
    limit: RiskLimit
    current_value: float
    message: str


@dataclass(frozen=True)
class RiskLimitCheck(SerializableMixin):
    violations: list[LimitViolation] = field(default_factory=list)
    passed: bool = True


@dataclass(frozen=True)
class RebalancingSuggestion(SerializableMixin):
    action: RebalanceAction
    asset_id: str
    symbol: str
    current_weight: float
    target_weight: float
    suggested_amount: float
    reason: str


@dataclass(frozen=True)
class RebalancingSuggestions(SerializableMixin):
    suggestions: list[RebalancingSuggestion] = field(default_factory=list)
    estimated_risk_reduction: float = 0.0
