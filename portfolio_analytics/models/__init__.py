"""Typed inputs and results for the analytics core."""

from .analytics import (
    AllocationAnalysis,
    AllocationBucket,
    ConcentrationSummary,
    CorrelationSummary,
    DiversificationScore,
    DrawdownDetails,
    ESGAnalysis,
    ESGHolding,
    ESGRecommendation,
    ExpectedReturns,
    ImpactMetrics,
    MonteCarloResult,
    PerformanceMetrics,
    PortfolioAnalytics,
    PortfolioComparison,
    PortfolioSummary,
    ProjectedValues,
    ProjectionData,
    RiskMetrics,
    TopHolding,
)
from .assessment import (
    AlertSeverity,
    Alignment,
    ConcentrationRisk,
    ConcentrationViolation,
    CurrencyExposure,
    CurrencyRisk,
    HistoricalWorstCase,
    HoldingImpact,
    IlliquidHolding,
    LimitViolation,
    LiquidityRisk,
    MarketRisk,
    RebalanceAction,
    RebalancingSuggestion,
    RebalancingSuggestions,
    RiskAlert,
    RiskAssessment,
    RiskCategory,
    RiskExposures,
    RiskLevel,
    RiskLimitCheck,
    ScenarioResult,
    SectorConcentration,
    SectorRisk,
    StressTestResults,
)
from .base import SerializableMixin, to_serializable
from .portfolio import (
    Asset,
    AssetType,
    ESGScores,
    Holding,
    Portfolio,
    PortfolioSnapshot,
    Transaction,
    TransactionType,
    validate_snapshots,
)
from .risk_profile import (
    ExperienceLevel,
    InvestmentHorizon,
    LimitAction,
    LimitOperator,
    LimitType,
    LiquidityNeeds,
    RiskLimit,
    RiskProfile,
    RiskTolerance,
)

__all__ = [
    # Inputs
    'Asset',
    'AssetType',
    'ESGScores',
    'Holding',
    'Portfolio',
    'PortfolioSnapshot',
    'Transaction',
    'TransactionType',
    'validate_snapshots',
    'RiskProfile',
    'RiskTolerance',
    'InvestmentHorizon',
    'LiquidityNeeds',
    'ExperienceLevel',
    'RiskLimit',
    'LimitType',
    'LimitOperator',
    'LimitAction',
    # Analytics results
    'AllocationAnalysis',
    'AllocationBucket',
    'ConcentrationSummary',
    'CorrelationSummary',
    'DiversificationScore',
    'DrawdownDetails',
    'ESGAnalysis',
    'ESGHolding',
    'ESGRecommendation',
    'ExpectedReturns',
    'ImpactMetrics',
    'MonteCarloResult',
    'PerformanceMetrics',
    'PortfolioAnalytics',
    'PortfolioComparison',
    'PortfolioSummary',
    'ProjectedValues',
    'ProjectionData',
    'RiskMetrics',
    'TopHolding',
    # Assessment results
    'AlertSeverity',
    'Alignment',
    'ConcentrationRisk',
    'ConcentrationViolation',
    'CurrencyExposure',
    'CurrencyRisk',
    'HistoricalWorstCase',
    'HoldingImpact',
    'IlliquidHolding',
    'LimitViolation',
    'LiquidityRisk',
    'MarketRisk',
    'RebalanceAction',
    'RebalancingSuggestion',
    'RebalancingSuggestions',
    'RiskAlert',
    'RiskAssessment',
    'RiskCategory',
    'RiskExposures',
    'RiskLevel',
    'RiskLimitCheck',
    'ScenarioResult',
    'SectorConcentration',
    'SectorRisk',
    'StressTestResults',
    # Serialization
    'SerializableMixin',
    'to_serializable',
]
