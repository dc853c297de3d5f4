"""Risk management configuration models."""

from .assessment_config import AlignmentConfig, ConcentrationConfig, LiquidityConfig, ScoringConfig
from .comprehensive_risk_config import ComprehensiveRiskConfig
from .rebalancing_config import RebalancingConfig
from .stress_test_config import (
    HistoricalWorstCaseConfig,
    StressScenario,
    StressTestConfig,
    default_scenarios,
)

__all__ = [
    'AlignmentConfig',
    'ComprehensiveRiskConfig',
    'ConcentrationConfig',
    'HistoricalWorstCaseConfig',
    'LiquidityConfig',
    'RebalancingConfig',
    'ScoringConfig',
    'StressScenario',
    'StressTestConfig',
    'default_scenarios',
]
