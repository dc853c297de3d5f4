"""Risk assessment, stress testing, risk limits and rebalancing.

Only the configuration models are re-exported here; the engines live in the
submodules and are imported from there.
"""

from .component_configs import (
    ComprehensiveRiskConfig,
    RebalancingConfig,
    StressScenario,
    StressTestConfig,
)

__all__ = [
    'ComprehensiveRiskConfig',
    'RebalancingConfig',
    'StressScenario',
    'StressTestConfig',
]
