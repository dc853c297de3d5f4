"""Statistics and time-series helpers for the analytics core."""

from .data_utils import (
    daily_returns,
    nearest_snapshot,
    return_frame,
    returns_from_history,
    value_series,
)
from .math_utils import (
    TRADING_DAYS_PER_YEAR,
    alpha_beta,
    correlation,
    downside_deviation,
    max_drawdown,
    monte_carlo,
    normal_random,
    safe_divide,
    sharpe_ratio,
    value_at_risk,
    volatility,
)

__all__ = [
    'TRADING_DAYS_PER_YEAR',
    'alpha_beta',
    'correlation',
    'daily_returns',
    'downside_deviation',
    'max_drawdown',
    'monte_carlo',
    'nearest_snapshot',
    'normal_random',
    'return_frame',
    'returns_from_history',
    'safe_divide',
    'sharpe_ratio',
    'value_at_risk',
    'value_series',
]
