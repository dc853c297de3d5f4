"""Portfolio Risk, Performance and ESG Analytics.

This package computes performance, allocation, risk and sustainability
analytics for investment portfolios, assesses them against a user's risk
profile, checks risk limits, runs stress scenarios and proposes rebalancing
trades.
"""

# Core exports
from portfolio_analytics.core.analytics_engine import PortfolioAnalyticsEngine
from portfolio_analytics.core.config import AnalyticsConfig, get_config, reset_config, set_config
from portfolio_analytics.core.exceptions import (
    AnalyticsError,
    DataProviderError,
    PortfolioNotFoundError,
    ProviderTimeoutError,
)
from portfolio_analytics.data.data_handler import ProviderGateway
from portfolio_analytics.data.providers import (
    InMemoryMarketDataProvider,
    InMemoryPortfolioDataProvider,
    InMemoryRiskProfileStore,
    MarketDataProvider,
    PortfolioDataProvider,
    RiskProfileStore,
)
from portfolio_analytics.risk_management.risk_manager import RiskManager

__version__ = "0.1.0"
__all__ = [
    "AnalyticsConfig",
    "AnalyticsError",
    "DataProviderError",
    "InMemoryMarketDataProvider",
    "InMemoryPortfolioDataProvider",
    "InMemoryRiskProfileStore",
    "MarketDataProvider",
    "PortfolioAnalyticsEngine",
    "PortfolioDataProvider",
    "PortfolioNotFoundError",
    "ProviderGateway",
    "ProviderTimeoutError",
    "RiskManager",
    "RiskProfileStore",
    "get_config",
    "reset_config",
    "set_config",
]
