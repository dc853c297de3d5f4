"""Core layer for analytics orchestration, performance metrics, configuration, and logging."""

from portfolio_analytics.core.analytics_engine import PortfolioAnalyticsEngine, PortfolioData
from portfolio_analytics.core.config import (
    AllocationConfig,
    AnalyticsConfig,
    ESGConfig,
    PerformanceConfig,
    ProjectionConfig,
    ServiceConfig,
    get_config,
    reset_config,
    set_config,
)
from portfolio_analytics.core.exceptions import (
    AnalyticsError,
    ConfigurationError,
    DataProviderError,
    PortfolioNotFoundError,
    ProviderTimeoutError,
)
from portfolio_analytics.core.logger import AnalyticsLogger, get_analytics_logger
from portfolio_analytics.core.performance import PerformanceAnalyzer
from portfolio_analytics.core.projections import ProjectionEngine

__all__ = [
    'AllocationConfig',
    'AnalyticsConfig',
    'AnalyticsError',
    'AnalyticsLogger',
    'ConfigurationError',
    'DataProviderError',
    'ESGConfig',
    'PerformanceAnalyzer',
    'PerformanceConfig',
    'PortfolioAnalyticsEngine',
    'PortfolioData',
    'PortfolioNotFoundError',
    'ProjectionConfig',
    'ProjectionEngine',
    'ProviderTimeoutError',
    'ServiceConfig',
    'get_analytics_logger',
    'get_config',
    'reset_config',
    'set_config',
]
