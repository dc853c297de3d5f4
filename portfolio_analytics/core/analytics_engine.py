"""Portfolio Analytics Engine.

Loads a portfolio through the provider gateway and computes its analytics
bundle. The independent sub-analyses run concurrently over immutable inputs.
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd

from portfolio_analytics.core.config import (
    AnalyticsConfig,
    PerformanceConfig,
    ServiceConfig,
    get_config,
)
from portfolio_analytics.core.performance import PerformanceAnalyzer
from portfolio_analytics.core.projections import ProjectionEngine
from portfolio_analytics.data.data_handler import ProviderGateway
from portfolio_analytics.esg.esg_analyzer import ESGAnalyzer
from portfolio_analytics.models.analytics import (
    PortfolioAnalytics,
    PortfolioComparison,
    PortfolioSummary,
)
from portfolio_analytics.models.portfolio import Portfolio, PortfolioSnapshot, Transaction
from portfolio_analytics.portfolio.allocation import AllocationAnalyzer
from portfolio_analytics.utils.data_utils import daily_returns


@dataclass(frozen=True, eq=False)
class PortfolioData:
    """Everything loaded from the providers for one analytics request."""

    portfolio: Portfolio
    snapshots: list[PortfolioSnapshot] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    returns: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))
    benchmark_returns: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))
    market_returns: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))


class PortfolioAnalyticsEngine:
    """Computes the analytics bundle and cross-portfolio comparisons."""

    def __init__(
        self,
        gateway: ProviderGateway,
        config: AnalyticsConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the analytics engine.

        Args:
            gateway: Provider gateway used for every data access
            config: AnalyticsConfig; the global configuration when None
            clock: Returns the current time; injectable for deterministic tests
            logger: Optional logger instance
        """
        self.gateway = gateway
        self.config: AnalyticsConfig = config or get_config()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

        self.performance_config: PerformanceConfig = self.config.performance or PerformanceConfig()
        self.service_config: ServiceConfig = self.config.service or ServiceConfig()

        self.performance = PerformanceAnalyzer(self.performance_config, clock, self.logger)
        self.allocation = AllocationAnalyzer(self.config.allocation, self.logger)
        self.esg = ESGAnalyzer(self.config.esg, self.logger)
        self.projections = ProjectionEngine(
            self.config.projections, self.logger, self.performance_config.trading_days
        )

    @property
    def max_workers(self) -> int:
        return self.service_config.max_workers

    def load(self, portfolio_id: str) -> PortfolioData:
        """Fetch the portfolio and its supporting data.

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
            DataProviderError: If any provider call fails or times out
        """
        portfolio = self.gateway.refresh_assets(self.gateway.get_portfolio(portfolio_id))
        snapshots = self.gateway.get_snapshots(portfolio_id)
        transactions = self.gateway.get_transactions(portfolio_id)

        return PortfolioData(
            portfolio=portfolio,
            snapshots=snapshots,
            transactions=transactions,
            returns=daily_returns(snapshots),
            benchmark_returns=self.gateway.get_returns(self.performance_config.benchmark_symbol),
            market_returns=self.gateway.get_returns(self.performance_config.market_symbol),
        )

    def get_portfolio_analytics(self, portfolio_id: str) -> PortfolioAnalytics:
        """Compute the full analytics bundle for a portfolio.

        Args:
            portfolio_id: Portfolio identifier

        Returns:
            PortfolioAnalytics with performance, allocation, risk,
            diversification, ESG and projections
        """
        self.logger.info(f"Computing analytics for portfolio {portfolio_id}")
        data = self.load(portfolio_id)
        portfolio = data.portfolio
        holdings = portfolio.holdings

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: dict[str, Any] = {
                'performance': executor.submit(
                    self.performance.calculate_performance,
                    portfolio,
                    data.snapshots,
                    data.transactions,
                    data.benchmark_returns,
                ),
                'allocation': executor.submit(self.allocation.analyze, holdings),
                'risk': executor.submit(
                    self.performance.calculate_risk_metrics,
                    portfolio,
                    data.snapshots,
                    data.market_returns,
                    data.benchmark_returns,
                ),
                'diversification': executor.submit(self.allocation.diversification, holdings),
                'esg': executor.submit(self.esg.analyze, holdings),
                'projections': executor.submit(
                    self.projections.project, portfolio.market_value, data.returns
                ),
            }
            results = {name: future.result() for name, future in futures.items()}

        analytics = PortfolioAnalytics(portfolio_id=portfolio.id, **results)
        self.logger.info(
            f"Analytics complete for {portfolio_id}: "
            f"value={analytics.performance.total_value:.2f}, "
            f"risk_score={analytics.risk.risk_score:.2f}"
        )
        return analytics

    def compare_portfolios(self, portfolio_ids: Sequence[str]) -> PortfolioComparison:
        """Compare headline performance and return correlation across portfolios.

        Args:
            portfolio_ids: Portfolios to compare, in output order

        Returns:
            PortfolioComparison with one summary per portfolio and the Pearson
            correlation matrix of their daily returns
        """
        summaries = []
        series = []

        for portfolio_id in portfolio_ids:
            data = self.load(portfolio_id)
            performance = self.performance.calculate_performance(
                data.portfolio, data.snapshots, data.transactions, data.benchmark_returns
            )
            summaries.append(
                PortfolioSummary(
                    id=data.portfolio.id,
                    name=data.portfolio.name,
                    total_return=performance.total_return,
                    annualized_return=performance.annualized_return,
                    volatility=performance.volatility,
                    sharpe_ratio=performance.sharpe_ratio,
                    max_drawdown=performance.max_drawdown,
                )
            )
            series.append(data.returns)

        return PortfolioComparison(
            portfolios=summaries,
            correlation_matrix=self.correlation_matrix(series),
        )

    @staticmethod
    def correlation_matrix(series: Sequence[pd.Series]) -> list[list[float]]:
        """Pairwise Pearson correlation on overlapping dates.

        The diagonal is 1; pairs with fewer than 2 overlapping points or no
        variance are 0.
        """
        count = len(series)
        if count == 0:
            return []

        frame = pd.concat(list(series), axis=1, keys=range(count))
        matrix = frame.corr(method='pearson', min_periods=2).to_numpy(dtype=float)
        matrix = np.nan_to_num(matrix, nan=0.0)
        np.fill_diagonal(matrix, 1.0)
        return matrix.tolist()
