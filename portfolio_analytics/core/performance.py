"""Performance Analysis Module.

This module computes return and risk statistics for a portfolio from its
holdings, value snapshots and transaction history.
"""

import logging
import math
from collections.abc import Callable, Sequence
from datetime import date, datetime, timedelta

import pandas as pd

from portfolio_analytics.core.config import PerformanceConfig
from portfolio_analytics.models.analytics import (
    CorrelationSummary,
    PerformanceMetrics,
    RiskMetrics,
)
from portfolio_analytics.models.portfolio import (
    Portfolio,
    PortfolioSnapshot,
    Transaction,
    TransactionType,
    validate_snapshots,
)
from portfolio_analytics.utils.data_utils import daily_returns, nearest_snapshot, value_series
from portfolio_analytics.utils.math_utils import (
    alpha_beta,
    correlation,
    downside_deviation,
    max_drawdown,
    safe_divide,
    sharpe_ratio,
    value_at_risk,
    volatility,
)


def _has_data(series: pd.Series | None) -> bool:
    return series is not None and len(series) > 0


def _age_days(created_at: datetime, now: datetime) -> int:
    if (created_at.tzinfo is None) != (now.tzinfo is None):
        created_at = created_at.replace(tzinfo=None)
        now = now.replace(tzinfo=None)
    return (now - created_at).days


def annualized_return(total_return_pct: float, age_days: int) -> float:
    """Compound annual growth rate in percent.

    Args:
        total_return_pct: Cumulative return in percent
        age_days: Days the portfolio has existed

    Returns:
        CAGR in percent; 0 for a non-positive age or a total loss
    """
    if age_days <= 0 or total_return_pct <= -100:
        return 0.0

    years = age_days / 365
    try:
        return (math.pow(1 + total_return_pct / 100, 1 / years) - 1) * 100
    except OverflowError:
        return 0.0


def window_return(snapshots: Sequence[PortfolioSnapshot], start: date) -> float:
    """Percentage change from the snapshot nearest ``start`` to the latest one."""
    if len(snapshots) < 2:
        return 0.0

    latest = snapshots[-1]
    first = nearest_snapshot(snapshots, start)
    if first is None or first is latest or first.total_value == 0:
        return 0.0

    return (latest.total_value - first.total_value) / first.total_value * 100


def win_rate(transactions: Sequence[Transaction]) -> float:
    """Share of sells executed above the running average cost.

    Transactions are replayed in execution order per asset. Buys update the
    running average cost; every sell counts as a closed position.

    Args:
        transactions: Transaction history in any order

    Returns:
        Winning sells as a percentage of all sells, 0 with no sells
    """
    positions: dict[str, tuple[float, float]] = {}
    wins = 0
    sells = 0

    for tx in sorted(transactions, key=lambda t: t.executed_at):
        quantity, average_cost = positions.get(tx.asset_id, (0.0, 0.0))

        if tx.transaction_type == TransactionType.BUY:
            new_quantity = quantity + tx.quantity
            new_cost = safe_divide(
                quantity * average_cost + tx.quantity * tx.price, new_quantity, average_cost
            )
            positions[tx.asset_id] = (new_quantity, new_cost)
        elif tx.transaction_type == TransactionType.SELL:
            sells += 1
            if tx.price > average_cost:
                wins += 1
            positions[tx.asset_id] = (max(0.0, quantity - tx.quantity), average_cost)

    return safe_divide(wins, sells) * 100


class PerformanceAnalyzer:
    """Computes performance and risk metrics for a single portfolio."""

    def __init__(
        self,
        config: PerformanceConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the performance analyzer.

        Args:
            config: PerformanceConfig with risk-free rate and windows
            clock: Returns the current time; injectable for deterministic tests
            logger: Optional logger instance
        """
        self.config: PerformanceConfig = config or PerformanceConfig()
        self.clock: Callable[[], datetime] = clock or datetime.now
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def calculate_performance(
        self,
        portfolio: Portfolio,
        snapshots: Sequence[PortfolioSnapshot],
        transactions: Sequence[Transaction] = (),
        benchmark_returns: pd.Series | None = None,
    ) -> PerformanceMetrics:
        """Calculate return metrics for a portfolio.

        Args:
            portfolio: Portfolio with current holdings
            snapshots: Value history in ascending date order
            transactions: Transaction history used for the win rate
            benchmark_returns: Daily benchmark returns for alpha/beta

        Returns:
            PerformanceMetrics; fields whose inputs are missing are 0
        """
        ordered = validate_snapshots(list(snapshots))
        now = self.clock()
        today = now.date()

        total_value = portfolio.market_value
        total_return = total_value - portfolio.total_invested
        total_return_pct = safe_divide(total_return, portfolio.total_invested) * 100
        cagr = annualized_return(total_return_pct, _age_days(portfolio.created_at, now))

        if len(ordered) < 2:
            self.logger.warning(
                f"Portfolio {portfolio.id} has {len(ordered)} snapshots; "
                "return statistics default to 0"
            )

        returns = daily_returns(ordered)
        full_volatility = volatility(returns, trading_days=self.config.trading_days)

        alpha, beta = 0.0, 0.0
        if _has_data(benchmark_returns):
            alpha, beta = alpha_beta(
                returns, benchmark_returns, self.config.risk_free_rate, self.config.trading_days
            )
        else:
            self.logger.debug(f"No benchmark returns for portfolio {portfolio.id}")

        values = [s.total_value for s in ordered]

        metrics = PerformanceMetrics(
            total_value=total_value,
            total_return=total_return,
            total_return_percentage=total_return_pct,
            annualized_return=cagr,
            daily_return=window_return(ordered, today - timedelta(days=1)),
            weekly_return=window_return(ordered, today - timedelta(days=7)),
            monthly_return=window_return(ordered, today - timedelta(days=30)),
            year_to_date_return=window_return(ordered, date(today.year, 1, 1)),
            all_time_high=max(values) if values else 0.0,
            all_time_low=min(values) if values else 0.0,
            sharpe_ratio=sharpe_ratio(cagr, full_volatility, self.config.risk_free_rate),
            volatility=full_volatility,
            alpha=alpha,
            beta=beta,
            max_drawdown=max_drawdown(value_series(ordered)).value,
            win_rate=win_rate(transactions),
        )

        self.logger.debug(
            f"Performance for {portfolio.id}: return={total_return_pct:.2f}%, "
            f"volatility={full_volatility:.2f}%, sharpe={metrics.sharpe_ratio:.2f}"
        )
        return metrics

    def calculate_risk_metrics(
        self,
        portfolio: Portfolio,
        snapshots: Sequence[PortfolioSnapshot],
        market_returns: pd.Series | None = None,
        benchmark_returns: pd.Series | None = None,
    ) -> RiskMetrics:
        """Calculate risk metrics for a portfolio.

        Args:
            portfolio: Portfolio with current holdings
            snapshots: Value history in ascending date order
            market_returns: Daily returns of the broad market
            benchmark_returns: Daily returns of the benchmark

        Returns:
            RiskMetrics with windowed volatility, VaR, drawdown and correlations
        """
        ordered = validate_snapshots(list(snapshots))
        returns = daily_returns(ordered)
        short_window, medium_window, long_window = self.config.volatility_windows

        trading_days = self.config.trading_days
        volatility_1y = volatility(returns, long_window, trading_days)
        drawdown = max_drawdown(value_series(ordered))

        to_market = correlation(returns, market_returns) if _has_data(market_returns) else 0.0
        to_benchmark = 0.0
        beta = 0.0
        if _has_data(benchmark_returns):
            to_benchmark = correlation(returns, benchmark_returns)
            _, beta = alpha_beta(
                returns, benchmark_returns, self.config.risk_free_rate, self.config.trading_days
            )

        score = self.risk_score(volatility_1y, drawdown.value, len(portfolio.holdings), beta)
        metrics = RiskMetrics(
            risk_score=score,
            volatility_30d=volatility(returns, short_window, trading_days),
            volatility_90d=volatility(returns, medium_window, trading_days),
            volatility_1y=volatility_1y,
            value_at_risk_95=value_at_risk(returns, 0.95),
            value_at_risk_99=value_at_risk(returns, 0.99),
            downside_deviation=downside_deviation(returns, trading_days=trading_days),
            max_drawdown=drawdown,
            correlation=CorrelationSummary(to_market=to_market, to_benchmark=to_benchmark),
        )

        self.logger.debug(
            f"Risk metrics for {portfolio.id}: score={metrics.risk_score:.2f}, "
            f"var95={metrics.value_at_risk_95:.2f}%"
        )
        return metrics

    def risk_score(
        self, volatility_pct: float, drawdown_pct: float, holdings_count: int, beta: float
    ) -> float:
        """Blend risk drivers into a 1-10 score.

        Volatility carries 40%, drawdown 30%, holding-count concentration 20%
        and |beta| 10%. Each driver is normalised to [0, 1] against its
        configured ceiling.
        """
        volatility_part = min(volatility_pct / self.config.risk_score_max_volatility, 1.0)
        drawdown_part = min(drawdown_pct / self.config.risk_score_max_drawdown, 1.0)

        diversified = self.config.risk_score_diversified_holdings
        if holdings_count == 0:
            concentration_part = 0.0
        else:
            concentration_part = 1.0 - min(holdings_count, diversified) / diversified

        beta_part = min(abs(beta) / self.config.risk_score_max_beta, 1.0)

        blended = (
            0.4 * volatility_part + 0.3 * drawdown_part + 0.2 * concentration_part + 0.1 * beta_part
        )
        return 1.0 + 9.0 * blended
