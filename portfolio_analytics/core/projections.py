"""Projection Engine.

Forward-looking estimates built from historical daily returns: expected
return bands, straight-line and compounded value projections, and a Monte
Carlo simulation.
"""

import logging

import numpy as np
import pandas as pd

from portfolio_analytics.core.config import ProjectionConfig
from portfolio_analytics.models.analytics import ExpectedReturns, ProjectedValues, ProjectionData
from portfolio_analytics.utils.math_utils import (
    TRADING_DAYS_PER_YEAR,
    mean,
    monte_carlo,
    volatility,
)


class ProjectionEngine:
    """Projects portfolio value from its return history."""

    def __init__(
        self,
        config: ProjectionConfig | None = None,
        logger: logging.Logger | None = None,
        trading_days: int = TRADING_DAYS_PER_YEAR,
    ) -> None:
        """Initialize the projection engine.

        Args:
            config: ProjectionConfig with simulation count, horizon and seed
            logger: Optional logger instance
            trading_days: Trading days per year used to annualize daily returns
        """
        self.config: ProjectionConfig = config or ProjectionConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.trading_days = trading_days

    def expected_returns(self, returns: pd.Series) -> ExpectedReturns:
        """Annual return bands one volatility either side of the mean."""
        annual_mean = mean(returns.dropna()) * self.trading_days * 100
        annual_volatility = volatility(returns, trading_days=self.trading_days)
        return ExpectedReturns(
            conservative=annual_mean - annual_volatility,
            moderate=annual_mean,
            optimistic=annual_mean + annual_volatility,
        )

    @staticmethod
    def projected_values(current_value: float, annual_return_pct: float) -> ProjectedValues:
        """Project value straight-line up to a year and compounded over five."""
        rate = annual_return_pct / 100
        return ProjectedValues(
            one_month=current_value * (1 + rate / 12),
            three_months=current_value * (1 + rate / 4),
            six_months=current_value * (1 + rate / 2),
            one_year=current_value * (1 + rate),
            five_years=current_value * (1 + rate) ** 5,
        )

    def project(
        self,
        current_value: float,
        returns: pd.Series,
        rng: np.random.Generator | None = None,
    ) -> ProjectionData:
        """Build the projection bundle for a portfolio.

        Args:
            current_value: Current portfolio value
            returns: Historical daily returns
            rng: Generator for the simulation; a seeded one from config when None

        Returns:
            ProjectionData with expected returns, projected values and the
            Monte Carlo summary
        """
        expected = self.expected_returns(returns)
        simulations = min(self.config.simulations, self.config.max_simulations)

        simulation = monte_carlo(
            initial_value=current_value,
            mean_return_pct=expected.moderate,
            volatility_pct=volatility(returns, trading_days=self.trading_days),
            years=self.config.horizon_years,
            simulations=simulations,
            rng=rng,
            seed=self.config.seed,
        )

        self.logger.debug(
            f"Projection: expected={expected.moderate:.2f}%, "
            f"median {self.config.horizon_years}y outcome={simulation.median_outcome:.2f}"
        )

        return ProjectionData(
            expected_return=expected,
            projected_value=self.projected_values(current_value, expected.moderate),
            monte_carlo_simulation=simulation,
        )
