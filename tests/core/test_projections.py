"""Tests for the projection engine."""

import numpy as np
import pandas as pd
import pytest

from portfolio_analytics.core.config import ProjectionConfig
from portfolio_analytics.core.projections import ProjectionEngine
from portfolio_analytics.utils.math_utils import TRADING_DAYS_PER_YEAR, volatility


@pytest.fixture
def returns() -> pd.Series:
    """Seeded daily returns with a small positive drift."""
    rng = np.random.default_rng(21)
    return pd.Series(rng.normal(0.0004, 0.01, 250))


class TestExpectedReturns:
    """Test suite for expected return bands."""

    def test_bands_around_mean(self, returns: pd.Series) -> None:
        """Test the bands sit one volatility either side of the mean."""
        expected = ProjectionEngine().expected_returns(returns)
        annual_mean = returns.mean() * TRADING_DAYS_PER_YEAR * 100
        annual_vol = volatility(returns)

        assert expected.moderate == pytest.approx(annual_mean)
        assert expected.conservative == pytest.approx(annual_mean - annual_vol)
        assert expected.optimistic == pytest.approx(annual_mean + annual_vol)

    def test_trading_days(self, returns: pd.Series) -> None:
        """Test the bands annualize with the engine's trading days."""
        expected = ProjectionEngine(trading_days=365).expected_returns(returns)

        assert expected.moderate == pytest.approx(returns.mean() * 365 * 100)
        assert expected.optimistic - expected.moderate == pytest.approx(
            volatility(returns, trading_days=365)
        )

    def test_no_history(self) -> None:
        """Test an empty history yields zero bands."""
        expected = ProjectionEngine().expected_returns(pd.Series(dtype=float))
        assert expected.moderate == 0.0
        assert expected.conservative == 0.0


class TestProjectedValues:
    """Test suite for straight-line and compounded projections."""

    def test_projection_horizons(self) -> None:
        """Test each horizon applies the annual rate as documented."""
        values = ProjectionEngine.projected_values(1000.0, 12.0)

        assert values.one_month == pytest.approx(1010.0)
        assert values.three_months == pytest.approx(1030.0)
        assert values.six_months == pytest.approx(1060.0)
        assert values.one_year == pytest.approx(1120.0)
        assert values.five_years == pytest.approx(1000.0 * 1.12**5)


class TestProject:
    """Test suite for the full projection bundle."""

    def test_seeded_projection_is_reproducible(self, returns: pd.Series) -> None:
        """Test a configured seed makes the simulation deterministic."""
        engine = ProjectionEngine(ProjectionConfig(simulations=300, seed=8))

        first = engine.project(50_000.0, returns)
        second = engine.project(50_000.0, returns)

        assert first == second
        assert first.monte_carlo_simulation.simulations == 300
        assert first.monte_carlo_simulation.years == 5

    def test_explicit_generator(self, returns: pd.Series) -> None:
        """Test an injected generator drives the simulation."""
        engine = ProjectionEngine(ProjectionConfig(simulations=200))

        first = engine.project(1000.0, returns, rng=np.random.default_rng(4))
        second = engine.project(1000.0, returns, rng=np.random.default_rng(4))

        assert first.monte_carlo_simulation == second.monte_carlo_simulation

    def test_flat_history(self) -> None:
        """Test a history without returns projects the current value."""
        engine = ProjectionEngine(ProjectionConfig(simulations=100, seed=1))
        result = engine.project(25_000.0, pd.Series(dtype=float))

        simulation = result.monte_carlo_simulation
        assert simulation.median_outcome == pytest.approx(25_000.0)
        assert simulation.percentile_10 == pytest.approx(25_000.0)
        assert simulation.percentile_90 == pytest.approx(25_000.0)
        assert result.projected_value.five_years == pytest.approx(25_000.0)

    def test_percentiles_ordered(self, returns: pd.Series) -> None:
        """Test simulated percentiles are ordered."""
        engine = ProjectionEngine(ProjectionConfig(simulations=1000, seed=3))
        simulation = engine.project(10_000.0, returns).monte_carlo_simulation

        assert simulation.percentile_10 <= simulation.median_outcome <= simulation.percentile_90


if __name__ == "__main__":
    pytest.main([__file__])
