"""
Statistics library for portfolio analytics.

Stateless functions over daily return series. Rates, returns and volatilities
going in and coming out are percentages unless a docstring says otherwise;
daily return series themselves are plain fractions (0.01 == 1%).
"""

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd

from portfolio_analytics.models.analytics import DrawdownDetails, MonteCarloResult

TRADING_DAYS_PER_YEAR = 252

ReturnsLike = pd.Series | Sequence[float] | np.ndarray


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` instead of raising on a zero denominator."""
    if denominator == 0:
        return default
    return numerator / denominator


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0 for an empty input."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def _as_array(returns: ReturnsLike) -> np.ndarray:
    if isinstance(returns, pd.Series):
        return returns.dropna().to_numpy(dtype=float)
    arr = np.asarray(returns, dtype=float)
    return arr[~np.isnan(arr)]


def _as_series(values: ReturnsLike) -> pd.Series:
    if isinstance(values, pd.Series):
        return values.dropna().astype(float)
    return pd.Series(np.asarray(values, dtype=float)).dropna()


def volatility(
    returns: ReturnsLike,
    window_days: int | None = None,
    trading_days: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Annualized volatility of daily returns.

    Population standard deviation, scaled by sqrt(trading_days) and expressed
    as a percentage.

    Args:
        returns: Daily returns as fractions
        window_days: Only use the most recent ``window_days`` observations
        trading_days: Trading days per year used to annualize

    Returns:
        Annualized volatility in percent, 0 with fewer than 2 observations
    """
    values = _as_array(returns)
    if window_days is not None:
        if window_days <= 0:
            raise ValueError(f"window_days must be positive, got {window_days}")
        values = values[-window_days:]

    if values.size < 2:
        return 0.0

    return float(np.std(values) * np.sqrt(trading_days) * 100)


def sharpe_ratio(
    annual_return_pct: float, annual_volatility_pct: float, risk_free_rate_pct: float = 2.0
) -> float:
    """Excess return per unit of volatility; 0 when volatility is 0."""
    if annual_volatility_pct == 0:
        return 0.0
    return (annual_return_pct - risk_free_rate_pct) / annual_volatility_pct


def value_at_risk(returns: ReturnsLike, confidence: float = 0.95) -> float:
    """Historical-simulation Value-at-Risk.

    Returns are sorted ascending and the observation at the ``1 - confidence``
    quantile is taken as the loss threshold.

    Args:
        returns: Daily returns as fractions
        confidence: Confidence level, strictly between 0 and 1

    Returns:
        One-day loss at the given confidence as a positive percentage. 0 when
        there are fewer than 2 observations or the threshold is not a loss.
    """
    if not 0 < confidence < 1:
        raise ValueError(f"confidence must be between 0 and 1, got {confidence}")

    values = np.sort(_as_array(returns))
    if values.size < 2:
        return 0.0

    # epsilon absorbs float error in (1 - confidence) * n
    index = int(np.floor((1 - confidence) * values.size + 1e-9))
    index = min(index, values.size - 1)
    threshold = values[index]
    return float(max(0.0, -threshold * 100))


def max_drawdown(values: ReturnsLike) -> DrawdownDetails:
    """Largest peak-to-trough decline of a value series.

    Args:
        values: Portfolio values, ideally indexed by date

    Returns:
        DrawdownDetails with the decline in percent and the peak/trough dates
    """
    series = _as_series(values)
    if len(series) < 2:
        return DrawdownDetails()

    running_peak = series.cummax()
    drawdowns = ((series - running_peak) / running_peak.replace(0, np.nan)).fillna(0.0)

    trough_pos = int(np.argmin(drawdowns.to_numpy()))
    worst = float(drawdowns.iloc[trough_pos])
    if worst >= 0:
        return DrawdownDetails()

    peak_value = running_peak.iloc[trough_pos]
    before_trough = series.iloc[: trough_pos + 1]
    peak_pos = int(np.flatnonzero(before_trough.to_numpy() == peak_value)[-1])

    if isinstance(series.index, pd.DatetimeIndex):
        start = series.index[peak_pos]
        end = series.index[trough_pos]
        start_date: Any = start.date()
        end_date: Any = end.date()
        duration = int((end - start).days)
    else:
        start_date = None
        end_date = None
        duration = trough_pos - peak_pos

    return DrawdownDetails(
        value=abs(worst) * 100,
        start_date=start_date,
        end_date=end_date,
        duration_days=duration,
    )


def downside_deviation(
    returns: ReturnsLike,
    minimum_acceptable_return: float = 0.0,
    trading_days: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Annualized semi-deviation below a minimum acceptable daily return, percent."""
    values = _as_array(returns)
    if values.size < 2:
        return 0.0

    shortfall = np.minimum(values - minimum_acceptable_return, 0.0)
    return float(np.sqrt(np.mean(shortfall**2)) * np.sqrt(trading_days) * 100)


def _align(series_a: ReturnsLike, series_b: ReturnsLike) -> pd.DataFrame:
    aligned = pd.concat([_as_series(series_a), _as_series(series_b)], axis=1, join='inner')
    return aligned.dropna()


def correlation(series_a: ReturnsLike, series_b: ReturnsLike) -> float:
    """Pearson correlation on index-aligned observations.

    Returns 0 with fewer than 2 overlapping points or when either side has no
    variance.
    """
    aligned = _align(series_a, series_b)
    if len(aligned) < 2:
        return 0.0

    a = aligned.iloc[:, 0]
    b = aligned.iloc[:, 1]
    if a.std(ddof=0) == 0 or b.std(ddof=0) == 0:
        return 0.0

    value = float(a.corr(b))
    return value if np.isfinite(value) else 0.0


def alpha_beta(
    portfolio_returns: ReturnsLike,
    benchmark_returns: ReturnsLike,
    risk_free_rate_pct: float = 2.0,
    trading_days: int = TRADING_DAYS_PER_YEAR,
) -> tuple[float, float]:
    """Regress daily portfolio returns on benchmark returns.

    Args:
        portfolio_returns: Daily portfolio returns
        benchmark_returns: Daily benchmark returns
        risk_free_rate_pct: Annual risk-free rate in percent
        trading_days: Trading days per year used to annualize

    Returns:
        Tuple of (annualized Jensen's alpha in percent, beta). (0, 0) when the
        series overlap on fewer than 2 dates or the benchmark is flat.
    """
    aligned = _align(portfolio_returns, benchmark_returns)
    if len(aligned) < 2:
        return 0.0, 0.0

    p = aligned.iloc[:, 0]
    b = aligned.iloc[:, 1]
    benchmark_variance = float(b.var(ddof=0))
    if benchmark_variance == 0:
        return 0.0, 0.0

    covariance = float(((p - p.mean()) * (b - b.mean())).mean())
    beta = covariance / benchmark_variance

    daily_rf = risk_free_rate_pct / 100 / trading_days
    daily_alpha = (p.mean() - daily_rf) - beta * (b.mean() - daily_rf)
    return float(daily_alpha * trading_days * 100), float(beta)


def normal_random(
    mean: float,
    std_dev: float,
    size: int | tuple[int, ...] | None = None,
    rng: np.random.Generator | None = None,
) -> Any:
    """Draw normally distributed values with the Box-Muller transform.

    Args:
        mean: Distribution mean
        std_dev: Distribution standard deviation
        size: Output shape; a scalar is returned when None
        rng: Uniform source; a fresh unseeded generator when None

    Returns:
        A float or an ndarray of the requested shape
    """
    generator = rng if rng is not None else np.random.default_rng()
    # 1 - U keeps u1 in (0, 1] so log(u1) is finite
    u1 = 1.0 - generator.random(size)
    u2 = generator.random(size)
    z0 = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return mean + std_dev * z0


def monte_carlo(
    initial_value: float,
    mean_return_pct: float,
    volatility_pct: float,
    years: int,
    simulations: int = 1000,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> MonteCarloResult:
    """Project a value forward with normally distributed annual returns.

    Each simulation compounds ``initial_value`` once per year. With zero
    volatility every path is identical, so all percentiles collapse to
    ``initial_value * (1 + mean)^years``.

    Args:
        initial_value: Starting portfolio value
        mean_return_pct: Expected annual return in percent
        volatility_pct: Annual volatility in percent
        years: Number of annual compounding steps
        simulations: Number of simulated paths
        rng: Generator to draw from; takes precedence over ``seed``
        seed: Seed for a new generator when ``rng`` is not given

    Returns:
        MonteCarloResult with median, 10th/90th percentile outcomes and the
        percentage of paths ending above ``initial_value``
    """
    if simulations < 1:
        raise ValueError(f"simulations must be >= 1, got {simulations}")
    if years < 0:
        raise ValueError(f"years must be >= 0, got {years}")

    generator = rng if rng is not None else np.random.default_rng(seed)

    if years == 0:
        outcomes = np.full(simulations, float(initial_value))
    else:
        annual_returns = normal_random(
            mean_return_pct / 100, volatility_pct / 100, size=(simulations, years), rng=generator
        )
        outcomes = float(initial_value) * np.prod(1.0 + annual_returns, axis=1)

    outcomes = np.sort(outcomes)
    gains = int(np.count_nonzero(outcomes > initial_value))

    return MonteCarloResult(
        median_outcome=float(outcomes[simulations // 2]),
        percentile_10=float(outcomes[int(simulations * 0.1)]),
        percentile_90=float(outcomes[int(simulations * 0.9)]),
        probability_of_gain=gains / simulations * 100,
        simulations=simulations,
        years=years,
    )
