"""
Snapshot and price-history processing utilities.
"""

from collections.abc import Sequence
from datetime import date, datetime

import numpy as np
import pandas as pd

from portfolio_analytics.models.portfolio import PortfolioSnapshot


def value_series(snapshots: Sequence[PortfolioSnapshot]) -> pd.Series:
    """Snapshot values indexed by date.

    Args:
        snapshots: Snapshots in ascending date order

    Returns:
        Float series with a DatetimeIndex, empty for no snapshots
    """
    if not snapshots:
        return pd.Series(dtype=float, index=pd.DatetimeIndex([], name='date'), name='value')

    index = pd.DatetimeIndex([pd.Timestamp(s.date) for s in snapshots], name='date')
    return pd.Series([float(s.total_value) for s in snapshots], index=index, name='value')


def return_frame(snapshots: Sequence[PortfolioSnapshot]) -> pd.DataFrame:
    """Build the ``{date, value, return}`` table used by the statistics library.

    One row per snapshot after the first; ``return`` is the change versus the
    previous snapshot as a fraction. A previous value of 0 yields a 0 return.

    Args:
        snapshots: Snapshots in ascending date order

    Returns:
        DataFrame with ``value`` and ``return`` columns, empty when fewer than
        2 snapshots exist
    """
    values = value_series(snapshots)
    if len(values) < 2:
        return pd.DataFrame(
            {'value': pd.Series(dtype=float), 'return': pd.Series(dtype=float)},
            index=pd.DatetimeIndex([], name='date'),
        )

    returns = values.pct_change().replace([np.inf, -np.inf], np.nan)
    # pct_change leaves NaN when the previous value was 0
    returns = returns.fillna(0.0).iloc[1:]

    return pd.DataFrame({'value': values.iloc[1:], 'return': returns})


def daily_returns(snapshots: Sequence[PortfolioSnapshot]) -> pd.Series:
    """Daily returns derived from snapshots (empty with fewer than 2 points)."""
    return return_frame(snapshots)['return']


def nearest_snapshot(
    snapshots: Sequence[PortfolioSnapshot], target: date | datetime
) -> PortfolioSnapshot | None:
    """Snapshot whose date is closest to ``target``.

    Ties resolve to the earlier snapshot.
    """
    if not snapshots:
        return None

    target_ts = pd.Timestamp(target)
    return min(snapshots, key=lambda s: abs(pd.Timestamp(s.date) - target_ts))


def returns_from_history(history: Sequence[PortfolioSnapshot] | None) -> pd.Series:
    """Daily returns of a benchmark or asset price history.

    Missing history degrades to an empty series.
    """
    if not history:
        return pd.Series(dtype=float, index=pd.DatetimeIndex([], name='date'), name='return')
    ordered = sorted(history, key=lambda s: s.date)
    return daily_returns(ordered)
