"""
Pytest configuration and shared fixtures for the portfolio analytics test suite.

This module provides pytest configuration, fixtures, and shared test utilities
that are used across all test modules.
"""

import logging
import os
import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd
import pytest

# Add the parent directory to the path to import portfolio_analytics modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portfolio_analytics.core.config import AnalyticsConfig, ProjectionConfig, reset_config
from portfolio_analytics.core.logger import AnalyticsLogger
from portfolio_analytics.data.data_handler import ProviderGateway
from portfolio_analytics.data.providers import (
    InMemoryMarketDataProvider,
    InMemoryPortfolioDataProvider,
    InMemoryRiskProfileStore,
)
from portfolio_analytics.models.portfolio import (
    Asset,
    AssetType,
    ESGScores,
    Holding,
    Portfolio,
    PortfolioSnapshot,
    Transaction,
    TransactionType,
)
from portfolio_analytics.models.risk_profile import RiskProfile, RiskTolerance

FIXED_NOW = datetime(2024, 6, 30, 12, 0, 0)


# Pytest configuration
def pytest_configure(config: Any) -> None:
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture(autouse=True)
def _reset_global_state() -> Any:
    """Give every test a fresh global configuration and logger registry."""
    reset_config()
    AnalyticsLogger.reset()
    yield
    reset_config()
    AnalyticsLogger.reset()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock pinned to a fixed instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger for engines under test."""
    return logging.getLogger("portfolio_analytics.tests")


@pytest.fixture
def make_asset() -> Callable[..., Asset]:
    """Factory for assets with sensible defaults."""

    def _make(
        asset_id: str,
        symbol: str | None = None,
        asset_type: AssetType | None = AssetType.STOCK,
        sector: str | None = "Technology",
        region: str | None = "North America",
        price: float = 100.0,
        volume: float = 10_000_000.0,
        market_cap: float = 1e11,
        currency: str = "USD",
        esg: ESGScores | None = None,
    ) -> Asset:
        return Asset(
            id=asset_id,
            symbol=symbol or asset_id.upper(),
            name=f"{symbol or asset_id.upper()} Inc.",
            asset_type=asset_type,
            sector=sector,
            region=region,
            current_price=price,
            volume=volume,
            market_cap=market_cap,
            currency=currency,
            esg=esg,
        )

    return _make


@pytest.fixture
def tech_asset(make_asset: Callable[..., Asset]) -> Asset:
    """Large-cap technology stock with strong ESG scores."""
    return make_asset(
        "asset-a",
        symbol="AAA",
        sector="Technology",
        price=100.0,
        esg=ESGScores(
            environmental=85.0, social=90.0, governance=95.0, composite=90.0, carbon_footprint=0.5
        ),
    )


@pytest.fixture
def energy_asset(make_asset: Callable[..., Asset]) -> Asset:
    """Energy stock with weak ESG scores."""
    return make_asset(
        "asset-b",
        symbol="BBB",
        sector="Energy",
        price=50.0,
        esg=ESGScores(
            environmental=20.0, social=50.0, governance=50.0, composite=40.0, carbon_footprint=2.0
        ),
    )


@pytest.fixture
def two_holdings(tech_asset: Asset, energy_asset: Asset) -> tuple[Holding, ...]:
    """Tech at 70% and Energy at 30% of a $100,000 portfolio."""
    return (
        Holding(asset=tech_asset, quantity=700, average_cost=80.0),
        Holding(asset=energy_asset, quantity=600, average_cost=55.0),
    )


@pytest.fixture
def portfolio(two_holdings: tuple[Holding, ...]) -> Portfolio:
    """Two-holding portfolio created one year before the fixed clock."""
    return Portfolio(
        id="pf-1",
        owner_id="user-1",
        created_at=datetime(2023, 6, 30, 12, 0, 0),
        name="Core Portfolio",
        total_value=100_000.0,
        total_invested=89_000.0,
        holdings=two_holdings,
    )


@pytest.fixture
def empty_portfolio() -> Portfolio:
    """Portfolio with no holdings."""
    return Portfolio(
        id="pf-empty",
        owner_id="user-1",
        created_at=datetime(2024, 1, 1),
        name="Empty",
    )


def _snapshot_series(
    start_value: float, periods: int, seed: int, drift: float = 0.0005, vol: float = 0.01
) -> list[PortfolioSnapshot]:
    rng = np.random.default_rng(seed)
    dates = pd.date_range(end=FIXED_NOW.date(), periods=periods, freq="D")
    returns = rng.normal(drift, vol, periods - 1)
    values = start_value * np.concatenate([[1.0], np.cumprod(1 + returns)])
    return [
        PortfolioSnapshot(date=ts.date(), total_value=float(value))
        for ts, value in zip(dates, values)
    ]


@pytest.fixture
def snapshots() -> list[PortfolioSnapshot]:
    """120 days of portfolio values ending on the fixed clock date."""
    return _snapshot_series(90_000.0, 120, seed=42)


@pytest.fixture
def benchmark_history() -> list[PortfolioSnapshot]:
    """Benchmark price history over the same dates as the portfolio."""
    return _snapshot_series(400.0, 120, seed=7, vol=0.008)


@pytest.fixture
def market_history() -> list[PortfolioSnapshot]:
    """Broad market price history over the same dates as the portfolio."""
    return _snapshot_series(200.0, 120, seed=11, vol=0.009)


@pytest.fixture
def transactions() -> list[Transaction]:
    """Two buys and two sells of asset A: one winning sell, one losing sell."""
    return [
        Transaction(
            id="t1",
            asset_id="asset-a",
            transaction_type=TransactionType.BUY,
            quantity=100,
            price=80.0,
            executed_at=datetime(2023, 7, 1),
        ),
        Transaction(
            id="t2",
            asset_id="asset-a",
            transaction_type=TransactionType.SELL,
            quantity=20,
            price=95.0,
            executed_at=datetime(2023, 8, 1),
        ),
        Transaction(
            id="t3",
            asset_id="asset-a",
            transaction_type=TransactionType.BUY,
            quantity=100,
            price=120.0,
            executed_at=datetime(2023, 9, 1),
        ),
        Transaction(
            id="t4",
            asset_id="asset-a",
            transaction_type=TransactionType.SELL,
            quantity=10,
            price=90.0,
            executed_at=datetime(2023, 10, 1),
        ),
    ]


@pytest.fixture
def moderate_profile() -> RiskProfile:
    """Moderate risk profile for user-1."""
    return RiskProfile(user_id="user-1", risk_tolerance=RiskTolerance.MODERATE)


@pytest.fixture
def candidate_assets(make_asset: Callable[..., Asset]) -> list[Asset]:
    """Tradable assets in sectors the portfolio does not hold."""
    return [
        make_asset("asset-h", symbol="HHH", sector="Healthcare"),
        make_asset("asset-f", symbol="FFF", sector="Financials"),
        make_asset("asset-c", symbol="CCC", sector="Consumer"),
    ]


@pytest.fixture
def portfolio_provider(
    portfolio: Portfolio,
    snapshots: list[PortfolioSnapshot],
    transactions: list[Transaction],
) -> InMemoryPortfolioDataProvider:
    """In-memory portfolio provider holding the two-holding portfolio."""
    provider = InMemoryPortfolioDataProvider()
    provider.add_portfolio(portfolio, transactions, snapshots)
    return provider


@pytest.fixture
def market_provider(
    tech_asset: Asset,
    energy_asset: Asset,
    candidate_assets: list[Asset],
    benchmark_history: list[PortfolioSnapshot],
    market_history: list[PortfolioSnapshot],
) -> InMemoryMarketDataProvider:
    """In-memory market provider with benchmark and market histories."""
    return InMemoryMarketDataProvider(
        [tech_asset, energy_asset, *candidate_assets],
        {"SPY": benchmark_history, "VTI": market_history},
    )


@pytest.fixture
def profile_store(moderate_profile: RiskProfile) -> InMemoryRiskProfileStore:
    """In-memory profile store holding the moderate profile."""
    return InMemoryRiskProfileStore([moderate_profile])


@pytest.fixture
def analytics_config() -> AnalyticsConfig:
    """Configuration with a seeded, smaller Monte Carlo run."""
    return AnalyticsConfig(projections=ProjectionConfig(simulations=500, seed=1234))


@pytest.fixture
def gateway(
    portfolio_provider: InMemoryPortfolioDataProvider,
    market_provider: InMemoryMarketDataProvider,
    profile_store: InMemoryRiskProfileStore,
    analytics_config: AnalyticsConfig,
) -> Any:
    """Provider gateway over the in-memory providers."""
    with ProviderGateway(
        portfolio_provider, market_provider, profile_store, analytics_config.service
    ) as gw:
        yield gw


def _history_rows(history: list[PortfolioSnapshot]) -> list[dict[str, Any]]:
    return [{'date': s.date.isoformat(), 'total_value': s.total_value} for s in history]


@pytest.fixture
def dataset_document(
    snapshots: list[PortfolioSnapshot],
    benchmark_history: list[PortfolioSnapshot],
    market_history: list[PortfolioSnapshot],
) -> dict[str, Any]:
    """JSON data set with two portfolios, market history and a risk profile."""
    second_series = _snapshot_series(50_000.0, 120, seed=99)
    return {
        'assets': [
            {
                'id': 'asset-a',
                'symbol': 'AAA',
                'name': 'AAA Inc.',
                'asset_type': 'STOCK',
                'sector': 'Technology',
                'region': 'North America',
                'current_price': 100.0,
                'volume': 10_000_000.0,
                'market_cap': 1e11,
                'esg': {
                    'environmental': 85,
                    'social': 90,
                    'governance': 95,
                    'composite': 90,
                    'carbon_footprint': 0.5,
                },
            },
            {
                'id': 'asset-b',
                'symbol': 'BBB',
                'asset_type': 'stock',
                'sector': 'Energy',
                'current_price': 50.0,
                'volume': 10_000_000.0,
                'market_cap': 1e11,
                'esg': {
                    'environmental': 20,
                    'social': 50,
                    'governance': 50,
                    'composite': 40,
                    'carbon_footprint': 2.0,
                },
            },
            {'id': 'asset-h', 'symbol': 'HHH', 'asset_type': 'stock', 'sector': 'Healthcare'},
        ],
        'portfolios': [
            {
                'id': 'pf-1',
                'owner_id': 'user-1',
                'name': 'Core Portfolio',
                'created_at': '2023-06-30T12:00:00',
                'total_value': 100_000.0,
                'total_invested': 89_000.0,
                'holdings': [
                    {'asset_id': 'asset-a', 'quantity': 700, 'average_cost': 80.0},
                    {'asset_id': 'asset-b', 'quantity': 600, 'average_cost': 55.0},
                ],
            },
            {
                'id': 'pf-2',
                'owner_id': 'user-2',
                'name': 'Bond Sleeve',
                'created_at': '2024-01-01T00:00:00',
                'total_invested': 48_000.0,
                'holdings': [
                    {
                        'asset': {
                            'id': 'asset-z',
                            'symbol': 'ZZZ',
                            'asset_type': 'bond',
                            'sector': 'Government',
                            'current_price': 1000.0,
                            'volume': 1_000_000.0,
                        },
                        'quantity': 50,
                        'average_cost': 960.0,
                    }
                ],
            },
        ],
        'transactions': {
            'pf-1': [
                {
                    'id': 't1',
                    'asset_id': 'asset-a',
                    'transaction_type': 'BUY',
                    'quantity': 100,
                    'price': 80.0,
                    'executed_at': '2023-07-01T00:00:00',
                }
            ]
        },
        'snapshots': {
            'pf-1': _history_rows(snapshots),
            'pf-2': _history_rows(second_series),
        },
        'price_history': {
            'SPY': _history_rows(benchmark_history),
            'VTI': _history_rows(market_history),
        },
        'risk_profiles': [
            {
                'user_id': 'user-1',
                'risk_tolerance': 'moderate',
                'investment_horizon': 'long',
                'excluded_sectors': ['Tobacco'],
            }
        ],
        'risk_limits': {
            'user-1': [
                {
                    'id': 'limit-1',
                    'user_id': 'user-1',
                    'limit_type': 'position',
                    'metric': 'AAA',
                    'operator': 'greater_than',
                    'threshold': 25.0,
                    'action': 'alert',
                }
            ]
        },
    }
