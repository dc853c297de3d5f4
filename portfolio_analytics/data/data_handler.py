"""Provider gateway.

This module wraps the data provider interfaces so that every call runs under
a timeout and every provider failure surfaces as a DataProviderError.
"""

import dataclasses
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, TypeVar

import pandas as pd

from portfolio_analytics.core.config import ServiceConfig
from portfolio_analytics.core.exceptions import (
    DataProviderError,
    PortfolioNotFoundError,
    ProviderTimeoutError,
)
from portfolio_analytics.models.portfolio import (
    Asset,
    Portfolio,
    PortfolioSnapshot,
    Transaction,
    validate_snapshots,
)
from portfolio_analytics.models.risk_profile import RiskLimit, RiskProfile
from portfolio_analytics.utils.data_utils import returns_from_history

from .providers import MarketDataProvider, PortfolioDataProvider, RiskProfileStore

T = TypeVar('T')


class ProviderGateway:
    """Timeout-guarded access to the portfolio, market and profile providers."""

    def __init__(
        self,
        portfolio_data: PortfolioDataProvider,
        market_data: MarketDataProvider,
        profile_store: RiskProfileStore | None = None,
        config: ServiceConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            portfolio_data: Portfolio data provider
            market_data: Market data provider
            profile_store: Risk profile store, required only for profile operations
            config: ServiceConfig with the provider timeout
            logger: Optional logger instance
        """
        self.portfolio_data = portfolio_data
        self.raw_market_data = market_data
        self.profile_store = profile_store
        self.config: ServiceConfig = config or ServiceConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix='provider'
        )
        self.market_data: MarketDataProvider = _GuardedMarketData(self)

    @property
    def timeout(self) -> float:
        return self.config.provider_timeout_seconds

    def close(self) -> None:
        """Release the worker threads."""
        self._executor.shutdown(wait=False)

    def __enter__(self) -> 'ProviderGateway':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, provider: str, operation: str, func: Callable[..., T], *args: Any) -> T:
        """Run one provider call under the configured timeout.

        Args:
            provider: Provider name for error reporting
            operation: Operation name for error reporting
            func: Provider method to call
            *args: Arguments for ``func``

        Returns:
            Whatever ``func`` returns

        Raises:
            ProviderTimeoutError: If the call does not finish in time
            DataProviderError: If the provider raises
        """
        future = self._executor.submit(func, *args)
        try:
            return future.result(timeout=self.timeout)
        except FuturesTimeoutError as e:
            future.cancel()
            self.logger.error(f"{provider}.{operation} timed out after {self.timeout}s")
            raise ProviderTimeoutError(provider, operation, self.timeout) from e
        except Exception as e:
            self.logger.error(f"{provider}.{operation} failed: {e}")
            raise DataProviderError(
                f"Provider call {provider}.{operation} failed: {e}",
                provider=provider,
                operation=operation,
            ) from e

    # Portfolio data

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        """Fetch a portfolio or raise PortfolioNotFoundError."""
        portfolio = self.call(
            'portfolio_data', 'get_portfolio', self.portfolio_data.get_portfolio, portfolio_id
        )
        if portfolio is None:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    def get_transactions(self, portfolio_id: str) -> list[Transaction]:
        return list(
            self.call(
                'portfolio_data',
                'get_transactions',
                self.portfolio_data.get_transactions,
                portfolio_id,
            )
        )

    def get_snapshots(self, portfolio_id: str) -> list[PortfolioSnapshot]:
        """Fetch snapshots and check they are in strictly increasing date order.

        Raises:
            DataProviderError: If the call fails or the dates are duplicated or unordered
        """
        snapshots = self.call(
            'portfolio_data', 'get_snapshots', self.portfolio_data.get_snapshots, portfolio_id
        )
        try:
            return validate_snapshots(list(snapshots))
        except ValueError as e:
            self.logger.error(f"Invalid snapshots for portfolio {portfolio_id}: {e}")
            raise DataProviderError(
                f"Invalid snapshots for portfolio {portfolio_id}: {e}",
                provider='portfolio_data',
                operation='get_snapshots',
                details={'portfolio_id': portfolio_id},
            ) from e

    # Market data

    def get_assets(self, asset_ids: Iterable[str]) -> dict[str, Asset]:
        return dict(
            self.call('market_data', 'get_assets', self.raw_market_data.get_assets, list(asset_ids))
        )

    def get_price_history(self, symbol: str) -> list[PortfolioSnapshot] | None:
        return self.call(
            'market_data', 'get_price_history', self.raw_market_data.get_price_history, symbol
        )

    def find_assets_by_sector(self, sector: str) -> list[Asset]:
        return list(
            self.call(
                'market_data',
                'find_assets_by_sector',
                self.raw_market_data.find_assets_by_sector,
                sector,
            )
        )

    def get_returns(self, symbol: str) -> pd.Series:
        """Daily returns for a symbol; empty when no history is available."""
        history = self.get_price_history(symbol)
        if not history:
            self.logger.warning(f"No price history for {symbol}")
        return returns_from_history(history)

    def refresh_assets(self, portfolio: Portfolio) -> Portfolio:
        """Replace each holding's asset with the market provider's latest snapshot.

        Holdings whose asset the market provider does not know keep the
        snapshot they came with.
        """
        if not portfolio.holdings:
            return portfolio

        latest = self.get_assets(h.asset_id for h in portfolio.holdings)
        holdings = tuple(
            dataclasses.replace(h, asset=latest[h.asset_id]) if h.asset_id in latest else h
            for h in portfolio.holdings
        )
        return dataclasses.replace(portfolio, holdings=holdings)

    # Risk profile store

    def _store(self, operation: str) -> RiskProfileStore:
        if self.profile_store is None:
            raise DataProviderError(
                "No risk profile store configured",
                provider='profile_store',
                operation=operation,
            )
        return self.profile_store

    def get_risk_profile(self, user_id: str) -> RiskProfile | None:
        store = self._store('get_risk_profile')
        return self.call('profile_store', 'get_risk_profile', store.get_risk_profile, user_id)

    def save_risk_profile(self, profile: RiskProfile) -> RiskProfile:
        store = self._store('save_risk_profile')
        return self.call('profile_store', 'save_risk_profile', store.save_risk_profile, profile)

    def get_risk_limits(self, user_id: str) -> list[RiskLimit]:
        store = self._store('get_risk_limits')
        return list(self.call('profile_store', 'get_risk_limits', store.get_risk_limits, user_id))

    def save_risk_limits(self, user_id: str, limits: list[RiskLimit]) -> list[RiskLimit]:
        store = self._store('save_risk_limits')
        return list(
            self.call(
                'profile_store', 'save_risk_limits', store.save_risk_limits, user_id, limits
            )
        )


class _GuardedMarketData(MarketDataProvider):
    """MarketDataProvider view that routes every call through a gateway."""

    def __init__(self, gateway: ProviderGateway) -> None:
        self._gateway = gateway

    def get_assets(self, asset_ids: Iterable[str]) -> dict[str, Asset]:
        return self._gateway.get_assets(asset_ids)

    def get_price_history(self, symbol: str) -> list[PortfolioSnapshot] | None:
        return self._gateway.get_price_history(symbol)

    def find_assets_by_sector(self, sector: str) -> list[Asset]:
        return self._gateway.find_assets_by_sector(sector)
