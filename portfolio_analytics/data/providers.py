"""Data provider interfaces.

The analytics core reads portfolios, market data and risk profiles only
through these interfaces. In-memory implementations back the CLI, tests and
callers that already hold their data.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from portfolio_analytics.models.portfolio import Asset, Portfolio, PortfolioSnapshot, Transaction
from portfolio_analytics.models.risk_profile import RiskLimit, RiskProfile


class PortfolioDataProvider(ABC):
    """Source of portfolios, transactions and value history."""

    @abstractmethod
    def get_portfolio(self, portfolio_id: str) -> Portfolio | None:
        """Return the portfolio, or None if it does not exist."""

    @abstractmethod
    def get_transactions(self, portfolio_id: str) -> list[Transaction]:
        """Return the portfolio's transaction history."""

    @abstractmethod
    def get_snapshots(self, portfolio_id: str) -> list[PortfolioSnapshot]:
        """Return value snapshots in ascending date order."""


class MarketDataProvider(ABC):
    """Source of asset snapshots and price history."""

    @abstractmethod
    def get_assets(self, asset_ids: Iterable[str]) -> dict[str, Asset]:
        """Return current asset snapshots keyed by asset id."""

    @abstractmethod
    def get_price_history(self, symbol: str) -> list[PortfolioSnapshot] | None:
        """Return daily closing values for a symbol, or None if unknown."""

    @abstractmethod
    def find_assets_by_sector(self, sector: str) -> list[Asset]:
        """Return tradable assets in a sector."""


class RiskProfileStore(ABC):
    """Storage for user risk profiles and risk limits."""

    @abstractmethod
    def get_risk_profile(self, user_id: str) -> RiskProfile | None:
        """Return the user's risk profile, or None."""

    @abstractmethod
    def save_risk_profile(self, profile: RiskProfile) -> RiskProfile:
        """Create or replace a risk profile."""

    @abstractmethod
    def get_risk_limits(self, user_id: str) -> list[RiskLimit]:
        """Return the user's risk limits."""

    @abstractmethod
    def save_risk_limits(self, user_id: str, limits: list[RiskLimit]) -> list[RiskLimit]:
        """Replace the user's risk limits."""


class InMemoryPortfolioDataProvider(PortfolioDataProvider):
    """Portfolio data held in dictionaries."""

    def __init__(
        self,
        portfolios: Iterable[Portfolio] = (),
        transactions: dict[str, list[Transaction]] | None = None,
        snapshots: dict[str, list[PortfolioSnapshot]] | None = None,
    ) -> None:
        self.portfolios: dict[str, Portfolio] = {p.id: p for p in portfolios}
        self.transactions: dict[str, list[Transaction]] = transactions or {}
        self.snapshots: dict[str, list[PortfolioSnapshot]] = snapshots or {}

    def add_portfolio(
        self,
        portfolio: Portfolio,
        transactions: list[Transaction] | None = None,
        snapshots: list[PortfolioSnapshot] | None = None,
    ) -> None:
        self.portfolios[portfolio.id] = portfolio
        if transactions is not None:
            self.transactions[portfolio.id] = list(transactions)
        if snapshots is not None:
            self.snapshots[portfolio.id] = list(snapshots)

    def get_portfolio(self, portfolio_id: str) -> Portfolio | None:
        return self.portfolios.get(portfolio_id)

    def get_transactions(self, portfolio_id: str) -> list[Transaction]:
        return list(self.transactions.get(portfolio_id, []))

    def get_snapshots(self, portfolio_id: str) -> list[PortfolioSnapshot]:
        return list(self.snapshots.get(portfolio_id, []))


class InMemoryMarketDataProvider(MarketDataProvider):
    """Market data held in dictionaries."""

    def __init__(
        self,
        assets: Iterable[Asset] = (),
        price_history: dict[str, list[PortfolioSnapshot]] | None = None,
    ) -> None:
        self.assets: dict[str, Asset] = {a.id: a for a in assets}
        self.price_history: dict[str, list[PortfolioSnapshot]] = price_history or {}

    def get_assets(self, asset_ids: Iterable[str]) -> dict[str, Asset]:
        return {
            asset_id: self.assets[asset_id] for asset_id in asset_ids if asset_id in self.assets
        }

    def get_price_history(self, symbol: str) -> list[PortfolioSnapshot] | None:
        history = self.price_history.get(symbol)
        return list(history) if history is not None else None

    def find_assets_by_sector(self, sector: str) -> list[Asset]:
        return [
            asset
            for asset in self.assets.values()
            if asset.sector is not None and asset.sector.lower() == sector.lower()
        ]


class InMemoryRiskProfileStore(RiskProfileStore):
    """Risk profiles and limits held in dictionaries."""

    def __init__(
        self,
        profiles: Iterable[RiskProfile] = (),
        limits: dict[str, list[RiskLimit]] | None = None,
    ) -> None:
        self.profiles: dict[str, RiskProfile] = {p.user_id: p for p in profiles}
        self.limits: dict[str, list[RiskLimit]] = limits or {}

    def get_risk_profile(self, user_id: str) -> RiskProfile | None:
        return self.profiles.get(user_id)

    def save_risk_profile(self, profile: RiskProfile) -> RiskProfile:
        self.profiles[profile.user_id] = profile
        return profile

    def get_risk_limits(self, user_id: str) -> list[RiskLimit]:
        return list(self.limits.get(user_id, []))

    def save_risk_limits(self, user_id: str, limits: list[RiskLimit]) -> list[RiskLimit]:
        self.limits[user_id] = list(limits)
        return list(limits)
