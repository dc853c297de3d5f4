"""Data layer: provider interfaces, in-memory providers and the provider gateway."""

from .data_handler import ProviderGateway
from .json_loader import InMemoryDataset, build_dataset, load_dataset
from .providers import (
    InMemoryMarketDataProvider,
    InMemoryPortfolioDataProvider,
    InMemoryRiskProfileStore,
    MarketDataProvider,
    PortfolioDataProvider,
    RiskProfileStore,
)

__all__ = [
    'InMemoryDataset',
    'InMemoryMarketDataProvider',
    'InMemoryPortfolioDataProvider',
    'InMemoryRiskProfileStore',
    'MarketDataProvider',
    'PortfolioDataProvider',
    'ProviderGateway',
    'RiskProfileStore',
    'build_dataset',
    'load_dataset',
]
