"""JSON data set loading.

Builds the in-memory providers from a single JSON document so the CLI and
embedding callers can run the analytics core without a database. Expected
top-level keys (all optional):

    assets          list of asset objects
    portfolios      list of portfolio objects; holdings reference an
                    ``asset_id`` from ``assets`` or embed an ``asset`` object
    transactions    {portfolio_id: [transaction, ...]}
    snapshots       {portfolio_id: [{"date": ..., "total_value": ...}, ...]}
    price_history   {symbol: [{"date": ..., "total_value": ...}, ...]}
    risk_profiles   list of risk profile objects
    risk_limits     {user_id: [risk limit, ...]}
"""

import dataclasses
import json
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, TypeVar

from portfolio_analytics.core.exceptions import ConfigurationError
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
from portfolio_analytics.models.risk_profile import (
    ExperienceLevel,
    InvestmentHorizon,
    LimitAction,
    LimitOperator,
    LimitType,
    LiquidityNeeds,
    RiskLimit,
    RiskProfile,
    RiskTolerance,
)

from .providers import (
    InMemoryMarketDataProvider,
    InMemoryPortfolioDataProvider,
    InMemoryRiskProfileStore,
)

T = TypeVar('T')


def _known_fields(cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    return {key: value for key, value in data.items() if key in names}


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_asset(data: dict[str, Any]) -> Asset:
    """Build an Asset from a JSON object."""
    fields = _known_fields(Asset, data)
    if fields.get('asset_type') is not None:
        fields['asset_type'] = AssetType(str(fields['asset_type']).lower())
    if fields.get('esg') is not None:
        fields['esg'] = ESGScores(**_known_fields(ESGScores, fields['esg']))
    return Asset(**fields)


def parse_snapshots(items: list[dict[str, Any]]) -> list[PortfolioSnapshot]:
    """Build snapshots sorted by date."""
    snapshots = [
        PortfolioSnapshot(date=_parse_date(item['date']), total_value=float(item['total_value']))
        for item in items
    ]
    return sorted(snapshots, key=lambda s: s.date)


def parse_holding(data: dict[str, Any], assets: dict[str, Asset]) -> Holding:
    """Build a Holding, resolving ``asset_id`` against the asset table."""
    if 'asset' in data:
        asset = parse_asset(data['asset'])
    else:
        asset_id = data.get('asset_id')
        if asset_id not in assets:
            raise ConfigurationError(
                f"Holding references unknown asset: {asset_id}", {'asset_id': asset_id}
            )
        asset = assets[asset_id]
    return Holding(
        asset=asset,
        quantity=float(data.get('quantity', 0.0)),
        average_cost=float(data.get('average_cost', 0.0)),
    )


def parse_portfolio(data: dict[str, Any], assets: dict[str, Asset]) -> Portfolio:
    """Build a Portfolio and its holdings from a JSON object."""
    fields = _known_fields(Portfolio, data)
    fields['created_at'] = _parse_datetime(fields['created_at'])
    fields['holdings'] = tuple(parse_holding(h, assets) for h in data.get('holdings', []))
    return Portfolio(**fields)


def parse_transaction(data: dict[str, Any]) -> Transaction:
    fields = _known_fields(Transaction, data)
    fields['transaction_type'] = TransactionType(str(fields['transaction_type']).lower())
    fields['executed_at'] = _parse_datetime(fields['executed_at'])
    return Transaction(**fields)


def parse_risk_profile(data: dict[str, Any]) -> RiskProfile:
    """Build a RiskProfile; enum fields accept their string values."""
    fields = _known_fields(RiskProfile, data)
    fields['risk_tolerance'] = RiskTolerance(fields['risk_tolerance'])
    enums = {
        'investment_horizon': InvestmentHorizon,
        'liquidity_needs': LiquidityNeeds,
        'experience_level': ExperienceLevel,
    }
    for name, enum_cls in enums.items():
        if name in fields:
            fields[name] = enum_cls(fields[name])
    return RiskProfile(**fields)


def parse_risk_limit(data: dict[str, Any]) -> RiskLimit:
    fields = _known_fields(RiskLimit, data)
    fields['limit_type'] = LimitType(fields['limit_type'])
    fields['operator'] = LimitOperator(fields['operator'])
    if 'action' in fields:
        fields['action'] = LimitAction(fields['action'])
    return RiskLimit(**fields)


@dataclass
class InMemoryDataset:
    """The three in-memory providers loaded from one document."""

    portfolio_data: InMemoryPortfolioDataProvider
    market_data: InMemoryMarketDataProvider
    profile_store: InMemoryRiskProfileStore


def build_dataset(document: dict[str, Any]) -> InMemoryDataset:
    """Build in-memory providers from a parsed JSON document.

    Args:
        document: Parsed JSON data set

    Returns:
        InMemoryDataset with populated providers

    Raises:
        ConfigurationError: If the document is malformed
    """
    try:
        assets = {a.id: a for a in (parse_asset(item) for item in document.get('assets', []))}
        portfolios = [parse_portfolio(item, assets) for item in document.get('portfolios', [])]
        transactions = {
            pid: [parse_transaction(t) for t in items]
            for pid, items in document.get('transactions', {}).items()
        }
        snapshots = {
            pid: parse_snapshots(items) for pid, items in document.get('snapshots', {}).items()
        }
        price_history = {
            symbol: parse_snapshots(items)
            for symbol, items in document.get('price_history', {}).items()
        }
        profiles = [parse_risk_profile(item) for item in document.get('risk_profiles', [])]
        limits = {
            user_id: [parse_risk_limit(item) for item in items]
            for user_id, items in document.get('risk_limits', {}).items()
        }
    except ConfigurationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid data set: {e}") from e

    return InMemoryDataset(
        portfolio_data=InMemoryPortfolioDataProvider(portfolios, transactions, snapshots),
        market_data=InMemoryMarketDataProvider(assets.values(), price_history),
        profile_store=InMemoryRiskProfileStore(profiles, limits),
    )


def load_dataset(path: str | Path) -> InMemoryDataset:
    """Load a JSON data set from disk.

    Raises:
        ConfigurationError: If the file is not valid JSON or is malformed
    """
    try:
        with open(path) as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read data set {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigurationError(f"Data set {path} must be a JSON object")
    return build_dataset(document)
