"""Portfolio input types.

These are read-only snapshots handed to the analytics core by the data
providers. The core never mutates them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .base import SerializableMixin


class AssetType(str, Enum):
    """Asset classes known to the analytics core."""

    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"
    CRYPTO = "crypto"
    FUND = "fund"


class TransactionType(str, Enum):
    """Kinds of historical portfolio events."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    FEE = "fee"


@dataclass(frozen=True)
class ESGScores(SerializableMixin):
    """Environmental, social and governance sub-scores on a 0-100 scale."""

    environmental: float = 0.0
    social: float = 0.0
    governance: float = 0.0
    composite: float = 0.0
    carbon_footprint: float | None = None  # tCO2e per unit held


@dataclass(frozen=True)
class Asset(SerializableMixin):
    """Market snapshot of a tradable asset."""

    id: str
    symbol: str
    name: str = ""
    asset_type: AssetType | None = None
    sector: str | None = None
    region: str | None = None
    current_price: float = 0.0
    volume: float = 0.0
    market_cap: float = 0.0
    currency: str = "USD"
    esg: ESGScores | None = None


@dataclass(frozen=True)
class Holding(SerializableMixin):
    """A position in a single asset."""

    asset: Asset
    quantity: float
    average_cost: float = 0.0

    def __post_init__(self) -> None:
        """Validate quantity and cost basis."""
        if self.quantity < 0:
            raise ValueError(f"Holding quantity must be >= 0, got {self.quantity}")
        if self.average_cost < 0:
            raise ValueError(f"Average cost must be >= 0, got {self.average_cost}")

    @property
    def asset_id(self) -> str:
        return self.asset.id

    @property
    def market_value(self) -> float:
        """Current value at the asset's latest price."""
        return self.quantity * self.asset.current_price

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.average_cost


@dataclass(frozen=True)
class Portfolio(SerializableMixin):
    """An investment account and its holdings."""

    id: str
    owner_id: str
    created_at: datetime
    name: str = ""
    total_value: float = 0.0
    total_invested: float = 0.0
    holdings: tuple[Holding, ...] = field(default_factory=tuple)

    @property
    def market_value(self) -> float:
        """Total value recomputed from the holdings.

        ``total_value`` is a stored aggregate that may lag behind prices, so
        every weight in the core is taken against this figure instead.
        """
        return sum(h.market_value for h in self.holdings)


@dataclass(frozen=True)
class Transaction(SerializableMixin):
    """Immutable record of a portfolio event."""

    id: str
    asset_id: str
    transaction_type: TransactionType
    quantity: float
    price: float
    executed_at: datetime
    symbol: str = ""
    amount: float = 0.0


@dataclass(frozen=True)
class PortfolioSnapshot(SerializableMixin):
    """Portfolio value on a given date."""

    date: date
    total_value: float


def validate_snapshots(snapshots: list[PortfolioSnapshot]) -> list[PortfolioSnapshot]:
    """Ensure snapshot dates are strictly increasing.

    Args:
        snapshots: Snapshot series in provider order

    Returns:
        The same snapshots as a list

    Raises:
        ValueError: If two snapshots are out of order or share a date
    """
    ordered = list(snapshots)
    for previous, current in zip(ordered, ordered[1:]):
        if current.date <= previous.date:
            raise ValueError(
                "Snapshots must be strictly increasing by date: "
                f"{previous.date} then {current.date}"
            )
    return ordered
